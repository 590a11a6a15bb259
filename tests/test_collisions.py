from __future__ import annotations

from structure_id.engine.collisions import (
    EPOCH_SEED_SHIFT,
    SHAPE_TERM_SHIFT,
    CollisionCounter,
    default_root_segment,
    draw_epoch_seed,
)
from structure_id.engine.signature import char_sum


def test_collision_counter_reads_without_advancing() -> None:
    counter = CollisionCounter()
    assert counter.current("L1:5") == 0
    assert counter.current("L1:5") == 0
    assert len(counter) == 0


def test_collision_counter_advance_returns_previous_value() -> None:
    counter = CollisionCounter()
    assert [counter.advance("L1:5") for _ in range(3)] == [0, 1, 2]
    assert counter.current("L1:5") == 3
    assert counter.current("L1:6") == 0


def test_collision_counter_payload_is_sorted() -> None:
    counter = CollisionCounter()
    counter.advance("L1:9")
    counter.advance("L1:10")
    counter.advance("L1:9")
    assert list(counter.payload().items()) == [("L1:10", 1), ("L1:9", 2)]


def test_default_root_segment_layout() -> None:
    seed = 3 << EPOCH_SEED_SHIFT
    root = default_root_segment("L1:5", root_term=128, epoch_seed=seed, counter=2)
    assert root >> SHAPE_TERM_SHIFT == char_sum("L1:5") + 128
    assert root & seed == seed
    assert root & 0xFFFF == 2


def test_draw_epoch_seed_differs_from_previous() -> None:
    previous = draw_epoch_seed()
    for _ in range(50):
        seed = draw_epoch_seed(previous)
        assert seed != previous
        assert seed > 0
        assert seed & 0xFFFF == 0
        assert seed < 1 << SHAPE_TERM_SHIFT
        previous = seed
