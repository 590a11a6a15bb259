from __future__ import annotations

from dataclasses import dataclass, field
import secrets

from structure_id.engine.signature import char_sum
from structure_id.order_contract import OrderPolicy, sort_once

SHAPE_TERM_SHIFT = 32
EPOCH_SEED_SHIFT = 16
EPOCH_SEED_BITS = 16


@dataclass
class CollisionCounter:
    """Per-signature occurrence counts used to tell same-shaped inputs apart.

    Counts only ever grow; `current` is a pure read.
    """

    counts: dict[str, int] = field(default_factory=dict)

    def current(self, signature: str) -> int:
        return self.counts.get(signature, 0)

    def advance(self, signature: str) -> int:
        """Bump the count for `signature` and return the value it had before."""
        previous = self.counts.get(signature, 0)
        self.counts[signature] = previous + 1
        return previous

    def __len__(self) -> int:
        return len(self.counts)

    def payload(self) -> dict[str, int]:
        return {
            signature: count
            for signature, count in sort_once(
                self.counts.items(),
                source="CollisionCounter.payload.counts",
                policy=OrderPolicy.SORT,
            )
        }


def default_root_segment(
    signature: str,
    *,
    root_term: int,
    epoch_seed: int,
    counter: int,
) -> int:
    """Default-mode `L0`; `root_term` is the root type bit plus any root marker bit."""
    shape_term = char_sum(signature) + root_term
    return (shape_term << SHAPE_TERM_SHIFT) | epoch_seed | counter


def draw_epoch_seed(previous: int | None = None) -> int:
    """Draw a seed for a new epoch, never equal to `previous`.

    Seeds live in bits 16-31: clear of the shape term above them and of any
    realistic counter value below them.
    """
    while True:
        seed = (secrets.randbits(EPOCH_SEED_BITS - 1) + 1) << EPOCH_SEED_SHIFT
        if seed != previous:
            return seed
