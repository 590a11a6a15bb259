from __future__ import annotations

from dataclasses import dataclass, field

from structure_id.engine.classify import FIRST_APPLICATION_BIT, TYPE_BITS, TypeTag
from structure_id.engine.decimal_text import format_decimal
from structure_id.order_contract import OrderPolicy, sort_once


@dataclass
class BitRegistry:
    """Symbol table binding each distinguishing key to a unique bit.

    Bits double on every allocation so that a sum of distinct bits cannot be
    reached by another small combination of them. The native type tags own
    the reserved range below `FIRST_APPLICATION_BIT` and never appear here.
    """

    bits: dict[str, int] = field(default_factory=dict)
    next_bit: int = FIRST_APPLICATION_BIT

    def get_or_assign(self, key: str) -> int:
        existing = self.bits.get(key)
        if existing is not None:
            return existing
        bit = self.next_bit
        self.bits[key] = bit
        self.next_bit = bit << 1
        return bit

    def bit_for(self, key: str) -> int | None:
        return self.bits.get(key)

    def key_for_bit(self, bit: int) -> str | None:
        for key, value in self.bits.items():
            if value == bit:
                return key
        return None

    @staticmethod
    def type_bit(tag: TypeTag) -> int:
        return TYPE_BITS[tag]

    def __len__(self) -> int:
        return len(self.bits)

    def __contains__(self, key: object) -> bool:
        return key in self.bits

    def seed_payload(self) -> dict[str, str]:
        return {
            key: format_decimal(bit)
            for key, bit in sort_once(
                self.bits.items(),
                source="BitRegistry.seed_payload.bits",
                key=lambda item: item[1],
                policy=OrderPolicy.SORT,
            )
        }

    @classmethod
    def from_bits(cls, bits: dict[str, int]) -> "BitRegistry":
        """Rebuild a registry; the watermark lands one doubling past the top bit."""
        next_bit = FIRST_APPLICATION_BIT
        if bits:
            next_bit = max(next_bit, max(bits.values()) << 1)
        return cls(bits=dict(bits), next_bit=next_bit)
