"""Base-10 rendering of arbitrary-precision integers.

CPython caps `str(int)` / `int(str)` at a configurable number of digits.
Registry bits and level sums are unbounded, so conversion goes through
fixed-size chunks that each stay well under the cap.
"""

from __future__ import annotations

_CHUNK_DIGITS = 1000
_CHUNK = 10**_CHUNK_DIGITS


def format_decimal(value: int) -> str:
    if value < 0:
        return "-" + format_decimal(-value)
    if value < _CHUNK:
        return str(value)
    chunks: list[int] = []
    while value:
        value, chunk = divmod(value, _CHUNK)
        chunks.append(chunk)
    head = str(chunks[-1])
    return head + "".join(str(chunk).zfill(_CHUNK_DIGITS) for chunk in reversed(chunks[:-1]))


def parse_decimal(text: str) -> int:
    """Parse an unsigned decimal string without leading zeros."""
    if not text or not text.isascii() or not text.isdigit():
        raise ValueError(f"not an unsigned decimal integer: {text[:32]!r}")
    if len(text) > 1 and text[0] == "0":
        raise ValueError(f"decimal integer has leading zeros: {text[:32]!r}")
    value = 0
    for start in range(0, len(text), _CHUNK_DIGITS):
        piece = text[start : start + _CHUNK_DIGITS]
        value = value * 10 ** len(piece) + int(piece)
    return value
