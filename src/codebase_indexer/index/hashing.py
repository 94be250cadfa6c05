"""Content hashing and Merkle root aggregation for change detection."""

from __future__ import annotations

from collections.abc import Sequence

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
EMPTY_ROOT = "00000000"

_MASK_32 = 0xFFFFFFFF


def hash_content(text: str) -> str:
    """Return the 32-bit FNV-1a hash of text as 8 lowercase hex digits.

    Fast equality/change detection only; not collision resistant.
    """
    value = FNV_OFFSET_BASIS
    for char in text:
        value ^= ord(char)
        value = (value * FNV_PRIME) & _MASK_32
    return f"{value:08x}"


def merkle_root(hashes: Sequence[str]) -> str:
    """Fold hashes pairwise, left to right, into one order-sensitive root.

    An odd trailing entry is paired with itself.
    """
    if not hashes:
        return EMPTY_ROOT
    level = list(hashes)
    while len(level) > 1:
        next_level: list[str] = []
        for index in range(0, len(level), 2):
            left = level[index]
            right = level[index + 1] if index + 1 < len(level) else left
            next_level.append(hash_content(left + right))
        level = next_level
    return level[0]
