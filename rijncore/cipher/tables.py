"""Rijndael substitution tables.

The forward S-box is generated once at import time from the GF(2^8)
inverse followed by the affine transform, and the inverse S-box is
derived from it. Both are tuples, so they can be shared read-only
between threads.
"""
from __future__ import annotations

from typing import Sequence, Tuple

from .errors import InvalidTable
from .gf import gf_inv

TABLE_SIZE = 256
_AFFINE_CONSTANT = 0x63


def _rotl8(x: int, r: int) -> int:
    return ((x << r) | (x >> (8 - r))) & 0xFF


def _affine(b: int) -> int:
    return b ^ _rotl8(b, 1) ^ _rotl8(b, 2) ^ _rotl8(b, 3) ^ _rotl8(b, 4) ^ _AFFINE_CONSTANT


def build_sbox() -> Tuple[int, ...]:
    """Compute the AES S-box: affine(inverse(x)) for every byte x."""
    return tuple(_affine(gf_inv(x)) for x in range(TABLE_SIZE))


def validate_table(table: Sequence[int], *, check_bijection: bool = False) -> None:
    """Raise InvalidTable unless `table` is a usable 256-entry byte table."""
    if len(table) != TABLE_SIZE:
        raise InvalidTable(f"substitution table must have {TABLE_SIZE} entries, got {len(table)}")
    for i, v in enumerate(table):
        if not isinstance(v, int) or not 0 <= v <= 0xFF:
            raise InvalidTable(f"substitution table entry {i} is not a byte: {v!r}")
    if check_bijection and len(set(table)) != TABLE_SIZE:
        raise InvalidTable("substitution table is not a bijection over 0..255")


def invert_table(table: Sequence[int]) -> Tuple[int, ...]:
    """Return the inverse permutation of a bijective 256-entry table."""
    validate_table(table, check_bijection=True)
    inv = [0] * TABLE_SIZE
    for i, v in enumerate(table):
        inv[v] = i
    return tuple(inv)


SBOX: Tuple[int, ...] = build_sbox()
INV_SBOX: Tuple[int, ...] = invert_table(SBOX)
