"""The four Rijndael round transformations and their inverses.

Every function takes a 16-byte block viewed as a 4x4 matrix in row-major
order (byte i is row i // 4, column i % 4) and returns a new ``bytes``
value. Nothing is mutated in place.
"""
from __future__ import annotations

from typing import Callable, List, Sequence

from .errors import InvalidLength, InvalidTable
from .gf import xtime
from .tables import INV_SBOX, SBOX, TABLE_SIZE

BLOCK_SIZE = 16
NB = 4  # rows == columns


def check_block(data: Sequence[int], what: str = "block") -> None:
    if len(data) != BLOCK_SIZE:
        raise InvalidLength(what, len(data))


# ============================================================================
# STATE LAYOUT
# ============================================================================

def to_state(data: Sequence[int]) -> bytes:
    """Map FIPS-197 input order (column by column) to a row-major state."""
    check_block(data)
    return bytes(data[r + NB * c] for r in range(NB) for c in range(NB))


def from_state(state: Sequence[int]) -> bytes:
    """Inverse of to_state. The mapping is a transpose, so it is its own inverse."""
    check_block(state, "state")
    return bytes(state[r + NB * c] for r in range(NB) for c in range(NB))


# ============================================================================
# ADD ROUND KEY
# ============================================================================

def add_round_key(block: Sequence[int], round_key: Sequence[int]) -> bytes:
    """XOR the block with the round key, position for position."""
    check_block(block)
    check_block(round_key, "round key")
    return bytes(a ^ k for a, k in zip(block, round_key))


# ============================================================================
# SUB BYTES
# ============================================================================

def sub_bytes(block: Sequence[int], table: Sequence[int] = SBOX) -> bytes:
    """Replace every byte with table[byte]."""
    check_block(block)
    if len(table) != TABLE_SIZE:
        raise InvalidTable(f"substitution table must have {TABLE_SIZE} entries, got {len(table)}")
    try:
        return bytes(table[b] for b in block)
    except (TypeError, ValueError) as e:
        raise InvalidTable(f"substitution table entry is not a byte: {e}") from e


def inv_sub_bytes(block: Sequence[int], table: Sequence[int] = INV_SBOX) -> bytes:
    """SubBytes with the inverse S-box."""
    return sub_bytes(block, table)


# ============================================================================
# SHIFT ROWS
# ============================================================================

def shift_row(row: Sequence[int], shift: int) -> List[int]:
    """Cyclically rotate a row left by `shift` positions."""
    n = len(row)
    if n == 0:
        return []
    shift %= n
    return list(row[shift:]) + list(row[:shift])


def _shift_all_rows(block: Sequence[int], inverse: bool) -> bytes:
    check_block(block)
    out: List[int] = []
    for r in range(NB):
        row = block[r * NB:(r + 1) * NB]
        out.extend(shift_row(row, (NB - r) % NB if inverse else r))
    return bytes(out)


def shift_rows(block: Sequence[int]) -> bytes:
    """Rotate row r left by r positions; row 0 is untouched."""
    return _shift_all_rows(block, inverse=False)


def inv_shift_rows(block: Sequence[int]) -> bytes:
    """Rotate row r right by r positions."""
    return _shift_all_rows(block, inverse=True)


# ============================================================================
# MIX COLUMNS
# ============================================================================

def mix_column(column: Sequence[int]) -> List[int]:
    """Multiply one column by the circulant MDS matrix (2, 3, 1, 1)."""
    a0, a1, a2, a3 = column
    d0, d1, d2, d3 = xtime(a0), xtime(a1), xtime(a2), xtime(a3)
    return [
        d0 ^ (d1 ^ a1) ^ a2 ^ a3,
        a0 ^ d1 ^ (d2 ^ a2) ^ a3,
        a0 ^ a1 ^ d2 ^ (d3 ^ a3),
        (d0 ^ a0) ^ a1 ^ a2 ^ d3,
    ]


def _mul_9_11_13_14(a: int):
    x2 = xtime(a)
    x4 = xtime(x2)
    x8 = xtime(x4)
    return (
        x8 ^ a,              # 9
        x8 ^ x2 ^ a,         # 11
        x8 ^ x4 ^ a,         # 13
        x8 ^ x4 ^ x2,        # 14
    )


def inv_mix_column(column: Sequence[int]) -> List[int]:
    """Multiply one column by the inverse MDS matrix (14, 11, 13, 9)."""
    m = [_mul_9_11_13_14(a) for a in column]
    # m[i] = (9*a_i, 11*a_i, 13*a_i, 14*a_i)
    return [
        m[0][3] ^ m[1][1] ^ m[2][2] ^ m[3][0],
        m[0][0] ^ m[1][3] ^ m[2][1] ^ m[3][2],
        m[0][2] ^ m[1][0] ^ m[2][3] ^ m[3][1],
        m[0][1] ^ m[1][2] ^ m[2][0] ^ m[3][3],
    ]


def _mix_all_columns(block: Sequence[int], mix: Callable[[Sequence[int]], List[int]]) -> bytes:
    check_block(block)
    out = bytearray(BLOCK_SIZE)
    for c in range(NB):
        mixed = mix([block[c + NB * r] for r in range(NB)])
        for r in range(NB):
            out[c + NB * r] = mixed[r]
    return bytes(out)


def mix_columns(block: Sequence[int]) -> bytes:
    """Apply mix_column to each of the four columns."""
    return _mix_all_columns(block, mix_column)


def inv_mix_columns(block: Sequence[int]) -> bytes:
    """Apply inv_mix_column to each of the four columns."""
    return _mix_all_columns(block, inv_mix_column)
