"""Round driver: composes the round transformations into the AES cipher
and inverse cipher for a caller-supplied key schedule.

Blocks and round keys arrive in FIPS-197 input order and are mapped onto
the row-major state before the first transformation runs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple, Union

from ..config import load_settings
from .schedule import KeySchedule, RoundKeyLike
from .state import CipherBlock, PlainBlock, new_cipher, new_plain
from .tables import INV_SBOX, SBOX, invert_table, validate_table
from .transforms import (
    add_round_key,
    from_state,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    sub_bytes,
    to_state,
)

logger = logging.getLogger(__name__)

ScheduleLike = Union[KeySchedule, Iterable[RoundKeyLike]]


def _prepare(schedule: ScheduleLike, table: Sequence[int], validate_tables: Optional[bool]) -> KeySchedule:
    ks = KeySchedule.of(schedule)
    if validate_tables is None:
        validate_tables = load_settings().validate_tables
    validate_table(table, check_bijection=validate_tables)
    logger.debug("key schedule accepted: %d round keys, %d rounds", len(ks), ks.rounds)
    return ks


def encrypt(
    plain: PlainBlock,
    schedule: ScheduleLike,
    sbox: Sequence[int] = SBOX,
    *,
    validate_tables: Optional[bool] = None,
) -> CipherBlock:
    """Encrypt one plaintext block.

    Args:
        plain: The block to encrypt. Must be a PlainBlock.
        schedule: 11, 13 or 15 round keys (AES-128/192/256).
        sbox: Forward substitution table, 256 entries.
        validate_tables: Also reject non-bijective tables. Defaults to
            ``Settings.validate_tables``.

    Returns:
        The ciphertext as a CipherBlock.

    Raises:
        TypeError: `plain` is not a PlainBlock.
        InvalidKeySchedule: wrong number of round keys.
        InvalidLength: a round key is not 16 bytes.
        InvalidTable: `sbox` is not a 256-entry byte table.
    """
    if not isinstance(plain, PlainBlock):
        raise TypeError(f"encrypt() requires a PlainBlock, got {type(plain).__name__}")
    ks = _prepare(schedule, sbox, validate_tables)
    last = len(ks) - 1

    state = add_round_key(to_state(plain.data), to_state(ks[0]))
    for i in range(1, last + 1):
        state = shift_rows(sub_bytes(state, sbox))
        # Final round has no MixColumns
        if i != last:
            state = mix_columns(state)
        state = add_round_key(state, to_state(ks[i]))

    return CipherBlock(from_state(state))


def decrypt(
    cipher: CipherBlock,
    schedule: ScheduleLike,
    inv_sbox: Sequence[int] = INV_SBOX,
    *,
    validate_tables: Optional[bool] = None,
) -> PlainBlock:
    """Decrypt one ciphertext block with the standard inverse cipher.

    Mirrors :func:`encrypt`: same schedule, inverse substitution table.
    """
    if not isinstance(cipher, CipherBlock):
        raise TypeError(f"decrypt() requires a CipherBlock, got {type(cipher).__name__}")
    ks = _prepare(schedule, inv_sbox, validate_tables)
    last = len(ks) - 1

    state = add_round_key(to_state(cipher.data), to_state(ks[last]))
    for i in range(last - 1, 0, -1):
        state = inv_sub_bytes(inv_shift_rows(state), inv_sbox)
        state = add_round_key(state, to_state(ks[i]))
        state = inv_mix_columns(state)
    state = inv_sub_bytes(inv_shift_rows(state), inv_sbox)
    state = add_round_key(state, to_state(ks[0]))

    return PlainBlock(from_state(state))


@dataclass
class RijndaelCipher:
    """A key schedule and S-box bound together, with a bytes-in/bytes-out API.

    The inverse table is derived from `sbox` when not given.
    """
    schedule: KeySchedule
    sbox: Tuple[int, ...] = SBOX
    inv_sbox: Optional[Tuple[int, ...]] = field(default=None)

    def __post_init__(self):
        self.schedule = KeySchedule.of(self.schedule)
        self.sbox = tuple(self.sbox)
        if self.inv_sbox is None:
            self.inv_sbox = INV_SBOX if self.sbox == SBOX else invert_table(self.sbox)
        else:
            self.inv_sbox = tuple(self.inv_sbox)

    @property
    def rounds(self) -> int:
        return self.schedule.rounds

    def encrypt_block(self, plaintext_block: bytes) -> bytes:
        return encrypt(new_plain(plaintext_block), self.schedule, self.sbox).data

    def decrypt_block(self, ciphertext_block: bytes) -> bytes:
        return decrypt(new_cipher(ciphertext_block), self.schedule, self.inv_sbox).data
