"""Rijndael single-block core: round transformations, tables and driver."""

from .driver import RijndaelCipher, decrypt, encrypt
from .errors import CipherError, InvalidKeySchedule, InvalidLength, InvalidTable
from .gf import gf_inv, gf_mul, xtime
from .schedule import KeySchedule
from .state import CipherBlock, Phase, PlainBlock, new_cipher, new_plain
from .tables import INV_SBOX, SBOX, build_sbox, invert_table, validate_table
from .transforms import (
    add_round_key,
    inv_mix_column,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_column,
    mix_columns,
    shift_row,
    shift_rows,
    sub_bytes,
)

__all__ = [
    "RijndaelCipher",
    "encrypt",
    "decrypt",
    "CipherError",
    "InvalidLength",
    "InvalidKeySchedule",
    "InvalidTable",
    "xtime",
    "gf_mul",
    "gf_inv",
    "KeySchedule",
    "Phase",
    "PlainBlock",
    "CipherBlock",
    "new_plain",
    "new_cipher",
    "SBOX",
    "INV_SBOX",
    "build_sbox",
    "invert_table",
    "validate_table",
    "add_round_key",
    "sub_bytes",
    "inv_sub_bytes",
    "shift_row",
    "shift_rows",
    "inv_shift_rows",
    "mix_column",
    "inv_mix_column",
    "mix_columns",
    "inv_mix_columns",
]
