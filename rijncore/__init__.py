"""rijncore - Rijndael/AES single-block transformation engine.

Round keys and substitution tables are supplied by the caller; key
expansion and modes of operation live outside this package.
"""

from .cipher import (
    INV_SBOX,
    SBOX,
    CipherBlock,
    CipherError,
    InvalidKeySchedule,
    InvalidLength,
    InvalidTable,
    KeySchedule,
    Phase,
    PlainBlock,
    RijndaelCipher,
    decrypt,
    encrypt,
    new_cipher,
    new_plain,
)

__version__ = "0.1.0"

__all__ = [
    "INV_SBOX",
    "SBOX",
    "CipherBlock",
    "CipherError",
    "InvalidKeySchedule",
    "InvalidLength",
    "InvalidTable",
    "KeySchedule",
    "Phase",
    "PlainBlock",
    "RijndaelCipher",
    "decrypt",
    "encrypt",
    "new_cipher",
    "new_plain",
]
