"""Phase-tagged 16-byte blocks.

``PlainBlock`` and ``CipherBlock`` are distinct nominal types holding the
same immutable payload. The driver only accepts a ``PlainBlock`` for
encryption and a ``CipherBlock`` for decryption, so ciphertext cannot be
encrypted again and plaintext cannot be decrypted.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .transforms import check_block

BytesLike = Union[bytes, bytearray, memoryview]


class Phase(str, Enum):
    """Which conversion a tagged block is allowed to go through next."""
    PLAIN = "plain"
    CIPHER = "cipher"


@dataclass(frozen=True)
class _TaggedBlock:
    data: bytes
    phase: ClassVar[Phase]

    def __post_init__(self):
        if isinstance(self.data, int):
            raise TypeError("block data must be bytes-like, not int")
        data = bytes(self.data)
        check_block(data, f"{self.phase.value} block")
        object.__setattr__(self, "data", data)

    def __bytes__(self) -> bytes:
        return self.data

    def hex(self) -> str:
        return self.data.hex()


@dataclass(frozen=True)
class PlainBlock(_TaggedBlock):
    """A 16-byte block that may only be encrypted."""
    phase: ClassVar[Phase] = Phase.PLAIN


@dataclass(frozen=True)
class CipherBlock(_TaggedBlock):
    """A 16-byte block that may only be decrypted."""
    phase: ClassVar[Phase] = Phase.CIPHER


def new_plain(data: BytesLike) -> PlainBlock:
    """Wrap raw bytes as plaintext. Raises InvalidLength unless 16 bytes."""
    return PlainBlock(data)


def new_cipher(data: BytesLike) -> CipherBlock:
    """Wrap raw bytes as ciphertext. Raises InvalidLength unless 16 bytes."""
    return CipherBlock(data)
