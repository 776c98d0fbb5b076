"""Error types raised by the block transformation core.

Every error is a caller contract violation on input shapes; none of them
is transient, so nothing in the core catches or retries them.
"""
from __future__ import annotations


class CipherError(ValueError):
    """Base class for malformed cipher inputs."""


class InvalidLength(CipherError):
    """A block or round key is not exactly 16 bytes."""

    def __init__(self, what: str, length: int, expected: int = 16):
        super().__init__(f"{what} must be exactly {expected} bytes, got {length}")
        self.what = what
        self.length = length
        self.expected = expected


class InvalidKeySchedule(CipherError):
    """The key schedule does not hold 11, 13 or 15 round keys."""


class InvalidTable(CipherError):
    """A substitution table is not a 256-entry byte permutation."""
