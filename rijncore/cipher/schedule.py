"""Key schedule container.

The schedule is produced by an external key-expansion step; this module
only checks its shape. Round keys are kept in FIPS-197 input order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple, Union

from .errors import InvalidKeySchedule
from .transforms import check_block

# schedule length -> number of rounds
ROUNDS_BY_SCHEDULE_LENGTH: Dict[int, int] = {11: 10, 13: 12, 15: 14}
# key size in bits -> schedule length
SCHEDULE_LENGTH_BY_KEY_BITS: Dict[int, int] = {128: 11, 192: 13, 256: 15}

RoundKeyLike = Union[bytes, bytearray, memoryview, str]


def _coerce_round_key(index: int, key: RoundKeyLike) -> bytes:
    if isinstance(key, int):
        raise InvalidKeySchedule(f"round key {index} must be bytes-like or hex, got int")
    if isinstance(key, str):
        try:
            key = bytes.fromhex(key)
        except ValueError as e:
            raise InvalidKeySchedule(f"round key {index} is not valid hex: {e}") from e
    data = bytes(key)
    check_block(data, f"round key {index}")
    return data


@dataclass(frozen=True)
class KeySchedule:
    """An immutable sequence of 11, 13 or 15 round keys of 16 bytes each."""
    round_keys: Tuple[bytes, ...]

    def __post_init__(self):
        keys = tuple(_coerce_round_key(i, k) for i, k in enumerate(self.round_keys))
        if len(keys) not in ROUNDS_BY_SCHEDULE_LENGTH:
            raise InvalidKeySchedule(
                f"key schedule must hold 11, 13 or 15 round keys, got {len(keys)}"
            )
        object.__setattr__(self, "round_keys", keys)

    @classmethod
    def of(cls, round_keys: Union["KeySchedule", Iterable[RoundKeyLike]]) -> "KeySchedule":
        if isinstance(round_keys, KeySchedule):
            return round_keys
        if isinstance(round_keys, (bytes, bytearray, memoryview, str)):
            raise InvalidKeySchedule("key schedule must be a sequence of round keys, not a single buffer")
        return cls(tuple(round_keys))

    @classmethod
    def from_concatenated(cls, data: bytes) -> "KeySchedule":
        """Split an expanded key (176, 208 or 240 bytes) into round keys."""
        if len(data) % 16 != 0:
            raise InvalidKeySchedule(f"expanded key length {len(data)} is not a multiple of 16")
        return cls(tuple(data[i:i + 16] for i in range(0, len(data), 16)))

    @property
    def rounds(self) -> int:
        return ROUNDS_BY_SCHEDULE_LENGTH[len(self.round_keys)]

    @property
    def key_size_bits(self) -> int:
        return {v: k for k, v in SCHEDULE_LENGTH_BY_KEY_BITS.items()}[len(self.round_keys)]

    def __len__(self) -> int:
        return len(self.round_keys)

    def __getitem__(self, index: int) -> bytes:
        return self.round_keys[index]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.round_keys)
