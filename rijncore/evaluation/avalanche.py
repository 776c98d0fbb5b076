"""Strict Avalanche Criterion (SAC) calculator with per-bit analysis.

Measures whether flipping each individual input bit causes each output bit
to flip with probability ~0.5. Inputs are either the plaintext or the
whitening round key (schedule[0]); the rest of the schedule is random.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from rijncore.cipher.driver import RijndaelCipher
from rijncore.cipher.schedule import SCHEDULE_LENGTH_BY_KEY_BITS, KeySchedule

BLOCK_BITS = 128


def hamming_distance_bytes(a: bytes, b: bytes) -> int:
    if len(a) != len(b):
        raise ValueError("hamming distance length mismatch")
    return sum(bin(x ^ y).count("1") for x, y in zip(a, b))


def flip_bit(data: bytes, bit_index: int) -> bytes:
    byte_i = bit_index // 8
    bit_i = bit_index % 8
    if byte_i < 0 or byte_i >= len(data):
        raise IndexError("bit_index out of range")
    out = bytearray(data)
    out[byte_i] ^= 1 << bit_i
    return bytes(out)


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


@dataclass
class SACResult:
    """Strict Avalanche Criterion measurement for one input type."""
    key_size_bits: int
    input_type: str             # "plaintext" or "round_key"
    num_trials: int
    num_input_bits: int
    num_output_bits: int

    # Per-input-bit mean flip fraction (len = num_input_bits)
    per_input_bit_mean: List[float] = field(default_factory=list)

    global_mean: float = 0.0    # ~0.5 ideal
    global_std: float = 0.0
    min_bit_prob: float = 0.0
    max_bit_prob: float = 0.0
    sac_deviation: float = 0.0  # Mean |per_bit - 0.5|

    @property
    def passes_sac(self) -> bool:
        """Heuristic: SAC deviation < 0.05 and min_bit_prob > 0.35."""
        return self.sac_deviation < 0.05 and self.min_bit_prob > 0.35

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{status}] SAC AES-{self.key_size_bits} ({self.input_type}): "
            f"mean={self.global_mean:.4f}, std={self.global_std:.4f}, "
            f"deviation={self.sac_deviation:.4f}, "
            f"min={self.min_bit_prob:.4f}, max={self.max_bit_prob:.4f}"
        )


def compute_sac(
    key_size_bits: int = 128,
    *,
    input_type: str = "plaintext",
    trials: int = 200,
    seed: int = 1337,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Compute Strict Avalanche Criterion with per-input-bit analysis.

    For each of the 128 input bit positions, run `trials` random
    (plaintext, schedule) pairs, flip the bit, encrypt both and record the
    mean fraction of ciphertext bits that changed.
    """
    if input_type not in ("plaintext", "round_key"):
        raise ValueError(f"input_type must be 'plaintext' or 'round_key', got '{input_type}'")
    if key_size_bits not in SCHEDULE_LENGTH_BY_KEY_BITS:
        raise ValueError(f"key_size_bits must be one of 128, 192, 256, got {key_size_bits}")
    n_keys = SCHEDULE_LENGTH_BY_KEY_BITS[key_size_bits]
    if trials < 1:
        raise ValueError("trials must be at least 1")

    rng = random.Random(seed)
    fractions = np.zeros((BLOCK_BITS, trials), dtype=np.float64)

    for bit_i in range(BLOCK_BITS):
        if progress_callback:
            progress_callback(bit_i, BLOCK_BITS)

        for t in range(trials):
            pt = _rand_bytes(rng, 16)
            round_keys = [_rand_bytes(rng, 16) for _ in range(n_keys)]
            cipher = RijndaelCipher(KeySchedule(tuple(round_keys)))
            ct1 = cipher.encrypt_block(pt)

            if input_type == "plaintext":
                ct2 = cipher.encrypt_block(flip_bit(pt, bit_i))
            else:
                round_keys[0] = flip_bit(round_keys[0], bit_i)
                ct2 = RijndaelCipher(KeySchedule(tuple(round_keys))).encrypt_block(pt)

            fractions[bit_i, t] = hamming_distance_bytes(ct1, ct2) / BLOCK_BITS

    per_bit = fractions.mean(axis=1)

    return SACResult(
        key_size_bits=key_size_bits,
        input_type=input_type,
        num_trials=trials,
        num_input_bits=BLOCK_BITS,
        num_output_bits=BLOCK_BITS,
        per_input_bit_mean=[float(p) for p in per_bit],
        global_mean=round(float(per_bit.mean()), 6),
        global_std=round(float(per_bit.std(ddof=1)), 6),
        min_bit_prob=round(float(per_bit.min()), 6),
        max_bit_prob=round(float(per_bit.max()), 6),
        sac_deviation=round(float(np.abs(per_bit - 0.5).mean()), 6),
    )
