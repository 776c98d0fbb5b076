"""Algebraic unit testing: roundtrip verification P = D(E(P, K), K).

Draws random plaintexts and random key schedules of a given length and
verifies that the inverse cipher undoes the forward cipher for every
vector. Round keys are random rather than expanded from a master key, so
the check covers every schedule the driver can be handed.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from rijncore.cipher.driver import decrypt, encrypt
from rijncore.cipher.schedule import ROUNDS_BY_SCHEDULE_LENGTH, SCHEDULE_LENGTH_BY_KEY_BITS, KeySchedule
from rijncore.cipher.state import new_plain
from rijncore.cipher.tables import INV_SBOX, SBOX

logger = logging.getLogger(__name__)


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_hex: str
    first_round_key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one key size."""
    key_size_bits: int
    rounds: int
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def name(self) -> str:
        return f"AES-{self.key_size_bits}"

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["name"] = self.name
        d["is_perfect"] = self.is_perfect
        return d

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.name} ({self.rounds} rounds): "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def random_schedule(rng: random.Random, key_size_bits: int) -> KeySchedule:
    """A schedule of the right length for `key_size_bits` filled with random round keys."""
    if key_size_bits not in SCHEDULE_LENGTH_BY_KEY_BITS:
        raise ValueError(f"key_size_bits must be one of 128, 192, 256, got {key_size_bits}")
    n = SCHEDULE_LENGTH_BY_KEY_BITS[key_size_bits]
    return KeySchedule(tuple(_rand_bytes(rng, 16) for _ in range(n)))


def run_roundtrip_tests(
    key_size_bits: int = 128,
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    max_failures_recorded: int = 10,
    sbox: Sequence[int] = SBOX,
    inv_sbox: Sequence[int] = INV_SBOX,
) -> RoundtripResult:
    """Run roundtrip verification P = D(E(P, K), K) across many test vectors.

    Args:
        key_size_bits: 128, 192 or 256; selects the schedule length.
        num_vectors: Number of random (plaintext, schedule) pairs to test.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.
        sbox: Forward substitution table.
        inv_sbox: Inverse substitution table.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    if key_size_bits not in SCHEDULE_LENGTH_BY_KEY_BITS:
        raise ValueError(f"key_size_bits must be one of 128, 192, 256, got {key_size_bits}")
    rounds = ROUNDS_BY_SCHEDULE_LENGTH[SCHEDULE_LENGTH_BY_KEY_BITS[key_size_bits]]

    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        pt = _rand_bytes(rng, 16)
        schedule = random_schedule(rng, key_size_bits)

        try:
            ct = encrypt(new_plain(pt), schedule, sbox)
            pt2 = decrypt(ct, schedule, inv_sbox)

            if pt == pt2.data:
                passed += 1
            else:
                failed += 1
                if len(failures) < max_failures_recorded:
                    failures.append(RoundtripFailure(
                        vector_index=i,
                        plaintext_hex=pt.hex(),
                        first_round_key_hex=schedule[0].hex(),
                        ciphertext_hex=ct.hex(),
                        decrypted_hex=pt2.hex(),
                        error=None,
                    ))
        except Exception as exc:
            failed += 1
            logger.warning("AES-%d vector %d raised %s: %s", key_size_bits, i, type(exc).__name__, exc)
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext_hex=pt.hex(),
                    first_round_key_hex=schedule[0].hex(),
                    ciphertext_hex="<error>",
                    decrypted_hex="<error>",
                    error=str(exc),
                ))

    elapsed = time.perf_counter() - start

    return RoundtripResult(
        key_size_bits=key_size_bits,
        rounds=rounds,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )


def run_all_key_sizes(
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Run roundtrip tests for AES-128, AES-192 and AES-256 schedule lengths.

    Args:
        num_vectors: Number of test vectors per key size.
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(label, current_index, total).

    Returns:
        List of RoundtripResult ordered by key size.
    """
    sizes = sorted(SCHEDULE_LENGTH_BY_KEY_BITS)
    results: List[RoundtripResult] = []

    for idx, bits in enumerate(sizes):
        if progress_callback:
            progress_callback(f"AES-{bits}", idx, len(sizes))

        result = run_roundtrip_tests(bits, num_vectors=num_vectors, seed=seed)
        logger.info(result.summary())
        results.append(result)

    return results
