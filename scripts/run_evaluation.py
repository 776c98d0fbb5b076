"""CLI entry point for evaluating the block core.

Usage:
    python scripts/run_evaluation.py                          # all key sizes
    python scripts/run_evaluation.py --key-sizes 128 --vectors 200
    python scripts/run_evaluation.py --skip-sac -v

Writes evaluation_report.json and summary.txt into a timestamped run
directory and exits non-zero when any check fails.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rijncore.config import load_settings
from rijncore.evaluation.avalanche import compute_sac
from rijncore.evaluation.report import EvaluationReport
from rijncore.evaluation.roundtrip import run_roundtrip_tests
from rijncore.evaluation.sbox_analysis import analyze_sbox
from rijncore.utils.repro import make_run_dir, set_global_seed

logger = logging.getLogger("run_evaluation")


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="Evaluate the Rijndael block core: roundtrip, SAC and S-box analysis",
    )
    parser.add_argument(
        "--key-sizes", nargs="+", type=int, default=[128, 192, 256], choices=[128, 192, 256],
        help="Key sizes whose schedule lengths are exercised (default: all)",
    )
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per key size (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--sac-trials", type=int, default=settings.sac_trials,
        help=f"SAC trials per input bit (default: {settings.sac_trials})",
    )
    parser.add_argument(
        "--skip-sac", action="store_true",
        help="Skip the strict avalanche measurement",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=settings.runs_dir,
        help=f"Output directory (default: {settings.runs_dir})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    set_global_seed(args.seed)
    report = EvaluationReport()
    key_sizes = sorted(set(args.key_sizes))

    for idx, bits in enumerate(key_sizes):
        _cli_progress(f"roundtrip AES-{bits}", idx, len(key_sizes))
        result = run_roundtrip_tests(bits, num_vectors=args.vectors, seed=args.seed)
        logger.info(result.summary())
        report.roundtrip_results.append(result)

    if not args.skip_sac:
        for idx, bits in enumerate(key_sizes):
            _cli_progress(f"SAC AES-{bits}", idx, len(key_sizes))
            sac = compute_sac(bits, trials=args.sac_trials, seed=args.seed)
            logger.info(sac.summary())
            report.sac_results.append(sac)

    sbox = analyze_sbox()
    logger.info(sbox.summary())
    report.sbox_results.append(sbox)

    paths = make_run_dir(args.output_dir, "evaluation")
    paths.save(report.to_dict(), report.to_summary())

    print(report.to_summary())
    print(f"\nAll results saved to: {paths.run_dir}")

    if not report.all_pass:
        logger.error("Evaluation failed for key sizes %s", report.failing_key_sizes() or "-")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
