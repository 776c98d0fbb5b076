"""Deterministic evaluation of the block core.

Provides algebraic unit testing (roundtrip verification), statistical
analysis (SAC) and S-box analysis (DDT/LAT, bijectivity).
"""

from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests, run_all_key_sizes
from .avalanche import SACResult, compute_sac
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox, sbox_ddt_max, sbox_lat_max_abs
from .report import EvaluationReport

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "run_all_key_sizes",
    "SACResult",
    "compute_sac",
    "SBoxAnalysisResult",
    "analyze_sbox",
    "sbox_ddt_max",
    "sbox_lat_max_abs",
    "EvaluationReport",
]
