import json

import pytest

from rijncore.cipher.tables import INV_SBOX, SBOX
from rijncore.evaluation import (
    EvaluationReport,
    analyze_sbox,
    compute_sac,
    run_all_key_sizes,
    run_roundtrip_tests,
    sbox_ddt_max,
    sbox_lat_max_abs,
)


# ---------------------------------------------------------------------------
# Roundtrip harness
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("bits,rounds", [(128, 10), (192, 12), (256, 14)])
def test_roundtrip_harness_passes(bits, rounds):
    result = run_roundtrip_tests(bits, num_vectors=20, seed=42)
    assert result.is_perfect, result.summary()
    assert result.rounds == rounds
    assert result.passed == 20
    assert result.success_rate == 1.0
    assert result.summary().startswith("[PASS] AES-%d" % bits)


def test_roundtrip_harness_records_failures():
    # A substitution pair that is not mutually inverse breaks decryption
    result = run_roundtrip_tests(128, num_vectors=5, seed=1, inv_sbox=SBOX, max_failures_recorded=3)
    assert not result.is_perfect
    assert result.failed == 5
    assert len(result.failures) == 3
    assert result.failures[0].error is None


def test_roundtrip_harness_records_exceptions():
    result = run_roundtrip_tests(128, num_vectors=2, seed=1, sbox=SBOX[:100])
    assert result.failed == 2
    assert "256 entries" in result.failures[0].error


def test_roundtrip_harness_rejects_unknown_key_size():
    with pytest.raises(ValueError):
        run_roundtrip_tests(512, num_vectors=1)


def test_run_all_key_sizes():
    seen = []
    results = run_all_key_sizes(num_vectors=3, seed=7, progress_callback=lambda m, i, n: seen.append(m))
    assert [r.key_size_bits for r in results] == [128, 192, 256]
    assert seen == ["AES-128", "AES-192", "AES-256"]
    assert all(r.is_perfect for r in results)


# ---------------------------------------------------------------------------
# SAC
# ---------------------------------------------------------------------------

def test_sac_plaintext_is_near_half():
    sac = compute_sac(128, trials=4, seed=3)
    assert sac.num_input_bits == 128
    assert len(sac.per_input_bit_mean) == 128
    assert 0.45 < sac.global_mean < 0.55


def test_sac_round_key_input():
    sac = compute_sac(128, input_type="round_key", trials=2, seed=5)
    assert sac.input_type == "round_key"
    assert 0.4 < sac.global_mean < 0.6
    assert "passes_sac" in sac.to_dict()


def test_sac_rejects_bad_arguments():
    with pytest.raises(ValueError):
        compute_sac(128, input_type="key", trials=1)
    with pytest.raises(ValueError):
        compute_sac(100, trials=1)
    with pytest.raises(ValueError):
        compute_sac(128, trials=0)


# ---------------------------------------------------------------------------
# S-box analysis
# ---------------------------------------------------------------------------

def test_aes_sbox_analysis():
    result = analyze_sbox(SBOX, INV_SBOX)
    assert result.ddt_max == 4
    assert result.lat_max_abs == 32
    assert result.is_bijective
    assert result.inverse_matches is True
    assert result.differential_uniformity == "good"
    assert result.linearity == "good"


def test_identity_sbox_is_linear():
    identity = list(range(256))
    assert sbox_ddt_max(identity) == 256
    assert sbox_lat_max_abs(identity) == 256
    result = analyze_sbox(identity, None, name="sbox.identity")
    assert result.inverse_matches is None
    assert result.linearity == "poor"


def test_non_bijective_sbox():
    result = analyze_sbox([0] * 256, INV_SBOX, name="sbox.constant")
    assert not result.is_bijective
    assert result.inverse_matches is False


def test_analysis_rejects_bad_size():
    with pytest.raises(ValueError):
        sbox_ddt_max(list(range(100)))


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def test_report_serializes():
    report = EvaluationReport(
        roundtrip_results=[run_roundtrip_tests(128, num_vectors=2)],
        sbox_results=[analyze_sbox()],
    )
    d = report.to_dict()
    json.dumps(d)
    assert d["summary"]["roundtrip_all_pass"]
    assert d["summary"]["key_sizes_tested"] == [128]
    assert d["summary"]["failing_key_sizes"] == []
    assert report.all_pass
    assert "Roundtrip Tests: 1/1" in report.to_summary()
