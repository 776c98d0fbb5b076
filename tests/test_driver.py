import random

import pytest

from rijncore import (
    CipherBlock,
    InvalidKeySchedule,
    InvalidLength,
    InvalidTable,
    KeySchedule,
    PlainBlock,
    RijndaelCipher,
    decrypt,
    encrypt,
    new_cipher,
    new_plain,
)
from rijncore.cipher.tables import INV_SBOX, SBOX


# ---------------------------------------------------------------------------
# Known-answer vectors (FIPS-197 Appendix B and C)
# ---------------------------------------------------------------------------

KNOWN_ANSWERS = [
    (
        "000102030405060708090a0b0c0d0e0f",
        "00112233445566778899aabbccddeeff",
        "69c4e0d86a7b0430d8cdb78070b4c55a",
    ),
    (
        "000102030405060708090a0b0c0d0e0f1011121314151617",
        "00112233445566778899aabbccddeeff",
        "dda97ca4864cdfe06eaf70a0ec0d7191",
    ),
    (
        "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f",
        "00112233445566778899aabbccddeeff",
        "8ea2b7ca516745bfeafc49904b496089",
    ),
    (
        "2b7e151628aed2a6abf7158809cf4f3c",
        "3243f6a8885a308d313198a2e0370734",
        "3925841d02dc09fbdc118597196a0b32",
    ),
]


@pytest.mark.parametrize("key_hex,pt_hex,ct_hex", KNOWN_ANSWERS)
def test_known_answer_encrypt(expand_key, key_hex, pt_hex, ct_hex):
    schedule = expand_key(bytes.fromhex(key_hex))
    ct = encrypt(new_plain(bytes.fromhex(pt_hex)), schedule)
    assert isinstance(ct, CipherBlock)
    assert ct.hex() == ct_hex


@pytest.mark.parametrize("key_hex,pt_hex,ct_hex", KNOWN_ANSWERS)
def test_known_answer_decrypt(expand_key, key_hex, pt_hex, ct_hex):
    schedule = expand_key(bytes.fromhex(key_hex))
    pt = decrypt(new_cipher(bytes.fromhex(ct_hex)), schedule)
    assert isinstance(pt, PlainBlock)
    assert pt.hex() == pt_hex


def test_expanded_key_schedule_matches_fips197(expand_key):
    schedule = expand_key(bytes.fromhex("000102030405060708090a0b0c0d0e0f"))
    assert len(schedule) == 11
    assert schedule[-1].hex() == "13111d7fe3944a17f307a78b4d2b30c5"


# ---------------------------------------------------------------------------
# Roundtrip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("n_keys", [11, 13, 15])
def test_roundtrip_random_schedules(n_keys):
    rng = random.Random(n_keys)
    for _ in range(25):
        schedule = KeySchedule(tuple(bytes(rng.randrange(256) for _ in range(16)) for _ in range(n_keys)))
        pt = bytes(rng.randrange(256) for _ in range(16))
        ct = encrypt(new_plain(pt), schedule)
        assert ct.data != pt
        assert decrypt(ct, schedule).data == pt


@pytest.mark.parametrize("key_len", [16, 24, 32])
def test_roundtrip_expanded_keys(expand_key, key_len):
    rng = random.Random(key_len)
    for _ in range(10):
        schedule = expand_key(bytes(rng.randrange(256) for _ in range(key_len)))
        pt = bytes(rng.randrange(256) for _ in range(16))
        assert decrypt(encrypt(new_plain(pt), schedule), schedule).data == pt


def test_cipher_object_roundtrip(expand_key):
    cipher = RijndaelCipher(KeySchedule.of(expand_key(bytes(range(16)))))
    assert cipher.rounds == 10
    ct = cipher.encrypt_block(bytes.fromhex("00112233445566778899aabbccddeeff"))
    assert ct.hex() == "69c4e0d86a7b0430d8cdb78070b4c55a"
    assert cipher.decrypt_block(ct).hex() == "00112233445566778899aabbccddeeff"


def test_custom_sbox_roundtrip():
    rng = random.Random(99)
    table = list(range(256))
    rng.shuffle(table)
    schedule = [bytes(rng.randrange(256) for _ in range(16)) for _ in range(11)]
    cipher = RijndaelCipher(KeySchedule.of(schedule), sbox=tuple(table))
    pt = bytes(range(16))
    assert cipher.decrypt_block(cipher.encrypt_block(pt)) == pt


# ---------------------------------------------------------------------------
# Phase and input contract
# ---------------------------------------------------------------------------

def test_encrypt_rejects_ciphertext():
    schedule = [bytes(16)] * 11
    with pytest.raises(TypeError):
        encrypt(new_cipher(bytes(16)), schedule)


def test_decrypt_rejects_plaintext():
    schedule = [bytes(16)] * 11
    with pytest.raises(TypeError):
        decrypt(new_plain(bytes(16)), schedule)


def test_encrypt_rejects_raw_bytes():
    with pytest.raises(TypeError):
        encrypt(bytes(16), [bytes(16)] * 11)


@pytest.mark.parametrize("n_keys", [0, 10, 12, 14, 16])
def test_invalid_schedule_length(n_keys):
    with pytest.raises(InvalidKeySchedule):
        encrypt(new_plain(bytes(16)), [bytes(16)] * n_keys)
    with pytest.raises(InvalidKeySchedule):
        decrypt(new_cipher(bytes(16)), [bytes(16)] * n_keys)


def test_invalid_round_key_length():
    schedule = [bytes(16)] * 10 + [bytes(8)]
    with pytest.raises(InvalidLength):
        encrypt(new_plain(bytes(16)), schedule)


def test_invalid_table_length():
    with pytest.raises(InvalidTable):
        encrypt(new_plain(bytes(16)), [bytes(16)] * 11, SBOX[:255])
    with pytest.raises(InvalidTable):
        decrypt(new_cipher(bytes(16)), [bytes(16)] * 11, list(INV_SBOX) + [0])


def test_bijection_check_is_configurable(monkeypatch):
    from rijncore.config import load_settings

    constant = [0x2A] * 256
    # Length is fine, so without validation the table is used as given
    ct = encrypt(new_plain(bytes(16)), [bytes(16)] * 11, constant)
    assert isinstance(ct, CipherBlock)

    with pytest.raises(InvalidTable):
        encrypt(new_plain(bytes(16)), [bytes(16)] * 11, constant, validate_tables=True)

    monkeypatch.setenv("RIJNCORE_VALIDATE_TABLES", "1")
    load_settings.cache_clear()
    with pytest.raises(InvalidTable):
        encrypt(new_plain(bytes(16)), [bytes(16)] * 11, constant)
