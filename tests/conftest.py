import sys
from pathlib import Path
from typing import List

import pytest

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rijncore.cipher.gf import xtime
from rijncore.cipher.tables import SBOX
from rijncore.config import load_settings


def fips197_expand_key(key: bytes) -> List[bytes]:
    """FIPS-197 KeyExpansion, used only to build known-answer schedules."""
    nk = len(key) // 4
    if len(key) not in (16, 24, 32):
        raise ValueError("key must be 16, 24 or 32 bytes")
    nr = nk + 6
    words = [list(key[4 * i:4 * i + 4]) for i in range(nk)]
    rcon = 0x01
    for i in range(nk, 4 * (nr + 1)):
        temp = list(words[i - 1])
        if i % nk == 0:
            temp = temp[1:] + temp[:1]
            temp = [SBOX[b] for b in temp]
            temp[0] ^= rcon
            rcon = xtime(rcon)
        elif nk > 6 and i % nk == 4:
            temp = [SBOX[b] for b in temp]
        words.append([w ^ t for w, t in zip(words[i - nk], temp)])
    return [bytes(sum(words[4 * r:4 * r + 4], [])) for r in range(nr + 1)]


@pytest.fixture
def expand_key():
    return fips197_expand_key


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    monkeypatch.delenv("RIJNCORE_VALIDATE_TABLES", raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
