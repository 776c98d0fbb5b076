"""GF(2^8) arithmetic with the AES reduction polynomial x^8+x^4+x^3+x+1 (0x11B)."""
from __future__ import annotations

_POLY_REDUCED = 0x1B  # 0x11B without the x^8 term


def xtime(b: int) -> int:
    """Multiply a byte by x (i.e. by 2) in GF(2^8)."""
    b &= 0xFF
    out = (b << 1) & 0xFF
    if b & 0x80:
        out ^= _POLY_REDUCED
    return out


def gf_mul(a: int, b: int) -> int:
    """GF(2^8) multiplication by shift-and-add over xtime."""
    a &= 0xFF
    b &= 0xFF
    res = 0
    while b:
        if b & 1:
            res ^= a
        a = xtime(a)
        b >>= 1
    return res


def gf_inv(a: int) -> int:
    """Multiplicative inverse, a^254. Zero maps to zero (S-box convention)."""
    a &= 0xFF
    if a == 0:
        return 0
    result = 1
    base = a
    power = 254
    while power:
        if power & 1:
            result = gf_mul(result, base)
        base = gf_mul(base, base)
        power >>= 1
    return result
