"""Reed-Solomon error correction over GF(256)."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

# x^8 + x^4 + x^3 + x^2 + 1
PRIMITIVE_POLY = 0x11D

EXP_TABLE = [0] * 512
LOG_TABLE = [0] * 256


def _init_tables() -> None:
    x = 1
    for i in range(255):
        EXP_TABLE[i] = x
        LOG_TABLE[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLY
    for i in range(255, 512):
        EXP_TABLE[i] = EXP_TABLE[i - 255]


_init_tables()


def gf_mul(x: int, y: int) -> int:
    if x == 0 or y == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[x] + LOG_TABLE[y]]


def poly_mul(p: Sequence[int], q: Sequence[int]) -> List[int]:
    result = [0] * (len(p) + len(q) - 1)
    for i, a in enumerate(p):
        for j, b in enumerate(q):
            result[i + j] ^= gf_mul(a, b)
    return result


@lru_cache(maxsize=None)
def generator_polynomial(degree: int) -> Tuple[int, ...]:
    """(x - 2^0)(x - 2^1)...(x - 2^(degree-1)), highest term first."""
    if not 1 <= degree <= 254:
        raise ValueError(f"degree out of range: {degree}")
    result = [1]
    for i in range(degree):
        result = poly_mul(result, [1, EXP_TABLE[i]])
    return tuple(result)


def poly_remainder(dividend: Sequence[int], divisor: Sequence[int]) -> List[int]:
    """Remainder of polynomial long division, both highest term first."""
    result = list(dividend)
    degree = len(divisor) - 1
    for i in range(len(result) - degree):
        coef = result[i]
        if coef == 0:
            continue
        for j, term in enumerate(divisor):
            result[i + j] ^= gf_mul(term, coef)
    return result[len(result) - degree:]


def ec_codewords(data: Sequence[int], ec_length: int) -> bytes:
    """Error correction codewords for one data block."""
    message = list(data) + [0] * ec_length
    return bytes(poly_remainder(message, generator_polynomial(ec_length)))
