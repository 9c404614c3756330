"""Format and version information fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .tables import ErrorLevel

if TYPE_CHECKING:
    from .matrix import MatrixBuilder

FORMAT_DIVISOR = 0b10100110111
FORMAT_MASK = 0b101010000010010
VERSION_DIVISOR = 0b1111100100101


def bch_remainder(value: int, divisor: int) -> int:
    """Remainder of ``value * x^deg(divisor)`` divided by ``divisor`` over GF(2)."""
    degree = divisor.bit_length() - 1
    remainder = value << degree
    while remainder.bit_length() > degree:
        remainder ^= divisor << (remainder.bit_length() - divisor.bit_length())
    return remainder


def format_bits(error_level: ErrorLevel, mask_index: int) -> int:
    """The 15-bit masked format information word."""
    if not 0 <= mask_index <= 7:
        raise ValueError(f"mask index out of range: {mask_index}")
    data = error_level.format_bits << 3 | mask_index
    return (data << 10 | bch_remainder(data, FORMAT_DIVISOR)) ^ FORMAT_MASK


def version_bits(version: int) -> int:
    """The 18-bit version information word."""
    return version << 12 | bch_remainder(version, VERSION_DIVISOR)


def place_format_modules(matrix: "MatrixBuilder", error_level: ErrorLevel, mask_index: int) -> None:
    size = matrix.size
    bits = format_bits(error_level, mask_index)

    def bit(i: int) -> int:
        return (bits >> i) & 1

    # Around the top-left finder; column/row 6 belong to the timing patterns
    for i in range(6):
        matrix.set_bit(i, 8, bit(i))
    matrix.set_bit(7, 8, bit(6))
    matrix.set_bit(8, 8, bit(7))
    matrix.set_bit(8, 7, bit(8))
    for i in range(9, 15):
        matrix.set_bit(8, 14 - i, bit(i))

    # Split between the top-right and bottom-left finders
    for i in range(8):
        matrix.set_bit(8, size - 1 - i, bit(i))
    for i in range(8, 15):
        matrix.set_bit(size - 15 + i, 8, bit(i))


def place_version_modules(matrix: "MatrixBuilder", version: int) -> None:
    if version < 7:
        return
    size = matrix.size
    bits = version_bits(version)
    for i in range(18):
        value = (bits >> i) & 1
        near, far = i // 3, size - 11 + i % 3
        matrix.set_bit(near, far, value)
        matrix.set_bit(far, near, value)
