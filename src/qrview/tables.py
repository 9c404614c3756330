"""Static reference data from ISO/IEC 18004."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

MIN_VERSION = 1
MAX_VERSION = 40


class ErrorLevel(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def ordinal(self) -> int:
        """Column of this level in the error correction tables."""
        return "LMQH".index(self.value)

    @property
    def format_bits(self) -> int:
        """Two-bit code stored in the format information."""
        return "MLHQ".index(self.value)

    @classmethod
    def parse(cls, value: "str | ErrorLevel") -> "ErrorLevel":
        if isinstance(value, ErrorLevel):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise ValueError(f"unknown error correction level: {value!r}") from exc


@dataclass(frozen=True)
class EcBlocks:
    blocks: int
    ec_codewords_per_block: int

    @property
    def ec_codewords(self) -> int:
        return self.blocks * self.ec_codewords_per_block


# Total EC codewords per version, columns L, M, Q, H
_TOTAL_EC_CODEWORDS = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
    (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
    (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
    (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
    (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
    (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
    (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
    (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
    (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
    (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430),
)

# Number of RS blocks per version, columns L, M, Q, H
_NUM_BLOCKS = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)

EC_TABLE: Tuple[Tuple[EcBlocks, ...], ...] = tuple(
    tuple(EcBlocks(blocks, total // blocks) for total, blocks in zip(totals, counts))
    for totals, counts in zip(_TOTAL_EC_CODEWORDS, _NUM_BLOCKS)
)


def ec_blocks(version: int, level: ErrorLevel) -> EcBlocks:
    check_version(version)
    return EC_TABLE[version - 1][level.ordinal]


def check_version(version: int) -> None:
    if not (MIN_VERSION <= version <= MAX_VERSION):
        raise ValueError(f"version out of range: {version}")


def matrix_size(version: int) -> int:
    return version * 4 + 17


def alignment_positions(version: int) -> List[int]:
    """Row/column coordinates of the alignment pattern centres."""
    if version == 1:
        return []
    num = version // 7 + 2
    step = 26 if version == 32 else ((version * 4 + num * 2 + 1) // (2 * num - 2)) * 2
    last = version * 4 + 10
    return [6] + [last - index * step for index in reversed(range(num - 1))]
