"""Module placement, masking and the finished symbol matrix."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Iterator, List, Sequence, Tuple

from .metadata import place_format_modules, place_version_modules
from .penalty import penalty_score
from .tables import ErrorLevel, alignment_positions, check_version, matrix_size

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]
MaskFunction = Callable[[int, int], bool]

MASK_FUNCTIONS: Tuple[MaskFunction, ...] = (
    lambda row, column: (row + column) % 2 == 0,
    lambda row, column: row % 2 == 0,
    lambda row, column: column % 3 == 0,
    lambda row, column: (row + column) % 3 == 0,
    lambda row, column: (row // 2 + column // 3) % 2 == 0,
    lambda row, column: (row * column) % 2 + (row * column) % 3 == 0,
    lambda row, column: ((row * column) % 2 + (row * column) % 3) % 2 == 0,
    lambda row, column: ((row + column) % 2 + (row * column) % 3) % 2 == 0,
)


class MatrixBuilder:
    """Mutable square grid used while a symbol is being drawn."""

    def __init__(self, version: int) -> None:
        check_version(version)
        self.version = version
        self.size = matrix_size(version)
        self.rows = [bytearray(self.size) for _ in range(self.size)]

    def get_bit(self, row: int, column: int) -> int:
        return self.rows[row][column]

    def set_bit(self, row: int, column: int, value: int) -> "MatrixBuilder":
        self.rows[row][column] = 1 if value else 0
        return self

    def fill_row(self, row: int, values: Sequence[int], start: int) -> None:
        """Copy ``values`` into ``row`` from column ``start``, clipped at the edge."""
        end = min(start + len(values), self.size)
        self.rows[row][start:end] = bytes(1 if value else 0 for value in values[:end - start])

    def fill_area(self, row: int, column: int, width: int, height: int, value: int = 1) -> None:
        line = [value] * width
        for index in range(row, min(row + height, self.size)):
            self.fill_row(index, line, column)

    def freeze(self) -> "BitMatrix":
        return BitMatrix(self.rows)


def _alignment_centres(version: int) -> Iterator[Coordinate]:
    tracks = alignment_positions(version)
    last = len(tracks) - 1
    for row_index, row in enumerate(tracks):
        for column_index, column in enumerate(tracks):
            # These three overlap the finder patterns
            if (row_index, column_index) in ((0, 0), (0, last), (last, 0)):
                continue
            yield row, column


def _reserve_function_areas(matrix: MatrixBuilder) -> None:
    size = matrix.size
    version = matrix.version
    # Finder patterns with separators and format areas
    matrix.fill_area(0, 0, 9, 9)
    matrix.fill_area(0, size - 8, 8, 9)
    matrix.fill_area(size - 8, 0, 9, 8)
    for row, column in _alignment_centres(version):
        matrix.fill_area(row - 2, column - 2, 5, 5)
    # Timing patterns
    matrix.fill_area(6, 9, version * 4, 1)
    matrix.fill_area(9, 6, 1, version * 4)
    # Dark module
    matrix.set_bit(size - 8, 8, 1)
    if version > 6:
        matrix.fill_area(0, size - 11, 3, 6)
        matrix.fill_area(size - 11, 0, 6, 3)


@lru_cache(maxsize=None)
def module_sequence(version: int) -> Tuple[Coordinate, ...]:
    """Data module coordinates in zig-zag placement order."""
    reserved = MatrixBuilder(version)
    _reserve_function_areas(reserved)
    size = reserved.size
    sequence: List[Coordinate] = []
    right = size - 1
    upward = True
    while right >= 1:
        if right == 6:
            # Vertical timing pattern
            right = 5
        for step in range(size):
            row = size - 1 - step if upward else step
            for column in (right, right - 1):
                if not reserved.get_bit(row, column):
                    sequence.append((row, column))
        upward = not upward
        right -= 2
    return tuple(sequence)


def total_codewords(version: int) -> int:
    """Number of whole codewords that fit in the data area of ``version``."""
    return len(module_sequence(version)) >> 3


def place_fixed_patterns(matrix: MatrixBuilder) -> None:
    size = matrix.size
    for row, column in ((0, 0), (size - 7, 0), (0, size - 7)):
        matrix.fill_area(row, column, 7, 7)
        matrix.fill_area(row + 1, column + 1, 5, 5, 0)
        matrix.fill_area(row + 2, column + 2, 3, 3)
    # Separators
    matrix.fill_area(7, 0, 8, 1, 0)
    matrix.fill_area(0, 7, 1, 7, 0)
    matrix.fill_area(size - 8, 0, 8, 1, 0)
    matrix.fill_area(size - 7, 7, 1, 7, 0)
    matrix.fill_area(7, size - 8, 8, 1, 0)
    matrix.fill_area(0, size - 8, 1, 7, 0)
    for row, column in _alignment_centres(matrix.version):
        matrix.fill_area(row - 2, column - 2, 5, 5)
        matrix.fill_area(row - 1, column - 1, 3, 3, 0)
        matrix.set_bit(row, column, 1)
    for position in range(8, size - 8):
        dark = 1 if position % 2 == 0 else 0
        matrix.set_bit(6, position, dark)
        matrix.set_bit(position, 6, dark)
    matrix.set_bit(size - 8, 8, 1)


class BitMatrix:
    """Finished, read-only symbol grid. Rows hold ``0`` (light) and ``1`` (dark)."""

    __slots__ = ("_rows", "_penalty_score")

    def __init__(self, rows: Sequence[Sequence[int]]) -> None:
        self._rows = tuple(tuple(1 if bit else 0 for bit in row) for row in rows)
        self._penalty_score = penalty_score(self._rows)

    @classmethod
    def from_codewords(
        cls, version: int, codewords: Sequence[int], error_level: ErrorLevel, mask_index: int
    ) -> "BitMatrix":
        """Draw ``codewords`` with mask ``mask_index`` and all function patterns."""
        mask = MASK_FUNCTIONS[mask_index]
        matrix = MatrixBuilder(version)
        count = len(codewords)
        for index, (row, column) in enumerate(module_sequence(version)):
            codeword_index = index >> 3
            # Remainder modules past the last codeword stay light before masking
            bit = (codewords[codeword_index] >> (7 - (index & 7))) & 1 if codeword_index < count else 0
            matrix.set_bit(row, column, bit ^ mask(row, column))
        place_fixed_patterns(matrix)
        place_format_modules(matrix, error_level, mask_index)
        place_version_modules(matrix, version)
        return matrix.freeze()

    @classmethod
    def optimal_mask(
        cls, version: int, codewords: Sequence[int], error_level: ErrorLevel
    ) -> Tuple["BitMatrix", int]:
        """Return the lowest-penalty matrix and its mask; ties go to the lower index."""
        best_matrix = None
        best_mask = -1
        for mask_index in range(len(MASK_FUNCTIONS)):
            matrix = cls.from_codewords(version, codewords, error_level, mask_index)
            logger.debug("mask %d scored %d", mask_index, matrix.penalty_score)
            if best_matrix is None or matrix.penalty_score < best_matrix.penalty_score:
                best_matrix = matrix
                best_mask = mask_index
        assert best_matrix is not None
        return best_matrix, best_mask

    @property
    def size(self) -> int:
        return len(self._rows)

    @property
    def penalty_score(self) -> int:
        return self._penalty_score

    def get_bit(self, row: int, column: int) -> int:
        return self._rows[row][column]

    def to_list(self) -> List[List[bool]]:
        return [[bool(bit) for bit in row] for row in self._rows]

    def to_json(self) -> dict:
        return {"type": "BitMatrix", "size": self.size}

    def __getitem__(self, row: int) -> Tuple[int, ...]:
        return self._rows[row]

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitMatrix):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __str__(self) -> str:
        return ", ".join([str(self.size)] + ["".join(map(str, row)) for row in self._rows])

    def __repr__(self) -> str:
        lines = ",\n  ".join("".join(map(str, row)) for row in self._rows)
        return f"BitMatrix({self.size}x{self.size}) [\n  {lines}\n]"
