import pytest

from qrview.matrix import MASK_FUNCTIONS, BitMatrix, MatrixBuilder, module_sequence, total_codewords
from qrview.metadata import bch_remainder, format_bits, version_bits
from qrview.penalty import penalty_score
from qrview.tables import ErrorLevel, alignment_positions, matrix_size

FINDER = [
    [1, 1, 1, 1, 1, 1, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 1, 1, 1, 1, 1, 1],
]


def _codewords(version: int) -> bytes:
    return bytes((index * 73 + 5) % 256 for index in range(total_codewords(version)))


@pytest.mark.parametrize(
    "version, expected",
    [
        (1, []),
        (2, [6, 18]),
        (7, [6, 22, 38]),
        (16, [6, 26, 50, 74]),
        (32, [6, 34, 60, 86, 112, 138]),
        (40, [6, 30, 58, 86, 114, 142, 170]),
    ],
)
def test_alignment_positions(version: int, expected: list) -> None:
    assert alignment_positions(version) == expected


def test_builder_fill_area_clips_at_edge() -> None:
    builder = MatrixBuilder(1)
    builder.fill_area(19, 19, 5, 5)
    assert builder.get_bit(20, 20) == 1
    assert builder.get_bit(18, 18) == 0
    assert all(len(row) == 21 for row in builder.rows)


def test_module_sequence_version_1() -> None:
    sequence = module_sequence(1)
    assert len(sequence) == 208
    assert sequence[:4] == ((20, 20), (20, 19), (19, 20), (19, 19))
    # The first column pair runs upward to row 9 and then turns down
    assert sequence[24:26] == ((9, 18), (9, 17))


@pytest.mark.parametrize("version", [1, 2, 6, 7, 14, 21, 40])
def test_module_sequence_covers_data_area(version: int) -> None:
    sequence = module_sequence(version)
    assert len(set(sequence)) == len(sequence)
    assert len(sequence) - 8 * total_codewords(version) in (0, 3, 4, 7)
    assert all(row != 6 and column != 6 for row, column in sequence)
    size = matrix_size(version)
    assert (size - 8, 8) not in sequence


def test_format_bits() -> None:
    assert format_bits(ErrorLevel.M, 0) == 0b101010000010010
    assert format_bits(ErrorLevel.L, 4) == 0b110011000101111
    with pytest.raises(ValueError):
        format_bits(ErrorLevel.L, 8)


def test_version_bits() -> None:
    assert version_bits(7) == 0x07C94
    assert version_bits(40) == 0x28C69


def test_bch_remainder_of_zero() -> None:
    assert bch_remainder(0, 0b10100110111) == 0


@pytest.mark.parametrize("version", [1, 3, 7])
def test_function_patterns(version: int) -> None:
    matrix = BitMatrix.from_codewords(version, _codewords(version), ErrorLevel.M, 3)
    size = matrix.size
    assert size == matrix_size(version)
    for top, left in ((0, 0), (size - 7, 0), (0, size - 7)):
        assert [list(matrix[top + row][left:left + 7]) for row in range(7)] == FINDER
    assert list(matrix[7][:8]) == [0] * 8
    assert [matrix.get_bit(row, 7) for row in range(size - 8, size)] == [0] * 8
    assert list(matrix[6][8:size - 8]) == [1 - index % 2 for index in range(size - 16)]
    assert [matrix.get_bit(row, 6) for row in range(8, size - 8)] == [1 - index % 2 for index in range(size - 16)]
    assert matrix.get_bit(size - 8, 8) == 1


def test_alignment_pattern_drawn() -> None:
    matrix = BitMatrix.from_codewords(2, _codewords(2), ErrorLevel.L, 0)
    block = [list(matrix[row][16:21]) for row in range(16, 21)]
    assert block == [
        [1, 1, 1, 1, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 1, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 1, 1, 1, 1],
    ]


def test_format_information_placement() -> None:
    matrix = BitMatrix.from_codewords(1, _codewords(1), ErrorLevel.Q, 5)
    bits = format_bits(ErrorLevel.Q, 5)
    size = matrix.size
    first = [matrix.get_bit(row, 8) for row in (0, 1, 2, 3, 4, 5, 7)]
    first += [matrix.get_bit(8, column) for column in (8, 7, 5, 4, 3, 2, 1, 0)]
    second = [matrix.get_bit(8, size - 1 - index) for index in range(8)]
    second += [matrix.get_bit(row, 8) for row in range(size - 7, size)]
    expected = [(bits >> index) & 1 for index in range(15)]
    assert first == expected
    assert second == expected


def test_version_information_placement() -> None:
    matrix = BitMatrix.from_codewords(7, _codewords(7), ErrorLevel.L, 1)
    bits = version_bits(7)
    size = matrix.size
    for index in range(18):
        bit = (bits >> index) & 1
        assert matrix.get_bit(index // 3, size - 11 + index % 3) == bit
        assert matrix.get_bit(size - 11 + index % 3, index // 3) == bit


def test_data_modules_are_masked() -> None:
    codewords = _codewords(1)
    plain = BitMatrix.from_codewords(1, codewords, ErrorLevel.L, 0)
    for index, (row, column) in enumerate(module_sequence(1)):
        bit = (codewords[index >> 3] >> (7 - (index & 7))) & 1
        assert plain.get_bit(row, column) == bit ^ MASK_FUNCTIONS[0](row, column)


def test_masks_leave_function_patterns_alone() -> None:
    codewords = _codewords(2)
    matrices = [BitMatrix.from_codewords(2, codewords, ErrorLevel.L, mask) for mask in range(8)]
    for matrix in matrices:
        assert [list(matrix[row][:7]) for row in range(7)] == FINDER
    assert len({matrix for matrix in matrices}) == 8


def test_penalty_cached_at_construction() -> None:
    matrix = BitMatrix.from_codewords(1, _codewords(1), ErrorLevel.H, 2)
    assert matrix.penalty_score == penalty_score([list(row) for row in matrix])


def test_optimal_mask_picks_first_minimum() -> None:
    codewords = _codewords(3)
    matrix, mask = BitMatrix.optimal_mask(3, codewords, ErrorLevel.Q)
    scores = [BitMatrix.from_codewords(3, codewords, ErrorLevel.Q, index).penalty_score for index in range(8)]
    assert mask == scores.index(min(scores))
    assert matrix.penalty_score == min(scores)
    assert matrix == BitMatrix.from_codewords(3, codewords, ErrorLevel.Q, mask)


def test_matrix_is_read_only() -> None:
    matrix = BitMatrix([[1, 0], [0, 1]])
    with pytest.raises(TypeError):
        matrix[0][0] = 0  # type: ignore[index]
    with pytest.raises(AttributeError):
        matrix.extra = 1  # type: ignore[attr-defined]


def test_matrix_text_forms() -> None:
    matrix = BitMatrix([[1, 0], [0, 1]])
    assert str(matrix) == "2, 10, 01"
    assert repr(matrix) == "BitMatrix(2x2) [\n  10,\n  01\n]"
    assert matrix.to_list() == [[True, False], [False, True]]
    assert matrix.to_json() == {"type": "BitMatrix", "size": 2}
