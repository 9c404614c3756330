"""Cross-check generated matrices against the ``qrcode`` package."""

import pytest

qrcode = pytest.importorskip("qrcode")

from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q  # noqa: E402
from qrcode.util import MODE_8BIT_BYTE, MODE_ALPHA_NUM, MODE_NUMBER, QRData  # noqa: E402

from qrview import EncodingMode, ErrorLevel, encode  # noqa: E402
from qrview.matrix import BitMatrix  # noqa: E402

LEVELS = {
    ErrorLevel.L: ERROR_CORRECT_L,
    ErrorLevel.M: ERROR_CORRECT_M,
    ErrorLevel.Q: ERROR_CORRECT_Q,
    ErrorLevel.H: ERROR_CORRECT_H,
}
MODES = {
    EncodingMode.NUMERIC: MODE_NUMBER,
    EncodingMode.ALPHANUMERIC: MODE_ALPHA_NUM,
    EncodingMode.BYTE: MODE_8BIT_BYTE,
}


def reference_matrix(content, version, error_level, mode, mask):
    qr = qrcode.QRCode(version=version, error_correction=LEVELS[error_level], border=0, mask_pattern=mask)
    qr.add_data(QRData(content.encode("iso-8859-1"), mode=MODES[mode]))
    qr.make(fit=False)
    return [[1 if cell else 0 for cell in row] for row in qr.get_matrix()]


@pytest.mark.parametrize(
    "content, level",
    [
        ("HELLO WORLD", "Q"),
        ("01234567890123456789", "M"),
        ("https://example.com/path?q=1", "L"),
        ("A" * 200, "L"),
        ("Grüße aus Köln " * 10, "Q"),
        ("x" * 400, "H"),
        ("31415926535897932384626433832795028841971693993751" * 20, "M"),
    ],
)
def test_matches_reference(content: str, level: str) -> None:
    symbol = encode(content, level)
    expected = reference_matrix(content, symbol.version, symbol.error_level, symbol.encoding_mode, symbol.mask_index)
    assert [list(row) for row in symbol.matrix] == expected


@pytest.mark.parametrize("mask", range(8))
def test_every_mask_matches_reference(mask: int) -> None:
    symbol = encode("MASK PATTERN CHECK", "M")
    matrix = BitMatrix.from_codewords(symbol.version, symbol.codewords, symbol.error_level, mask)
    expected = reference_matrix("MASK PATTERN CHECK", symbol.version, symbol.error_level, symbol.encoding_mode, mask)
    assert [list(row) for row in matrix] == expected
