"""QR Code symbol encoder with PNG and JSON export."""

from .exceptions import (
    ContentTooLarge,
    InvalidInputType,
    MalformedPersistedState,
    QRViewError,
    UnsupportedContent,
)
from .matrix import BitMatrix
from .modes import EncodingMode, encoding_mode
from .symbol import QRSymbol, create_png, encode
from .tables import ErrorLevel

__all__ = [
    "BitMatrix",
    "ContentTooLarge",
    "EncodingMode",
    "ErrorLevel",
    "InvalidInputType",
    "MalformedPersistedState",
    "QRSymbol",
    "QRViewError",
    "UnsupportedContent",
    "create_png",
    "encode",
    "encoding_mode",
]
