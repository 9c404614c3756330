"""Character-set encoding modes and the mode classifier."""

from __future__ import annotations

import re
import unicodedata
from enum import IntEnum
from typing import Iterator, Optional, Tuple

from .exceptions import InvalidInputType, UnsupportedContent

ALPHANUMERIC_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

_NUMERIC_RE = re.compile(r"\d*", re.ASCII)
_ALPHANUMERIC_RE = re.compile(r"[0-9A-Z $%*+\-./:]*")
_LATIN1_RE = re.compile(r"[\x00-\xff]*")

_NUMERIC_WIDTHS = (0, 4, 7, 10)
_KANJI_SCRIPT_PREFIXES = (
    "CJK UNIFIED IDEOGRAPH",
    "CJK COMPATIBILITY IDEOGRAPH",
    "HIRAGANA",
    "KATAKANA",
    "IDEOGRAPHIC",
)

UNSUPPORTED_MODE = 0b0111

Value = Tuple[int, int]


class EncodingMode(IntEnum):
    """The four data modes. The integer value is the 4-bit mode indicator."""

    NUMERIC = 0b0001
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100
    KANJI = 0b1000

    def length_bits(self, version: int) -> int:
        """Width of the character count field for ``version``."""
        tier = 0 if version <= 9 else 1 if version <= 26 else 2
        return _LENGTH_BITS[self][tier]

    def capacity(self, available_bits: int) -> int:
        """Maximum number of characters that fit into ``available_bits``."""
        if available_bits <= 0:
            return 0
        if self is EncodingMode.NUMERIC:
            remainder = available_bits % 10
            return available_bits // 10 * 3 + (2 if remainder > 6 else 1 if remainder > 3 else 0)
        if self is EncodingMode.ALPHANUMERIC:
            return available_bits // 11 * 2 + (1 if available_bits % 11 > 5 else 0)
        if self is EncodingMode.BYTE:
            return available_bits >> 3
        return available_bits // 13

    def values(self, content: str) -> Iterator[Value]:
        """Yield ``(value, bit_width)`` pairs for ``content``."""
        if self is EncodingMode.NUMERIC:
            for index in range(0, len(content), 3):
                chunk = content[index:index + 3]
                yield int(chunk), _NUMERIC_WIDTHS[len(chunk)]
        elif self is EncodingMode.ALPHANUMERIC:
            for index in range(0, len(content), 2):
                codes = [ALPHANUMERIC_CHARS.index(char) for char in content[index:index + 2]]
                if len(codes) == 2:
                    yield codes[0] * len(ALPHANUMERIC_CHARS) + codes[1], 11
                else:
                    yield codes[0], 6
        elif self is EncodingMode.BYTE:
            for byte in content.encode("iso-8859-1"):
                yield byte, 8
        else:
            for char in content:
                code = _shift_jis_code(char)
                if code is None:
                    raise UnsupportedContent(f"character {char!r} has no Kanji mode encoding")
                reduced = code - (0xC140 if code >= 0xE040 else 0x8140)
                yield (reduced >> 8) * 0xC0 + (reduced & 0xFF), 13

    @classmethod
    def classify(cls, content: str) -> "EncodingMode":
        """Return the most compact mode whose repertoire covers all of ``content``."""
        if not isinstance(content, str):
            raise InvalidInputType(f"content must be str, not {type(content).__name__}")
        if _NUMERIC_RE.fullmatch(content):
            return cls.NUMERIC
        if _ALPHANUMERIC_RE.fullmatch(content):
            return cls.ALPHANUMERIC
        if _LATIN1_RE.fullmatch(content):
            return cls.BYTE
        if all(_is_kanji(char) for char in content):
            return cls.KANJI
        raise UnsupportedContent("could not find an encoding mode for the content")


_LENGTH_BITS = {
    EncodingMode.NUMERIC: (10, 12, 14),
    EncodingMode.ALPHANUMERIC: (9, 11, 13),
    EncodingMode.BYTE: (8, 16, 16),
    EncodingMode.KANJI: (8, 10, 12),
}


def encoding_mode(content: str) -> int:
    """Return the mode indicator for ``content``, or ``0b0111`` if none applies."""
    try:
        return int(EncodingMode.classify(content))
    except (InvalidInputType, UnsupportedContent):
        return UNSUPPORTED_MODE


def _shift_jis_code(char: str) -> Optional[int]:
    try:
        encoded = char.encode("shift_jis")
    except UnicodeEncodeError:
        return None
    if len(encoded) != 2:
        return None
    code = encoded[0] << 8 | encoded[1]
    if 0x8140 <= code <= 0x9FFC or 0xE040 <= code <= 0xEBBF:
        return code
    return None


def _is_kanji(char: str) -> bool:
    name = unicodedata.name(char, "")
    return name.startswith(_KANJI_SCRIPT_PREFIXES) and _shift_jis_code(char) is not None
