"""Encoding entry point and the persisted symbol model."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from . import png
from .bitstream import pack
from .exceptions import MalformedPersistedState
from .interleave import interleave
from .matrix import BitMatrix, total_codewords
from .modes import EncodingMode
from .planner import plan
from .tables import MAX_VERSION, MIN_VERSION, ErrorLevel, ec_blocks, matrix_size

logger = logging.getLogger(__name__)

_PERSISTED_FIELDS = ("matrix", "version", "size", "errorLevel", "encodingMode", "codewords", "maskIndex")


@dataclass(frozen=True)
class QRSymbol:
    matrix: BitMatrix
    version: int
    size: int
    error_level: ErrorLevel
    encoding_mode: EncodingMode
    codewords: bytes
    mask_index: int

    def to_png(
        self,
        width: Optional[int] = png.DEFAULT_WIDTH,
        margin: int = png.DEFAULT_MARGIN,
        light: str = png.DEFAULT_LIGHT,
        dark: str = png.DEFAULT_DARK,
    ) -> bytes:
        scale = png.scale_for_width(self.size, width, margin)
        return png.render_png(self.matrix, scale=scale, margin=margin, light=light, dark=dark)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "QRSymbol",
            "matrix": self.matrix.to_json(),
            "version": self.version,
            "size": self.size,
            "errorLevel": self.error_level.value,
            "encodingMode": int(self.encoding_mode),
            "codewords": list(self.codewords),
            "maskIndex": self.mask_index,
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "QRSymbol":
        """Rebuild a symbol, regenerating its matrix from the stored codewords."""
        if not isinstance(payload, Mapping):
            raise MalformedPersistedState(f"expected a mapping, got {type(payload).__name__}")
        missing = [field for field in _PERSISTED_FIELDS if field not in payload]
        if missing:
            raise MalformedPersistedState(f"missing fields: {', '.join(missing)}")

        version = _int_field(payload, "version", MIN_VERSION, MAX_VERSION)
        size = _int_field(payload, "size", 0, None)
        if size != matrix_size(version):
            raise MalformedPersistedState(f"size {size} does not match version {version}")
        mask_index = _int_field(payload, "maskIndex", 0, 7)
        try:
            error_level = ErrorLevel.parse(payload["errorLevel"])
            encoding_mode = EncodingMode(payload["encodingMode"])
        except ValueError as exc:
            raise MalformedPersistedState(str(exc)) from exc

        raw_codewords = payload["codewords"]
        if isinstance(raw_codewords, Mapping):
            raw_codewords = raw_codewords.get("data")
        if not isinstance(raw_codewords, (list, tuple, bytes, bytearray)):
            raise MalformedPersistedState("codewords must be a sequence of bytes")
        try:
            codewords = bytes(raw_codewords)
        except (TypeError, ValueError) as exc:
            raise MalformedPersistedState("codewords must be integers between 0 and 255") from exc
        if len(codewords) != total_codewords(version):
            raise MalformedPersistedState(
                f"expected {total_codewords(version)} codewords for version {version}, got {len(codewords)}"
            )

        logger.debug("regenerating version %d level %s mask %d", version, error_level.value, mask_index)
        matrix = BitMatrix.from_codewords(version, codewords, error_level, mask_index)
        return cls(matrix, version, size, error_level, encoding_mode, codewords, mask_index)

    @classmethod
    def from_json(cls, text: "str | bytes") -> "QRSymbol":
        try:
            payload = json.loads(text)
        except ValueError as exc:
            raise MalformedPersistedState(f"invalid JSON: {exc}") from exc
        return cls.from_dict(payload)


def _int_field(payload: Mapping[str, Any], name: str, low: int, high: Optional[int]) -> int:
    value = payload[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedPersistedState(f"{name} must be an integer")
    if value < low or (high is not None and value > high):
        raise MalformedPersistedState(f"{name} out of range: {value}")
    return value


def encode(content: str, error_level: "str | ErrorLevel" = ErrorLevel.M) -> QRSymbol:
    """Encode ``content`` into a QR symbol with at least ``error_level`` correction."""
    requested = ErrorLevel.parse(error_level)
    mode = EncodingMode.classify(content)
    layout = plan(mode, len(content), requested)
    data = pack(content, mode, layout.length_bits, layout.data_codewords)
    codewords = interleave(data, ec_blocks(layout.version, layout.error_level))
    matrix, mask_index = BitMatrix.optimal_mask(layout.version, codewords, layout.error_level)
    logger.debug(
        "encoded %d characters as %s, version %d level %s mask %d",
        len(content),
        mode.name,
        layout.version,
        layout.error_level.value,
        mask_index,
    )
    return QRSymbol(
        matrix=matrix,
        version=layout.version,
        size=matrix.size,
        error_level=layout.error_level,
        encoding_mode=mode,
        codewords=codewords,
        mask_index=mask_index,
    )


def create_png(
    content: str,
    error_level: "str | ErrorLevel" = ErrorLevel.M,
    width: Optional[int] = png.DEFAULT_WIDTH,
    margin: int = png.DEFAULT_MARGIN,
    light: str = png.DEFAULT_LIGHT,
    dark: str = png.DEFAULT_DARK,
) -> bytes:
    return encode(content, error_level).to_png(width=width, margin=margin, light=light, dark=dark)
