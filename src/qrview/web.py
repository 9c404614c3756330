"""Flask HTTP service for QR code generation."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from flask import Flask, Response, jsonify, request, send_file

from . import png
from .exceptions import MalformedPersistedState, QRViewError
from .symbol import QRSymbol, encode
from .tables import ErrorLevel

MAX_WIDTH = 4000
MAX_MARGIN = 40


@dataclass
class QRRequest:
    data: str
    error_level: ErrorLevel
    width: int
    margin: int
    light: str
    dark: str

    @staticmethod
    def _parse_int(payload: Mapping[str, object], key: str, default: int, low: int, high: int) -> int:
        raw_value = payload.get(key, default)
        if raw_value in (None, ""):
            return default
        try:
            value = int(raw_value)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{key} must be an integer.") from exc
        if not low <= value <= high:
            raise ValueError(f"{key} must be between {low} and {high}.")
        return value

    @staticmethod
    def _parse_color(payload: Mapping[str, object], key: str, default: str) -> str:
        value = str(payload.get(key) or default)
        png.parse_color(value)
        return value

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "QRRequest":
        data = payload.get("data")
        if data is None:
            raise ValueError("data is required.")
        if not isinstance(data, str):
            raise ValueError("data must be a string.")

        error_level = ErrorLevel.parse(str(payload.get("errorCorrection") or "M"))
        return cls(
            data=data,
            error_level=error_level,
            width=cls._parse_int(payload, "width", png.DEFAULT_WIDTH, 1, MAX_WIDTH),
            margin=cls._parse_int(payload, "margin", png.DEFAULT_MARGIN, 0, MAX_MARGIN),
            light=cls._parse_color(payload, "light", png.DEFAULT_LIGHT),
            dark=cls._parse_color(payload, "dark", png.DEFAULT_DARK),
        )

    @classmethod
    def from_request(cls) -> "QRRequest":
        return cls.from_payload(_request_payload())


def _request_payload() -> Dict[str, Any]:
    if request.method == "GET":
        return {key: value for key, value in request.args.items()}
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


def create_app() -> Flask:
    app = Flask(__name__)

    @app.errorhandler(QRViewError)
    @app.errorhandler(ValueError)
    def bad_request(exc: Exception) -> tuple[Response, int]:
        return jsonify({"message": str(exc)}), 400

    @app.route("/api/qr-png", methods=["GET", "POST"])
    def qr_png():
        qr_request = QRRequest.from_request()
        symbol = encode(qr_request.data, qr_request.error_level)
        buffer = io.BytesIO(
            symbol.to_png(
                width=qr_request.width,
                margin=qr_request.margin,
                light=qr_request.light,
                dark=qr_request.dark,
            )
        )
        return send_file(buffer, mimetype="image/png")

    @app.route("/api/qr-json", methods=["GET", "POST"])
    def qr_json():
        qr_request = QRRequest.from_request()
        return jsonify(encode(qr_request.data, qr_request.error_level).to_dict())

    @app.post("/api/qr-matrix")
    def qr_matrix():
        payload: Optional[object] = request.get_json(force=True, silent=True)
        if payload is None:
            raise MalformedPersistedState("request body must be a JSON object")
        symbol = QRSymbol.from_dict(payload)  # type: ignore[arg-type]
        rows = ["".join(map(str, row)) for row in symbol.matrix]
        return jsonify({"version": symbol.version, "maskIndex": symbol.mask_index, "rows": rows})

    return app
