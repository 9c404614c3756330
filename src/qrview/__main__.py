"""Command line interface for generating QR code PNG and JSON files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from . import png
from .exceptions import QRViewError
from .symbol import encode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrview", description="Generate QR codes as PNG images or JSON")
    data_group = parser.add_mutually_exclusive_group(required=True)
    data_group.add_argument("--text", help="Literal text/URL to encode")
    data_group.add_argument("--file", type=Path, help="Read the payload from a file")

    parser.add_argument("-o", "--output", type=Path, help="Output file path (default: qr_code.png or qr_code.json)")
    parser.add_argument("--format", choices=["png", "json"], default="png", help="Output format")
    parser.add_argument("--ecc", choices=["L", "M", "Q", "H"], default="M", help="Minimum error correction level")
    parser.add_argument("--width", type=int, default=png.DEFAULT_WIDTH, help="Target image width in pixels")
    parser.add_argument("--margin", type=int, default=png.DEFAULT_MARGIN, help="Quiet-zone width in modules")
    parser.add_argument("--light", default=png.DEFAULT_LIGHT, help="Light colour as RRGGBB[AA]")
    parser.add_argument("--dark", default=png.DEFAULT_DARK, help="Dark colour as RRGGBB[AA]")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log encoding decisions")
    return parser


def resolve_payload(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    raise SystemExit("No payload provided")


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.margin < 0:
        parser.error("--margin must not be negative")
    payload = resolve_payload(args)
    output = args.output or Path(f"qr_code.{args.format}")
    try:
        symbol = encode(payload, args.ecc)
        if args.format == "json":
            output.write_text(symbol.to_json(), encoding="utf-8")
        else:
            output.write_bytes(symbol.to_png(width=args.width, margin=args.margin, light=args.light, dark=args.dark))
    except (QRViewError, ValueError) as exc:
        raise SystemExit(f"error: {exc}") from exc
    parser.exit(
        0,
        f"Saved version {symbol.version}-{symbol.error_level.value} QR code (mask {symbol.mask_index}) to {output}\n",
    )


if __name__ == "__main__":
    main()
