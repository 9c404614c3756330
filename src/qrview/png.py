"""PNG export of symbol matrices."""

from __future__ import annotations

import io
from typing import Sequence, Tuple

from PIL import Image

DEFAULT_WIDTH = 300
DEFAULT_MARGIN = 2
DEFAULT_SCALE = 8
DEFAULT_LIGHT = "FFFFFFFF"
DEFAULT_DARK = "000000FF"

RGBA = Tuple[int, int, int, int]


def parse_color(value: str) -> RGBA:
    """Parse ``RRGGBB`` or ``RRGGBBAA`` hex colours, with an optional ``#``."""
    text = str(value).strip().lstrip("#")
    if len(text) == 6:
        text += "FF"
    if len(text) != 8:
        raise ValueError(f"invalid colour: {value!r}")
    try:
        packed = int(text, 16)
    except ValueError as exc:
        raise ValueError(f"invalid colour: {value!r}") from exc
    return (packed >> 24 & 0xFF, packed >> 16 & 0xFF, packed >> 8 & 0xFF, packed & 0xFF)


def scale_for_width(size: int, width: "int | None", margin: int) -> int:
    """Largest whole module scale that fits ``width``, or the default scale."""
    footprint = size + margin * 2
    if width and width >= footprint:
        return width // footprint
    return DEFAULT_SCALE


def render_image(
    matrix: Sequence[Sequence[int]],
    scale: int = DEFAULT_SCALE,
    margin: int = DEFAULT_MARGIN,
    light: str = DEFAULT_LIGHT,
    dark: str = DEFAULT_DARK,
) -> Image.Image:
    """Palette image with one pixel per module, scaled up by ``scale``."""
    if scale <= 0:
        raise ValueError("scale must be positive")
    if margin < 0:
        raise ValueError("margin must not be negative")
    size = len(matrix)
    if size == 0:
        raise ValueError("matrix must not be empty")
    light_rgba = parse_color(light)
    dark_rgba = parse_color(dark)

    modules = size + margin * 2
    pixels = bytearray(modules * modules)
    for y, row in enumerate(matrix):
        start = (margin + y) * modules + margin
        pixels[start:start + size] = bytes(1 if cell else 0 for cell in row)

    image = Image.frombytes("P", (modules, modules), bytes(pixels))
    if scale != 1:
        image = image.resize((modules * scale, modules * scale), Image.Resampling.NEAREST)
    image.putpalette(light_rgba + dark_rgba, rawmode="RGBA")
    return image


def render_png(
    matrix: Sequence[Sequence[int]],
    scale: int = DEFAULT_SCALE,
    margin: int = DEFAULT_MARGIN,
    light: str = DEFAULT_LIGHT,
    dark: str = DEFAULT_DARK,
) -> bytes:
    image = render_image(matrix, scale=scale, margin=margin, light=light, dark=dark)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
