"""Locally drawn stand-in image used when every remote backend has failed."""

from __future__ import annotations

import base64
import html
import logging
import textwrap
from io import BytesIO
from typing import List

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

SIZE = 512
GRADIENT_START = (0xFF, 0x6B, 0x6B)
GRADIENT_END = (0x4E, 0xCD, 0xC4)
FONT_SIZE = 24
LINE_HEIGHT = 30
WRAP_WIDTH = 400
# Rough characters-per-line for the SVG variant, which cannot measure text
SVG_WRAP_CHARS = 28

_FONT_CANDIDATES = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf", "Arial.ttf")


def _font(size: int = FONT_SIZE):
    for name in _FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _gradient(size: int = SIZE) -> Image.Image:
    """Top-left to bottom-right blend of the two gradient colours."""
    span = 2 * (size - 1) or 1
    mask = Image.new("L", (size, size))
    mask.putdata([255 * (x + y) // span for y in range(size) for x in range(size)])
    start = Image.new("RGB", (size, size), GRADIENT_START)
    end = Image.new("RGB", (size, size), GRADIENT_END)
    return Image.composite(end, start, mask)


def wrap_words(text: str, fits) -> List[str]:
    """Greedy word wrap; `fits(line)` says whether a candidate line is narrow enough."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and not fits(candidate):
            lines.append(current)
            current = word
        else:
            current = candidate
    lines.append(current)
    return lines


def render_raster(recipe_name: str) -> str:
    img = _gradient()
    draw = ImageDraw.Draw(img)
    font = _font()
    lines = wrap_words(recipe_name, lambda line: draw.textlength(line, font=font) <= WRAP_WIDTH)

    centre = SIZE / 2
    start_y = centre - (len(lines) - 1) * LINE_HEIGHT / 2
    for index, line in enumerate(lines):
        left, top, right, bottom = draw.textbbox((0, 0), line, font=font)
        x = centre - (right - left) / 2 - left
        y = start_y + index * LINE_HEIGHT - (bottom - top) / 2 - top
        draw.text((x, y), line, fill="white", font=font)

    out = BytesIO()
    img.save(out, format="JPEG", quality=80)
    return "data:image/jpeg;base64," + base64.b64encode(out.getvalue()).decode("ascii")


def render_svg(recipe_name: str) -> str:
    lines = textwrap.wrap(recipe_name, SVG_WRAP_CHARS) or [recipe_name]
    centre = SIZE // 2
    start_y = centre - (len(lines) - 1) * LINE_HEIGHT // 2
    tspans = "".join(
        f'<tspan x="{centre}" y="{start_y + i * LINE_HEIGHT}">{html.escape(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    svg = (
        f'<svg width="{SIZE}" height="{SIZE}" xmlns="http://www.w3.org/2000/svg">'
        '<defs><linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="100%">'
        '<stop offset="0%" style="stop-color:#ff6b6b;stop-opacity:1" />'
        '<stop offset="100%" style="stop-color:#4ecdc4;stop-opacity:1" />'
        "</linearGradient></defs>"
        f'<rect width="{SIZE}" height="{SIZE}" fill="url(#grad)" />'
        f'<text font-family="Arial" font-size="{FONT_SIZE}" font-weight="bold" '
        f'text-anchor="middle" dominant-baseline="middle" fill="white">{tspans}</text>'
        "</svg>"
    )
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def render_placeholder(recipe_name: str) -> str:
    """Gradient card with the recipe name. Falls back to SVG if drawing fails."""
    name = (recipe_name or "").strip() or "Recipe"
    try:
        return render_raster(name)
    except Exception:
        logger.exception("Raster placeholder failed; using SVG | recipe=%s", name)
        return render_svg(name)
