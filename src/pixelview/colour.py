from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

Rgba16 = tuple[int, int, int, int]

MAX_16 = 0xFFFF


def _widen(c: int) -> int:
    """Spread an 8-bit channel over 16 bits (0xab -> 0xabab)."""
    return c * 0x101


def _rgb(c) -> Rgba16:
    r, g, b = c[0], c[1], c[2]
    return _widen(r), _widen(g), _widen(b), MAX_16


def _nrgba(c) -> Rgba16:
    r, g, b, a = c
    a = _widen(a)
    return _widen(r) * a // MAX_16, _widen(g) * a // MAX_16, _widen(b) * a // MAX_16, a


def _gray(c) -> Rgba16:
    y = _widen(c)
    return y, y, y, MAX_16


def _gray_alpha(c) -> Rgba16:
    y, a = c
    a = _widen(a)
    y = _widen(y) * a // MAX_16
    return y, y, y, a


def _rgba_premultiplied(c) -> Rgba16:
    r, g, b, a = c
    return _widen(r), _widen(g), _widen(b), _widen(a)


def _gray_alpha_premultiplied(c) -> Rgba16:
    y, a = c
    y = _widen(y)
    return y, y, y, _widen(a)


def _gray16(c) -> Rgba16:
    y = min(max(int(c), 0), MAX_16)
    return y, y, y, MAX_16


@dataclass(frozen=True)
class ColourModel:
    """How to read a native pixel value as 16-bit-per-channel, alpha-premultiplied RGBA."""

    name: str
    rgba: Callable[[Any], Rgba16]


RGB = ColourModel("rgb", _rgb)
NRGBA = ColourModel("nrgba", _nrgba)
GRAY = ColourModel("gray", _gray)
RGBA_PREMULTIPLIED = ColourModel("rgba_premultiplied", _rgba_premultiplied)
GRAY_ALPHA = ColourModel("gray_alpha", _gray_alpha)
GRAY_ALPHA_PREMULTIPLIED = ColourModel("gray_alpha_premultiplied", _gray_alpha_premultiplied)
GRAY16 = ColourModel("gray16", _gray16)

# Pillow modes whose getpixel() values map directly onto a model
MODE_MODELS = {
    "1": GRAY,
    "L": GRAY,
    "LA": GRAY_ALPHA,
    "La": GRAY_ALPHA_PREMULTIPLIED,
    "RGB": RGB,
    "RGBA": NRGBA,
    "RGBa": RGBA_PREMULTIPLIED,
    "I": GRAY16,
    "I;16": GRAY16,
    "I;16L": GRAY16,
    "I;16B": GRAY16,
    "I;16N": GRAY16,
}


def colour_hex(colour, model: ColourModel = NRGBA) -> str:
    """Format a native colour as ``#rrggbb``, dropping the low byte of each channel."""
    r, g, b, _ = model.rgba(colour)
    return f"#{r >> 8:02x}{g >> 8:02x}{b >> 8:02x}"
