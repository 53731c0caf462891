from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol

import numpy as np
from PIL import Image

from pixelview.colour import GRAY, MODE_MODELS, NRGBA, RGB, ColourModel

log = logging.getLogger(__name__)

Rect = tuple[int, int, int, int]  # (min_x, min_y, max_x, max_y), max exclusive

PALETTE_SIZE = 256
_PALETTE_FILL = (0, 0, 0, 0xFF)

# Modes whose single-colour transparency Pillow folds into alpha on conversion to RGBA
TRANSPARENCY_MODES = ("1", "L", "RGB")


class ColourAccess(Protocol):
    bounds: Rect
    model: ColourModel

    def at(self, x: int, y: int):
        """Return the native colour at (x, y), which must lie inside bounds."""
        ...


def _intersect(a: Rect, b: Rect) -> Rect:
    x0, y0 = max(a[0], b[0]), max(a[1], b[1])
    x1, y1 = min(a[2], b[2]), min(a[3], b[3])
    if x0 >= x1 or y0 >= y1:
        return (x0, y0, x0, y0)
    return (x0, y0, x1, y1)


@dataclass
class PalettedBuffer:
    """One palette index per pixel, rows ``stride`` bytes apart."""

    pix: bytes | memoryview
    stride: int
    rect: Rect
    palette: list[tuple[int, ...]]
    model: ColourModel = NRGBA

    @property
    def bounds(self) -> Rect:
        return self.rect

    def offset(self, x: int, y: int) -> int:
        return (y - self.rect[1]) * self.stride + (x - self.rect[0])

    def at(self, x: int, y: int):
        return self.palette[self.pix[self.offset(x, y)]]

    def sub_image(self, rect: Rect) -> PalettedBuffer:
        """View of the pixels inside rect, sharing storage with this buffer."""
        rect = _intersect(self.rect, rect)
        start = self.offset(rect[0], rect[1])
        return replace(self, pix=memoryview(self.pix)[start:], rect=rect)


@dataclass
class NRGBABuffer:
    """Four bytes (r, g, b, straight alpha) per pixel, rows ``stride`` bytes apart."""

    pix: bytes | memoryview
    stride: int
    rect: Rect
    model: ColourModel = NRGBA

    @property
    def bounds(self) -> Rect:
        return self.rect

    def offset(self, x: int, y: int) -> int:
        return (y - self.rect[1]) * self.stride + (x - self.rect[0]) * 4

    def at(self, x: int, y: int):
        i = self.offset(x, y)
        return tuple(self.pix[i : i + 4])

    def sub_image(self, rect: Rect) -> NRGBABuffer:
        """View of the pixels inside rect, sharing storage with this buffer."""
        rect = _intersect(self.rect, rect)
        start = self.offset(rect[0], rect[1])
        return replace(self, pix=memoryview(self.pix)[start:], rect=rect)


def palette_colours(image: Image.Image) -> list[tuple[int, ...]]:
    """Palette of a ``P`` image as NRGBA tuples, padded to 256 entries, with transparency applied."""
    flat = image.getpalette("RGBA") or []
    colours = [tuple(flat[i : i + 4]) for i in range(0, len(flat), 4)][:PALETTE_SIZE]
    colours += [_PALETTE_FILL] * (PALETTE_SIZE - len(colours))

    transparency = image.info.get("transparency")
    if isinstance(transparency, int):
        alphas = {transparency: 0}
    elif isinstance(transparency, bytes):
        alphas = dict(enumerate(transparency[:PALETTE_SIZE]))
    else:
        alphas = {}
    for index, alpha in alphas.items():
        r, g, b, _ = colours[index]
        colours[index] = (r, g, b, alpha)
    return colours


class PillowAccess:
    """Generic accessor over a Pillow image whose pixel values match a known colour model."""

    def __init__(self, image: Image.Image, model: ColourModel | None = None):
        self.image = image
        self.bounds = (0, 0, image.width, image.height)
        self._pixels = image.load()
        if image.mode == "P":
            self._palette = palette_colours(image)
            self.model = model or NRGBA
        else:
            self._palette = None
            self.model = model or MODE_MODELS[image.mode]

    def at(self, x: int, y: int):
        value = self._pixels[x, y]
        if self._palette is not None:
            return self._palette[value]
        return value


def to_rgba(image: Image.Image) -> Image.Image:
    """Convert any Pillow mode to RGBA, going through its base mode or first band if needed."""
    try:
        return image.convert("RGBA")
    except ValueError:
        log.debug("No direct %s to RGBA conversion", image.mode)
    try:
        return image.convert(Image.getmodebase(image.mode)).convert("RGBA")
    except ValueError:
        return image.getchannel(0).convert("RGBA")


def from_pil(image: Image.Image) -> ColourAccess:
    """Describe a Pillow image by the most specific buffer type available for its mode."""
    w, h = image.size
    if image.mode == "P":
        return PalettedBuffer(pix=image.tobytes(), stride=w, rect=(0, 0, w, h), palette=palette_colours(image))
    if image.mode == "RGBA":
        return NRGBABuffer(pix=image.tobytes(), stride=w * 4, rect=(0, 0, w, h))
    if image.mode in TRANSPARENCY_MODES and "transparency" in image.info:
        log.debug("Applying transparency to %s image", image.mode)
        return from_pil(image.convert("RGBA"))
    if image.mode in MODE_MODELS:
        return PillowAccess(image)
    log.debug("Converting %s image to RGBA", image.mode)
    return from_pil(to_rgba(image))


def from_array(array: np.ndarray) -> ColourAccess:
    """Describe a uint8 array shaped (H, W, 4), (H, W, 3) or (H, W)."""
    array = np.asarray(array)
    if array.dtype != np.uint8:
        raise ValueError(f"Unsupported array dtype: {array.dtype}")

    if array.ndim == 3 and array.shape[2] == 4:
        h, w, _ = array.shape
        return NRGBABuffer(pix=np.ascontiguousarray(array).tobytes(), stride=w * 4, rect=(0, 0, w, h))
    if array.ndim == 3 and array.shape[2] == 3:
        return PillowAccess(Image.fromarray(array), RGB)
    if array.ndim == 2:
        return PillowAccess(Image.fromarray(array), GRAY)
    raise ValueError(f"Unsupported array shape: {array.shape}")
