from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image

from pixelview.buffer import ColourAccess, NRGBABuffer, PalettedBuffer, from_array, from_pil
from pixelview.scanner import scan_generic, scan_nrgba, scan_paletted

log = logging.getLogger(__name__)

# Buffer types with a dedicated scanner; anything else goes through scan_generic
FAST_PATHS = {
    PalettedBuffer: scan_paletted,
    NRGBABuffer: scan_nrgba,
}


class InvalidHeightError(ValueError):
    def __init__(self, height: int):
        super().__init__("Can't process image with uneven height")
        self.height = height


def validate_height(height: int) -> None:
    """Raise InvalidHeightError unless the rows split evenly into pixel pairs."""
    if height % 2 != 0:
        raise InvalidHeightError(height)


def _height(image) -> int:
    if isinstance(image, Image.Image):
        return image.height
    if isinstance(image, np.ndarray):
        return image.shape[0]
    _, y0, _, y1 = image.bounds
    return y1 - y0


def from_image(image: Image.Image | np.ndarray | ColourAccess) -> str:
    """Render an image as half-block glyphs with inline ``[fg:bg]`` colour markup.

    Each output line covers two pixel rows: the glyph's foreground is the top
    pixel and its background the bottom one. Markup is only written for colours
    that differ from the previous glyph on the same line.

    Raises InvalidHeightError if the image has an odd number of rows.
    """
    validate_height(_height(image))

    if isinstance(image, Image.Image):
        image = from_pil(image)
    elif isinstance(image, np.ndarray):
        image = from_array(image)

    scan = FAST_PATHS.get(type(image), scan_generic)
    log.debug("Scanning %s with %s", type(image).__name__, scan.__name__)
    return scan(image)


def from_reader(stream: BinaryIO) -> str:
    with Image.open(stream) as image:
        return from_image(image)


def from_file(path: str | Path) -> str:
    with Path(path).open("rb") as f:
        return from_reader(f)
