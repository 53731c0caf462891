import numpy as np
import pytest
from PIL import Image


def _image_from_rows(mode, rows):
    img = Image.new(mode, (len(rows[0]), len(rows)))
    for y, row in enumerate(rows):
        for x, colour in enumerate(row):
            img.putpixel((x, y), colour)
    return img


@pytest.fixture
def make_image():
    """Build a Pillow image from a list of pixel rows, top to bottom."""

    def make(rows, mode="RGBA"):
        return _image_from_rows(mode, rows)

    return make


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def noisy_rgba(rng):
    """RGBA pixels drawn from a handful of colours so runs and changes both occur."""
    palette = np.array(
        [(255, 0, 0, 255), (0, 0, 255, 255), (0, 0, 0, 0), (255, 255, 255, 128)],
        dtype=np.uint8,
    )
    return palette[rng.integers(0, len(palette), size=(8, 7))]
