import numpy as np
import pytest

from pixelview.buffer import NRGBABuffer, PalettedBuffer, from_array
from pixelview.scanner import scan_generic, scan_nrgba, scan_paletted

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
BLACK = (0, 0, 0, 255)


def nrgba(rows):
    return from_array(np.array(rows, dtype=np.uint8))


def paletted(indices, palette):
    arr = np.array(indices, dtype=np.uint8)
    h, w = arr.shape
    return PalettedBuffer(pix=arr.tobytes(), stride=w, rect=(0, 0, w, h), palette=palette)


SCANNERS = {
    NRGBABuffer: scan_nrgba,
    PalettedBuffer: scan_paletted,
}


@pytest.fixture(params=["generic", "fast"])
def scan(request):
    if request.param == "generic":
        return scan_generic
    return lambda image: SCANNERS[type(image)](image)


def test_two_by_two(scan):
    image = nrgba([[RED, BLUE], [BLUE, BLUE]])
    assert scan(image) == "[#ff0000:#0000ff]▀[#0000ff:]▀\n"


def test_two_by_two_columns_of_one_colour(scan):
    image = nrgba([[RED, BLUE], [RED, BLUE]])
    assert scan(image) == "[#ff0000:#ff0000]▀[#0000ff:#0000ff]▀\n"


def test_single_black_column(scan):
    assert scan(nrgba([[BLACK], [BLACK]])) == "[#000000:#000000]▀\n"


def test_solid_band_only_marks_first_glyph(scan):
    image = nrgba([[GREEN] * 4, [BLUE] * 4])
    assert scan(image) == "[#00ff00:#0000ff]▀▀▀▀\n"


def test_alternating_foreground_never_repeats_background(scan):
    image = nrgba([[RED, GREEN, RED, GREEN], [BLACK] * 4])
    assert scan(image) == "[#ff0000:#000000]▀[#00ff00:]▀[#ff0000:]▀[#00ff00:]▀\n"


def test_state_resets_every_band(scan):
    image = nrgba([[RED], [RED], [RED], [RED]])
    assert scan(image) == "[#ff0000:#ff0000]▀\n[#ff0000:#ff0000]▀\n"


def test_paletted_alternating_background(scan):
    image = paletted([[0, 0, 0], [1, 2, 1]], [BLACK, RED, GREEN])
    assert scan(image) == "[#000000:#ff0000]▀[:#00ff00]▀[:#ff0000]▀\n"


def test_band_and_glyph_counts(noisy_rgba):
    image = from_array(noisy_rgba)
    lines = scan_generic(image).split("\n")
    assert lines[-1] == ""
    bands = lines[:-1]
    assert len(bands) == noisy_rgba.shape[0] // 2
    assert all(band.count("▀") == noisy_rgba.shape[1] for band in bands)


def test_empty_image():
    assert scan_nrgba(NRGBABuffer(pix=b"", stride=0, rect=(0, 0, 0, 0))) == ""


def test_nrgba_matches_generic(noisy_rgba):
    image = from_array(noisy_rgba)
    assert scan_nrgba(image) == scan_generic(image)


def test_paletted_matches_generic(rng):
    palette = [RED, GREEN, BLUE, (0, 0, 0, 0)]
    image = paletted(rng.integers(0, len(palette), size=(6, 9)), palette)
    assert scan_paletted(image) == scan_generic(image)


def test_nrgba_sub_image(noisy_rgba):
    sub = from_array(noisy_rgba).sub_image((1, 2, 5, 6))
    assert sub.rect == (1, 2, 5, 6)
    expected = scan_nrgba(from_array(noisy_rgba[2:6, 1:5]))
    assert scan_nrgba(sub) == expected
    assert scan_generic(sub) == expected


def test_paletted_sub_image(rng):
    palette = [RED, GREEN, BLUE]
    indices = rng.integers(0, len(palette), size=(6, 5))
    sub = paletted(indices, palette).sub_image((2, 1, 5, 5))
    expected = scan_paletted(paletted(indices[1:5, 2:5], palette))
    assert scan_paletted(sub) == expected
    assert scan_generic(sub) == expected


def test_padded_stride(noisy_rgba):
    h, w, _ = noisy_rgba.shape
    padded = np.zeros((h, w * 4 + 12), dtype=np.uint8)
    padded[:, : w * 4] = noisy_rgba.reshape(h, w * 4)
    image = NRGBABuffer(pix=padded.tobytes(), stride=w * 4 + 12, rect=(0, 0, w, h))
    expected = scan_nrgba(from_array(noisy_rgba))
    assert scan_nrgba(image) == expected
    assert scan_generic(image) == expected
