"""Walk an image two rows at a time, encoding each column as one glyph.

Every scanner resets the encoder state at the start of each band and ends each
band with a newline. The buffer-specific scanners read pixels straight from
storage instead of going through ``at()``, and must produce exactly the same
text as ``scan_generic`` for the same pixels.
"""

from pixelview.buffer import ColourAccess, NRGBABuffer, PalettedBuffer
from pixelview.encoder import EncoderState, encode


def scan_generic(image: ColourAccess) -> str:
    """Fallback scanner for anything providing ``bounds``, ``model`` and ``at()``."""
    x0, y0, x1, y1 = image.bounds
    model = image.model
    bands = []
    for y in range(y0, y1, 2):
        state = EncoderState()
        parts = [encode(image.at(x, y), image.at(x, y + 1), state, model) for x in range(x0, x1)]
        parts.append("\n")
        bands.append("".join(parts))
    return "".join(bands)


def scan_paletted(image: PalettedBuffer) -> str:
    x0, y0, x1, y1 = image.rect
    pix, stride, palette, model = image.pix, image.stride, image.palette, image.model
    bands = []
    for y in range(y0, y1, 2):
        state = EncoderState()
        row = (y - y0) * stride - x0
        parts = []
        for x in range(x0, x1):
            i = row + x
            parts.append(encode(palette[pix[i]], palette[pix[i + stride]], state, model))
        parts.append("\n")
        bands.append("".join(parts))
    return "".join(bands)


def scan_nrgba(image: NRGBABuffer) -> str:
    x0, y0, x1, y1 = image.rect
    pix, stride, model = image.pix, image.stride, image.model
    bands = []
    for y in range(y0, y1, 2):
        state = EncoderState()
        row = (y - y0) * stride - x0 * 4
        parts = []
        for x in range(x0, x1):
            i = row + x * 4
            fg = (pix[i], pix[i + 1], pix[i + 2], pix[i + 3])
            i += stride
            bg = (pix[i], pix[i + 1], pix[i + 2], pix[i + 3])
            parts.append(encode(fg, bg, state, model))
        parts.append("\n")
        bands.append("".join(parts))
    return "".join(bands)
