from dataclasses import dataclass

from pixelview.colour import NRGBA, ColourModel, colour_hex

# Upper half block: foreground paints the top pixel, background the bottom one
GLYPH = "▀"


class _NoColour:
    """Sentinel that compares unequal to every real colour."""

    __slots__ = ()

    def __repr__(self):
        return "NO_COLOUR"


NO_COLOUR = _NoColour()


@dataclass
class EncoderState:
    """Colours most recently set in the current band. Create a new one per band."""

    prev_fg: object = NO_COLOUR
    prev_bg: object = NO_COLOUR


def encode(fg, bg, state: EncoderState, model: ColourModel = NRGBA) -> str:
    """Encode one pixel pair as a glyph, prefixed with markup for whichever colours changed.

    Colours are compared by native value, not by their formatted hex, so two
    colours that only differ in a discarded channel still produce markup.
    """
    if fg == state.prev_fg and bg == state.prev_bg:
        return GLYPH

    if fg == state.prev_fg:
        state.prev_bg = bg
        return f"[:{colour_hex(bg, model)}]{GLYPH}"

    if bg == state.prev_bg:
        state.prev_fg = fg
        return f"[{colour_hex(fg, model)}:]{GLYPH}"

    state.prev_fg = fg
    state.prev_bg = bg
    return f"[{colour_hex(fg, model)}:{colour_hex(bg, model)}]{GLYPH}"
