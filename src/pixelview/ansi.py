import re

MARKUP = re.compile(r"\[(#[0-9a-f]{6})?:(#[0-9a-f]{6})?\]")
RESET = "\033[0m"


def _sgr(layer: int, hex_colour: str) -> str:
    r, g, b = (int(hex_colour[i : i + 2], 16) for i in (1, 3, 5))
    return f"\033[{layer};2;{r};{g};{b}m"


def _replace(match: re.Match) -> str:
    fg, bg = match.groups()
    parts = []
    if fg:
        parts.append(_sgr(38, fg))
    if bg:
        parts.append(_sgr(48, bg))
    return "".join(parts)


def markup_to_ansi(text: str) -> str:
    """Translate ``[fg:bg]`` markup into ANSI truecolor escapes, resetting at the end of each line."""
    lines = [MARKUP.sub(_replace, line) + RESET for line in text.splitlines()]
    return "".join(line + "\n" for line in lines)
