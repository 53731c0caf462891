import argparse
import logging
import sys
from pathlib import Path

from pixelview.ansi import markup_to_ansi
from pixelview.converter import InvalidHeightError, from_file


def main():
    parser = argparse.ArgumentParser(description="Render an image as half-block glyphs with colour markup")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-c", "--colour", action="store_true", default=False, help="Emit ANSI truecolor escapes instead of markup"
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s", stream=sys.stderr)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        encoded = from_file(image_path)
    except (InvalidHeightError, OSError) as e:
        print(f"{image_path}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.colour:
        encoded = markup_to_ansi(encoded)
    sys.stdout.write(encoded)
