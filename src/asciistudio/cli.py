import argparse
import logging
import sys

from asciistudio.charsets import Palette
from asciistudio.engine import RESOLUTION_MAX, RESOLUTION_MIN, ConversionConfig
from asciistudio.errors import AsciiStudioError
from asciistudio.presets import PRESETS, get_preset
from asciistudio.render import load_font, render_ansi
from asciistudio.session import Studio

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_config(args: argparse.Namespace) -> ConversionConfig:
    """Start from the preset (if any) and let explicit flags override it."""
    config = ConversionConfig()
    if args.preset is not None:
        config = get_preset(args.preset).apply(config)
    changes = {}
    if args.resolution is not None:
        changes["resolution"] = args.resolution
    if args.chars is not None:
        changes["palette"] = args.chars
    elif args.palette is not None:
        changes["palette"] = Palette.from_name(args.palette).value
    if args.invert:
        changes["inverted"] = True
    if args.colour:
        changes["grayscale"] = False
    config = config.replace(**changes)
    config.validate()
    return config


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as ASCII art")
    parser.add_argument("image", nargs="?", default=None, help="Path or URL of the input image (default: sample image)")
    parser.add_argument(
        "-r",
        "--resolution",
        type=float,
        default=None,
        help=f"Fraction of pixels kept as characters (recommended {RESOLUTION_MIN}-{RESOLUTION_MAX}, default: 0.11)",
    )
    parser.add_argument(
        "-p", "--palette", default=None, choices=Palette.names(), help="Built-in character set (default: standard)"
    )
    parser.add_argument("--chars", default=None, help="Custom character ramp, darkest first (overrides --palette)")
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Invert brightness")
    parser.add_argument("-c", "--colour", action="store_true", default=False, help="Keep per-character colours")
    parser.add_argument("--preset", default=None, choices=sorted(PRESETS), help="Apply a named preset first")
    parser.add_argument("-o", "--output", default=None, help="Save the text to this file")
    parser.add_argument("--preview", default=None, help="Save a rendered PNG preview to this file")
    parser.add_argument("--font", default=None, help="TrueType font for the preview (default: Pillow's built-in font)")
    parser.add_argument("--ansi", action="store_true", default=False, help="Print with ANSI truecolor escapes")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log output (-v, -vv)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = make_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    studio = Studio(config)
    try:
        grid = studio.load(args.image)
        if args.output is not None:
            studio.download(args.output)
        if args.preview is not None:
            font = load_font(args.font) if args.font else None
            studio.preview(font=font).save(args.preview)
        if args.ansi:
            print(render_ansi(grid))
        elif args.output is None:
            studio.copy(sys.stdout)
    except (AsciiStudioError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
