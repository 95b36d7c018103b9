import argparse
import gettext
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Make "_" available before any user-facing strings are built
gettext.install("bmpcodec")

from . import config as config_module  # noqa: E402
from .bmp.errors import BmpError  # noqa: E402
from .config import LOG_LEVELS  # noqa: E402
from .core.image import Image  # noqa: E402
from .core.pixel import Pixel  # noqa: E402
from .fileio import open as open_image  # noqa: E402

logger = logging.getLogger(__name__)


def _cmd_info(args) -> int:
    img = open_image(args.filename)
    palette = img.color_palette
    print(_("File: {path}").format(path=args.filename))
    print(
        _("Size: {width}x{height}").format(
            width=img.width, height=img.height
        )
    )
    print(_("File size: {size} bytes").format(size=img.header.file_size))
    print(_("Pixel offset: {offset}").format(offset=img.header.pixel_offset))
    print(
        _("Palette: {count} colors").format(
            count=len(palette) if palette is not None else 0
        )
    )
    print(_("Row padding: {padding} bytes").format(padding=img.padding))
    return 0


def _cmd_convert(args, cfg) -> int:
    output = Path(args.output)
    if output.exists() and not (args.force or cfg.overwrite):
        print(
            _("{path} exists, use --force to overwrite it.").format(
                path=output
            ),
            file=sys.stderr,
        )
        return 1
    img = open_image(args.input)
    img.save(output)
    logger.info(
        "Converted %s to 24-bit %s (%dx%d)",
        args.input,
        output,
        img.width,
        img.height,
    )
    return 0


def _cmd_gradient(args) -> int:
    if args.width <= 0 or args.height <= 0:
        print(_("Width and height must be positive."), file=sys.stderr)
        return 1
    img = Image.new(args.width, args.height)
    for x, y in img.coordinates():
        img.set_pixel(x, y, Pixel(x, y, 200))
    img.save(args.output)
    logger.info(
        "Wrote %dx%d gradient to %s", img.width, img.height, args.output
    )
    return 0


def _cmd_config(args, cfg) -> int:
    if args.key is None:
        for key, value in cfg.to_dict().items():
            print(f"{key}: {value}")
        return 0
    if args.value is None:
        print(f"{args.key}: {cfg.to_dict()[args.key]}")
        return 0
    if args.key == "log_level":
        try:
            cfg.set_log_level(args.value)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1
    else:
        value = args.value.lower()
        if value not in ("true", "false", "1", "0", "yes", "no"):
            print(
                _("Expected a boolean value, got '{value}'.").format(
                    value=args.value
                ),
                file=sys.stderr,
            )
            return 1
        cfg.set_overwrite(value in ("true", "1", "yes"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bmpcodec",
        description=_("Reads, inspects and writes BMP images."),
    )
    parser.add_argument(
        "--loglevel",
        default=None,
        choices=LOG_LEVELS,
        help=_("Set the logging level (default: from config, or INFO)"),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser(
        "info", help=_("Print the header fields of a BMP file.")
    )
    info.add_argument("filename", help=_("Path to the BMP file."))

    convert = subparsers.add_parser(
        "convert", help=_("Re-encode a BMP file as 24-bit truecolor.")
    )
    convert.add_argument("input", help=_("Path to the source BMP file."))
    convert.add_argument("output", help=_("Path of the file to write."))
    convert.add_argument(
        "--force",
        action="store_true",
        help=_("Overwrite the output file if it exists."),
    )

    gradient = subparsers.add_parser(
        "gradient", help=_("Write a red/green gradient test image.")
    )
    gradient.add_argument("output", help=_("Path of the file to write."))
    gradient.add_argument("--width", type=int, default=256)
    gradient.add_argument("--height", type=int, default=256)

    cfg = subparsers.add_parser(
        "config", help=_("Show or change configuration options.")
    )
    cfg.add_argument(
        "key", nargs="?", choices=("log_level", "overwrite"), default=None
    )
    cfg.add_argument("value", nargs="?", default=None)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = config_module.initialize_config().config

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    log_level_name = args.loglevel or cfg.log_level
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    logging.getLogger().setLevel(log_level)
    logger.debug(
        "Running '%s' with log level %s", args.command, log_level_name
    )

    try:
        if args.command == "info":
            return _cmd_info(args)
        if args.command == "convert":
            return _cmd_convert(args, cfg)
        if args.command == "gradient":
            return _cmd_gradient(args)
        return _cmd_config(args, cfg)
    except BmpError as e:
        print(_("Error: {error}").format(error=e), file=sys.stderr)
        return 1
    except OSError as e:
        print(_("Error: {error}").format(error=e), file=sys.stderr)
        return 1
