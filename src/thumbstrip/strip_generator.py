"""Command-line entry point for thumbnail strip generation.

This module owns argument parsing and logging setup for ``poetry run
thumbstrip``; the work itself happens in ``StripPipeline``.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys

from .strip_errors import ConfigError
from .strip_errors import ThumbstripError
from .strip_pipeline import StripPipeline
from .strip_settings import INT_DEFAULT_CANVAS_WIDTH
from .strip_settings import INT_DEFAULT_ROW_HEIGHT
from .strip_settings import INT_DEFAULT_SPACING
from .strip_settings import STR_DEFAULT_OUTPUT
from .strip_settings import StripSettings

# Structured logging without timestamps for cleaner CLI output.
logging.basicConfig(format="%(levelname)s: %(message)s", level=logging.INFO)
logger_app = logging.getLogger(__name__)


def get_version() -> str:
    """Retrieve package version from installed metadata."""
    try:
        str_version_result: str = importlib.metadata.version("thumbstrip")
        return str_version_result
    except importlib.metadata.PackageNotFoundError as exc_error:
        logger_app.warning(
            "Package 'thumbstrip' not found. Using 'unknown' version. Context: %s",
            exc_error,
        )
        str_unknown_version: str = "unknown"
        return str_unknown_version


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser; ``-h`` is the row height, so help lives on ``-?``."""
    obj_parser = argparse.ArgumentParser(
        prog="thumbstrip",
        description="Creates a strip of thumbnail images, and an optional mapfile.",
        add_help=False,
    )
    obj_parser.add_argument(
        "input_images",
        nargs="*",
        type=str,
        help="Input image paths, placed left to right in the given order.",
    )
    obj_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=STR_DEFAULT_OUTPUT,
        help=f"Image file to create, default '{STR_DEFAULT_OUTPUT}'.",
    )
    obj_parser.add_argument(
        "-m",
        "--mapfile",
        type=str,
        default=None,
        help="Map file to create, optional.",
    )
    obj_parser.add_argument(
        "-h",
        "--height",
        type=int,
        default=INT_DEFAULT_ROW_HEIGHT,
        help=f"Height of a row in pixels, default {INT_DEFAULT_ROW_HEIGHT}.",
    )
    obj_parser.add_argument(
        "-s",
        "--space",
        type=int,
        default=INT_DEFAULT_SPACING,
        help=f"Space between thumbnails in pixels, default {INT_DEFAULT_SPACING}.",
    )
    obj_parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=INT_DEFAULT_CANVAS_WIDTH,
        help=f"Width of a row in pixels, default {INT_DEFAULT_CANVAS_WIDTH}.",
    )
    obj_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Be verbose."
    )
    obj_parser.add_argument(
        "-?", "--help", action="store_true", help="Print this help screen."
    )
    obj_parser.add_argument(
        "--version", action="store_true", help="Print version and exit."
    )
    return obj_parser


def main() -> None:
    """CLI entrypoint: build the strip and exit non-zero on any failure."""
    obj_parser: argparse.ArgumentParser = build_parser()
    obj_args = obj_parser.parse_args()

    if obj_args.help:
        obj_parser.print_help(sys.stderr)
        sys.exit(0)

    if obj_args.version:
        str_version_text: str = (
            f"thumbstrip v{get_version()} (Python {sys.version.split()[0]})"
        )
        logger_app.info(str_version_text)
        sys.exit(0)

    if obj_args.verbose:
        logging.getLogger("thumbstrip").setLevel(logging.DEBUG)

    try:
        obj_settings: StripSettings = StripSettings(
            str_output_destination=obj_args.output,
            str_map_path=obj_args.mapfile,
            int_row_height=obj_args.height,
            int_spacing=obj_args.space,
            int_canvas_width=obj_args.width,
            bool_verbose=obj_args.verbose,
        )
    except ConfigError as exc_error:
        logger_app.error("Invalid configuration. Context: %s", exc_error)
        sys.exit(1)

    obj_pipeline: StripPipeline = StripPipeline(obj_args.input_images, obj_settings)
    try:
        obj_pipeline.run()
    except ThumbstripError as exc_error:
        logger_app.error("Strip generation failed. Context: %s", exc_error)
        if isinstance(exc_error, ConfigError):
            obj_parser.print_usage(sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
