"""Run configuration for thumbnail strip generation.

Defaults mirror the command-line defaults so the pipeline can be driven from
Python without going through ``argparse``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .strip_errors import ConfigError

STR_DEFAULT_OUTPUT: str = "pnm:-"
INT_DEFAULT_ROW_HEIGHT: int = 28
INT_DEFAULT_SPACING: int = 4
INT_DEFAULT_CANVAS_WIDTH: int = 732


@dataclass
class StripSettings:
    """Validated settings for one strip run.

    Inputs:
    - ``str_output_destination``: file path or ``format:target`` destination.
    - ``str_map_path``: optional map file path.
    - ``int_row_height``: thumbnail height in pixels, must be > 0.
    - ``int_spacing``: gap between thumbnails and rows, must be >= 0.
    - ``int_canvas_width``: width of every row, must be > 0.
    - ``bool_verbose``: per-image debug logging and progress output.
    """

    str_output_destination: str = STR_DEFAULT_OUTPUT
    str_map_path: str | None = None
    int_row_height: int = INT_DEFAULT_ROW_HEIGHT
    int_spacing: int = INT_DEFAULT_SPACING
    int_canvas_width: int = INT_DEFAULT_CANVAS_WIDTH
    bool_verbose: bool = False

    def __post_init__(self) -> None:
        """Reject geometry the row packer cannot work with."""
        if self.int_row_height <= 0:
            raise ConfigError(f"Row height must be > 0. Received: {self.int_row_height}")
        if self.int_canvas_width <= 0:
            raise ConfigError(
                f"Canvas width must be > 0. Received: {self.int_canvas_width}"
            )
        if self.int_spacing < 0:
            raise ConfigError(f"Spacing must be >= 0. Received: {self.int_spacing}")

        str_destination: str = self.str_output_destination.strip()
        if not str_destination:
            raise ConfigError("Output destination cannot be empty or whitespace.")
        self.str_output_destination = str_destination
