"""Exception hierarchy for thumbnail strip generation.

Every error that terminates a run derives from ``ThumbstripError`` so the CLI
can report it and exit non-zero. ``RasterEngineError`` is raised only by raster
engines and is translated into a stage error at the stage boundary.
"""

from __future__ import annotations


class ThumbstripError(RuntimeError):
    """Base class for errors that abort a strip run."""


class RasterEngineError(RuntimeError):
    """Raised by a raster engine when a decode/filter/encode primitive fails."""


class DecodeError(ThumbstripError):
    """An input image could not be decoded, scaled, or sharpened."""

    def __init__(self, str_source_path: str, str_message: str) -> None:
        super().__init__(f"{str_source_path}: {str_message}")
        self.str_source_path: str = str_source_path


class LayoutError(ThumbstripError):
    """The thumbnails cannot be laid out on the requested canvas."""


class ImageTooWideError(LayoutError):
    """A single thumbnail is wider than the whole canvas."""

    def __init__(
        self, str_source_path: str, int_width: int, int_canvas_width: int
    ) -> None:
        super().__init__(
            f"Image too large: {str_source_path} "
            f"(thumbnail width {int_width} exceeds canvas width {int_canvas_width})"
        )
        self.str_source_path: str = str_source_path
        self.int_width: int = int_width
        self.int_canvas_width: int = int_canvas_width


class ConfigError(ThumbstripError):
    """Invalid run configuration."""


class NoInputImagesError(ConfigError):
    """The run was started without any input image paths."""

    def __init__(self) -> None:
        super().__init__("No input images given.")


class RenderError(ThumbstripError):
    """Canvas allocation, compositing, or encoding failed."""


class MapWriteError(ThumbstripError):
    """The map file could not be opened or written."""

    def __init__(self, str_map_path: str, str_message: str) -> None:
        super().__init__(f"{str_map_path}: {str_message}")
        self.str_map_path: str = str_map_path
