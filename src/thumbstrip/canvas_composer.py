"""Composite placed thumbnails onto one canvas and encode it."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .raster_engine import STR_COMPOSITE_OVER
from .raster_engine import RasterEngine
from .strip_errors import RasterEngineError
from .strip_errors import RenderError
from .strip_records import Dimensions
from .strip_records import ThumbnailRecord

logger_app = logging.getLogger(__name__)

INT_JPEG_QUALITY: int = 70
STR_BACKGROUND_COLOR: str = "white"


class CanvasComposer:
    """Render a laid-out collection to the output destination.

    Constructor Input:
    - ``obj_engine``: raster engine that owns the canvas handle.

    Output/Behavior:
    - ``compose`` allocates the canvas, composites in collection order, and
      encodes with quality ``INT_JPEG_QUALITY``.
    - The canvas is released on every exit path; thumbnail rasters stay owned
      by their records.
    """

    def __init__(self, obj_engine: RasterEngine) -> None:
        self.obj_engine: RasterEngine = obj_engine

    def compose(
        self,
        obj_canvas_size: Dimensions,
        iterable_records: Iterable[ThumbnailRecord],
        str_destination: str,
    ) -> None:
        """Composite every record at its offset and write ``str_destination``."""
        try:
            raster_canvas: Any = self.obj_engine.new_canvas(
                obj_canvas_size.int_width,
                obj_canvas_size.int_height,
                STR_BACKGROUND_COLOR,
            )
        except RasterEngineError as exc_error:
            raise RenderError(f"Canvas allocation failed: {exc_error}") from exc_error

        try:
            for obj_record in iterable_records:
                if obj_record.obj_offset is None:
                    raise RenderError(
                        f"Thumbnail {obj_record.str_source_path} was never laid out."
                    )
                self.obj_engine.composite(
                    raster_canvas,
                    obj_record.raster,
                    obj_record.obj_offset.int_x,
                    obj_record.obj_offset.int_y,
                    STR_COMPOSITE_OVER,
                )
            self.obj_engine.encode(raster_canvas, str_destination, INT_JPEG_QUALITY)
        except RasterEngineError as exc_error:
            raise RenderError(f"Rendering failed: {exc_error}") from exc_error
        finally:
            self.obj_engine.release(raster_canvas)

        logger_app.debug(
            "Saved %dx%d strip to %s",
            obj_canvas_size.int_width,
            obj_canvas_size.int_height,
            str_destination,
        )
