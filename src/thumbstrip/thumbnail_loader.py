"""Decode, scale, and sharpen one input image into a ``ThumbnailRecord``."""

from __future__ import annotations

import logging
from typing import Any

from .raster_engine import STR_FILTER_SINC
from .raster_engine import RasterEngine
from .strip_errors import DecodeError
from .strip_errors import RasterEngineError
from .strip_records import Dimensions
from .strip_records import ThumbnailRecord

logger_app = logging.getLogger(__name__)

# Unsharp mask applied after downscaling.
FLOAT_SHARPEN_RADIUS: float = 1.0
FLOAT_SHARPEN_SIGMA: float = 0.5
FLOAT_SHARPEN_AMOUNT: float = 1.0
FLOAT_SHARPEN_THRESHOLD: float = 1.0


def scale_to_height(obj_original_size: Dimensions, int_row_height: int) -> Dimensions:
    """Scale to ``int_row_height`` preserving aspect ratio.

    The width is truncated, never rounded: the row packer relies on exactly
    ``floor(width * height / original_height)``.
    """
    if obj_original_size.int_height <= 0:
        raise ValueError("Cannot scale an image with zero height.")
    int_thumb_width: int = (
        obj_original_size.int_width * int_row_height
    ) // obj_original_size.int_height
    obj_thumbnail_size: Dimensions = Dimensions(int_thumb_width, int_row_height)
    return obj_thumbnail_size


class ThumbnailLoader:
    """Turn input paths into sharpened, height-normalized thumbnails.

    Constructor Input:
    - ``obj_engine``: raster engine used for every pixel operation.
    - ``int_row_height``: target thumbnail height in pixels.

    Output/Behavior:
    - ``load`` returns a record owning exactly one raster handle.
    - Intermediate handles are released as soon as the next stage replaces
      them; on failure everything acquired so far is released before
      ``DecodeError`` is raised.
    """

    def __init__(self, obj_engine: RasterEngine, int_row_height: int) -> None:
        if int_row_height <= 0:
            raise ValueError(f"Row height must be > 0. Received: {int_row_height}")
        self.obj_engine: RasterEngine = obj_engine
        self.int_row_height: int = int_row_height

    def _replace(self, raster_old: Any, raster_new: Any) -> Any:
        """Release ``raster_old`` unless the engine handed the same handle back."""
        if raster_new is not raster_old:
            self.obj_engine.release(raster_old)
        return raster_new

    def load(self, str_source_path: str) -> ThumbnailRecord:
        """Build one thumbnail record, raising ``DecodeError`` on any failure."""
        logger_app.debug("Reading %s", str_source_path)
        try:
            raster_current: Any = self.obj_engine.decode(str_source_path)
        except RasterEngineError as exc_error:
            raise DecodeError(str_source_path, str(exc_error)) from exc_error

        try:
            obj_original_size: Dimensions = self.obj_engine.size(raster_current)
            if obj_original_size.int_height <= 0 or obj_original_size.int_width <= 0:
                logger_app.error(
                    "Decoded image has empty dimensions: %s (%dx%d)",
                    str_source_path,
                    obj_original_size.int_width,
                    obj_original_size.int_height,
                )
                raise DecodeError(
                    str_source_path,
                    f"decoded image has empty dimensions "
                    f"{obj_original_size.int_width}x{obj_original_size.int_height}",
                )

            obj_thumbnail_size: Dimensions = scale_to_height(
                obj_original_size, self.int_row_height
            )
            if obj_thumbnail_size.int_width <= 0:
                logger_app.error(
                    "Image is too narrow to scale to height %d: %s",
                    self.int_row_height,
                    str_source_path,
                )
                raise DecodeError(
                    str_source_path,
                    f"image scales to zero width at row height {self.int_row_height}",
                )

            logger_app.debug(
                "Resizing %s from %dx%d to %dx%d",
                str_source_path,
                obj_original_size.int_width,
                obj_original_size.int_height,
                obj_thumbnail_size.int_width,
                obj_thumbnail_size.int_height,
            )
            raster_current = self._replace(
                raster_current,
                self.obj_engine.resize(
                    raster_current,
                    obj_thumbnail_size.int_width,
                    obj_thumbnail_size.int_height,
                    STR_FILTER_SINC,
                ),
            )
            raster_current = self._replace(
                raster_current,
                self.obj_engine.sharpen(
                    raster_current,
                    FLOAT_SHARPEN_RADIUS,
                    FLOAT_SHARPEN_SIGMA,
                    FLOAT_SHARPEN_AMOUNT,
                    FLOAT_SHARPEN_THRESHOLD,
                ),
            )
        except RasterEngineError as exc_error:
            self.obj_engine.release(raster_current)
            raise DecodeError(str_source_path, str(exc_error)) from exc_error
        except Exception:
            self.obj_engine.release(raster_current)
            raise

        obj_record: ThumbnailRecord = ThumbnailRecord(
            str_source_path=str_source_path,
            obj_original_size=obj_original_size,
            obj_thumbnail_size=obj_thumbnail_size,
            raster=raster_current,
        )
        return obj_record
