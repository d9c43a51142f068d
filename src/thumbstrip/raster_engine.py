"""Raster primitives used by the strip pipeline.

The pipeline only talks to the ``RasterEngine`` protocol, so tests can swap in
an engine that records handle ownership. ``PillowRasterEngine`` is the default
implementation and maps each primitive onto Pillow.

Third-party API reference:
https://pillow.readthedocs.io/en/stable/reference/Image.html
"""

from __future__ import annotations

import logging
import sys
from typing import Any
from typing import Protocol

from PIL import Image, ImageFilter

from .strip_errors import RasterEngineError
from .strip_records import Dimensions

logger_app = logging.getLogger(__name__)

STR_FILTER_SINC: str = "sinc"
STR_COMPOSITE_OVER: str = "over"
STR_STDOUT_TARGET: str = "-"

DICT_FILTER_RESAMPLING: dict[str, Image.Resampling] = {
    STR_FILTER_SINC: Image.Resampling.LANCZOS,
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "box": Image.Resampling.BOX,
    "nearest": Image.Resampling.NEAREST,
}

# Destination prefixes accepted in "format:target" output strings.
DICT_FORMAT_ALIASES: dict[str, str] = {
    "pnm": "PPM",
    "ppm": "PPM",
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "gif": "GIF",
    "bmp": "BMP",
    "tif": "TIFF",
    "tiff": "TIFF",
    "webp": "WEBP",
}


class RasterEngine(Protocol):
    """Decode/filter/composite/encode primitives over opaque raster handles.

    Every method that fails raises ``RasterEngineError``. ``release`` must be
    called exactly once for every handle returned by ``decode``, ``resize``,
    ``sharpen`` or ``new_canvas``.
    """

    def decode(self, str_path: str) -> Any:
        """Decode the image file at ``str_path``."""

    def size(self, raster: Any) -> Dimensions:
        """Return the pixel extents of ``raster``."""

    def resize(
        self, raster: Any, int_width: int, int_height: int, str_filter_kind: str
    ) -> Any:
        """Return a new raster scaled to ``int_width`` x ``int_height``."""

    def sharpen(
        self,
        raster: Any,
        float_radius: float,
        float_sigma: float,
        float_amount: float,
        float_threshold: float,
    ) -> Any:
        """Return a new unsharp-masked raster."""

    def new_canvas(self, int_width: int, int_height: int, str_background: str) -> Any:
        """Allocate a blank raster filled with ``str_background``."""

    def composite(
        self,
        raster_dest: Any,
        raster_src: Any,
        int_x: int,
        int_y: int,
        str_mode: str = STR_COMPOSITE_OVER,
    ) -> None:
        """Draw ``raster_src`` onto ``raster_dest`` at ``(int_x, int_y)``."""

    def encode(self, raster: Any, str_destination: str, int_quality: int) -> None:
        """Write ``raster`` to a path or ``format:target`` destination."""

    def release(self, raster: Any) -> None:
        """Free the resources held by ``raster``."""


def parse_destination(str_destination: str) -> tuple[str | None, str]:
    """Split an output destination into ``(pillow_format, target)``.

    ``"pnm:-"`` becomes ``("PPM", "-")``. Strings without a known format prefix
    are plain paths whose format Pillow infers from the extension, which keeps
    Windows drive letters such as ``C:\\out.png`` intact.
    """
    str_prefix: str
    str_separator: str
    str_target: str
    str_prefix, str_separator, str_target = str_destination.partition(":")
    if str_separator and str_prefix.lower() in DICT_FORMAT_ALIASES:
        tuple_result: tuple[str | None, str] = (
            DICT_FORMAT_ALIASES[str_prefix.lower()],
            str_target,
        )
        return tuple_result

    tuple_result = (None, str_destination)
    return tuple_result


class PillowRasterEngine:
    """``RasterEngine`` implementation backed by Pillow images."""

    def decode(self, str_path: str) -> Image.Image:
        """Open, fully load, and normalize an image to RGB or RGBA."""
        try:
            with Image.open(str_path) as image_file:
                bool_has_alpha: bool = (
                    "A" in image_file.getbands() or "transparency" in image_file.info
                )
                str_mode: str = "RGBA" if bool_has_alpha else "RGB"
                image_decoded: Image.Image = image_file.convert(str_mode)
        except Exception as exc_error:
            logger_app.error("Failed to decode image file: %s. Context: %s", str_path, exc_error)
            raise RasterEngineError(f"Error decoding image: {exc_error}") from exc_error
        return image_decoded

    def size(self, raster: Image.Image) -> Dimensions:
        obj_size: Dimensions = Dimensions(raster.width, raster.height)
        return obj_size

    def resize(
        self,
        raster: Image.Image,
        int_width: int,
        int_height: int,
        str_filter_kind: str,
    ) -> Image.Image:
        """Resample with the Pillow filter registered for ``str_filter_kind``."""
        if str_filter_kind not in DICT_FILTER_RESAMPLING:
            raise RasterEngineError(f"Unknown resampling filter: {str_filter_kind}")
        try:
            image_resized: Image.Image = raster.resize(
                (int_width, int_height), DICT_FILTER_RESAMPLING[str_filter_kind]
            )
        except Exception as exc_error:
            logger_app.error("Failed to resize image. Context: %s", exc_error)
            raise RasterEngineError(f"Error resizing image: {exc_error}") from exc_error
        return image_resized

    def sharpen(
        self,
        raster: Image.Image,
        float_radius: float,
        float_sigma: float,
        float_amount: float,
        float_threshold: float,
    ) -> Image.Image:
        """Apply ``ImageFilter.UnsharpMask``.

        Pillow derives the kernel extent from the Gaussian spread, so
        ``float_sigma`` drives the blur and ``float_radius`` is only validated.
        ``float_amount`` is a fraction where Pillow expects a percentage.
        """
        if float_radius < 0 or float_sigma <= 0:
            raise RasterEngineError(
                f"Invalid unsharp mask geometry: radius={float_radius}, sigma={float_sigma}"
            )
        obj_filter: ImageFilter.UnsharpMask = ImageFilter.UnsharpMask(
            radius=float_sigma,
            percent=int(round(float_amount * 100)),
            threshold=int(float_threshold),
        )
        try:
            image_sharpened: Image.Image = raster.filter(obj_filter)
        except Exception as exc_error:
            logger_app.error("Failed to sharpen image. Context: %s", exc_error)
            raise RasterEngineError(f"Error sharpening image: {exc_error}") from exc_error
        return image_sharpened

    def new_canvas(
        self, int_width: int, int_height: int, str_background: str
    ) -> Image.Image:
        try:
            image_canvas: Image.Image = Image.new(
                "RGB", (int_width, int_height), str_background
            )
        except Exception as exc_error:
            logger_app.error(
                "Failed to allocate %dx%d canvas. Context: %s",
                int_width,
                int_height,
                exc_error,
            )
            raise RasterEngineError(f"Error allocating canvas: {exc_error}") from exc_error
        return image_canvas

    def composite(
        self,
        raster_dest: Image.Image,
        raster_src: Image.Image,
        int_x: int,
        int_y: int,
        str_mode: str = STR_COMPOSITE_OVER,
    ) -> None:
        """Source-over composite: alpha sources blend, opaque sources overwrite."""
        if str_mode != STR_COMPOSITE_OVER:
            raise RasterEngineError(f"Unsupported composite mode: {str_mode}")
        try:
            if raster_src.mode == "RGBA":
                raster_dest.paste(raster_src, (int_x, int_y), mask=raster_src)
            else:
                raster_dest.paste(raster_src, (int_x, int_y))
        except Exception as exc_error:
            logger_app.error(
                "Failed to composite image at (%d, %d). Context: %s",
                int_x,
                int_y,
                exc_error,
            )
            raise RasterEngineError(f"Error compositing image: {exc_error}") from exc_error

    def encode(
        self, raster: Image.Image, str_destination: str, int_quality: int
    ) -> None:
        """Save to a path, or to standard output when the target is ``-``."""
        str_format: str | None
        str_target: str
        str_format, str_target = parse_destination(str_destination)
        if str_target == STR_STDOUT_TARGET and str_format is None:
            raise RasterEngineError(
                "Writing to standard output requires a format prefix, e.g. 'pnm:-'."
            )

        try:
            if str_target == STR_STDOUT_TARGET:
                raster.save(sys.stdout.buffer, format=str_format, quality=int_quality)
                sys.stdout.buffer.flush()
            else:
                raster.save(str_target, format=str_format, quality=int_quality)
        except Exception as exc_error:
            logger_app.error(
                "Failed to encode image to %s. Context: %s", str_destination, exc_error
            )
            raise RasterEngineError(f"Error saving image: {exc_error}") from exc_error

    def release(self, raster: Image.Image) -> None:
        raster.close()
