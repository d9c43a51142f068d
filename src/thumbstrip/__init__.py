"""Public package interface for the thumbnail strip builder."""

from .__version__ import __version__
from .canvas_composer import CanvasComposer
from .map_emitter import write_map
from .raster_engine import PillowRasterEngine
from .raster_engine import RasterEngine
from .row_packer import layout_rows
from .row_packer import pack_rows
from .strip_errors import ConfigError
from .strip_errors import DecodeError
from .strip_errors import ImageTooWideError
from .strip_errors import LayoutError
from .strip_errors import MapWriteError
from .strip_errors import NoInputImagesError
from .strip_errors import RasterEngineError
from .strip_errors import RenderError
from .strip_errors import ThumbstripError
from .strip_generator import get_version
from .strip_generator import main
from .strip_pipeline import PipelineState
from .strip_pipeline import StripPipeline
from .strip_records import Dimensions
from .strip_records import LayoutResult
from .strip_records import Offset
from .strip_records import ThumbnailCollection
from .strip_records import ThumbnailRecord
from .strip_settings import StripSettings
from .thumbnail_loader import ThumbnailLoader

__all__ = [
    "__version__",
    "CanvasComposer",
    "ConfigError",
    "DecodeError",
    "Dimensions",
    "ImageTooWideError",
    "LayoutError",
    "LayoutResult",
    "MapWriteError",
    "NoInputImagesError",
    "Offset",
    "PillowRasterEngine",
    "PipelineState",
    "RasterEngine",
    "RasterEngineError",
    "RenderError",
    "StripPipeline",
    "StripSettings",
    "ThumbnailCollection",
    "ThumbnailLoader",
    "ThumbnailRecord",
    "ThumbstripError",
    "get_version",
    "layout_rows",
    "main",
    "pack_rows",
    "write_map",
]
