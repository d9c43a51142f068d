"""Orchestrate loading, layout, rendering, and map output for one strip.

The pipeline is a sequential state machine:
``IDLE -> LOADING -> LAYING_OUT -> RENDERING -> MAPPING -> DONE`` with
``FAILED`` reachable from every running state. Thumbnail rasters are
registered for release the moment they are loaded, so each one is freed
exactly once whether the run succeeds or aborts mid-load.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from contextlib import ExitStack

from tqdm import tqdm

from .canvas_composer import CanvasComposer
from .map_emitter import write_map
from .raster_engine import PillowRasterEngine
from .raster_engine import RasterEngine
from .row_packer import pack_rows
from .strip_errors import NoInputImagesError
from .strip_records import LayoutResult
from .strip_records import ThumbnailCollection
from .strip_records import ThumbnailRecord
from .strip_settings import StripSettings
from .thumbnail_loader import ThumbnailLoader

logger_app = logging.getLogger(__name__)


class PipelineState(enum.Enum):
    """Lifecycle states of a ``StripPipeline`` run."""

    IDLE = "idle"
    LOADING = "loading"
    LAYING_OUT = "laying_out"
    RENDERING = "rendering"
    MAPPING = "mapping"
    DONE = "done"
    FAILED = "failed"


class StripPipeline:
    """Build one thumbnail strip from ordered input paths.

    Constructor Input:
    - ``list_str_input_paths``: image paths in placement order.
    - ``obj_settings``: validated ``StripSettings``.
    - ``obj_engine``: raster engine; defaults to ``PillowRasterEngine``.

    Output/Behavior:
    - ``run`` returns the ``LayoutResult`` or raises the ``ThumbstripError``
      that stopped the run. ``state`` ends as ``DONE`` or ``FAILED``.
    - A pipeline instance runs at most once.
    """

    def __init__(
        self,
        list_str_input_paths: Sequence[str],
        obj_settings: StripSettings,
        obj_engine: RasterEngine | None = None,
    ) -> None:
        self.list_str_input_paths: list[str] = list(list_str_input_paths)
        self.obj_settings: StripSettings = obj_settings
        self.obj_engine: RasterEngine = (
            obj_engine if obj_engine is not None else PillowRasterEngine()
        )
        self.state: PipelineState = PipelineState.IDLE
        self.obj_collection: ThumbnailCollection = ThumbnailCollection()

    def _load_all(self, obj_stack: ExitStack) -> None:
        """Load every input in order, registering each raster for release."""
        obj_loader: ThumbnailLoader = ThumbnailLoader(
            self.obj_engine, self.obj_settings.int_row_height
        )
        for str_input_path in tqdm(
            self.list_str_input_paths,
            desc="Loading thumbnails",
            unit="image",
            disable=not self.obj_settings.bool_verbose,
        ):
            obj_record: ThumbnailRecord = obj_loader.load(str_input_path)
            obj_stack.callback(self.obj_engine.release, obj_record.raster)
            self.obj_collection.append(obj_record)

    def run(self) -> LayoutResult:
        """Execute every stage in order with guaranteed raster cleanup."""
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value}).")

        with ExitStack() as obj_stack:
            try:
                self.state = PipelineState.LOADING
                self._load_all(obj_stack)
                if len(self.obj_collection) == 0:
                    raise NoInputImagesError()

                self.state = PipelineState.LAYING_OUT
                obj_layout_result: LayoutResult = pack_rows(
                    self.obj_collection,
                    self.obj_settings.int_canvas_width,
                    self.obj_settings.int_row_height,
                    self.obj_settings.int_spacing,
                )
                logger_app.debug(
                    "Placed %d thumbnails in %d rows.",
                    len(self.obj_collection),
                    obj_layout_result.int_row_count,
                )

                self.state = PipelineState.RENDERING
                CanvasComposer(self.obj_engine).compose(
                    obj_layout_result.obj_canvas_size,
                    self.obj_collection,
                    self.obj_settings.str_output_destination,
                )

                self.state = PipelineState.MAPPING
                write_map(self.obj_settings.str_map_path, self.obj_collection)
            except Exception:
                self.state = PipelineState.FAILED
                raise

        self.state = PipelineState.DONE
        return obj_layout_result
