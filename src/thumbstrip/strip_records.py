"""Geometry and per-image records shared by the strip pipeline stages."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from typing import Any


@dataclass(frozen=True)
class Dimensions:
    """Pixel extents of a raster."""

    int_width: int
    int_height: int


@dataclass(frozen=True)
class Offset:
    """Top-left pixel position of a thumbnail on the canvas."""

    int_x: int
    int_y: int


@dataclass(frozen=True)
class LayoutResult:
    """Row count and canvas size produced by one layout pass."""

    int_row_count: int
    obj_canvas_size: Dimensions


@dataclass
class ThumbnailRecord:
    """One input image as it moves through the pipeline.

    Inputs:
    - ``str_source_path``: path the image was read from.
    - ``obj_original_size``: size as decoded.
    - ``obj_thumbnail_size``: size after scaling to the row height.
    - ``raster``: engine handle for the sharpened thumbnail.

    Output/Behavior:
    - ``obj_offset`` stays ``None`` until the row packer places the record.
    - The record owns ``raster``; the pipeline releases it exactly once.
    """

    str_source_path: str
    obj_original_size: Dimensions
    obj_thumbnail_size: Dimensions
    raster: Any = field(repr=False)
    obj_offset: Offset | None = None

    @property
    def str_base_name(self) -> str:
        """Return the file name component of the source path."""
        return os.path.basename(self.str_source_path)

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Return ``(x0, y0, x1, y1)`` of the placed thumbnail, gutter excluded."""
        if self.obj_offset is None:
            raise RuntimeError(f"Thumbnail {self.str_source_path} has not been placed.")
        tuple_box: tuple[int, int, int, int] = (
            self.obj_offset.int_x,
            self.obj_offset.int_y,
            self.obj_offset.int_x + self.obj_thumbnail_size.int_width,
            self.obj_offset.int_y + self.obj_thumbnail_size.int_height,
        )
        return tuple_box


class ThumbnailCollection:
    """Ordered records; insertion order is placement order and is never changed."""

    def __init__(self) -> None:
        self._list_records: list[ThumbnailRecord] = []

    def append(self, obj_record: ThumbnailRecord) -> None:
        self._list_records.append(obj_record)

    def __iter__(self) -> Iterator[ThumbnailRecord]:
        return iter(self._list_records)

    def __len__(self) -> int:
        return len(self._list_records)

    def __getitem__(self, int_index: int) -> ThumbnailRecord:
        return self._list_records[int_index]
