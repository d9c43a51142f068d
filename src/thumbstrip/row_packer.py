"""Greedy row packing of fixed-height thumbnails.

Thumbnails are placed left to right in input order and wrap to a new row when
the next one would cross the canvas edge. There is no reordering and no
attempt to balance rows: reading order of the strip is input order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .strip_errors import ImageTooWideError
from .strip_records import Dimensions
from .strip_records import LayoutResult
from .strip_records import Offset
from .strip_records import ThumbnailRecord

logger_app = logging.getLogger(__name__)


def canvas_size_for_rows(
    int_row_count: int, int_canvas_width: int, int_row_height: int, int_spacing: int
) -> Dimensions:
    """Return the canvas size for ``int_row_count`` rows separated by spacing."""
    int_canvas_height: int = (
        int_row_count * int_row_height + (int_row_count - 1) * int_spacing
    )
    obj_canvas_size: Dimensions = Dimensions(int_canvas_width, int_canvas_height)
    return obj_canvas_size


def layout_rows(
    iterable_records: Iterable[ThumbnailRecord],
    int_canvas_width: int,
    int_row_height: int,
    int_spacing: int,
) -> tuple[list[Offset], LayoutResult]:
    """Compute offsets for each record without modifying the records.

    Inputs:
    - ``iterable_records``: thumbnails in placement order.
    - ``int_canvas_width``/``int_row_height``: row geometry, both > 0.
    - ``int_spacing``: gutter between thumbnails and between rows, >= 0.

    Output:
    - One ``Offset`` per record, in order, and the ``LayoutResult``.

    Raises ``ImageTooWideError`` when a thumbnail cannot fit even in an empty
    row.
    """
    if int_canvas_width <= 0 or int_row_height <= 0 or int_spacing < 0:
        raise ValueError(
            "Invalid row geometry: "
            f"width={int_canvas_width}, height={int_row_height}, spacing={int_spacing}"
        )

    int_col: int = 0
    int_row: int = 0
    int_row_count: int = 1
    list_offsets: list[Offset] = []

    for obj_record in iterable_records:
        int_thumb_width: int = obj_record.obj_thumbnail_size.int_width
        while int_col + int_thumb_width > int_canvas_width:
            if int_col == 0:
                logger_app.error("Image too large: %s", obj_record.str_source_path)
                raise ImageTooWideError(
                    obj_record.str_source_path, int_thumb_width, int_canvas_width
                )
            int_row_count += 1
            int_col = 0
            int_row += int_row_height + int_spacing
        list_offsets.append(Offset(int_col, int_row))
        int_col += int_thumb_width + int_spacing

    obj_layout_result: LayoutResult = LayoutResult(
        int_row_count=int_row_count,
        obj_canvas_size=canvas_size_for_rows(
            int_row_count, int_canvas_width, int_row_height, int_spacing
        ),
    )
    return list_offsets, obj_layout_result


def pack_rows(
    iterable_records: Iterable[ThumbnailRecord],
    int_canvas_width: int,
    int_row_height: int,
    int_spacing: int,
) -> LayoutResult:
    """Lay out the records and store each computed offset on its record."""
    list_placed: list[ThumbnailRecord] = list(iterable_records)
    list_offsets: list[Offset]
    obj_layout_result: LayoutResult
    list_offsets, obj_layout_result = layout_rows(
        list_placed, int_canvas_width, int_row_height, int_spacing
    )
    for obj_record, obj_offset in zip(list_placed, list_offsets):
        obj_record.obj_offset = obj_offset

    logger_app.debug(
        "Laid out %d thumbnails in %d rows (%dx%d canvas)",
        len(list_placed),
        obj_layout_result.int_row_count,
        obj_layout_result.obj_canvas_size.int_width,
        obj_layout_result.obj_canvas_size.int_height,
    )
    return obj_layout_result
