"""Tests for greedy row packing."""

from __future__ import annotations

import pytest

from thumbstrip.row_packer import canvas_size_for_rows
from thumbstrip.row_packer import layout_rows
from thumbstrip.row_packer import pack_rows
from thumbstrip.strip_errors import ImageTooWideError
from thumbstrip.strip_errors import LayoutError
from thumbstrip.strip_records import Dimensions
from thumbstrip.strip_records import Offset
from thumbstrip.strip_records import ThumbnailRecord


def build_records(list_int_widths: list[int], int_row_height: int = 28) -> list[ThumbnailRecord]:
    """Create unplaced records with the given thumbnail widths."""
    list_records: list[ThumbnailRecord] = []
    for int_index, int_width in enumerate(list_int_widths):
        obj_record = ThumbnailRecord(
            str_source_path=f"images/img{int_index}.jpg",
            obj_original_size=Dimensions(int_width * 2, int_row_height * 2),
            obj_thumbnail_size=Dimensions(int_width, int_row_height),
            raster=None,
        )
        list_records.append(obj_record)
    return list_records


def test_three_wide_thumbnails_wrap_to_second_row() -> None:
    """Two 300px thumbnails share a 700px row and the third wraps."""
    list_records = build_records([300, 300, 300])

    obj_result = pack_rows(list_records, 700, 28, 4)

    assert [obj_record.obj_offset for obj_record in list_records] == [
        Offset(0, 0),
        Offset(304, 0),
        Offset(0, 32),
    ]
    assert obj_result.int_row_count == 2
    assert obj_result.obj_canvas_size == Dimensions(700, 2 * 28 + 4)


def test_thumbnail_exactly_canvas_width_fits() -> None:
    """A thumbnail as wide as the canvas sits at the origin."""
    list_records = build_records([732])

    obj_result = pack_rows(list_records, 732, 28, 4)

    assert list_records[0].obj_offset == Offset(0, 0)
    assert obj_result.int_row_count == 1
    assert obj_result.obj_canvas_size == Dimensions(732, 28)


def test_thumbnail_one_pixel_too_wide_fails_first() -> None:
    """A thumbnail one pixel wider than the canvas fails even in an empty row."""
    list_records = build_records([733, 10])

    with pytest.raises(ImageTooWideError) as obj_exc_info:
        pack_rows(list_records, 732, 28, 4)

    assert obj_exc_info.value.str_source_path == "images/img0.jpg"
    assert isinstance(obj_exc_info.value, LayoutError)


def test_too_wide_thumbnail_after_others_names_offender() -> None:
    """Wrapping does not rescue a thumbnail wider than the canvas."""
    list_records = build_records([100, 800])

    with pytest.raises(ImageTooWideError) as obj_exc_info:
        pack_rows(list_records, 700, 28, 4)

    assert obj_exc_info.value.str_source_path == "images/img1.jpg"
    assert obj_exc_info.value.int_width == 800
    assert obj_exc_info.value.int_canvas_width == 700


def test_spacing_does_not_count_against_row_end() -> None:
    """The trailing gutter never forces a wrap, only the thumbnail width does."""
    list_records = build_records([348, 348])

    obj_result = pack_rows(list_records, 700, 28, 4)

    assert list_records[1].obj_offset == Offset(352, 0)
    assert obj_result.int_row_count == 1


def test_never_exceeds_canvas_width() -> None:
    """No placed thumbnail crosses the right edge for mixed widths."""
    list_int_widths = [37, 250, 731, 1, 400, 399, 120, 90, 90, 90, 500, 12]
    for int_spacing in (0, 4, 17):
        list_records = build_records(list_int_widths)
        pack_rows(list_records, 731, 28, int_spacing)
        for obj_record in list_records:
            int_x0, _int_y0, int_x1, _int_y1 = obj_record.bounding_box()
            assert int_x0 >= 0
            assert int_x1 <= 731


def test_rows_are_spaced_by_height_plus_spacing() -> None:
    """Every row starts at a multiple of row height plus spacing."""
    list_records = build_records([500, 500, 500, 500], int_row_height=20)

    obj_result = pack_rows(list_records, 600, 20, 6)

    assert [obj_record.obj_offset.int_y for obj_record in list_records] == [0, 26, 52, 78]
    assert obj_result.int_row_count == 4
    assert obj_result.obj_canvas_size.int_height == 4 * 20 + 3 * 6


def test_layout_rows_is_idempotent_and_does_not_mutate() -> None:
    """Running the pure layout twice gives identical results and leaves records unplaced."""
    list_records = build_records([120, 300, 280, 50, 700, 10])

    tuple_first = layout_rows(list_records, 700, 28, 4)
    tuple_second = layout_rows(list_records, 700, 28, 4)

    assert tuple_first == tuple_second
    assert all(obj_record.obj_offset is None for obj_record in list_records)


def test_pack_rows_preserves_input_order() -> None:
    """Placement follows input order even when a smaller thumbnail would fill a gap."""
    list_records = build_records([400, 400, 100])

    pack_rows(list_records, 700, 28, 4)

    assert list_records[1].obj_offset == Offset(0, 32)
    assert list_records[2].obj_offset == Offset(404, 32)


def test_zero_spacing_packs_flush() -> None:
    """With zero spacing thumbnails touch and rows stack directly."""
    list_records = build_records([50, 50, 50])

    obj_result = pack_rows(list_records, 100, 28, 0)

    assert [obj_record.obj_offset for obj_record in list_records] == [
        Offset(0, 0),
        Offset(50, 0),
        Offset(0, 28),
    ]
    assert obj_result.obj_canvas_size == Dimensions(100, 56)


def test_invalid_geometry_is_rejected() -> None:
    """Non-positive width or height and negative spacing are programming errors."""
    with pytest.raises(ValueError):
        layout_rows(build_records([10]), 0, 28, 4)
    with pytest.raises(ValueError):
        layout_rows(build_records([10]), 100, 28, -1)


def test_canvas_size_for_single_row_has_no_gutter() -> None:
    """One row is exactly the row height tall."""
    assert canvas_size_for_rows(1, 732, 28, 4) == Dimensions(732, 28)
