"""Write the tab-separated thumbnail coordinate map."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from .strip_errors import MapWriteError
from .strip_records import ThumbnailRecord

logger_app = logging.getLogger(__name__)


def format_map_line(obj_record: ThumbnailRecord) -> bytes:
    """Return ``name\\tx0\\ty0\\tx1\\ty1\\n`` with the file name bytes untouched."""
    int_x0: int
    int_y0: int
    int_x1: int
    int_y1: int
    int_x0, int_y0, int_x1, int_y1 = obj_record.bounding_box()
    bytes_name: bytes = os.fsencode(obj_record.str_base_name)
    bytes_line: bytes = b"%s\t%d\t%d\t%d\t%d\n" % (
        bytes_name,
        int_x0,
        int_y0,
        int_x1,
        int_y1,
    )
    return bytes_line


def write_map(str_map_path: str | None, iterable_records: Iterable[ThumbnailRecord]) -> None:
    """Write one map line per record; a ``None`` path is a no-op."""
    if str_map_path is None:
        return

    try:
        with open(str_map_path, "wb") as obj_map_file:
            for obj_record in iterable_records:
                obj_map_file.write(format_map_line(obj_record))
    except OSError as exc_error:
        logger_app.error("Failed to write map file: %s. Context: %s", str_map_path, exc_error)
        raise MapWriteError(str_map_path, str(exc_error)) from exc_error

    logger_app.debug("Saved map file to %s", str_map_path)
