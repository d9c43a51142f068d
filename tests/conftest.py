"""Shared pytest configuration and fixtures for the thumbstrip test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import sys

from PIL import Image
import pytest


path_project_root = Path(__file__).resolve().parents[1]
path_src = path_project_root / "src"
if str(path_src) not in sys.path:
    sys.path.insert(0, str(path_src))

from thumbstrip.strip_errors import RasterEngineError  # noqa: E402
from thumbstrip.strip_records import Dimensions  # noqa: E402


class FakeRaster:
    """Opaque raster handle with a size and a unique id."""

    def __init__(self, int_handle: int, int_width: int, int_height: int) -> None:
        self.int_handle = int_handle
        self.int_width = int_width
        self.int_height = int_height


class RecordingRasterEngine:
    """Raster engine stub that tracks every handle it allocates and releases.

    ``dict_tuple_decode_sizes`` maps input paths to decoded sizes; unknown
    paths fail to decode. ``str_fail_on`` names one operation that raises, and
    ``str_fail_path`` optionally limits decode/resize/sharpen failures to one
    input.
    """

    def __init__(self) -> None:
        self.dict_tuple_decode_sizes: dict[str, tuple[int, int]] = {}
        self.str_fail_on: str | None = None
        self.str_fail_path: str | None = None
        self.list_int_allocated: list[int] = []
        self.list_int_released: list[int] = []
        self.list_tuple_composites: list[tuple[str, int, int]] = []
        self.list_tuple_encodes: list[tuple[str, int]] = []
        self.list_str_filter_kinds: list[str] = []
        self.list_tuple_sharpen_params: list[tuple[float, float, float, float]] = []
        self.dict_int_handle_paths: dict[int, str] = {}

    def _allocate(self, int_width: int, int_height: int, str_path: str) -> FakeRaster:
        int_handle = len(self.list_int_allocated) + 1
        self.list_int_allocated.append(int_handle)
        self.dict_int_handle_paths[int_handle] = str_path
        return FakeRaster(int_handle, int_width, int_height)

    def _maybe_fail(self, str_operation: str, str_path: str = "") -> None:
        if self.str_fail_on != str_operation:
            return
        if self.str_fail_path is not None and self.str_fail_path != str_path:
            return
        raise RasterEngineError(f"{str_operation} failed")

    def decode(self, str_path: str) -> FakeRaster:
        self._maybe_fail("decode", str_path)
        if str_path not in self.dict_tuple_decode_sizes:
            raise RasterEngineError(f"unable to open image '{str_path}'")
        int_width, int_height = self.dict_tuple_decode_sizes[str_path]
        return self._allocate(int_width, int_height, str_path)

    def size(self, raster: FakeRaster) -> Dimensions:
        return Dimensions(raster.int_width, raster.int_height)

    def resize(
        self, raster: FakeRaster, int_width: int, int_height: int, str_filter_kind: str
    ) -> FakeRaster:
        str_path = self.dict_int_handle_paths[raster.int_handle]
        self._maybe_fail("resize", str_path)
        self.list_str_filter_kinds.append(str_filter_kind)
        return self._allocate(int_width, int_height, str_path)

    def sharpen(
        self,
        raster: FakeRaster,
        float_radius: float,
        float_sigma: float,
        float_amount: float,
        float_threshold: float,
    ) -> FakeRaster:
        str_path = self.dict_int_handle_paths[raster.int_handle]
        self._maybe_fail("sharpen", str_path)
        self.list_tuple_sharpen_params.append(
            (float_radius, float_sigma, float_amount, float_threshold)
        )
        return self._allocate(raster.int_width, raster.int_height, str_path)

    def new_canvas(self, int_width: int, int_height: int, str_background: str) -> FakeRaster:
        self._maybe_fail("new_canvas")
        return self._allocate(int_width, int_height, "<canvas>")

    def composite(
        self,
        raster_dest: FakeRaster,
        raster_src: FakeRaster,
        int_x: int,
        int_y: int,
        str_mode: str = "over",
    ) -> None:
        self._maybe_fail("composite")
        str_path = self.dict_int_handle_paths[raster_src.int_handle]
        self.list_tuple_composites.append((str_path, int_x, int_y))

    def encode(self, raster: FakeRaster, str_destination: str, int_quality: int) -> None:
        self._maybe_fail("encode")
        self.list_tuple_encodes.append((str_destination, int_quality))

    def release(self, raster: FakeRaster) -> None:
        self.list_int_released.append(raster.int_handle)

    def assert_all_released_once(self) -> None:
        """Every allocated handle was released, and none twice."""
        assert sorted(self.list_int_released) == sorted(self.list_int_allocated)
        assert len(set(self.list_int_released)) == len(self.list_int_released)


@pytest.fixture
def obj_recording_engine() -> RecordingRasterEngine:
    """Return a fresh handle-tracking raster engine stub."""
    return RecordingRasterEngine()


@pytest.fixture
def make_input_image(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes a solid-color RGB image and returns its path."""

    def _make_input_image(
        str_name: str,
        tuple_size: tuple[int, int],
        tuple_color: tuple[int, int, int] = (10, 30, 80),
    ) -> Path:
        path_image = tmp_path / str_name
        image_input = Image.new("RGB", tuple_size, tuple_color)
        image_input.save(path_image)
        return path_image

    return _make_input_image
