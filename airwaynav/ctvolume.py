"""Reading CT volumes stored as Analyze 7.5 header and image file pairs."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path

import numpy as np

_log = logging.getLogger(__name__)

_DEPTH_OFFSET = 0x48
_DIMS_OFFSET = 42
_DELTAS_OFFSET = 80
_GRAY_MAX_OFFSET = 140
_GRAY_MIN_OFFSET = 144

_VOXEL_TYPES = {8: np.dtype(np.uint8), 16: np.dtype(">i2")}


class UnsupportedDepthError(ValueError):
    """Raised when the voxel bit depth cannot be read."""


@dataclass(frozen=True)
class AnalyzeHeader:
    """Image geometry and gray range from an Analyze header."""

    depth: int
    columns: int
    rows: int
    slices: int
    x_delta: float
    y_delta: float
    z_delta: float
    gray_max: int
    gray_min: int

    @property
    def slice_size(self) -> int:
        return self.rows * self.columns

    @property
    def num_voxels(self) -> int:
        return self.rows * self.columns * self.slices


def _unpack(data: bytes, fmt: str, offset: int):
    size = struct.calcsize(fmt)
    if len(data) < offset + size:
        raise ValueError(f"header is too short: needs {offset + size} bytes, has {len(data)}")
    return struct.unpack_from(fmt, data, offset)


def read_header(path) -> AnalyzeHeader:
    """Read the big-endian Analyze header at ``path``."""
    data = Path(path).read_bytes()
    (depth,) = _unpack(data, ">H", _DEPTH_OFFSET)
    columns, rows, slices = _unpack(data, ">3H", _DIMS_OFFSET)
    x_delta, y_delta, z_delta = _unpack(data, ">3f", _DELTAS_OFFSET)
    (gray_max,) = _unpack(data, ">i", _GRAY_MAX_OFFSET)
    (gray_min,) = _unpack(data, ">i", _GRAY_MIN_OFFSET)
    return AnalyzeHeader(
        depth=depth,
        columns=columns,
        rows=rows,
        slices=slices,
        x_delta=x_delta,
        y_delta=y_delta,
        z_delta=z_delta,
        gray_max=gray_max,
        gray_min=gray_min,
    )


def read_image(path, header: AnalyzeHeader) -> np.ndarray:
    """Read the voxels of an image file as a flat float32 array.

    8-bit voxels are unsigned, 16-bit voxels big-endian signed. A file
    shorter than the header promises leaves the remaining voxels at zero.
    """
    dtype = _VOXEL_TYPES.get(header.depth)
    if dtype is None:
        if header.depth in (32, 64):
            message = f"No support for {header.depth // 8}byte voxels."
        else:
            message = "Bit depth for voxels is not 8, 16, 32, or 64."
        _log.debug(message)
        raise UnsupportedDepthError(message)
    count = header.num_voxels
    with open(path, "rb") as stream:
        raw = stream.read(count * dtype.itemsize)
    usable = len(raw) // dtype.itemsize
    values = np.frombuffer(raw[: usable * dtype.itemsize], dtype=dtype)
    data = np.zeros(count, dtype=np.float32)
    data[:usable] = values
    return data


def image_path_for_header(header_path) -> str:
    """Return the image file path that belongs with ``header_path``."""
    return str(Path(header_path).with_suffix(".img"))


class CTVolume:
    """A CT volume: its header geometry and its flat voxel data."""

    def __init__(self, header_filename=None, image_filename=None) -> None:
        self.header_filename: str | None = None
        self.image_filename: str | None = None
        self.header: AnalyzeHeader | None = None
        self.data = np.zeros(0, dtype=np.float32)
        if header_filename is not None:
            if image_filename is None:
                image_filename = image_path_for_header(header_filename)
            self.read_from_file(header_filename, image_filename)

    def read_from_file(self, header_filename, image_filename) -> None:
        """Load the header and image files, replacing any data held."""
        self.header_filename = str(header_filename)
        self.image_filename = str(image_filename)
        self.header = read_header(header_filename)
        self.data = read_image(image_filename, self.header)

    def _require_header(self) -> AnalyzeHeader:
        if self.header is None:
            raise ValueError("no volume has been read")
        return self.header

    @property
    def num_rows(self) -> int:
        return self._require_header().rows

    @property
    def num_columns(self) -> int:
        return self._require_header().columns

    @property
    def num_slices(self) -> int:
        return self._require_header().slices

    @property
    def gray_min(self) -> int:
        return self._require_header().gray_min

    @property
    def gray_max(self) -> int:
        return self._require_header().gray_max

    @property
    def x_delta(self) -> float:
        return self._require_header().x_delta

    @property
    def y_delta(self) -> float:
        return self._require_header().y_delta

    @property
    def z_delta(self) -> float:
        return self._require_header().z_delta

    def volume_physical_dims(self) -> tuple[float, float, float]:
        """Return the volume's physical extent along x, y and z."""
        h = self._require_header()
        return (h.x_delta * h.rows, h.y_delta * h.columns, h.z_delta * h.slices)

    def volume_data(self) -> np.ndarray:
        """Return the voxels as an array indexed ``[row][column][slice]``."""
        h = self._require_header()
        i = np.arange(h.rows)[:, None, None]
        j = np.arange(h.columns)[None, :, None]
        k = np.arange(h.slices)[None, None, :]
        index = i + h.columns * j + h.slice_size * k
        return self.data[index]

    def flat_data(self) -> np.ndarray:
        """Return a copy of the flat voxel data."""
        return self.data.copy()

    def voxel(self, x: int, y: int, z: int) -> float:
        """Return the voxel at ``(x, y, z)``, or -1 when out of bounds."""
        if not self.is_in_bounds(x, y, z):
            return -1.0
        h = self._require_header()
        index = x + h.columns * y + h.slice_size * z
        if index >= self.data.size:
            raise IndexError(f"voxel index {index} out of range")
        return float(self.data[index])

    def axial_aspect_ratio(self) -> float:
        h = self._require_header()
        return (h.columns * h.x_delta) / (h.rows * h.y_delta)

    def coronal_aspect_ratio(self) -> float:
        h = self._require_header()
        return (h.columns * h.x_delta) / (h.slices * h.z_delta)

    def sagittal_aspect_ratio(self) -> float:
        h = self._require_header()
        return (h.rows * h.x_delta) / (h.slices * h.z_delta)

    def is_in_bounds(self, x: int, y: int, z: int) -> bool:
        """Return whether ``(x, y, z)`` passes the volume's bounds check.

        ``x`` is checked against the row count, ``y`` only for being
        non-negative, and ``z`` against the slice count.
        """
        h = self._require_header()
        return 0 <= x < h.rows and y >= 0 and 0 <= z < h.slices