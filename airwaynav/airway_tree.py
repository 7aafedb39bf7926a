"""Airway tree surfaces read from legacy VTK polygon data files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path

import numpy as np

_log = logging.getLogger(__name__)

_CELL_SECTIONS = ("VERTICES", "LINES", "POLYGONS", "TRIANGLE_STRIPS")
_END_SECTIONS = ("POINT_DATA", "CELL_DATA", "FIELD", "METADATA")

_BINARY_TYPES = {
    "float": np.dtype(">f4"),
    "double": np.dtype(">f8"),
    "int": np.dtype(">i4"),
    "unsigned_int": np.dtype(">u4"),
    "vtkidtype": np.dtype(">i4"),
    "long": np.dtype(">i8"),
    "unsigned_long": np.dtype(">u8"),
    "short": np.dtype(">i2"),
    "unsigned_short": np.dtype(">u2"),
    "char": np.dtype(">i1"),
    "unsigned_char": np.dtype(">u1"),
}


class _Cursor:
    """Reads lines and raw blocks from the bytes of a legacy VTK file."""

    def __init__(self, data: bytes, binary: bool = False) -> None:
        self.data = data
        self.pos = 0
        self.binary = binary

    def raw_line(self) -> str | None:
        if self.pos >= len(self.data):
            return None
        end = self.data.find(b"\n", self.pos)
        if end == -1:
            end = len(self.data)
        text = self.data[self.pos : end].decode("latin-1").strip()
        self.pos = end + 1
        return text

    def line(self) -> str | None:
        while (text := self.raw_line()) is not None:
            if text:
                return text
        return None

    def values(self, count: int, type_name: str) -> np.ndarray:
        if self.binary:
            dtype = _BINARY_TYPES.get(type_name.lower())
            if dtype is None:
                raise ValueError(f"unsupported data type {type_name!r}")
            size = count * dtype.itemsize
            block = self.data[self.pos : self.pos + size]
            if len(block) < size:
                raise ValueError("file ends inside a binary data block")
            self.pos += size
            return np.frombuffer(block, dtype=dtype).astype(float)
        tokens: list[str] = []
        while len(tokens) < count:
            text = self.line()
            if text is None:
                raise ValueError("file ends inside an ASCII data block")
            tokens.extend(text.split())
        return np.array([float(token) for token in tokens[:count]], dtype=float)


def _split_cells(values: np.ndarray, count: int) -> list[tuple[int, ...]]:
    stream = iter(int(v) for v in values)
    cells = []
    for size in stream:
        cell = tuple(islice(stream, size))
        if len(cell) < size:
            raise ValueError("cell list is truncated")
        cells.append(cell)
    if len(cells) != count:
        raise ValueError(f"expected {count} cells, found {len(cells)}")
    return cells


def read_vtk_polydata(path) -> tuple[np.ndarray, list[tuple[int, ...]]]:
    """Read a legacy VTK POLYDATA file.

    Returns the points as an ``(n, 3)`` float32 array and the polygons as
    tuples of point indices. Both ASCII and big-endian BINARY files are read.
    """
    cursor = _Cursor(Path(path).read_bytes())
    first = cursor.raw_line()
    if first is None or not first.lower().startswith("# vtk datafile"):
        raise ValueError("not a legacy VTK data file")
    cursor.raw_line()  # title
    mode = (cursor.line() or "").upper()
    if mode not in ("ASCII", "BINARY"):
        raise ValueError(f"unknown file format {mode!r}")
    cursor.binary = mode == "BINARY"
    dataset = (cursor.line() or "").split()
    if len(dataset) != 2 or dataset[0].upper() != "DATASET" or dataset[1].upper() != "POLYDATA":
        raise ValueError("dataset is not POLYDATA")

    points = np.zeros((0, 3), dtype=np.float32)
    polygons: list[tuple[int, ...]] = []
    while (text := cursor.line()) is not None:
        keyword, *rest = text.split()
        keyword = keyword.upper()
        if keyword == "POINTS":
            count = int(rest[0])
            type_name = rest[1] if len(rest) > 1 else "float"
            points = cursor.values(3 * count, type_name).reshape(count, 3).astype(np.float32)
        elif keyword in _CELL_SECTIONS:
            count, size = int(rest[0]), int(rest[1])
            cells = _split_cells(cursor.values(size, "int"), count)
            if keyword == "POLYGONS":
                polygons = cells
        elif keyword in _END_SECTIONS:
            break
        else:
            raise ValueError(f"unsupported section {keyword!r}")
    return points, polygons


def triangle_normal(a, b, c) -> np.ndarray:
    """Return the unit normal of the triangle ``a``, ``b``, ``c``."""
    a, b, c = (np.asarray(p, dtype=np.float32) for p in (a, b, c))
    normal = np.cross(b - a, c - a)
    with np.errstate(invalid="ignore", divide="ignore"):
        return (normal / np.linalg.norm(normal)).astype(np.float32)


@dataclass(eq=False)
class AirwayTree:
    """Airway surface geometry: vertex positions and the polygons joining them."""

    points: np.ndarray
    polygons: list[tuple[int, ...]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.points = np.asarray(self.points, dtype=np.float32).reshape(-1, 3)
        self.polygons = [tuple(int(i) for i in cell) for cell in self.polygons]
        count = len(self.points)
        for cell in self.polygons:
            if len(cell) < 3:
                raise ValueError("polygon with fewer than 3 vertices")
            if any(i < 0 or i >= count for i in cell):
                raise ValueError(f"polygon {cell} refers to a missing point")
            if len(cell) > 3:
                _log.debug("More than 3 vertices: %d for cell %s", len(cell), cell)

    @classmethod
    def from_file(cls, filename) -> "AirwayTree":
        """Load the airway surface from a legacy VTK polygon file."""
        points, polygons = read_vtk_polydata(filename)
        tree = cls(points, polygons)
        _log.debug("AirwayTree loaded from %s", filename)
        return tree

    @property
    def indices(self) -> np.ndarray:
        """The polygon vertex indices in drawing order."""
        return np.array([i for cell in self.polygons for i in cell], dtype=np.uint32)

    def mean_location(self) -> np.ndarray:
        """Return the mean of all vertex positions."""
        if len(self.points) == 0:
            raise ValueError("the airway tree has no points")
        return self.points.astype(float).mean(axis=0).astype(np.float32)

    def vertex_normals(self) -> np.ndarray:
        """Return one normal per vertex, averaged over the polygons using it.

        A vertex used by no polygon gets a zero normal.
        """
        sums = np.zeros((len(self.points), 3), dtype=np.float32)
        counts = np.zeros(len(self.points), dtype=int)
        for cell in self.polygons:
            normal = triangle_normal(*self.points[list(cell[:3])])
            for index in cell:
                sums[index] += normal
                counts[index] += 1
        normals = np.zeros_like(sums)
        single = counts == 1
        normals[single] = sums[single]
        shared = counts > 1
        if shared.any():
            averaged = sums[shared] / (3 * counts[shared])[:, None]
            with np.errstate(invalid="ignore", divide="ignore"):
                normals[shared] = averaged / np.linalg.norm(averaged, axis=1)[:, None]
        return normals

    def interleaved_vertices(self) -> np.ndarray:
        """Return an ``(n, 6)`` array of ``x, y, z, nx, ny, nz`` per vertex."""
        return np.hstack([self.points, self.vertex_normals()]).astype(np.float32)