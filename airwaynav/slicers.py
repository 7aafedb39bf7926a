"""Slice selection for axial, coronal and slab views of a CT volume.

Each slicer keeps the index of the slice it shows and notifies listeners
when a location is selected, when voxel information is produced and when
that information should be cleared.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Protocol, Sequence


class Volume(Protocol):
    """What a slicer needs from a CT volume."""

    @property
    def num_rows(self) -> int: ...

    @property
    def num_slices(self) -> int: ...

    def voxel(self, x: int, y: int, z: int) -> float: ...


@dataclass(frozen=True)
class VoxelInfo:
    """A selected voxel: its coordinates and its Hounsfield value."""

    x: int
    y: int
    z: int
    hu: int


class Key(IntEnum):
    """Keys a slicer responds to, with their Qt key codes."""

    ESCAPE = 0x01000000
    S = 0x53
    W = 0x57


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


Location = Sequence[float]


class Slicer(ABC):
    """Common slice selection behaviour of the orthogonal slicers."""

    def __init__(self, volume: Volume) -> None:
        self.volume = volume
        self.slice_index = 0
        self.cursor_on = False
        self.slice_listeners: list[Callable[[tuple[float, float]], None]] = []
        self.voxel_listeners: list[Callable[[VoxelInfo], None]] = []
        self.clear_listeners: list[Callable[[], None]] = []

    @property
    @abstractmethod
    def slice_count(self) -> int:
        """Number of slices this view can step through."""

    @abstractmethod
    def voxel_info(self, location: Location) -> VoxelInfo:
        """Return the voxel under an in-slice ``location``."""

    def _clear_voxel_info(self) -> None:
        for listener in self.clear_listeners:
            listener()

    def set_slice(self, index: float) -> int:
        """Show slice ``index`` (truncated, clamped to the volume) and hide the cursor."""
        selected = int(index)
        last = self.slice_count - 1
        if selected < 0:
            selected = 0
        elif selected > last:
            selected = last
        self.slice_index = selected
        self.cursor_on = False
        self._clear_voxel_info()
        return selected

    def key_press(self, key: int) -> None:
        """Step through slices with W and S; Escape exits."""
        if key == Key.ESCAPE:
            raise SystemExit(0)
        if key == Key.W:
            self.set_slice(self.slice_index + 1)
        elif key == Key.S:
            self.set_slice(self.slice_index - 1)

    def receive_voxel_info(self, voxel_info: VoxelInfo) -> None:
        """React to a voxel selected in another view by hiding the cursor."""
        self.cursor_on = False
        self._clear_voxel_info()

    def select(self, location: Location) -> VoxelInfo:
        """Send ``location`` to the other views and report the voxel under it."""
        point = (float(location[0]), float(location[1]))
        for listener in self.slice_listeners:
            listener(point)
        info = self.voxel_info(point)
        for listener in self.voxel_listeners:
            listener(info)
        return info


class AxialSlicer(Slicer):
    """The X-Y plane; the slice index runs along Z."""

    @property
    def slice_count(self) -> int:
        return self.volume.num_slices

    def sagittal_change_slice(self, location: Location) -> int:
        """Follow a sagittal selection; its y is the axial slice."""
        return self.set_slice(location[1])

    def coronal_change_slice(self, location: Location) -> int:
        """Follow a coronal selection; its y is the axial slice."""
        return self.set_slice(location[1])

    def voxel_info(self, location: Location) -> VoxelInfo:
        x = _round_half_away(location[0])
        y = _round_half_away(location[1])
        z = self.slice_index
        hu = _round_half_away(self.volume.voxel(x, y, z))
        return VoxelInfo(x, y, z, hu)


class CoronalSlicer(Slicer):
    """The X-Z plane; the slice index runs along Y."""

    @property
    def slice_count(self) -> int:
        return self.volume.num_rows

    def axial_change_slice(self, location: Location) -> int:
        """Follow an axial selection; its y is the coronal slice."""
        return self.set_slice(location[1])

    def sagittal_change_slice(self, location: Location) -> int:
        """Follow a sagittal selection; its x is the coronal slice."""
        return self.set_slice(location[0])

    def voxel_info(self, location: Location) -> VoxelInfo:
        x = _round_half_away(location[0])
        y = self.slice_index
        z = _round_half_away(location[1])
        hu = _round_half_away(self.volume.voxel(x, y, z))
        return VoxelInfo(x, y, z, hu)


class AxialSlab(AxialSlicer):
    """An axial view of a slab; stepping slices leaves voxel information alone."""

    def key_press(self, key: int) -> None:
        if key == Key.ESCAPE:
            raise SystemExit(0)
        if key == Key.W:
            self.slice_index = min(self.slice_index + 1, self.slice_count - 1)
        elif key == Key.S:
            self.slice_index = max(self.slice_index - 1, 0)