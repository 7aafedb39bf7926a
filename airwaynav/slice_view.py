"""Orthographic pan and zoom state for a 2D view of CT slices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .camera import Camera6DoF

DEFAULT_ZOOM_SENSITIVITY = 0.01
INITIAL_MOUSE_MOVEMENT_SPEED = 0.0025
WHEEL_STEP = 120.0


class WindowType(Enum):
    """Preset gray-level windows for displaying CT data."""

    LUNG = "lung"
    MEDIASTINUM = "mediastinum"
    XSECTION = "xsection"


_WINDOWS = {
    WindowType.LUNG: (-350.0, 1800.0),
    WindowType.MEDIASTINUM: (-40.0, 400.0),
    WindowType.XSECTION: (-900.0, 600.0),
}

_DEFAULT_WINDOW = (0.0, 2000.0)


def window_parameters(select) -> tuple[float, float]:
    """Return ``(window_level, window_width)`` for a window preset.

    Anything that is not a known preset gets a level of 0 and a width of 2000.
    """
    return _WINDOWS.get(select, _DEFAULT_WINDOW)


def ortho(left: float, right: float, bottom: float, top: float) -> np.ndarray:
    """Return a 4x4 orthographic projection with near and far planes at -1 and 1."""
    if right == left or top == bottom:
        raise ValueError("projection bounds must enclose a non-empty area")
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -1.0
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    return m


def _initial_camera() -> Camera6DoF:
    camera = Camera6DoF()
    camera.mouse_movement_speed = INITIAL_MOUSE_MOVEMENT_SPEED
    return camera


@dataclass(eq=False)
class OrthoSliceView:
    """Pan and zoom of a slice of ``columns`` x ``rows`` voxels shown on a screen.

    ``ortho_pos`` holds the projection window as left, right, bottom, top.
    """

    columns: int
    rows: int
    width: int = 0
    height: int = 0
    zoom: float = 1.0
    zoom_sensitivity: float = DEFAULT_ZOOM_SENSITIVITY
    ortho_pos: np.ndarray = field(default_factory=lambda: np.array([-1.0, 1.0, -1.0, 1.0]))
    camera: Camera6DoF = field(default_factory=_initial_camera)

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError("slice dimensions must be positive")
        self.ortho_pos = np.asarray(self.ortho_pos, dtype=float).copy()

    def resize(self, width: int, height: int) -> None:
        """Record the screen size in pixels."""
        if width < 0 or height < 0:
            raise ValueError("screen dimensions must not be negative")
        self.width = width
        self.height = height

    def pan(self, xoffset: float, yoffset: float) -> None:
        """Move the view by a mouse drag of ``xoffset`` and ``yoffset`` pixels."""
        self.camera.process_mouse_translation(xoffset, yoffset, False)
        offset = self.camera.model_offset
        self.ortho_pos = np.array(
            [
                -self.zoom - offset[0],
                self.zoom - offset[0],
                -self.zoom + offset[1],
                self.zoom + offset[1],
            ]
        )

    def wheel(self, delta: float) -> None:
        """Zoom by a wheel turn; one notch is 120, positive zooms out."""
        self.zoom += (delta / WHEEL_STEP) * self.zoom_sensitivity
        if self.zoom > 1.0:
            self.zoom = 1.0
        if self.zoom < self.zoom_sensitivity:
            self.zoom = self.zoom_sensitivity
        self.camera.mouse_movement_speed = self.zoom_sensitivity * self.zoom

        x_center = (self.ortho_pos[0] + self.ortho_pos[1]) / 2
        y_center = (self.ortho_pos[2] + self.ortho_pos[3]) / 2
        self.ortho_pos = np.array(
            [
                -self.zoom + x_center,
                self.zoom + x_center,
                -self.zoom + y_center,
                self.zoom + y_center,
            ]
        )

    def reset(self) -> None:
        """Return to full view with no pan."""
        self.zoom = 1.0
        self.camera.model_offset = np.zeros(3)
        self.camera.mouse_movement_speed = self.zoom_sensitivity * self.zoom
        self.ortho_pos = np.array([-1.0, 1.0, -1.0, 1.0])

    def projection(self) -> np.ndarray:
        """Return the orthographic projection for the current window."""
        return ortho(*self.ortho_pos)

    def select_location(self, x: float, y: float) -> tuple[float, float]:
        """Map a screen pixel, top left at (0, 0), to a voxel location in the slice.

        The result is unrounded: round it to select slices in other views,
        truncate it to read a voxel.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError("screen size is not known; call resize first")
        offset = self.camera.model_offset
        center_x = self.width * 0.5
        center_y = self.height * 0.5
        offset_px_x = self.width * 0.5 * offset[0]
        offset_px_y = self.height * 0.5 * offset[1]
        x_fract = self.columns / self.width
        y_fract = self.rows / self.height

        x_loc = (x - center_x) * self.zoom - offset_px_x + center_x
        y_loc = (y - center_y) * self.zoom - offset_px_y + center_y
        return float(x_loc * x_fract), float(y_loc * y_fract)