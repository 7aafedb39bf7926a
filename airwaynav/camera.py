"""A six degree of freedom camera driven by mouse and keyboard input."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from enum import Enum

import numpy as np

_log = logging.getLogger(__name__)

XCOORD = 0
YCOORD = 1
ZCOORD = 2
ROLLCOORD = 3
PITCHCOORD = 4
YAWCOORD = 5
PI = 3.14159265359


class CameraMovement(Enum):
    """Directions of keyboard translation."""

    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


def _vec(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z], dtype=float)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_at(eye, center, up) -> np.ndarray:
    """Return a right-handed 4x4 view matrix looking from ``eye`` at ``center``."""
    eye = np.asarray(eye, dtype=float)
    center = np.asarray(center, dtype=float)
    up = np.asarray(up, dtype=float)
    f = _normalize(center - eye)
    s = _normalize(np.cross(f, up))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -(s @ eye)
    m[1, 3] = -(u @ eye)
    m[2, 3] = f @ eye
    return m


def _axis_rotation(axis: np.ndarray, degrees: float) -> np.ndarray:
    """Rotation matrix for ``degrees`` about a unit ``axis``, built from a quaternion."""
    half = math.radians(degrees) / 2
    w = math.cos(half)
    x, y, z = axis * math.sin(half)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def rotation_matrix_to_angles(rot) -> tuple[float, float, float]:
    """Return ``(yaw, pitch, roll)`` in degrees for a 3x3 rotation matrix."""
    r = np.asarray(rot, dtype=float)
    a = r[0, 2]
    if a != -1.0 and a != 1.0:
        pitch = -math.asin(min(1.0, max(-1.0, a)))
        c = math.cos(pitch)
        roll = math.atan2(r[1, 2] / c, r[2, 2] / c)
        yaw = -math.atan2(r[0, 1] / c, r[0, 0] / c)
    else:
        yaw = 0.0
        if a == -1.0:
            pitch = PI / 2.0
            roll = yaw + math.atan2(r[1, 0], r[2, 0])
        else:
            pitch = -PI / 2.0
            roll = -yaw + math.atan2(-r[1, 0], -r[2, 0])
    return math.degrees(yaw), math.degrees(pitch), math.degrees(roll)


@dataclass(eq=False)
class Camera6DoF:
    """Camera fixed at a position, with the scene moved by a model offset.

    ``front``, ``up`` and ``right`` are the camera's x, y and z axes.
    """

    position: np.ndarray = field(default_factory=lambda: _vec(0.0, 0.0, 0.0))
    model_offset: np.ndarray = field(default_factory=lambda: _vec(0.0, 0.0, 0.0))
    front: np.ndarray = field(default_factory=lambda: _vec(1.0, 0.0, 0.0))
    up: np.ndarray = field(default_factory=lambda: _vec(0.0, 1.0, 0.0))
    right: np.ndarray = field(default_factory=lambda: _vec(0.0, 0.0, 1.0))
    keyboard_movement_speed: float = 0.5
    mouse_movement_speed: float = 0.5
    mouse_sensitivity: float = 0.15
    zoom: float = 45.0

    def __post_init__(self) -> None:
        for name in ("position", "model_offset", "front", "up", "right"):
            setattr(self, name, np.asarray(getattr(self, name), dtype=float).copy())

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix for the current position and axes."""
        return look_at(self.position, self.position + self.front, self.up)

    def rotation_matrix(self) -> np.ndarray:
        """Return the 3x3 matrix whose columns are front, up and right."""
        return np.column_stack([self.front, self.up, self.right])

    def camera_parameters(self) -> tuple[float, float, float, float, float, float]:
        """Return ``(x, y, z, roll, pitch, yaw)``; index with the ``*COORD`` constants."""
        view_rot = self.view_matrix()[:3, :3]
        yaw, pitch, roll = rotation_matrix_to_angles(-view_rot)
        x, y, z = (float(v) for v in self.position)
        return (x, y, z, roll, pitch, yaw)

    def set_default(self) -> None:
        """Restore every attribute to its initial value."""
        fresh = Camera6DoF()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))

    def process_mouse_rotation(self, xoffset: float, yoffset: float, shift_select: bool) -> None:
        """Rotate from mouse motion; with shift, roll about the viewing direction."""
        xoffset *= self.mouse_sensitivity
        yoffset *= self.mouse_sensitivity
        if shift_select:
            self._rotate(self.front, xoffset)
        else:
            self._rotate(self.up, xoffset)
            self._rotate(self.right, yoffset)

    def process_mouse_translation(self, xoffset: float, yoffset: float, shift_select: bool) -> None:
        """Move the model from mouse motion; with shift, only along the front axis."""
        xoffset *= self.mouse_movement_speed
        yoffset *= self.mouse_movement_speed
        if shift_select:
            self.model_offset = self.model_offset + self.front * xoffset
        else:
            self.model_offset = self.model_offset + self.right * xoffset
            self.model_offset = self.model_offset + self.up * yoffset

    def process_mouse_scroll(self, yoffset: float) -> None:
        """Change the field of view, kept within 1 to 45 degrees."""
        if 1.0 <= self.zoom <= 45.0:
            self.zoom -= yoffset
        if self.zoom <= 1.0:
            self.zoom = 1.0
        if self.zoom >= 45.0:
            self.zoom = 45.0

    def process_keyboard_translation(self, direction: CameraMovement) -> None:
        """Move the model one keyboard step in ``direction``."""
        step = self.keyboard_movement_speed
        moves = {
            CameraMovement.FORWARD: self.front * step,
            CameraMovement.BACKWARD: -self.front * step,
            CameraMovement.LEFT: self.right * step,
            CameraMovement.RIGHT: -self.right * step,
            CameraMovement.UP: self.up * step,
            CameraMovement.DOWN: -self.up * step,
        }
        self.model_offset = self.model_offset + moves[direction]

    def check_camera_vectors(self) -> bool:
        """Return whether the three axes are mutually perpendicular, warning if not."""
        perpendicular = (
            float(self.up @ self.front) == 0.0
            and float(self.up @ self.right) == 0.0
            and float(self.right @ self.front) == 0.0
        )
        if not perpendicular:
            _log.warning("Camera Right, Up and Front vectors are not all perpendicular.")
        return perpendicular

    def front_rotation(self, deg: float) -> None:
        """Rotate all axes ``deg`` degrees about the front axis."""
        self._rotate(self.front, deg)

    def right_rotation(self, deg: float) -> None:
        """Rotate all axes ``deg`` degrees about the right axis."""
        self._rotate(self.right, deg)

    def up_rotation(self, deg: float) -> None:
        """Rotate all axes ``deg`` degrees about the up axis."""
        self._rotate(self.up, deg)

    def _rotate(self, axis: np.ndarray, deg: float) -> None:
        rot = _axis_rotation(np.asarray(axis, dtype=float), deg)
        self.right = _normalize(rot @ self.right)
        self.up = _normalize(rot @ self.up)
        self.front = _normalize(rot @ self.front)