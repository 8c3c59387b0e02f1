"""A 2D-rotating camera producing perspective and orthographic matrices.

Matrices are numpy arrays in row-major mathematical form: a column vector
``v`` is transformed as ``m @ v``.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

_FOV_DEGREES = 90.0
_NEAR = 0.1
_FAR = 1000.0


def _perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def _orthographic(left: float, right: float, bottom: float, top: float, near: float, far: float) -> np.ndarray:
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def _translation(offset: np.ndarray) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = offset
    return m


def _rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = np.identity(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


class Camera:
    """Camera with a position and a rotation (radians) about the z axis."""

    def __init__(self, position: Any = (0.0, 0.0, 0.0), rotation: float = 0.0) -> None:
        self._position = self._as_vec3(position)
        self._rotation = float(rotation)
        self.width = 1
        self.height = 1
        self._perspective_projection = np.identity(4)
        self._orthographic_projection = np.identity(4)
        self._calc_matrix()

    @staticmethod
    def _as_vec3(values: Any) -> np.ndarray:
        array = np.array(values, dtype=np.float64).reshape(-1)
        if array.shape != (3,):
            raise ValueError(f"position needs 3 components, got {array.size}")
        return array

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Any) -> None:
        self._position = self._as_vec3(value)
        self._calc_matrix()

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._calc_matrix()

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view_matrix.copy()

    @property
    def perspective_view_projection(self) -> np.ndarray:
        return self._perspective_view_projection.copy()

    @property
    def orthographic_view_projection(self) -> np.ndarray:
        return self._orthographic_view_projection.copy()

    def set_window_dimension(self, width: int, height: int) -> None:
        """Rebuild both projections for a viewport of ``width`` by ``height``."""
        if width <= 0 or height <= 0:
            raise ValueError(f"window dimension must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._perspective_projection = _perspective(
            math.radians(_FOV_DEGREES), self.width / self.height, _NEAR, _FAR
        )
        self._orthographic_projection = _orthographic(
            0.0, float(self.width), 0.0, float(self.height), _NEAR, _FAR
        )
        self._calc_matrix()

    def _calc_matrix(self) -> None:
        transform = _translation(self._position) @ _rotation_z(self._rotation)
        self._view_matrix = np.linalg.inv(transform)
        self._perspective_view_projection = self._perspective_projection @ self._view_matrix
        self._orthographic_view_projection = self._orthographic_projection @ self._view_matrix