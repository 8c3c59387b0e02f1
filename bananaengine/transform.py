"""Placement, size, colour and projection mode of an object in a scene."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import numpy as np


class Projection(IntEnum):
    """Which camera projection a drawn object uses."""

    NONE = 0
    ORTHOGRAPHIC = 1
    PERSPECTIVE = 2


def _vector(values: Any, length: int, what: str) -> np.ndarray:
    array = np.array(values, dtype=np.float64).reshape(-1)
    if array.shape != (length,):
        raise ValueError(f"{what} needs {length} components, got {array.size}")
    return array


@dataclass(eq=False)
class Transform:
    """Position, size and colour of an entity, with its rotation in degrees."""

    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    size: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(4))
    rotation: float = 0.0
    proj: Projection = Projection.NONE

    def __post_init__(self) -> None:
        self.pos = _vector(self.pos, 3, "pos")
        self.size = _vector(self.size, 3, "size")
        self.color = _vector(self.color, 4, "color")
        self.rotation = float(self.rotation)
        self.proj = Projection(self.proj)

    def copy(self) -> Transform:
        """An independent copy of this transform."""
        return Transform(self.pos.copy(), self.size.copy(), self.color.copy(), self.rotation, self.proj)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return (
            np.array_equal(self.pos, other.pos)
            and np.array_equal(self.size, other.size)
            and np.array_equal(self.color, other.color)
            and self.rotation == other.rotation
            and self.proj == other.proj
        )