"""Position, Euler rotation and scale of an object in 3D space."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np


def _vec3(value: Sequence[float]) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape == ():
        array = np.full(3, float(array))
    if array.shape != (3,):
        raise ValueError("expected three components")
    return array


def _rotation(rotation: np.ndarray) -> np.ndarray:
    """Rotation of yaw about Y, then pitch about X, then roll about Z (degrees)."""
    pitch, yaw, roll = np.radians(rotation)
    ch, sh = np.cos(yaw), np.sin(yaw)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cb, sb = np.cos(roll), np.sin(roll)
    ry = np.array([[ch, 0, sh], [0, 1, 0], [-sh, 0, ch]])
    rx = np.array([[1, 0, 0], [0, cp, -sp], [0, sp, cp]])
    rz = np.array([[cb, -sb, 0], [sb, cb, 0], [0, 0, 1]])
    result = np.eye(4)
    result[:3, :3] = ry @ rx @ rz
    return result


@dataclass(eq=False)
class Transform:
    """An object's placement; rotation is given in degrees per axis."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)
        self.rotation = _vec3(self.rotation)
        self.scale = _vec3(self.scale)

    def matrix(self) -> np.ndarray:
        """The 4x4 model matrix: translate, then scale, then rotate."""
        translate = np.eye(4)
        translate[:3, 3] = self.position
        scale = np.diag([*self.scale, 1.0])
        return translate @ scale @ _rotation(self.rotation)

    def _axis(self, index: int) -> np.ndarray:
        return _rotation(self.rotation)[:3, index].copy()

    def forward(self) -> np.ndarray:
        """The rotated +Z axis."""
        return self._axis(2)

    def up(self) -> np.ndarray:
        """The rotated +Y axis."""
        return self._axis(1)

    def right(self) -> np.ndarray:
        """The rotated +X axis."""
        return self._axis(0)

    def apply(self, vector: Sequence[float]) -> np.ndarray:
        """Transform a 4-vector, or a 3-vector taken as a point (w = 1)."""
        v = np.asarray(vector, dtype=float)
        if v.shape == (4,):
            return self.matrix() @ v
        if v.shape == (3,):
            return (self.matrix() @ np.append(v, 1.0))[:3]
        raise ValueError("vector must have 3 or 4 components")