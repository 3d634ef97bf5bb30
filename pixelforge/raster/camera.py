"""A left-handed view and perspective projection for rasterising."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length == 0:
        raise ValueError("degenerate camera view")
    return v / length


def _point(position: Sequence[float]) -> np.ndarray:
    return np.append(np.asarray(position, dtype=float), 1.0)


class Camera:
    """View and projection matrices for a screen of ``width`` x ``height`` pixels."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.view = np.eye(4)
        self.projection = np.eye(4)

    def set_view(
        self,
        eye: Sequence[float],
        target: Sequence[float],
        up: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        """Look from ``eye`` towards ``target``; view space has +Z pointing forward."""
        eye = np.asarray(eye, dtype=float)
        f = _normalize(np.asarray(target, dtype=float) - eye)
        s = _normalize(np.cross(np.asarray(up, dtype=float), f))
        u = np.cross(f, s)
        view = np.eye(4)
        view[0, :3] = s
        view[1, :3] = u
        view[2, :3] = f
        view[0, 3] = -float(np.dot(s, eye))
        view[1, 3] = -float(np.dot(u, eye))
        view[2, 3] = -float(np.dot(f, eye))
        self.view = view

    def set_projection(self, fov: float, aspect: float, near: float, far: float) -> None:
        """Perspective projection mapping depth ``near``..``far`` to 0..1."""
        tan_half = math.tan(math.radians(fov) / 2.0)
        projection = np.zeros((4, 4))
        projection[0, 0] = 1.0 / (aspect * tan_half)
        projection[1, 1] = 1.0 / tan_half
        projection[2, 2] = far / (far - near)
        projection[3, 2] = 1.0
        projection[2, 3] = -(far * near) / (far - near)
        self.projection = projection

    def model_to_view(self, position: Sequence[float]) -> np.ndarray:
        """A world-space point in view space."""
        return (self.view @ _point(position))[:3]

    def view_to_projection(self, position: Sequence[float]) -> np.ndarray:
        """A view-space point in homogeneous clip space."""
        return self.projection @ _point(position)

    def to_screen(self, position: Sequence[float]) -> tuple[int, int]:
        """Pixel coordinates of a view-space point, or (-1, -1) if it is not visible."""
        clip = self.view_to_projection(position)
        w = float(clip[3])
        if w == 0:
            return (-1, -1)
        ndc = clip[:3] / w
        if ndc[2] < -1 or ndc[2] > 1:
            return (-1, -1)
        x = (ndc[0] + 1) * (self.width * 0.5)
        y = (1 - ndc[1]) * (self.height * 0.5)
        return (int(x), int(y))