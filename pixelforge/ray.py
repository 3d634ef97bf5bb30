"""Rays and ray-cast hit records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np


@dataclass(eq=False)
class Ray:
    """A half-line from an origin along a (not necessarily unit) direction."""

    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.origin = np.asarray(self.origin, dtype=float)
        self.direction = np.asarray(self.direction, dtype=float)

    def at(self, t: float) -> np.ndarray:
        """The point at parameter ``t`` along the ray."""
        return self.origin + self.direction * t

    def __mul__(self, t: float) -> np.ndarray:
        return self.at(t)


@dataclass(eq=False)
class RayHit:
    """Where and what a ray struck."""

    distance: float = 0.0
    point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    material: Optional[Any] = None

    def __post_init__(self) -> None:
        self.point = np.asarray(self.point, dtype=float)
        self.normal = np.asarray(self.normal, dtype=float)


def _as_vector(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float)