"""Random numbers and vectors shared by the renderers."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence

import numpy as np

_rng = random.Random()


def seed(value: object) -> None:
    """Seed the shared generator."""
    _rng.seed(value)


def random_below(maximum: int) -> int:
    """A random integer in ``[0, maximum)``."""
    if maximum <= 0:
        raise ValueError("maximum must be positive")
    return _rng.randrange(maximum)


def random_int(minimum: int, maximum: int) -> int:
    """A random integer in ``[minimum, maximum)``."""
    return minimum + random_below(maximum - minimum)


def random_float(low: float = 1.0, high: Optional[float] = None) -> float:
    """A random float.

    With no arguments the range is ``[0, 1]``; with one, ``[0, low]``;
    with two, ``[low, high]``.
    """
    if high is None:
        return low * _rng.random()
    return low + (high - low) * _rng.random()


def random_vector(low: Sequence[float], high: Optional[Sequence[float]] = None) -> np.ndarray:
    """A random 3-vector, per component like :func:`random_float`."""
    if high is None:
        return np.array([random_float(m) for m in low], dtype=float)
    return np.array([random_float(lo, hi) for lo, hi in zip(low, high)], dtype=float)


def random_on_unit_circle() -> np.ndarray:
    """A random point on the unit circle."""
    angle = math.radians(random_float(0.0, 360.0))
    return np.array([math.cos(angle), math.sin(angle)])


def random_in_unit_sphere() -> np.ndarray:
    """A random point inside the unit sphere."""
    while True:
        v = random_vector((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
        if float(np.dot(v, v)) <= 1.0:
            return v


def random_on_unit_sphere() -> np.ndarray:
    """A random unit vector."""
    while True:
        v = random_in_unit_sphere()
        length = float(np.linalg.norm(v))
        if length > 0:
            return v / length