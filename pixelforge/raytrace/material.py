"""Surface materials that decide how rays scatter off the objects they hit."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence, Union

import numpy as np

from pixelforge.randomness import random_on_unit_sphere
from pixelforge.ray import Ray, RayHit


class Scatter(NamedTuple):
    """A scattered ray and the colour it is tinted by."""

    attenuation: np.ndarray
    ray: Ray


def _colour(value: Union[float, Sequence[float]]) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape == ():
        array = np.full(3, float(array))
    if array.shape != (3,):
        raise ValueError("colour must have three components")
    return array


def _reflect(incident: np.ndarray, normal: np.ndarray) -> np.ndarray:
    return incident - 2.0 * float(np.dot(incident, normal)) * normal


class Material(ABC):
    """A surface with an albedo colour."""

    def __init__(self, albedo: Union[float, Sequence[float]]) -> None:
        self.albedo = _colour(albedo)

    @abstractmethod
    def scatter(self, ray: Ray, hit: RayHit) -> Optional[Scatter]:
        """The ray leaving the surface at ``hit``, or None if the ray is absorbed."""

    def emissive(self) -> np.ndarray:
        """Light given off by the surface."""
        return np.zeros(3)


class Lambertian(Material):
    """A diffuse surface that scatters in random directions around the normal."""

    def scatter(self, ray: Ray, hit: RayHit) -> Optional[Scatter]:
        direction = hit.normal + random_on_unit_sphere()
        return Scatter(self.albedo.copy(), Ray(hit.point.copy(), direction))


class Metal(Material):
    """A reflective surface; ``fuzz`` blurs the reflection."""

    def __init__(self, albedo: Union[float, Sequence[float]], fuzz: float) -> None:
        super().__init__(albedo)
        self.fuzz = float(fuzz)

    def scatter(self, ray: Ray, hit: RayHit) -> Optional[Scatter]:
        reflected = _reflect(ray.direction, hit.normal)
        direction = reflected + random_on_unit_sphere() * self.fuzz
        if float(np.dot(direction, hit.normal)) <= 0:
            return None
        return Scatter(self.albedo.copy(), Ray(hit.point.copy(), direction))


class Emissive(Material):
    """A light source: absorbs every ray and gives off ``albedo * intensity``."""

    def __init__(
        self, albedo: Union[float, Sequence[float]], intensity: float = 1.0
    ) -> None:
        super().__init__(albedo)
        self.intensity = float(intensity)

    def scatter(self, ray: Ray, hit: RayHit) -> Optional[Scatter]:
        return None

    def emissive(self) -> np.ndarray:
        return self.albedo * self.intensity