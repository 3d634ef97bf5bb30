"""Ray-traceable primitives: spheres, planes and triangles."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import numpy as np

from pixelforge.ray import Ray, RayHit
from pixelforge.transform import Transform

_EPSILON = 1.1920929e-07  # single-precision machine epsilon


def _approximately(a: float, b: float) -> bool:
    return abs(a - b) < _EPSILON


def _vec(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def sphere_raycast(
    ray: Ray,
    center: Sequence[float],
    radius: float,
    min_distance: float,
    max_distance: float,
) -> Optional[float]:
    """Distance along ``ray`` to the nearer hit on the sphere within range, or None."""
    oc = ray.origin - _vec(center)
    a = float(np.dot(ray.direction, ray.direction))
    if a == 0:
        return None
    b = 2.0 * float(np.dot(ray.direction, oc))
    c = float(np.dot(oc, oc)) - radius * radius
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0:
        return None
    root = math.sqrt(discriminant)
    for t in ((-b - root) / (2.0 * a), (-b + root) / (2.0 * a)):
        if min_distance <= t <= max_distance:
            return t
    return None


def plane_raycast(
    ray: Ray,
    point: Sequence[float],
    normal: Sequence[float],
    min_distance: float,
    max_distance: float,
) -> Optional[float]:
    """Distance along ``ray`` to the plane, strictly inside the range, or None."""
    normal = _vec(normal)
    denominator = float(np.dot(ray.direction, normal))
    if _approximately(denominator, 0.0):
        return None
    t = float(np.dot(_vec(point) - ray.origin, normal)) / denominator
    if t < 0 or t <= min_distance or t >= max_distance:
        return None
    return t


def triangle_raycast(
    ray: Ray,
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    min_distance: float,
    max_distance: float,
) -> Optional[float]:
    """Distance along ``ray`` to the front face of the triangle within range, or None.

    Triangles seen from behind are not hit.
    """
    v1, v2, v3 = _vec(v1), _vec(v2), _vec(v3)
    edge1 = v2 - v1
    edge2 = v3 - v1

    pvec = np.cross(ray.direction, edge2)
    determinant = float(np.dot(pvec, edge1))
    if determinant < 0 or _approximately(determinant, 0.0):
        return None
    inv_det = 1.0 / determinant

    tvec = ray.origin - v1
    u = float(np.dot(tvec, pvec)) * inv_det
    if u < 0 or u > 1:
        return None

    qvec = np.cross(tvec, edge1)
    v = float(np.dot(qvec, ray.direction)) * inv_det
    if v < 0 or u + v > 1:
        return None

    t = float(np.dot(edge2, qvec)) * inv_det
    if min_distance <= t <= max_distance:
        return t
    return None


class SceneObject(ABC):
    """Something in a scene that rays can hit."""

    def __init__(self, material: Any, transform: Optional[Transform] = None) -> None:
        self.material = material
        self.transform = transform if transform is not None else Transform()

    def update(self) -> None:
        """Recompute world-space geometry from the transform; nothing by default."""
        return None

    @abstractmethod
    def hit(self, ray: Ray, min_distance: float, max_distance: float) -> Optional[RayHit]:
        """The hit of ``ray`` on this object within the distance range, or None."""


class Sphere(SceneObject):
    """A sphere at the transform's position; its radius is scaled by scale.x."""

    def __init__(self, transform: Transform, radius: float, material: Any) -> None:
        super().__init__(material, transform)
        self.radius = float(radius)

    def hit(self, ray: Ray, min_distance: float, max_distance: float) -> Optional[RayHit]:
        center = self.transform.position
        radius = self.radius * float(self.transform.scale[0])
        t = sphere_raycast(ray, center, radius, min_distance, max_distance)
        if t is None:
            return None
        point = ray.at(t)
        return RayHit(t, point, _normalize(point - center), self.material)


class Plane(SceneObject):
    """An infinite plane through the transform's position, facing its up axis."""

    def __init__(self, transform: Transform, material: Any) -> None:
        super().__init__(material, transform)

    def hit(self, ray: Ray, min_distance: float, max_distance: float) -> Optional[RayHit]:
        up = self.transform.up()
        t = plane_raycast(ray, self.transform.position, up, min_distance, max_distance)
        if t is None:
            return None
        return RayHit(t, ray.at(t), _normalize(up), self.material)


class Triangle(SceneObject):
    """A single triangle; world vertices are computed by :meth:`update`."""

    def __init__(
        self,
        v1: Sequence[float],
        v2: Sequence[float],
        v3: Sequence[float],
        material: Any,
        transform: Optional[Transform] = None,
    ) -> None:
        super().__init__(material, transform)
        self.local_vertices = (_vec(v1), _vec(v2), _vec(v3))
        self.vertices = (np.zeros(3), np.zeros(3), np.zeros(3))

    def update(self) -> None:
        self.vertices = tuple(self.transform.apply(v) for v in self.local_vertices)

    def hit(self, ray: Ray, min_distance: float, max_distance: float) -> Optional[RayHit]:
        v1, v2, v3 = self.vertices
        t = triangle_raycast(ray, v1, v2, v3, min_distance, max_distance)
        if t is None:
            return None
        normal = _normalize(np.cross(v2 - v1, v3 - v1))
        return RayHit(t, ray.at(t), normal, self.material)