"""A collection of ray-traceable objects with a sky, and the path tracer over them."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from pixelforge.clock import Clock
from pixelforge.color import to_rgba
from pixelforge.framebuffer import Framebuffer
from pixelforge.randomness import random_float
from pixelforge.ray import Ray, RayHit
from pixelforge.raytrace.camera import Camera
from pixelforge.raytrace.objects import SceneObject

logger = logging.getLogger(__name__)


def _colour(value: Sequence[float]) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape == ():
        array = np.full(3, float(array))
    if array.shape != (3,):
        raise ValueError("colour must have three components")
    return array


class Scene:
    """Objects to trace rays against; rays that miss everything see the sky gradient."""

    def __init__(self) -> None:
        self.objects: list[SceneObject] = []
        self.sky_bottom = np.ones(3)
        self.sky_top = np.array([0.5, 0.7, 1.0])

    def add(self, obj: SceneObject) -> None:
        """Add an object to the scene."""
        self.objects.append(obj)

    def set_sky(self, bottom: Sequence[float], top: Sequence[float]) -> None:
        """Set the colours the sky blends between from straight down to straight up."""
        self.sky_bottom = _colour(bottom)
        self.sky_top = _colour(top)

    def update(self) -> None:
        """Recompute the world-space geometry of every object."""
        for obj in self.objects:
            obj.update()

    def trace(
        self, ray: Ray, min_distance: float, max_distance: float, depth: int
    ) -> np.ndarray:
        """The linear colour seen along ``ray``, following at most ``depth`` bounces."""
        if depth == 0:
            return np.zeros(3)

        closest = max_distance
        nearest: Optional[RayHit] = None
        for obj in self.objects:
            hit = obj.hit(ray, min_distance, closest)
            if hit is not None:
                nearest = hit
                closest = hit.distance

        if nearest is not None:
            material = nearest.material
            scattered = material.scatter(ray, nearest)
            if scattered is not None:
                return scattered.attenuation * self.trace(
                    scattered.ray, min_distance, max_distance, depth - 1
                )
            return np.asarray(material.emissive(), dtype=float)

        direction = ray.direction / np.linalg.norm(ray.direction)
        t = (float(direction[1]) + 1.0) * 0.5
        return self.sky_bottom + (self.sky_top - self.sky_bottom) * t

    def render(
        self,
        framebuffer: Framebuffer,
        camera: Camera,
        samples: int = 10,
        depth: int = 5,
    ) -> None:
        """Trace every pixel with ``samples`` jittered rays and draw the averages."""
        if samples <= 0:
            raise ValueError("samples must be positive")
        frame_clock = Clock()
        scanline_clock = Clock()
        size = np.array([framebuffer.width, framebuffer.height], dtype=float)
        for y in range(framebuffer.height):
            scanline_clock.reset()
            for x in range(framebuffer.width):
                colour = np.zeros(3)
                for _ in range(samples):
                    pixel = np.array([x + random_float(1.0), y + random_float(1.0)])
                    point = pixel / size
                    point[1] = 1.0 - point[1]
                    colour += self.trace(camera.ray(point), 0.001, 100.0, depth)
                framebuffer.draw_point(x, y, to_rgba(colour / samples))
            logger.info("y: %d - scanline time: %f", y, scanline_clock.elapsed())
        logger.info("frame time: %f", frame_clock.elapsed())