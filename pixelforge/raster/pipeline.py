"""Draws triangle lists: vertex shading, culling, rasterising and depth testing."""

from __future__ import annotations

import enum
import math
from typing import Optional, Sequence

import numpy as np

from pixelforge.color import to_rgba
from pixelforge.framebuffer import Framebuffer
from pixelforge.raster.shading import (
    Fragment,
    Uniforms,
    Vertex,
    VertexOutput,
    process_fragment,
    process_vertex,
)


class FrontFace(enum.Enum):
    """Screen-space winding of front-facing triangles."""

    CW = enum.auto()
    CCW = enum.auto()


class CullMode(enum.Enum):
    """Which faces are discarded before rasterising."""

    FRONT = enum.auto()
    BACK = enum.auto()
    NONE = enum.auto()


def _cross(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def _index(framebuffer: Framebuffer, position: Sequence[float]) -> int:
    return int(position[0] + position[1] * framebuffer.width)


def check_depth(framebuffer: Framebuffer, position: Sequence[float], z: float) -> bool:
    """Whether depth ``z`` is nearer than the depth stored at ``position``."""
    return z < framebuffer.depth[_index(framebuffer, position)]


def write_depth(framebuffer: Framebuffer, position: Sequence[float], z: float) -> None:
    """Store depth ``z`` at ``position``."""
    framebuffer.depth[_index(framebuffer, position)] = z


def rasterize_triangle(
    framebuffer: Framebuffer,
    p0: Sequence[float],
    p1: Sequence[float],
    p2: Sequence[float],
    v0: VertexOutput,
    v1: VertexOutput,
    v2: VertexOutput,
    uniforms: Uniforms,
) -> None:
    """Fill the screen-space triangle p0 p1 p2, shading each pixel that passes depth."""
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (p0, p1, p2))
    xs = [math.floor(p[0]) for p in (p0, p1, p2)]
    ys = [math.floor(p[1]) for p in (p0, p1, p2)]
    xmin = int(max(0, min(xs)))
    xmax = int(min(framebuffer.width - 1, max(xs)))
    ymin = int(max(0, min(ys)))
    ymax = int(min(framebuffer.height - 1, max(ys)))

    area = _cross(p1 - p0, p2 - p0)
    if area == 0:
        return

    for y in range(ymin, ymax + 1):
        for x in range(xmin, xmax + 1):
            p = np.array([x, y], dtype=float)
            w0 = _cross(p1 - p, p2 - p) / area
            w1 = _cross(p2 - p, p0 - p) / area
            w2 = 1.0 - w0 - w1
            if w0 < 0 or w1 < 0 or w2 < 0:
                continue

            z = w0 * v0.position[2] + w1 * v1.position[2] + w2 * v2.position[2]
            if not check_depth(framebuffer, (x, y), z):
                continue
            write_depth(framebuffer, (x, y), z)

            fragment = Fragment(
                position=(w0 * v0.position + w1 * v1.position + w2 * v2.position)[:3],
                normal=w0 * v0.normal + w1 * v1.normal + w2 * v2.normal,
            )
            framebuffer.draw_point(x, y, to_rgba(process_fragment(fragment, uniforms)))


class Pipeline:
    """Renders triangle lists into a framebuffer with the given uniforms."""

    def __init__(
        self,
        framebuffer: Framebuffer,
        uniforms: Optional[Uniforms] = None,
        front_face: FrontFace = FrontFace.CCW,
        cull_mode: CullMode = CullMode.BACK,
    ) -> None:
        self.framebuffer = framebuffer
        self.uniforms = uniforms if uniforms is not None else Uniforms()
        self.front_face = front_face
        self.cull_mode = cull_mode

    def draw(self, vertices: Sequence[Vertex]) -> None:
        """Draw a list of triangles, three vertices each."""
        if len(vertices) % 3:
            raise ValueError("vertex count must be a multiple of three")
        outputs = [process_vertex(v, self.uniforms) for v in vertices]
        for start in range(0, len(outputs), 3):
            v0, v1, v2 = outputs[start:start + 3]
            screen = [self.to_screen(v) for v in (v0, v1, v2)]
            if any(s is None for s in screen):
                continue
            s0, s1, s2 = screen
            if self._culled(_cross(s1 - s0, s2 - s0)):
                continue
            rasterize_triangle(self.framebuffer, s0, s1, s2, v0, v1, v2, self.uniforms)

    def to_screen(self, vertex: VertexOutput) -> Optional[np.ndarray]:
        """Screen coordinates of a clip-space vertex, or None if it is not visible."""
        w = float(vertex.position[3])
        if w == 0:
            return None
        ndc = vertex.position[:3] / w
        if ndc[2] < -1 or ndc[2] > 1:
            return None
        return np.array(
            [
                (ndc[0] + 1) * (self.framebuffer.width * 0.5),
                (1 - ndc[1]) * (self.framebuffer.height * 0.5),
            ]
        )

    def _culled(self, z: float) -> bool:
        ccw = self.front_face is FrontFace.CCW
        if self.cull_mode is CullMode.FRONT:
            return (ccw and z > 0) or (not ccw and z < 0)
        if self.cull_mode is CullMode.BACK:
            return (ccw and z < 0) or (not ccw and z > 0)
        return False