"""Triangle meshes read from Wavefront OBJ files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence, Union

import numpy as np

from pixelforge.ray import Ray, RayHit
from pixelforge.raytrace.objects import SceneObject, sphere_raycast, triangle_raycast
from pixelforge.transform import Transform


def _parse_index(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


class Mesh(SceneObject):
    """A list of triangles, three vertices each, with a bounding sphere."""

    def __init__(
        self,
        material: Any,
        transform: Optional[Transform] = None,
        vertices: Optional[Sequence[Sequence[float]]] = None,
    ) -> None:
        super().__init__(material, transform)
        self.vertices: list[np.ndarray] = [
            np.asarray(v, dtype=float) for v in (vertices or [])
        ]
        self.world_vertices: list[np.ndarray] = [np.zeros(3) for _ in self.vertices]
        self.center = np.zeros(3)
        self.radius = 0.0

    def load(self, filename: Union[str, Path]) -> None:
        """Append the face vertices of an OBJ file to the mesh."""
        try:
            with open(filename, encoding="utf-8") as source:
                lines = source.read().splitlines()
        except OSError as exc:
            raise OSError(f"error opening {filename}") from exc

        positions: list[np.ndarray] = []
        for line in lines:
            if line.startswith("v "):
                fields = line[2:].split()
                if len(fields) < 3:
                    raise ValueError(f"malformed vertex line: {line!r}")
                positions.append(np.array([float(f) for f in fields[:3]]))
            elif line.startswith("f "):
                for token in line[2:].split(" "):
                    if not token:
                        continue
                    index = _parse_index(token.split("/")[0]) if token.split("/")[0] else 0
                    if not index:
                        continue
                    if not 1 <= index <= len(positions):
                        raise ValueError(f"vertex index {index} out of range")
                    self.vertices.append(positions[index - 1].copy())

        self.world_vertices = [np.zeros(3) for _ in self.vertices]

    def update(self) -> None:
        """Transform the vertices to world space and fit the bounding sphere."""
        self.world_vertices = [self.transform.apply(v) for v in self.vertices]
        if not self.world_vertices:
            self.center = np.zeros(3)
            self.radius = 0.0
            return
        self.center = np.mean(self.world_vertices, axis=0)
        self.radius = max(
            float(np.linalg.norm(v - self.center)) for v in self.world_vertices
        )

    def hit(self, ray: Ray, min_distance: float, max_distance: float) -> Optional[RayHit]:
        """The first triangle the ray strikes, in file order, or None."""
        count = len(self.world_vertices) // 3
        if count == 0:
            return None
        if sphere_raycast(ray, self.center, self.radius, min_distance, max_distance) is None:
            return None
        for start in range(0, count * 3, 3):
            v1, v2, v3 = self.world_vertices[start:start + 3]
            t = triangle_raycast(ray, v1, v2, v3, min_distance, max_distance)
            if t is not None:
                normal = np.cross(v2 - v1, v3 - v1)
                normal = normal / np.linalg.norm(normal)
                return RayHit(t, ray.at(t), normal, self.material)
        return None