"""Vertex lists loaded from OBJ files, and actors that place them in the world."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from pixelforge.raster.pipeline import Pipeline
from pixelforge.raster.shading import SurfaceMaterial, Vertex
from pixelforge.transform import Transform


def _parse_index(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _parse_vector(line: str, body: str) -> np.ndarray:
    fields = body.split()
    if len(fields) < 3:
        raise ValueError(f"malformed line: {line!r}")
    return np.array([float(f) for f in fields[:3]])


def _lookup(items: list[np.ndarray], index: int, kind: str) -> np.ndarray:
    if not 1 <= index <= len(items):
        raise ValueError(f"{kind} index {index} out of range")
    return items[index - 1].copy()


class Model:
    """A triangle list, three vertices per triangle."""

    def __init__(
        self,
        vertices: Optional[Sequence[Vertex]] = None,
        color: Sequence[float] = (1.0, 1.0, 1.0, 1.0),
    ) -> None:
        self.vertices: list[Vertex] = list(vertices or [])
        self.color = np.asarray(color, dtype=float)

    def load(self, filename: Union[str, Path]) -> None:
        """Append the face vertices of an OBJ file, with their normals where given."""
        try:
            with open(filename, encoding="utf-8") as source:
                lines = source.read().splitlines()
        except OSError as exc:
            raise OSError(f"error opening {filename}") from exc

        positions: list[np.ndarray] = []
        normals: list[np.ndarray] = []
        for line in lines:
            if line.startswith("v "):
                positions.append(_parse_vector(line, line[2:]))
            elif line.startswith("vn "):
                normals.append(_parse_vector(line, line[3:]))
            elif line.startswith("f "):
                for token in line[2:].split(" "):
                    parts = [_parse_index(p) if p else 0 for p in token.split("/")[:3]]
                    parts += [0] * (3 - len(parts))
                    position_index, _, normal_index = parts
                    if not position_index:
                        continue
                    normal = (
                        _lookup(normals, normal_index, "normal")
                        if normal_index
                        else np.ones(3)
                    )
                    self.vertices.append(
                        Vertex(_lookup(positions, position_index, "vertex"), normal)
                    )

    def draw(self, pipeline: Pipeline) -> None:
        """Render the triangles with the pipeline's current uniforms."""
        pipeline.draw(self.vertices)


class Actor:
    """A model drawn with its own transform and material."""

    def __init__(
        self, transform: Transform, model: Model, material: SurfaceMaterial
    ) -> None:
        self.transform = transform
        self.model = model
        self.material = material

    def draw(self, pipeline: Pipeline) -> None:
        """Set the model matrix and material uniforms, then draw the model."""
        pipeline.uniforms.model = self.transform.matrix()
        pipeline.uniforms.material = dataclasses.replace(self.material)
        self.model.draw(pipeline)