"""Vertex and fragment shading with a point light and Phong specular highlights."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np


def _vec(value, size: int) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape == ():
        array = np.full(size, float(array))
    if array.shape != (size,):
        raise ValueError(f"expected {size} components")
    return array


def _normalize(v: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore", divide="ignore"):
        return v / np.linalg.norm(v)


def _reflect(incident: np.ndarray, normal: np.ndarray) -> np.ndarray:
    return incident - 2.0 * float(np.dot(normal, incident)) * normal


@dataclass(eq=False)
class Light:
    """A light with a position, a direction and a colour."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.direction = _vec(self.direction, 3)
        self.color = _vec(self.color, 3)


@dataclass(eq=False)
class SurfaceMaterial:
    """Diffuse colour, specular colour and specular exponent of a surface."""

    albedo: np.ndarray = field(default_factory=lambda: np.ones(3))
    specular: np.ndarray = field(default_factory=lambda: np.ones(3))
    shininess: float = 32.0

    def __post_init__(self) -> None:
        self.albedo = _vec(self.albedo, 3)
        self.specular = _vec(self.specular, 3)
        self.shininess = float(self.shininess)


@dataclass(eq=False)
class Vertex:
    """A model-space vertex."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    uv: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.normal = _vec(self.normal, 3)
        self.uv = _vec(self.uv, 2)


@dataclass(eq=False)
class VertexOutput:
    """A vertex after shading: clip-space and view-space position, view-space normal."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(4))
    view_position: np.ndarray = field(default_factory=lambda: np.zeros(4))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 4)
        self.view_position = _vec(self.view_position, 4)
        self.normal = _vec(self.normal, 3)
        self.color = _vec(self.color, 3)


@dataclass(eq=False)
class Fragment:
    """Interpolated attributes at one pixel of a triangle."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: np.ndarray = field(default_factory=lambda: np.zeros(4))

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.normal = _vec(self.normal, 3)
        self.color = _vec(self.color, 4)


@dataclass(eq=False)
class Uniforms:
    """Values shared by every vertex and fragment of a draw."""

    model: np.ndarray = field(default_factory=lambda: np.eye(4))
    view: np.ndarray = field(default_factory=lambda: np.eye(4))
    projection: np.ndarray = field(default_factory=lambda: np.eye(4))
    material: SurfaceMaterial = field(default_factory=SurfaceMaterial)
    light: Light = field(default_factory=Light)
    ambient: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.model = np.asarray(self.model, dtype=float)
        self.view = np.asarray(self.view, dtype=float)
        self.projection = np.asarray(self.projection, dtype=float)
        self.ambient = _vec(self.ambient, 3)


def process_vertex(vertex: Vertex, uniforms: Uniforms) -> VertexOutput:
    """Transform a vertex to clip space and its normal to view space."""
    model_view = uniforms.view @ uniforms.model
    mvp = uniforms.projection @ model_view
    point = np.append(vertex.position, 1.0)
    return VertexOutput(
        position=mvp @ point,
        view_position=model_view @ point,
        normal=_normalize(model_view[:3, :3] @ vertex.normal),
    )


def process_fragment(fragment: Fragment, uniforms: Uniforms) -> np.ndarray:
    """The RGBA colour of a fragment: ambient and diffuse times albedo, plus specular."""
    light_position = (uniforms.view @ np.append(uniforms.light.position, 1.0))[:3]
    light_dir = _normalize(light_position - fragment.position)

    intensity = max(0.0, float(np.dot(light_dir, fragment.normal)))
    diffuse = uniforms.light.color * intensity

    specular: Union[np.ndarray, float] = np.zeros(3)
    if intensity > 0:
        reflection = _reflect(-light_dir, fragment.normal)
        view_dir = _normalize(-fragment.position)
        intensity = max(float(np.dot(reflection, view_dir)), 0.0)
        intensity = intensity ** uniforms.material.shininess
        specular = uniforms.material.specular * intensity

    color = (uniforms.ambient + diffuse) * uniforms.material.albedo + specular
    return np.append(color, 1.0)