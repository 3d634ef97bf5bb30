"""Colour types, conversions and blending of 8-bit RGBA pixels."""

from __future__ import annotations

import enum
import math
from typing import Callable, NamedTuple, Optional, Sequence

import numpy as np


class Rgba(NamedTuple):
    """An 8-bit-per-channel colour."""

    r: int
    g: int
    b: int
    a: int = 255


class BlendMode(enum.Enum):
    """How a source pixel is combined with the pixel already present."""

    NORMAL = enum.auto()
    ALPHA = enum.auto()
    ADDITIVE = enum.auto()
    MULTIPLY = enum.auto()


def hsv_to_rgb(hue: float, saturation: float, value: float) -> np.ndarray:
    """Convert HSV (hue in degrees, saturation and value in 0..1) to linear RGB."""
    if saturation == 0:
        return np.array([value, value, value], dtype=float)

    scaled = hue / 60.0
    sector = math.floor(scaled)
    frac = scaled - sector
    o = value * (1 - saturation)
    p = value * (1 - saturation * frac)
    q = value * (1 - saturation * (1 - frac))

    sectors = {
        1: (p, value, o),
        2: (o, value, q),
        3: (o, p, value),
        4: (q, o, value),
        5: (value, o, p),
    }
    # Sector 0 and anything out of range share the same mapping.
    return np.array(sectors.get(int(sector), (value, q, o)), dtype=float)


def linear_to_gamma(linear: float) -> float:
    """Apply a gamma of 2 to a linear channel value; non-positive values give 0."""
    return math.sqrt(linear) if linear > 0 else 0.0


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def to_rgba(color: Sequence[float]) -> Rgba:
    """Convert a linear RGB or RGBA float colour to a gamma-corrected 8-bit colour.

    Alpha is clamped but not gamma corrected; a three-component colour is opaque.
    """
    components = [float(c) for c in color]
    if len(components) not in (3, 4):
        raise ValueError("colour must have 3 or 4 components")
    r, g, b = (int(_clamp01(linear_to_gamma(c)) * 255) for c in components[:3])
    a = int(_clamp01(components[3]) * 255) if len(components) == 4 else 255
    return Rgba(r, g, b, a)


def to_float(color: Rgba) -> np.ndarray:
    """Convert an 8-bit colour to four floats in the range 0..1."""
    return np.array([min(max(c, 0), 255) / 255.0 for c in color], dtype=float)


def normal_blend(src: Rgba, dst: Rgba) -> Rgba:
    """Replace the destination with the source, ignoring what was there."""
    r, g, b, a = src
    return Rgba(r, g, b, a)


def alpha_blend(src: Rgba, dst: Rgba) -> Rgba:
    """Mix source and destination weighted by the source alpha."""
    alpha = src.a
    inv_alpha = 255 - src.a
    return Rgba(
        (alpha * src.r + inv_alpha * dst.r) >> 8,
        (alpha * src.g + inv_alpha * dst.g) >> 8,
        (alpha * src.b + inv_alpha * dst.b) >> 8,
        src.a,
    )


def additive_blend(src: Rgba, dst: Rgba) -> Rgba:
    """Add source and destination, saturating at 255."""
    return Rgba(
        min(src.r + dst.r, 255),
        min(src.g + dst.g, 255),
        min(src.b + dst.b, 255),
        src.a,
    )


def multiply_blend(src: Rgba, dst: Rgba) -> Rgba:
    """Multiply source and destination channels."""
    return Rgba(
        (src.r * dst.r) >> 8,
        (src.g * dst.g) >> 8,
        (src.b * dst.b) >> 8,
        src.a,
    )


_BLENDERS: dict[BlendMode, Callable[[Rgba, Rgba], Rgba]] = {
    BlendMode.NORMAL: normal_blend,
    BlendMode.ALPHA: alpha_blend,
    BlendMode.ADDITIVE: additive_blend,
    BlendMode.MULTIPLY: multiply_blend,
}

_blend_func: Optional[Callable[[Rgba, Rgba], Rgba]] = None


def set_blend_mode(mode: BlendMode) -> None:
    """Choose the blend function used by :func:`blend`."""
    global _blend_func
    _blend_func = _BLENDERS[BlendMode(mode)]


def blend(src: Rgba, dst: Rgba) -> Rgba:
    """Blend with the current blend mode."""
    if _blend_func is None:
        raise RuntimeError("no blend mode has been set")
    return _blend_func(src, dst)