"""RGBA images loaded from disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from PIL import Image as PilImage

from pixelforge.color import Rgba


@dataclass
class Image:
    """A width x height grid of pixels stored row by row."""

    width: int = 0
    height: int = 0
    pixels: list[Rgba] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match image size")

    @classmethod
    def load(cls, filename: Union[str, Path]) -> "Image":
        """Read an image file, converting it to RGBA."""
        try:
            with PilImage.open(filename) as source:
                rgba = source.convert("RGBA")
        except OSError as exc:
            raise OSError(f"error loading image: {filename}") from exc
        width, height = rgba.size
        data = rgba.tobytes()
        pixels = [Rgba(*data[i:i + 4]) for i in range(0, len(data), 4)]
        return cls(width, height, pixels)