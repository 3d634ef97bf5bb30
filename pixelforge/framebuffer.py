"""A software pixel buffer with a depth buffer and simple 2D drawing."""

from __future__ import annotations

import enum
import math
from pathlib import Path
from typing import Union

from PIL import Image as PilImage

from pixelforge.color import Rgba, blend
from pixelforge.image import Image

FAR_DEPTH = 3.4028234663852886e38
"""Depth written by :meth:`Framebuffer.clear`: the largest single-precision float."""


class _Region(enum.IntFlag):
    INSIDE = 0
    LEFT = 1
    RIGHT = 2
    BOTTOM = 4
    TOP = 8


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Framebuffer:
    """A width x height grid of RGBA pixels, stored row by row, with per-pixel depth."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("framebuffer size must not be negative")
        self.width = width
        self.height = height
        self.pixels: list[Rgba] = [Rgba(0, 0, 0, 0)] * (width * height)
        self.depth: list[float] = [0.0] * (width * height)

    def clear(self, color: Rgba) -> None:
        """Fill every pixel with ``color`` and reset depth to the far value."""
        color = Rgba(*color)
        self.pixels = [color] * (self.width * self.height)
        self.depth = [FAR_DEPTH] * (self.width * self.height)

    def draw_point(self, x: int, y: int, color: Rgba) -> None:
        """Blend ``color`` onto the pixel at (x, y) if its index lies in the buffer."""
        index = x + y * self.width
        if 0 <= index < len(self.pixels):
            self.pixels[index] = blend(Rgba(*color), self.pixels[index])

    def draw_point_clip(self, x: int, y: int, color: Rgba) -> None:
        """Write ``color`` at (x, y) unless the point is outside the buffer."""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        self.pixels[x + y * self.width] = Rgba(*color)

    def _put(self, x: int, y: int, color: Rgba) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"point ({x}, {y}) is outside the framebuffer")
        self.pixels[x + y * self.width] = Rgba(*color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: Rgba) -> None:
        """Draw a clipped line with Bresenham's algorithm."""
        steep = abs(y2 - y1) > abs(x2 - x1)
        if steep:
            x1, y1 = y1, x1
            x2, y2 = y2, x2
        if x1 > x2:
            x1, x2 = x2, x1
            y1, y2 = y2, y1

        dx = x2 - x1
        dy = abs(y2 - y1)
        error = dx // 2
        ystep = 1 if y1 < y2 else -1

        x1, y1, x2, y2 = self._clip_line(x1, y1, x2, y2)

        y = y1
        for x in range(x1, x2 + 1):
            if steep:
                self.draw_point_clip(y, x, color)
            else:
                self.draw_point_clip(x, y, color)
            error -= dy
            if error < 0:
                y += ystep
                error += dx

    def draw_line_slope(self, x1: int, y1: int, x2: int, y2: int, color: Rgba) -> None:
        """Draw an unclipped line from its slope-intercept form.

        Raises IndexError if a point of the line falls outside the buffer.
        """
        dx = x2 - x1
        dy = y2 - y1

        if dx == 0:
            for y in range(min(y1, y2), max(y1, y2) + 1):
                self._put(x1, y, color)
            return

        m = dy / dx
        b = y1 - m * x1

        if abs(dx) > abs(dy):
            for x in range(min(x1, x2), max(x1, x2) + 1):
                self._put(x, _round_half_away(m * x + b), color)
        else:
            for y in range(min(y1, y2), max(y1, y2) + 1):
                self._put(_round_half_away((y - b) / m), y, color)

    def draw_rect(self, x: int, y: int, w: int, h: int, color: Rgba) -> None:
        """Fill the rectangle with top-left (x, y), clipped to the buffer."""
        if x + w < 0 or x >= self.width or y + h < 0 or y >= self.height:
            return
        left, right = max(x, 0), min(x + w, self.width)
        top, bottom = max(y, 0), min(y + h, self.height)
        for sy in range(top, bottom):
            for sx in range(left, right):
                self.draw_point(sx, sy, color)

    def draw_triangle(
        self, x1: int, y1: int, x2: int, y2: int, x3: int, y3: int, color: Rgba
    ) -> None:
        """Draw the outline of a triangle."""
        self.draw_line(x1, y1, x2, y2, color)
        self.draw_line(x2, y2, x3, y3, color)
        self.draw_line(x3, y3, x1, y1, color)

    def draw_circle(self, xc: int, yc: int, r: int, color: Rgba) -> None:
        """Draw a circle outline with the midpoint algorithm."""
        x, y = 0, r
        d = 3 - 2 * r
        self._draw_octant(xc, yc, x, y, color)
        while y >= x:
            if d > 0:
                y -= 1
                d += 4 * (x - y) + 10
            else:
                d += 4 * x + 6
            x += 1
            if x < 0 or x >= self.width or y < 0 or y >= self.height:
                continue
            self._draw_octant(xc, yc, x, y, color)

    def draw_image(self, x: int, y: int, image: Image) -> None:
        """Draw ``image`` centred on (x, y), clipped to the buffer."""
        if (
            x + image.width < 0
            or x >= self.width
            or y + image.height < 0
            or y >= self.height
        ):
            return
        for iy in range(image.height):
            sy = y + iy - image.height // 2
            if sy < 0 or sy >= self.height:
                continue
            row = image.pixels[iy * image.width:(iy + 1) * image.width]
            for ix, color in enumerate(row):
                sx = x + ix - image.width // 2
                if sx < 0 or sx >= self.width:
                    continue
                self.draw_point(sx, sy, color)

    def save(self, path: Union[str, Path]) -> None:
        """Write the pixels to an image file; the format follows the file suffix."""
        data = bytes(channel for pixel in self.pixels for channel in pixel)
        PilImage.frombytes("RGBA", (self.width, self.height), data).save(path)

    def _draw_octant(self, xc: int, yc: int, x: int, y: int, color: Rgba) -> None:
        for px, py in (
            (xc + x, yc + y),
            (xc - x, yc + y),
            (xc + x, yc - y),
            (xc - x, yc - y),
            (xc + y, yc + x),
            (xc - y, yc + x),
            (xc + y, yc - x),
            (xc - y, yc - x),
        ):
            self.draw_point(px, py, color)

    def _region_code(self, x: int, y: int) -> _Region:
        code = _Region.INSIDE
        if x < 0:
            code |= _Region.LEFT
        elif x >= self.width:
            code |= _Region.RIGHT
        if y < 0:
            code |= _Region.TOP
        elif y >= self.height:
            code |= _Region.BOTTOM
        return code

    def _clip_line(
        self, x1: int, y1: int, x2: int, y2: int
    ) -> tuple[int, int, int, int]:
        """Cohen-Sutherland clipping of a line to the buffer bounds."""
        code1 = self._region_code(x1, y1)
        code2 = self._region_code(x2, y2)

        while code1 or code2:
            if code1 & code2:
                break
            code_out = code1 if code1 else code2

            if code_out & _Region.TOP:
                x = x1 + _trunc_div((x2 - x1) * (0 - y1), y2 - y1)
                y = 0
            elif code_out & _Region.BOTTOM:
                x = x1 + _trunc_div((x2 - x1) * (self.height - y1), y2 - y1)
                y = self.height - 1
            elif code_out & _Region.LEFT:
                y = y1 + _trunc_div((y2 - y1) * (0 - x1), x2 - x1)
                x = 0
            else:
                y = y1 + _trunc_div((y2 - y1) * (self.width - x1), x2 - x1)
                x = self.width - 1

            if code_out == code1:
                x1, y1 = x, y
                code1 = self._region_code(x1, y1)
            else:
                x2, y2 = x, y
                code2 = self._region_code(x2, y2)

        return x1, y1, x2, y2