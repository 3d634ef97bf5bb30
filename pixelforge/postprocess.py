"""Whole-image filters applied in place to a row-major list of RGBA pixels."""

from __future__ import annotations

import math
from typing import Callable, Iterator, MutableSequence, Sequence

from pixelforge.color import Rgba

Buffer = MutableSequence[Rgba]

_BOX = (1, 1, 1, 1, 1, 1, 1, 1, 1)
_GAUSSIAN = (1, 2, 1, 2, 4, 2, 1, 2, 1)
_SHARPEN = (0, -1, 0, -1, 5, -1, 0, -1, 0)
_SOBEL_H = (1, 0, -1, 2, 0, -2, 1, 0, -1)
_SOBEL_V = (-1, -2, -1, 0, 0, 0, 1, 2, 1)
_EMBOSS = (-2, -1, 0, -1, 1, 1, 0, 1, 2)


def _clamp(value: int) -> int:
    return min(max(value, 0), 255)


def _average(pixel: Rgba) -> int:
    return (pixel.r + pixel.g + pixel.b) // 3


def _map_pixels(buffer: Buffer, func: Callable[[Rgba], Rgba]) -> None:
    buffer[:] = [func(Rgba(*pixel)) for pixel in buffer]


def invert(buffer: Buffer) -> None:
    """Replace each colour channel with its complement; alpha is kept."""
    _map_pixels(buffer, lambda p: Rgba(255 - p.r, 255 - p.g, 255 - p.b, p.a))


def monochrome(buffer: Buffer) -> None:
    """Set each colour channel to the average of the three."""

    def grey(p: Rgba) -> Rgba:
        avg = _average(p)
        return Rgba(avg, avg, avg, p.a)

    _map_pixels(buffer, grey)


def color_balance(buffer: Buffer, ro: int, go: int, bo: int) -> None:
    """Add a separate offset to each colour channel, saturating to 0..255."""
    _map_pixels(
        buffer,
        lambda p: Rgba(_clamp(p.r + ro), _clamp(p.g + go), _clamp(p.b + bo), p.a),
    )


def brightness(buffer: Buffer, amount: int) -> None:
    """Add ``amount`` to every colour channel, saturating to 0..255."""
    color_balance(buffer, amount, amount, amount)


def threshold(buffer: Buffer, level: int) -> None:
    """Make pixels whose channel average reaches ``level`` white, the rest black."""

    def cut(p: Rgba) -> Rgba:
        value = 255 if _average(p) >= level else 0
        return Rgba(value, value, value, p.a)

    _map_pixels(buffer, cut)


def posterize(buffer: Buffer, levels: int) -> None:
    """Quantise each colour channel to steps of ``255 // levels``."""
    if not 1 <= levels <= 255:
        raise ValueError("levels must be between 1 and 255")
    step = 255 // levels
    _map_pixels(
        buffer,
        lambda p: Rgba(
            (p.r // step) * step, (p.g // step) * step, (p.b // step) * step, p.a
        ),
    )


def alpha(buffer: Buffer, value: int) -> None:
    """Set the alpha of every pixel."""
    if not 0 <= value <= 255:
        raise ValueError("alpha must be between 0 and 255")
    _map_pixels(buffer, lambda p: Rgba(p.r, p.g, p.b, value))


def _neighbourhoods(
    buffer: Buffer, width: int, height: int
) -> Iterator[tuple[int, list[Rgba]]]:
    """Yield each interior pixel index with its 3x3 neighbours, row by row.

    Neighbours are read from a copy taken before any pixel is changed.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    source: Sequence[Rgba] = [Rgba(*p) for p in buffer]
    for index in range(len(source)):
        x, y = index % width, index // width
        if x < 1 or x + 1 >= width or y < 1 or y + 1 >= height:
            continue
        yield index, [
            source[(x + dx) + (y + dy) * width]
            for dy in (-1, 0, 1)
            for dx in (-1, 0, 1)
        ]


def _weighted(values: Sequence[int], kernel: Sequence[int]) -> int:
    return sum(v * k for v, k in zip(values, kernel))


def _convolve(
    buffer: Buffer,
    width: int,
    height: int,
    kernel: Sequence[int],
    finish: Callable[[int], int],
) -> None:
    for index, block in list(_neighbourhoods(buffer, width, height)):
        r = finish(_weighted([p.r for p in block], kernel))
        g = finish(_weighted([p.g for p in block], kernel))
        b = finish(_weighted([p.b for p in block], kernel))
        buffer[index] = Rgba(r, g, b, Rgba(*buffer[index]).a)


def box_blur(buffer: Buffer, width: int, height: int) -> None:
    """Average each interior pixel with its eight neighbours."""
    _convolve(buffer, width, height, _BOX, lambda total: total // 9)


def gaussian_blur(buffer: Buffer, width: int, height: int) -> None:
    """Blur interior pixels with a 3x3 Gaussian kernel."""
    _convolve(buffer, width, height, _GAUSSIAN, lambda total: total // 16)


def sharpen(buffer: Buffer, width: int, height: int) -> None:
    """Sharpen interior pixels with a 3x3 Laplacian-based kernel."""
    _convolve(buffer, width, height, _SHARPEN, _clamp)


def edge(buffer: Buffer, width: int, height: int, level: int) -> None:
    """Sobel edge detection on the red channel; magnitudes below ``level`` become 0."""
    results = []
    for index, block in _neighbourhoods(buffer, width, height):
        reds = [p.r for p in block]
        h = _weighted(reds, _SOBEL_H)
        v = _weighted(reds, _SOBEL_V)
        magnitude = int(math.sqrt(h * h + v * v))
        if magnitude < level:
            magnitude = 0
        results.append((index, _clamp(magnitude)))
    for index, c in results:
        buffer[index] = Rgba(c, c, c, Rgba(*buffer[index]).a)


def emboss(buffer: Buffer, width: int, height: int) -> None:
    """Grey emboss of interior pixels from the channel averages."""
    results = []
    for index, block in _neighbourhoods(buffer, width, height):
        total = _clamp(_weighted([_average(p) for p in block], _EMBOSS))
        results.append((index, total))
    for index, c in results:
        buffer[index] = Rgba(c, c, c, Rgba(*buffer[index]).a)


def emboss_color(buffer: Buffer, width: int, height: int) -> None:
    """Emboss each colour channel of interior pixels separately."""
    _convolve(buffer, width, height, _EMBOSS, _clamp)