"""Synthetic fixture images drawn with Pillow — dark filled shapes on a white canvas."""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageDraw

from shapescan.evaluation.harness import Fixture
from shapescan.models.image import RasterImage

_BACKGROUND = (255, 255, 255, 255)
_INK = (20, 20, 20, 255)


def _canvas(size: int) -> tuple[Image.Image, ImageDraw.ImageDraw]:
    img = Image.new("RGBA", (size, size), _BACKGROUND)
    return img, ImageDraw.Draw(img)


def _to_raster(img: Image.Image) -> RasterImage:
    return RasterImage.from_array(np.array(img))


def regular_polygon(cx: float, cy: float, radius: float, sides: int) -> list[tuple[float, float]]:
    """Vertices of a regular polygon with one vertex pointing straight up."""
    return [
        (
            cx + radius * math.cos(-math.pi / 2 + 2 * math.pi * i / sides),
            cy + radius * math.sin(-math.pi / 2 + 2 * math.pi * i / sides),
        )
        for i in range(sides)
    ]


def draw_square(size: int = 120, side: int = 50) -> RasterImage:
    img, draw = _canvas(size)
    x0 = (size - side) // 2
    draw.rectangle([x0, x0, x0 + side - 1, x0 + side - 1], fill=_INK)
    return _to_raster(img)


def draw_rectangle(size: int = 120, width: int = 80, height: int = 40) -> RasterImage:
    img, draw = _canvas(size)
    x0 = (size - width) // 2
    y0 = (size - height) // 2
    draw.rectangle([x0, y0, x0 + width - 1, y0 + height - 1], fill=_INK)
    return _to_raster(img)


def draw_circle(size: int = 120, radius: int = 32) -> RasterImage:
    img, draw = _canvas(size)
    c = size // 2
    draw.ellipse([c - radius, c - radius, c + radius, c + radius], fill=_INK)
    return _to_raster(img)


def draw_triangle(size: int = 120) -> RasterImage:
    img, draw = _canvas(size)
    draw.polygon([(size / 2, size * 0.12), (size * 0.88, size * 0.85), (size * 0.12, size * 0.85)], fill=_INK)
    return _to_raster(img)


def draw_pentagon(size: int = 120, radius: float = 42) -> RasterImage:
    img, draw = _canvas(size)
    draw.polygon(regular_polygon(size / 2, size / 2 + 4, radius, 5), fill=_INK)
    return _to_raster(img)


def draw_blank(size: int = 120) -> RasterImage:
    img, _ = _canvas(size)
    return _to_raster(img)


def synthetic_fixtures() -> list[Fixture]:
    """The built-in evaluation set, one primitive per image."""
    return [
        Fixture("square", draw_square(), ["rectangle"]),
        Fixture("rectangle", draw_rectangle(), ["rectangle"]),
        Fixture("circle", draw_circle(), ["circle"]),
        Fixture("triangle", draw_triangle(), ["triangle"]),
        Fixture("pentagon", draw_pentagon(), ["pentagon"]),
        Fixture("blank", draw_blank(), []),
    ]
