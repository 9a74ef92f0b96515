"""Shared test fixtures — synthetic RGBA images built with numpy."""

from __future__ import annotations

import struct
import zlib

import numpy as np
import pytest

from shapescan.models.image import RasterImage

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def canvas(width: int = 100, height: int = 100, color: tuple[int, int, int] = WHITE) -> np.ndarray:
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = color
    pixels[..., 3] = 255
    return pixels


def fill_rect(pixels: np.ndarray, x0: int, y0: int, x1: int, y1: int, color=BLACK) -> np.ndarray:
    """Fill the inclusive pixel range [x0, x1] × [y0, y1]."""
    pixels[y0 : y1 + 1, x0 : x1 + 1, :3] = color
    return pixels


def png_declaring_size(width: int, height: int) -> bytes:
    """A tiny RGBA PNG whose header claims width × height pixels."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


def fill_disk(pixels: np.ndarray, cx: int, cy: int, radius: int, color=BLACK) -> np.ndarray:
    ys, xs = np.mgrid[0 : pixels.shape[0], 0 : pixels.shape[1]]
    mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius * radius
    pixels[mask, :3] = color
    return pixels


@pytest.fixture
def blank_image() -> RasterImage:
    return RasterImage.from_array(canvas())


@pytest.fixture
def square_image() -> RasterImage:
    """40×40 black square covering x, y in [30, 69] on a 100×100 white canvas."""
    return RasterImage.from_array(fill_rect(canvas(), 30, 30, 69, 69))


@pytest.fixture
def circle_image() -> RasterImage:
    """Black disk of radius 30 centered at (50, 50) on a 100×100 white canvas."""
    return RasterImage.from_array(fill_disk(canvas(), 50, 50, 30))


@pytest.fixture
def two_squares_image() -> RasterImage:
    pixels = canvas(160, 100)
    fill_rect(pixels, 10, 30, 49, 69)
    fill_rect(pixels, 100, 20, 139, 59)
    return RasterImage.from_array(pixels)
