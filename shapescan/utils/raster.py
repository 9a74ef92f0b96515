"""Raster utilities — luminance conversion and Sobel edge extraction."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# ITU-R BT.601 luma weights.
_LUMA_R = 0.299
_LUMA_G = 0.587
_LUMA_B = 0.114

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)

EDGE_ON = 255
EDGE_OFF = 0


def luminance(rgba: NDArray[np.uint8]) -> NDArray[np.float64]:
    """(H, W, 4) RGBA pixels → (H, W) grayscale intensities in [0, 255]. Alpha ignored."""
    r = rgba[..., 0].astype(np.float64)
    g = rgba[..., 1].astype(np.float64)
    b = rgba[..., 2].astype(np.float64)
    return _LUMA_R * r + _LUMA_G * g + _LUMA_B * b


def sobel_magnitude(gray: NDArray[np.float64]) -> NDArray[np.float64]:
    """Gradient magnitude sqrt(Gx² + Gy²) at every interior pixel.

    Border pixels, where the 3×3 window would leave the image, stay 0.
    """
    height, width = gray.shape
    magnitude = np.zeros((height, width), dtype=np.float64)
    if height < 3 or width < 3:
        return magnitude

    gx = np.zeros((height - 2, width - 2), dtype=np.float64)
    gy = np.zeros((height - 2, width - 2), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            window = gray[ky : ky + height - 2, kx : kx + width - 2]
            if SOBEL_X[ky, kx]:
                gx += SOBEL_X[ky, kx] * window
            if SOBEL_Y[ky, kx]:
                gy += SOBEL_Y[ky, kx] * window

    magnitude[1:-1, 1:-1] = np.sqrt(gx * gx + gy * gy)
    return magnitude


def edge_map(gray: NDArray[np.float64], threshold: float) -> NDArray[np.uint8]:
    """Binary edge map: 255 where the Sobel magnitude exceeds ``threshold``, else 0."""
    height, width = gray.shape
    edges = np.full((height, width), EDGE_OFF, dtype=np.uint8)
    if height < 3 or width < 3:
        return edges
    interior = sobel_magnitude(gray)[1:-1, 1:-1]
    edges[1:-1, 1:-1] = np.where(interior > threshold, EDGE_ON, EDGE_OFF)
    return edges
