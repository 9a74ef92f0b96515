"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

# Chord lengths below this are treated as a single point.
_DEGENERATE_LENGTH = 1e-12


def polygon_area(points: NDArray[np.float64]) -> float:
    """Shoelace area of the closed polygon through ``points``. Always >= 0."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0].astype(np.float64)
    y = points[:, 1].astype(np.float64)
    return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)))


def closed_length(points: NDArray[np.float64]) -> float:
    """Sum of consecutive point distances, closing the loop back to the first point."""
    if len(points) < 2:
        return 0.0
    pts = points.astype(np.float64)
    steps = np.roll(pts, -1, axis=0) - pts
    return float(np.sum(np.hypot(steps[:, 0], steps[:, 1])))


def perpendicular_distances(
    points: NDArray[np.float64],
    start: NDArray[np.float64],
    end: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Distance from each point to the infinite line through ``start`` and ``end``.

    A zero-length line falls back to plain Euclidean distance from the shared endpoint.
    """
    x1, y1 = float(start[0]), float(start[1])
    x2, y2 = float(end[0]), float(end[1])
    length = math.hypot(x2 - x1, y2 - y1)
    if length < _DEGENERATE_LENGTH:
        return np.hypot(points[:, 0] - x1, points[:, 1] - y1)
    return (
        np.abs((y2 - y1) * points[:, 0] - (x2 - x1) * points[:, 1] + x2 * y1 - y2 * x1)
        / length
    )


def bbox(points: NDArray[np.int64]) -> tuple[int, int, int, int]:
    """Compute (xmin, ymin, xmax, ymax) over integer pixel coordinates."""
    if len(points) == 0:
        return (0, 0, 0, 0)
    return (
        int(np.min(points[:, 0])),
        int(np.min(points[:, 1])),
        int(np.max(points[:, 0])),
        int(np.max(points[:, 1])),
    )


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def circularity(area: float, perimeter: float) -> float:
    """Isoperimetric ratio 4π·area/perimeter². Circle=1.0, zero perimeter=0.0."""
    if perimeter <= 1e-10:
        return 0.0
    return 4.0 * math.pi * area / (perimeter * perimeter)


def aspect_ratio(width: float, height: float) -> float | None:
    """width / height, or None for a zero-height (single-row) box."""
    if height <= 0:
        return None
    return width / height
