"""Contour ordering and Ramer-Douglas-Peucker simplification."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shapescan.utils.geometry import centroid, perpendicular_distances


def order_by_angle(points: NDArray[np.int64]) -> NDArray[np.int64]:
    """Sort points by atan2 around their centroid, ascending.

    Approximate outline traversal only: interior points are kept alongside
    boundary points. Ties keep their input order.
    """
    if len(points) == 0:
        return points.copy()
    cx, cy = centroid(points)
    angles = np.arctan2(points[:, 1] - cy, points[:, 0] - cx)
    order = np.argsort(angles, kind="stable")
    return points[order]


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification.

    Keeps the point farthest from the first→last chord whenever it deviates by
    more than ``epsilon`` and recurses on both halves; otherwise the span
    collapses to its endpoints. Sequences shorter than 3 come back unchanged.
    Uses an explicit work stack so near-collinear inputs cannot exhaust the
    interpreter's recursion limit.
    """
    if epsilon < 0:
        raise ValueError(f"epsilon must be >= 0, got {epsilon}")

    pts = np.asarray(points, dtype=np.float64)
    n = len(pts)
    if n < 3:
        return pts.copy()

    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]

    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        distances = perpendicular_distances(pts[first + 1 : last], pts[first], pts[last])
        idx = int(np.argmax(distances))
        if distances[idx] > epsilon:
            split = first + 1 + idx
            keep[split] = True
            stack.append((split, last))
            stack.append((first, split))

    return pts[keep]


def close_contour(points: NDArray[np.int64]) -> NDArray[np.int64]:
    """Append the first point so the sequence ends where it starts."""
    if len(points) == 0:
        return points.copy()
    return np.vstack([points, points[:1]])


def distinct_vertex_count(polygon: NDArray[np.float64]) -> int:
    """Vertex count of a simplified closed polygon, ignoring the closing duplicate."""
    n = len(polygon)
    if n >= 2 and np.array_equal(polygon[0], polygon[-1]):
        return n - 1
    return n
