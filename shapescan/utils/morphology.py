"""Connected-component discovery and boundary tracing on binary edge maps."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# 8-connectivity offsets (dx, dy).
_NEIGHBOURS_8 = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1))

# Moore neighbourhood in clockwise order (image coordinates, y down), starting west.
_MOORE = ((-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1))
_MOORE_INDEX = {offset: i for i, offset in enumerate(_MOORE)}
_WEST = 0


def find_regions(
    edges: NDArray[np.uint8],
    min_size: int,
) -> tuple[list[NDArray[np.int64]], int]:
    """Partition edge pixels into 8-connected components.

    Seeds are taken in row-major order. A component is kept only if its pixel
    count exceeds ``min_size``; smaller ones are dropped but stay visited.

    Returns (regions, dropped_count). Each region is an (N, 2) array of (x, y).
    """
    height, width = edges.shape
    foreground = (edges > 0).tolist()
    visited = [[False] * width for _ in range(height)]

    regions: list[NDArray[np.int64]] = []
    dropped = 0
    ys, xs = np.nonzero(edges)
    for y, x in zip(ys.tolist(), xs.tolist()):
        if visited[y][x]:
            continue
        pixels = _flood_fill(foreground, visited, x, y)
        if len(pixels) > min_size:
            regions.append(np.array(pixels, dtype=np.int64))
        else:
            dropped += 1

    return regions, dropped


def _flood_fill(
    foreground: list[list[bool]],
    visited: list[list[bool]],
    start_x: int,
    start_y: int,
) -> list[tuple[int, int]]:
    """Stack-based 8-connected flood fill. Marks every reached pixel visited."""
    height = len(foreground)
    width = len(foreground[0])
    stack = [(start_x, start_y)]
    visited[start_y][start_x] = True
    pixels: list[tuple[int, int]] = []

    while stack:
        x, y = stack.pop()
        pixels.append((x, y))
        for dx, dy in _NEIGHBOURS_8:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and foreground[ny][nx] and not visited[ny][nx]:
                visited[ny][nx] = True
                stack.append((nx, ny))

    return pixels


def trace_boundary(points: NDArray[np.int64]) -> NDArray[np.int64]:
    """Moore-neighbour trace of the outer boundary of a pixel set.

    Starts at the first pixel in row-major order and walks clockwise. Stops
    once a (pixel, backtrack) state repeats, so thin
    one-pixel spurs are walked out and back. Returns an (M, 2) array of
    (x, y) without repeating the start pixel at the end.
    """
    if len(points) == 0:
        return np.empty((0, 2), dtype=np.int64)

    members = {(int(x), int(y)) for x, y in points}
    start = min(members, key=lambda p: (p[1], p[0]))
    contour = [start]
    current = start
    back = _WEST
    seen = {(start, back)}

    while True:
        for step in range(1, 9):
            k = (back + step) % 8
            dx, dy = _MOORE[k]
            candidate = (current[0] + dx, current[1] + dy)
            if candidate in members:
                break
        else:
            # Isolated pixel
            break

        pdx, pdy = _MOORE[(k - 1) % 8]
        backtrack = (current[0] + pdx - candidate[0], current[1] + pdy - candidate[1])
        back = _MOORE_INDEX[backtrack]
        current = candidate

        state = (current, back)
        if state in seen:
            break
        seen.add(state)
        contour.append(current)

    if len(contour) > 1 and contour[-1] == start:
        contour.pop()
    return np.array(contour, dtype=np.int64)
