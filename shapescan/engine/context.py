"""DetectionContext — per-call state flowing through the stages.

Every stage adds its own output field; none rewrites an earlier one.
Per-region outputs are lists parallel to ``regions``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from shapescan.engine.config import PipelineConfig
from shapescan.models.image import RasterImage
from shapescan.models.shapes import DetectedShape
from shapescan.utils.geometry import bbox


def _frozen(arr: NDArray) -> NDArray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class Region:
    """A maximal 8-connected set of edge pixels. Pixel order carries no meaning."""

    points: NDArray[np.int64]  # (N, 2) of (x, y)

    def __post_init__(self) -> None:
        _frozen(self.points)

    @property
    def size(self) -> int:
        return len(self.points)

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        return bbox(self.points)

    @property
    def width(self) -> int:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> int:
        return self.bbox[3] - self.bbox[1]

    @property
    def center(self) -> tuple[float, float]:
        """Bounding-box center."""
        xmin, ymin, xmax, ymax = self.bbox
        return ((xmin + xmax) / 2.0, (ymin + ymax) / 2.0)


@dataclass(frozen=True)
class ContourMetrics:
    perimeter: float
    # Area fed into circularity: enclosed trace area, or pixel count in angle mode
    area: float
    circularity: float


@dataclass(frozen=True)
class SimplifiedPolygon:
    vertices: NDArray[np.float64]
    vertex_count: int
    epsilon: float


@dataclass
class DetectionContext:
    """Shared state for one detection call."""

    image: RasterImage
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Layer 0 ---
    gray: NDArray[np.float64] | None = None
    edges: NDArray[np.uint8] | None = None

    # --- Layer 1 ---
    regions: list[Region] = field(default_factory=list)
    dropped_regions: int = 0

    # --- Layer 2 (parallel to regions) ---
    contours: list[NDArray[np.int64]] = field(default_factory=list)
    metrics: list[ContourMetrics] = field(default_factory=list)
    polygons: list[SimplifiedPolygon] = field(default_factory=list)
    shapes: list[DetectedShape] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def edge_pixel_count(self) -> int:
        if self.edges is None:
            return 0
        return int(np.count_nonzero(self.edges))
