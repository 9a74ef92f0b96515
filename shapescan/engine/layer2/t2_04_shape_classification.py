"""T2.04 — Shape classification.

Evaluated in priority order:
  IF circularity > threshold AND vertices <= 5  → "circle", confidence min(C, 0.95)
  IF vertices == 3                              → "triangle", 0.9
  IF vertices == 4                              → "rectangle" ("square" when enabled), 0.9
  IF vertices == 5                              → "pentagon", 0.85
  IF vertices >= 10                             → "star", 0.8
  ELSE                                          → "polygon", 0.6

Confidences are fixed heuristic weights, not calibrated probabilities.
"""

from __future__ import annotations

from shapescan.engine.config import PipelineConfig
from shapescan.engine.context import DetectionContext, Region
from shapescan.engine.registry import Layer, transform
from shapescan.models.shapes import BoundingBox, DetectedShape, Point
from shapescan.utils.geometry import aspect_ratio

_CIRCLE_MAX_VERTICES = 5
_CIRCLE_MAX_CONFIDENCE = 0.95
_TRIANGLE_CONFIDENCE = 0.9
_QUAD_CONFIDENCE = 0.9
_PENTAGON_CONFIDENCE = 0.85
_STAR_MIN_VERTICES = 10
_STAR_CONFIDENCE = 0.8
_POLYGON_CONFIDENCE = 0.6


def classify_shape(
    circularity: float,
    vertex_count: int,
    aspect: float | None,
    config: PipelineConfig,
) -> tuple[str, float]:
    """Map (circularity, vertex count, aspect ratio) to (shape type, confidence)."""
    if circularity > config.circularity_threshold and vertex_count <= _CIRCLE_MAX_VERTICES:
        return "circle", min(circularity, _CIRCLE_MAX_CONFIDENCE)
    if vertex_count == 3:
        return "triangle", _TRIANGLE_CONFIDENCE
    if vertex_count == 4:
        if (
            config.distinguish_squares
            and aspect is not None
            and abs(aspect - 1.0) < config.square_tolerance
        ):
            return "square", _QUAD_CONFIDENCE
        return "rectangle", _QUAD_CONFIDENCE
    if vertex_count == 5:
        return "pentagon", _PENTAGON_CONFIDENCE
    if vertex_count >= _STAR_MIN_VERTICES:
        return "star", _STAR_CONFIDENCE
    return "polygon", _POLYGON_CONFIDENCE


def _describe(region: Region, shape_type: str, confidence: float) -> DetectedShape:
    xmin, ymin, _, _ = region.bbox
    cx, cy = region.center
    return DetectedShape(
        type=shape_type,
        confidence=confidence,
        bounding_box=BoundingBox(x=xmin, y=ymin, width=region.width, height=region.height),
        center=Point(x=cx, y=cy),
        area=region.size,
    )


@transform(
    id="T2.04",
    layer=Layer.SHAPE_ANALYSIS,
    dependencies=["T2.02", "T2.03"],
    description="Classify regions into shape types with confidence",
)
def shape_classification(ctx: DetectionContext) -> None:
    shapes = []
    for region, metrics, polygon in zip(ctx.regions, ctx.metrics, ctx.polygons):
        aspect = aspect_ratio(region.width, region.height)
        shape_type, confidence = classify_shape(
            metrics.circularity, polygon.vertex_count, aspect, ctx.config
        )
        shapes.append(_describe(region, shape_type, confidence))
    ctx.shapes = shapes
