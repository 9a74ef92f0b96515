"""T2.01 — Contour ordering.

trace: Moore-neighbour walk of the region's outer boundary.
angle: every region pixel sorted by atan2 around the centroid (interior pixels included).
"""

from __future__ import annotations

from shapescan.engine.context import DetectionContext
from shapescan.engine.registry import Layer, transform
from shapescan.utils.contour import order_by_angle
from shapescan.utils.morphology import trace_boundary


@transform(
    id="T2.01",
    layer=Layer.SHAPE_ANALYSIS,
    dependencies=["T1.01"],
    description="Order region pixels into a contour",
)
def contour_ordering(ctx: DetectionContext) -> None:
    order = trace_boundary if ctx.config.contour_mode == "trace" else order_by_angle
    contours = []
    for region in ctx.regions:
        contour = order(region.points)
        contour.setflags(write=False)
        contours.append(contour)
    ctx.contours = contours
