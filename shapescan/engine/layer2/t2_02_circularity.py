"""T2.02 — Perimeter and circularity.

Perimeter is the closed length of the ordered contour. C = 4π·area/perimeter²,
0 when the perimeter is 0. Area is the trace's enclosed area in trace mode and
the region pixel count in angle mode.
"""

from __future__ import annotations

from shapescan.engine.context import ContourMetrics, DetectionContext
from shapescan.engine.registry import Layer, transform
from shapescan.utils.geometry import circularity, closed_length, polygon_area


@transform(
    id="T2.02",
    layer=Layer.SHAPE_ANALYSIS,
    dependencies=["T2.01"],
    description="Compute contour perimeter and circularity (4π·area/perimeter²)",
)
def perimeter_circularity(ctx: DetectionContext) -> None:
    trace_mode = ctx.config.contour_mode == "trace"
    metrics = []
    for region, contour in zip(ctx.regions, ctx.contours):
        perimeter = closed_length(contour)
        area = polygon_area(contour) if trace_mode else float(region.size)
        metrics.append(
            ContourMetrics(
                perimeter=perimeter,
                area=area,
                circularity=circularity(area, perimeter),
            )
        )
    ctx.metrics = metrics
