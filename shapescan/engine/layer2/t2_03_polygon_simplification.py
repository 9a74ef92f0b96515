"""T2.03 — Polygon simplification (Ramer-Douglas-Peucker).

ε = rdp_epsilon_factor × region pixel count, so tolerance grows with the region.
A traced contour is closed before simplifying and counted without its closing
duplicate; an angle-ordered contour is simplified as an open sequence.
"""

from __future__ import annotations

from shapescan.engine.context import DetectionContext, SimplifiedPolygon
from shapescan.engine.registry import Layer, transform
from shapescan.utils.contour import close_contour, distinct_vertex_count, rdp_simplify


@transform(
    id="T2.03",
    layer=Layer.SHAPE_ANALYSIS,
    dependencies=["T2.01"],
    description="Simplify contours to polygons and count vertices",
)
def polygon_simplification(ctx: DetectionContext) -> None:
    trace_mode = ctx.config.contour_mode == "trace"
    polygons = []
    for region, contour in zip(ctx.regions, ctx.contours):
        epsilon = ctx.config.rdp_epsilon_factor * region.size
        if trace_mode:
            vertices = rdp_simplify(close_contour(contour), epsilon)
            count = distinct_vertex_count(vertices)
        else:
            vertices = rdp_simplify(contour, epsilon)
            count = len(vertices)
        vertices.setflags(write=False)
        polygons.append(SimplifiedPolygon(vertices=vertices, vertex_count=count, epsilon=epsilon))
    ctx.polygons = polygons
