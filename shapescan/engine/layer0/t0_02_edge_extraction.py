"""T0.02 — Sobel edge extraction.

Pixel is an edge (255) iff sqrt(Gx² + Gy²) > edge_threshold. Border pixels stay 0.
"""

from __future__ import annotations

import logging

from shapescan.engine.context import DetectionContext
from shapescan.engine.registry import Layer, transform
from shapescan.utils.raster import edge_map

logger = logging.getLogger(__name__)


@transform(
    id="T0.02",
    layer=Layer.PREPROCESSING,
    dependencies=["T0.01"],
    description="Threshold Sobel gradient magnitude into a binary edge map",
)
def edge_extraction(ctx: DetectionContext) -> None:
    edges = edge_map(ctx.gray, ctx.config.edge_threshold)
    edges.setflags(write=False)
    ctx.edges = edges
    logger.debug(
        "Edge map: %d edge pixels at threshold %.1f",
        ctx.edge_pixel_count,
        ctx.config.edge_threshold,
    )
