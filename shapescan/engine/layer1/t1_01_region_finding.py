"""T1.01 — Region finding.

Row-major scan + stack-based 8-connected flood fill. Components at or below
min_region_size are dropped; their pixels stay visited.
"""

from __future__ import annotations

import logging

from shapescan.engine.context import DetectionContext, Region
from shapescan.engine.registry import Layer, transform
from shapescan.utils.morphology import find_regions

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.SEGMENTATION,
    dependencies=["T0.02"],
    description="Group edge pixels into 8-connected regions",
)
def region_finding(ctx: DetectionContext) -> None:
    point_sets, dropped = find_regions(ctx.edges, ctx.config.min_region_size)
    ctx.regions = [Region(points=pts) for pts in point_sets]
    ctx.dropped_regions = dropped
    logger.debug(
        "Regions: %d kept, %d dropped at min size %d",
        len(ctx.regions),
        dropped,
        ctx.config.min_region_size,
    )
