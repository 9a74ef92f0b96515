"""T0.01 — Luminance conversion.

gray = 0.299·R + 0.587·G + 0.114·B (BT.601). Alpha is ignored.
"""

from __future__ import annotations

from shapescan.engine.context import DetectionContext
from shapescan.engine.registry import Layer, transform
from shapescan.utils.raster import luminance


@transform(
    id="T0.01",
    layer=Layer.PREPROCESSING,
    description="Convert RGBA pixels to grayscale intensity",
)
def luminance_conversion(ctx: DetectionContext) -> None:
    gray = luminance(ctx.image.as_array())
    gray.setflags(write=False)
    ctx.gray = gray
