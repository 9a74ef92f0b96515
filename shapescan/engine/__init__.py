"""Shape detection engine."""

from shapescan.engine.registry import transform, Layer, get_registry
from shapescan.engine.config import PipelineConfig
from shapescan.engine.context import DetectionContext, Region
from shapescan.engine.pipeline import Pipeline, create_pipeline, detect_shapes

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "PipelineConfig",
    "DetectionContext",
    "Region",
    "Pipeline",
    "create_pipeline",
    "detect_shapes",
]
