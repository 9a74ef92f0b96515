"""Pipeline orchestrator — runs the detection stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from shapescan.engine.config import PipelineConfig
from shapescan.engine.context import DetectionContext
from shapescan.engine.registry import Layer, TransformRegistry, get_registry
from shapescan.models.image import RasterImage
from shapescan.models.shapes import DetectionResult

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ("layer0", "layer1", "layer2")


def register_transforms() -> None:
    """Import every stage module so its @transform decorator fires. Safe to call repeatedly."""
    for layer_name in _LAYER_PACKAGES:
        package = importlib.import_module(f"shapescan.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


class Pipeline:
    """Orchestrates the stage pipeline. Any stage failure aborts the run."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: DetectionContext) -> DetectionContext:
        """Run every registered stage on the given context."""
        start = time.perf_counter()
        ordered = self.registry.resolve_order()
        logger.debug("Pipeline: %d transforms queued", len(ordered))

        for spec in ordered:
            self._run_spec(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d transforms, %d regions, %d shapes in %.1fms",
            len(ctx.completed_transforms),
            len(ctx.regions),
            len(ctx.shapes),
            total,
        )
        return ctx

    def run_layer(self, ctx: DetectionContext, layer: Layer) -> DetectionContext:
        """Run only transforms in a specific layer. Earlier layers must already have run."""
        for spec in self.registry.get_layer(layer):
            self._run_spec(spec, ctx)
        return ctx

    def _run_spec(self, spec, ctx: DetectionContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except Exception as e:
            logger.warning("  %s FAILED: %s", spec.id, e)
            raise
        elapsed = (time.perf_counter() - t0) * 1000
        ctx.completed_transforms.add(spec.id)
        ctx.timings_ms[spec.id] = elapsed
        logger.debug("  %s completed in %.1fms", spec.id, elapsed)


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory for a pipeline over the shared registry with all stages loaded."""
    register_transforms()
    return Pipeline(config=config)


def detect_shapes(image: RasterImage, config: PipelineConfig | None = None) -> DetectionResult:
    """Detect geometric primitives in ``image``.

    Pure with respect to shared state: every call allocates its own buffers,
    so repeated or concurrent calls never influence each other.
    """
    start = time.perf_counter()
    pipeline = create_pipeline(config)
    ctx = pipeline.run(DetectionContext(image=image, config=pipeline.config))
    elapsed = (time.perf_counter() - start) * 1000

    return DetectionResult(
        shapes=tuple(ctx.shapes),
        processing_time=elapsed,
        image_width=image.width,
        image_height=image.height,
    )
