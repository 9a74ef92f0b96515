"""Tests for the pipeline orchestrator and the detect_shapes entry point."""

import math

import numpy as np
import pytest

from shapescan.engine import PipelineConfig, create_pipeline, detect_shapes
from shapescan.engine.context import DetectionContext
from shapescan.engine.pipeline import Pipeline
from shapescan.engine.registry import Layer, TransformRegistry, TransformSpec
from shapescan.models.image import InvalidImageError, RasterImage
from tests.conftest import canvas, fill_rect


def test_pipeline_runs_transforms(blank_image):
    reg = TransformRegistry()
    results = []

    def t1(ctx: DetectionContext) -> None:
        results.append("t1")

    def t2(ctx: DetectionContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.02", layer=Layer.PREPROCESSING, fn=t2, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=t1))

    pipeline = Pipeline(registry=reg)
    ctx = pipeline.run(DetectionContext(image=blank_image))

    assert results == ["t1", "t2"]
    assert ctx.completed_transforms == {"T0.01", "T0.02"}
    assert set(ctx.timings_ms) == {"T0.01", "T0.02"}


def test_pipeline_propagates_stage_errors(blank_image):
    reg = TransformRegistry()
    ran = []

    def fail(ctx: DetectionContext) -> None:
        raise RuntimeError("stage exploded")

    def after(ctx: DetectionContext) -> None:
        ran.append("after")

    reg.register(TransformSpec(id="T0.01", layer=Layer.PREPROCESSING, fn=fail))
    reg.register(TransformSpec(id="T0.02", layer=Layer.PREPROCESSING, fn=after, dependencies=["T0.01"]))

    ctx = DetectionContext(image=blank_image)
    with pytest.raises(RuntimeError, match="stage exploded"):
        Pipeline(registry=reg).run(ctx)
    assert ran == []
    assert "T0.01" not in ctx.completed_transforms


def test_create_pipeline_loads_all_stages():
    pipeline = create_pipeline()
    ids = [s.id for s in pipeline.registry.resolve_order()]
    assert ids == ["T0.01", "T0.02", "T1.01", "T2.01", "T2.02", "T2.03", "T2.04"]


def test_create_pipeline_is_idempotent():
    first = create_pipeline().registry.count
    assert create_pipeline().registry.count == first


def test_detect_blank_image(blank_image):
    result = detect_shapes(blank_image)
    assert result.shapes == ()
    assert result.image_width == 100
    assert result.image_height == 100
    assert result.processing_time >= 0.0


def test_detect_square(square_image):
    result = detect_shapes(square_image)
    assert len(result.shapes) == 1
    assert result.shapes[0].type == "rectangle"


def test_detect_is_deterministic(two_squares_image):
    a = detect_shapes(two_squares_image)
    b = detect_shapes(two_squares_image)
    assert a.model_dump(exclude={"processing_time"}) == b.model_dump(exclude={"processing_time"})


def test_detect_does_not_mutate_input(square_image):
    before = square_image.data
    detect_shapes(square_image)
    assert square_image.data == before


def test_detect_with_baseline_config(square_image, circle_image):
    for image in (square_image, circle_image):
        result = detect_shapes(image, PipelineConfig.baseline())
        assert len(result.shapes) == 1


def test_result_uses_camel_case_keys(square_image):
    data = detect_shapes(square_image).to_dict()
    assert set(data) == {"shapes", "processingTime", "imageWidth", "imageHeight"}
    shape = data["shapes"][0]
    assert set(shape) == {"type", "confidence", "boundingBox", "center", "area"}
    assert shape["boundingBox"] == {"x": 29, "y": 29, "width": 41, "height": 41}


def test_mismatched_buffer_is_rejected():
    with pytest.raises(InvalidImageError):
        RasterImage(width=10, height=10, data=b"\x00" * 399)


def test_non_positive_dimensions_are_rejected():
    with pytest.raises(InvalidImageError):
        RasterImage(width=0, height=10, data=b"")


def test_from_array_expands_rgb_and_gray():
    rgb = RasterImage.from_array(np.zeros((3, 5, 3), dtype=np.uint8))
    assert (rgb.width, rgb.height) == (5, 3)
    assert rgb.as_array()[0, 0].tolist() == [0, 0, 0, 255]

    gray = RasterImage.from_array(np.full((2, 2), 7, dtype=np.uint8))
    assert gray.as_array()[1, 1].tolist() == [7, 7, 7, 255]


def test_config_rejects_bad_values():
    with pytest.raises(ValueError):
        PipelineConfig(edge_threshold=-1)
    with pytest.raises(ValueError):
        PipelineConfig(contour_mode="spiral")


def test_config_overrides_ignore_none():
    config = PipelineConfig().with_overrides(edge_threshold=80.0, min_region_size=None)
    assert config.edge_threshold == 80.0
    assert config.min_region_size == PipelineConfig().min_region_size


def _step_image() -> RasterImage:
    # 3 rows tall: only row 1 is interior, so every edge region is a flat run
    pixels = canvas(8, 3)
    fill_rect(pixels, 0, 0, 3, 2)
    return RasterImage.from_array(pixels)


def _dot_image() -> RasterImage:
    # One interior pixel, next to a dark border pixel: a single-pixel region
    pixels = canvas(3, 3)
    fill_rect(pixels, 2, 1, 2, 1)
    return RasterImage.from_array(pixels)


@pytest.mark.parametrize("mode", ["trace", "angle"])
def test_degenerate_regions_end_to_end(mode):
    config = PipelineConfig(min_region_size=0, contour_mode=mode)
    for image, size in ((_step_image(), 2), (_dot_image(), 1)):
        result = detect_shapes(image, config)
        assert len(result.shapes) == 1
        shape = result.shapes[0]
        assert shape.area == size
        assert shape.bounding_box.height == 0
        assert 0.0 <= shape.confidence <= 1.0
        assert math.isfinite(shape.confidence)
        assert math.isfinite(shape.center.x) and math.isfinite(shape.center.y)


def test_single_pixel_region_has_zero_perimeter():
    pipeline = create_pipeline(PipelineConfig(min_region_size=0))
    ctx = pipeline.run(DetectionContext(image=_dot_image(), config=pipeline.config))

    metrics = ctx.metrics[0]
    assert metrics.perimeter == 0.0
    assert metrics.circularity == 0.0
    assert ctx.shapes[0].type == "polygon"
