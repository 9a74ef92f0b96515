"""DetectionResult → human-readable summary text."""

from __future__ import annotations

from shapescan.models.shapes import DetectionResult, DetectedShape


def format_shape(shape: DetectedShape) -> str:
    return (
        f"{shape.type}\n"
        f"  Confidence: {shape.confidence * 100:.1f}%\n"
        f"  Center: ({shape.center.x:.1f}, {shape.center.y:.1f})\n"
        f"  Bounding box: x={shape.bounding_box.x} y={shape.bounding_box.y} "
        f"w={shape.bounding_box.width} h={shape.bounding_box.height}\n"
        f"  Area: {shape.area}px²"
    )


def format_result(result: DetectionResult) -> str:
    lines = [
        f"Processing Time: {result.processing_time:.2f}ms",
        f"Image: {result.image_width}x{result.image_height}",
        f"Shapes Found: {len(result.shapes)}",
    ]
    if not result.shapes:
        lines.append("No shapes detected.")
        return "\n".join(lines)

    lines.append("Detected Shapes:")
    for i, shape in enumerate(result.shapes, 1):
        lines.append(f"{i}. {format_shape(shape)}")
    return "\n".join(lines)
