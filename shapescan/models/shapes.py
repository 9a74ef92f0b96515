"""Detection output models — camelCase on the wire, snake_case in Python."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ShapeType = Literal["circle", "triangle", "rectangle", "square", "pentagon", "star", "polygon"]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Point(_WireModel):
    x: float
    y: float


class BoundingBox(_WireModel):
    x: int
    y: int
    width: int
    height: int


class DetectedShape(_WireModel):
    type: ShapeType
    confidence: float = Field(..., ge=0.0, le=1.0)
    bounding_box: BoundingBox
    center: Point
    area: int = Field(..., ge=0, description="Pixel count of the source region")


class DetectionResult(_WireModel):
    shapes: tuple[DetectedShape, ...] = ()
    processing_time: float = Field(0.0, description="Wall-clock milliseconds for the full pipeline")
    image_width: int
    image_height: int

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
