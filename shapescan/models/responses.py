"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapescan.models.shapes import DetectionResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0
    transforms: list[str] = Field(default_factory=list, description="Stage ids by layer, then id")


class DetectResponse(BaseModel):
    result: DetectionResult
    summary: str = ""
