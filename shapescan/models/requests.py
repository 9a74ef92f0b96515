"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DetectOptions(BaseModel):
    edge_threshold: float | None = Field(None, ge=0, description="Sobel magnitude cutoff")
    min_region_size: int | None = Field(None, ge=0, description="Drop regions with this many pixels or fewer")
    circularity_threshold: float | None = Field(None, ge=0)
    rdp_epsilon_factor: float | None = Field(None, ge=0)
    contour_mode: Literal["trace", "angle"] | None = None
    distinguish_squares: bool | None = None
    square_tolerance: float | None = Field(None, ge=0)


class DetectRequest(BaseModel):
    image: str = Field(..., description="Image as a data URL or bare base64 string")
    options: DetectOptions = Field(default_factory=DetectOptions)


class FixtureInput(BaseModel):
    name: str
    image: str = Field(..., description="Image as a data URL or bare base64 string")
    expected: list[str] = Field(default_factory=list, description="Expected shape types")


class EvaluateRequest(BaseModel):
    fixtures: list[FixtureInput] = Field(default_factory=list)
    synthetic: bool = Field(default=False, description="Also run the built-in synthetic set")
    options: DetectOptions = Field(default_factory=DetectOptions)
