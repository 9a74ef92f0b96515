"""Batch evaluation report models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FixtureScore(BaseModel):
    name: str
    expected: list[str] = Field(default_factory=list)
    detected: list[str] = Field(default_factory=list)
    true_positives: int = 0
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0
    processing_time_ms: float = 0.0

    @property
    def passed(self) -> bool:
        return self.f1 == 1.0


class EvaluationReport(BaseModel):
    config: dict[str, Any] = Field(default_factory=dict, description="Detector thresholds used for the run")
    fixtures: list[FixtureScore] = Field(default_factory=list)
    mean_precision: float = 0.0
    mean_recall: float = 0.0
    mean_f1: float = 0.0
    accuracy: float = Field(0.0, description="Fraction of fixtures detected exactly")
    total_processing_time_ms: float = 0.0
    mean_processing_time_ms: float = 0.0
