"""FastAPI dependency injection."""

from __future__ import annotations

from shapescan.config import Settings, settings
from shapescan.engine.config import PipelineConfig
from shapescan.models.requests import DetectOptions


def get_settings() -> Settings:
    return settings


def build_config(current: Settings, options: DetectOptions | None) -> PipelineConfig:
    """Settings defaults with any per-request overrides applied."""
    config = PipelineConfig.from_settings(current)
    if options is None:
        return config
    return config.with_overrides(**options.model_dump())
