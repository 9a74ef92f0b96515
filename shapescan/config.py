"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # HTTP server (shapescan serve)
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Detector defaults (overridable per request)
    edge_threshold: float = 50.0
    min_region_size: int = 10
    # Above the nominal 0.6-0.75 band on purpose; see PipelineConfig.circularity_threshold
    circularity_threshold: float = 0.8
    rdp_epsilon_factor: float = 0.03
    contour_mode: str = "trace"
    distinguish_squares: bool = False
    square_tolerance: float = 0.1

    model_config = {"env_prefix": "SHAPESCAN_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
