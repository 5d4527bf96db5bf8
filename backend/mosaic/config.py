"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mosaic_env: str = "development"
    mosaic_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:4200", "http://localhost:3000"]

    # Session defaults
    mosaic_canvas_width: float = 800.0
    mosaic_canvas_height: float = 600.0
    mosaic_min_size: float = 30.0
    mosaic_max_size: float = 150.0
    mosaic_blank_percent: float = 20.0
    mosaic_seed: int | None = None
    mosaic_palette: list[str] = ["#1B998B", "#2D3047", "#FFFD82", "#FF9B71", "#E84855"]

    # Partition tunables
    mosaic_stop_probability: float = 0.9
    mosaic_max_depth: int = 64
    mosaic_max_leaves: int = 20_000
    mosaic_neutral_color: str = "#ffffff"
    mosaic_fallback_color: str = "#cccccc"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
