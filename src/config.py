"""Centralised application settings loaded from environment / .env file."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Geocoder (Nominatim-compatible)
    geocoder_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "delivery-coverage-simulator/1.0"
    geocoder_timeout_seconds: float = 10.0

    # Catalog snapshot loaded at startup (see seed.py)
    catalog_file: Optional[Path] = None

    # Simulation
    history_size: int = 5
    simulation_delay_seconds: float = 0.0  # emulated latency, 0 disables

    # Delivery time model
    minutes_per_km: float = 3.0
    high_load_threshold: float = 80.0  # percent, strictly greater is "high"
    normal_load_factor: float = 1.2
    high_load_factor: float = 1.5
    preparation_minutes: int = 10

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
