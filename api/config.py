"""
API Configuration

Settings loaded from environment variables (or a .env file).
The engine never reads these; routers pass them in as explicit defaults.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from pourcost.models.common import MeasurementSystem


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App info
    app_name: str = "PourCost API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    cors_origins: str = "http://localhost:8081,http://localhost:3000"

    # Pricing defaults
    default_pour_cost_goal: float = 20.0
    default_cocktail_goal: float = 22.0
    base_currency: str = "USD"
    measurement_system: MeasurementSystem = MeasurementSystem.US
    locale: str = "en-US"

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
