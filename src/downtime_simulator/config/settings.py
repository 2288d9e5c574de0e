"""Service settings loaded from the environment.

Every field maps to an ``DOWNTIME_SIM_``-prefixed variable, e.g.
``DOWNTIME_SIM_PORT=9000`` or ``DOWNTIME_SIM_EQUIPMENT_FILE=assets.yaml``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from downtime_simulator.config.parameters import DEFAULT_HOURLY_WAGE


class Settings(BaseSettings):
    """Runtime configuration for the HTTP service."""

    model_config = SettingsConfigDict(
        env_prefix="DOWNTIME_SIM_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"

    equipment_file: Optional[Path] = Field(
        default=None,
        description="YAML file with the equipment snapshot served to the engine.",
    )
    default_hourly_wage: float = Field(default=DEFAULT_HOURLY_WAGE, ge=0)
    simulation_timeout_seconds: Optional[float] = Field(default=None, gt=0)


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
