from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED = Path(__file__).resolve().parent / "data" / "seed.json"


class Settings(BaseSettings):
    """Strongly-typed settings model loaded from env / .env.

    Notes:
        - The portal keeps no secrets; every field has a development default.
        - `SIMULATED_LATENCY_MS` is applied before each store operation.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        protected_namespaces=()
    )

    ENV: Literal["dev", "staging", "prod"] = Field(default="dev", description="Deployment environment")
    SERVICE_NAME: str = Field(default="tierlearn", description="Service name")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    SIMULATED_LATENCY_MS: int = Field(default=0, ge=0, description="Artificial delay per store operation")
    SEED_PATH: str = Field(default=str(DEFAULT_SEED), description="JSON/YAML file with the initial dataset")
    SEED_ON_START: bool = Field(default=True, description="Fill stores from SEED_PATH at start-up")

    @property
    def latency_seconds(self) -> float:
        return self.SIMULATED_LATENCY_MS / 1000.0


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance."""
    return Settings()
