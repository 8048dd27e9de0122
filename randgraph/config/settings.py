"""randgraph configuration via environment / .env file."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RANDGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Graph ---
    DEFAULT_NODE_COUNT: int = 50

    # --- Statistics ---
    FIXED_POINT_ITERATIONS: int = 10

    # --- Cycle enumeration guard (0 = unlimited) ---
    CYCLE_SEARCH_LIMIT: int = 0

    # --- Simulation ---
    RANDOM_SEED: Optional[int] = None

    # --- Logging ---
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("DEFAULT_NODE_COUNT", "CYCLE_SEARCH_LIMIT")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("FIXED_POINT_ITERATIONS")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


settings = Settings()
