"""
txscope.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the database façade.
- Offer a cached settings instance for process wiring.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TXSCOPE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "txscope"
    log_level: str = "INFO"

    # Persistence
    database_url: str = Field(default="sqlite+aiosqlite:///./txscope.db", repr=False)
    pool_pre_ping: bool = True

    # Savepoint names are hex-encoded chunks of a shared random buffer.
    savepoint_name_bytes: int = Field(default=8, gt=0)
    savepoint_buffer_bytes: int = Field(default=2048, gt=0)

    @model_validator(mode="after")
    def _buffer_holds_whole_names(self) -> Settings:
        if self.savepoint_buffer_bytes % self.savepoint_name_bytes != 0:
            raise ValueError("savepoint_buffer_bytes must be a multiple of savepoint_name_bytes")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars on every lookup.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `database_url` is hidden from repr because production URLs embed credentials.
