"""Centralized configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance (built on first
access, not at import) that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local

The dump switches (`DIAGSNAP_ENABLED`, `DIAGSNAP_LEVEL`) let operators turn on
diagnostics without touching code. `level` stays raw text on purpose: it is
validated by the printer, which reports bad values as `InvalidSelector`.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `DIAGSNAP_ENV`.
    log_level : LogLevelName
        Level of loggers built by `get_logger`; maps from `LOG_LEVEL`.
    enabled : bool
        Whether settings-driven dumps print anything; `DIAGSNAP_ENABLED`.
    level : str
        Selector text such as "MEM" or "STACK,GC"; `DIAGSNAP_LEVEL`.
    trace_allocations : bool
        Start `tracemalloc` so `Alloc`/`TotalAlloc` are populated;
        `DIAGSNAP_TRACE_ALLOCATIONS`.
    distribution : str | None
        Distribution reported as build info; inferred from `__main__` when
        unset. Maps from `DIAGSNAP_DISTRIBUTION`.
    log_call_depth : int
        Frames above the printer that logger-sink records are attributed to
        (1 = the code asking for the dump); `DIAGSNAP_LOG_CALL_DEPTH`.
    """

    environment: EnvName = Field(default="dev", alias="DIAGSNAP_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    enabled: bool = Field(default=False, alias="DIAGSNAP_ENABLED")
    level: str = Field(default="INFO", alias="DIAGSNAP_LEVEL")
    trace_allocations: bool = Field(default=False, alias="DIAGSNAP_TRACE_ALLOCATIONS")
    distribution: str | None = Field(default=None, alias="DIAGSNAP_DISTRIBUTION")
    log_call_depth: int = Field(default=1, ge=0, alias="DIAGSNAP_LOG_CALL_DEPTH")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        """Accept `debug`, `Info`, ... as commonly found in shared `LOG_LEVEL`s."""
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests can force a rebuild via `load_settings.cache_clear()` after
    mutating `os.environ`.
    """
    os.environ.setdefault("DIAGSNAP_ENV", "dev")
    return Settings()


def __getattr__(name: str) -> Any:
    # Importing this module never reads the environment.
    if name == "settings":
        return load_settings()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def get_logger(name: str = "diagsnap") -> logging.Logger:
    """Return a logger with one stream handler, leveled from the current settings."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "load_settings", "settings", "get_logger"]
