"""
Application settings and logging setup.

Values come from environment variables prefixed with ``JOULE_``
(e.g. ``JOULE_SERVICE_URL``) or a local ``.env`` file.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOULE_", env_file=".env", extra="ignore")

    app_name: str = "Joule Heating Simulation (1D)"
    service_url: str = "http://localhost:5000/api/simulate"
    timeout_s: float = 300.0
    log_level: str = "INFO"
    presets_dir: str = "presets"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stream handler on the package logger (idempotent)."""
    logger = logging.getLogger("joule_app")
    logger.setLevel(level if isinstance(level, int) else level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
