"""Process-level settings for inistore using Pydantic Settings (v2).

These settings configure the *library* (logging, locking defaults, the path
used by the convenience default store). They never overlay values inside a
loaded INI file.

Sources, highest precedence first:
- Real environment variables
- `.env` files in the working directory: .env, .env.local
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed library configuration loaded from env and `.env` files.

    Attributes
    ----------
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    concurrency_safe : bool
        Default for `StoreOptions.concurrency_safe`; maps from
        `INISTORE_CONCURRENCY_SAFE`.
    default_config_path : str
        File read by `inistore.default.init()` when no path is given; maps
        from `INISTORE_CONFIG_PATH`.
    """

    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    concurrency_safe: bool = Field(default=True, alias="INISTORE_CONCURRENCY_SAFE")
    default_config_path: str = Field(default="conf/app.conf", alias="INISTORE_CONFIG_PATH")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "inistore") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
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


__all__ = ["Settings", "get_logger", "load_settings", "settings"]
