"""
Service settings, read from the environment (and a .env file if present).
"""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    pass


class Settings:
    def __init__(self) -> None:
        self.log_level = os.getenv("ALE2CDL_LOG_LEVEL", "INFO").strip().upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"ALE2CDL_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )

        raw_limit = os.getenv("ALE2CDL_MAX_UPLOAD_BYTES", str(20 * 1024 * 1024))
        try:
            self.max_upload_bytes = int(raw_limit)
        except ValueError:
            raise ConfigError(
                f"ALE2CDL_MAX_UPLOAD_BYTES must be an integer, got {raw_limit!r}"
            ) from None
        if self.max_upload_bytes <= 0:
            raise ConfigError("ALE2CDL_MAX_UPLOAD_BYTES must be positive")


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
