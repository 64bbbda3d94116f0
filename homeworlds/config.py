"""
Runtime settings, read from the environment at import time.

    HOMEWORLDS_ENV               development | test | production
    HOMEWORLDS_LOG_LEVEL         level used by configure_logging()
    HOMEWORLDS_CHECK_INVARIANTS  "1"/"0"; verify piece accounting after
                                 every transition (on unless production)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os


HOMEWORLDS_ENV = os.getenv("HOMEWORLDS_ENV", "development")
HOMEWORLDS_LOG_LEVEL = os.getenv("HOMEWORLDS_LOG_LEVEL", "WARNING")
HOMEWORLDS_CHECK_INVARIANTS = os.getenv("HOMEWORLDS_CHECK_INVARIANTS")


def _flag(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    env: str = HOMEWORLDS_ENV
    log_level: str = HOMEWORLDS_LOG_LEVEL
    check_invariants: bool = _flag(HOMEWORLDS_CHECK_INVARIANTS, HOMEWORLDS_ENV != "production")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for scripts and drivers. The engine never calls this."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
