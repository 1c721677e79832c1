"""Application configuration as an injectable dataclass."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from streamprobe.constants import DEFAULT_USER_AGENT

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _coerce_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _coerce_bool(value, default: bool) -> bool:
    normalized = str(value or "").strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass
class AppConfig:
    """Application configuration loaded from environment variables."""

    # Probe
    user_agent: str = DEFAULT_USER_AGENT
    smart_skip: bool = True

    # Batch
    batch_workers: int = 4

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    @staticmethod
    def from_env() -> "AppConfig":
        """Load config from .env file and environment variables."""
        load_dotenv()
        return AppConfig(
            user_agent=os.getenv("STREAMPROBE_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
            smart_skip=_coerce_bool(os.getenv("STREAMPROBE_SMART_SKIP"), True),
            batch_workers=max(1, _coerce_int(os.getenv("STREAMPROBE_BATCH_WORKERS", "4"), 4)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE", "").strip(),
        )
