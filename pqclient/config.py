"""pqclient.config

Centralized configuration for the primusquery client.

Uses environment variables to avoid hardcoded secrets and host-specific paths.
"""

from __future__ import annotations
from dataclasses import dataclass
import os

from pqclient.errors import ConfigError


def _env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _env_optional_int(name: str) -> int | None:
    v = (os.getenv(name) or "").strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer number of seconds, got {v!r}") from e


@dataclass(frozen=True)
class Settings:
    """Client settings loaded from environment variables."""

    # primusquery executable
    executable_path: str
    update_timeout_seconds: int
    default_timeout_seconds: int
    import_timeout_seconds: int | None  # None = no deadline

    # Files
    temp_dir: str | None  # None = system temp dir
    repair_delay_seconds: float
    debug_query_file: str

    # Behaviour
    debug: bool
    strict_queries: bool

    # Logging
    log_dir: str

    @staticmethod
    def load() -> "Settings":
        return Settings(
            executable_path=_env("PQ_EXECUTABLE_PATH", "./primusquery") or "./primusquery",
            update_timeout_seconds=_env_int("PQ_UPDATE_TIMEOUT_SECONDS", 60),
            default_timeout_seconds=_env_int("PQ_QUERY_TIMEOUT_SECONDS", 30),
            import_timeout_seconds=_env_optional_int("PQ_IMPORT_TIMEOUT_SECONDS"),
            temp_dir=_env("PQ_TEMP_DIR") or None,
            repair_delay_seconds=_env_float("PQ_REPAIR_DELAY_SECONDS", 2.0),
            debug_query_file=_env("PQ_DEBUG_QUERY_FILE", "debug.priq") or "debug.priq",
            debug=_env_bool("PQ_DEBUG", False),
            strict_queries=_env_bool("PQ_STRICT_QUERIES", False),
            log_dir=_env("LOG_DIR", "logs") or "logs",
        )
