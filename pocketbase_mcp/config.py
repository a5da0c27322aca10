"""
Runtime configuration.

Values come from the environment (a .env file in the working directory is
loaded first) and can be overridden by command-line flags.

Environment variables:
    POCKETBASE_URL              PocketBase base URL (default: http://localhost:8090)
    POCKETBASE_TOKEN            Pre-issued auth token
    POCKETBASE_ADMIN_EMAIL      Superuser email (fallback: POCKETBASE_EMAIL)
    POCKETBASE_ADMIN_PASSWORD   Superuser password (fallback: POCKETBASE_PASSWORD)
    POCKETBASE_TIMEOUT          Request timeout in seconds
    LOG_LEVEL                   Logging level (default: INFO)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_URL = "http://localhost:8090"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    url: str = DEFAULT_URL
    token: Optional[str] = None
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _env(*names: str) -> Optional[str]:
    """First non-empty value among the given environment variables."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def parse_timeout(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timeout: {value!r} is not a number") from None
    if timeout <= 0:
        raise ValueError(f"Invalid timeout: {value!r} must be greater than zero")
    return timeout


def parse_log_level(value: Optional[str]) -> str:
    level = (value or DEFAULT_LOG_LEVEL).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value!r}. Use one of {', '.join(LOG_LEVELS)}")
    return level


def load_settings(load_env_file: bool = True, **overrides) -> Settings:
    """
    Build Settings from the environment, then apply overrides.

    Args:
        load_env_file: Load a .env file into the environment first
        **overrides: Values from the command line; None means "not given"

    Returns:
        The merged Settings

    Raises:
        ValueError: If the timeout or log level is invalid
    """
    if load_env_file:
        load_dotenv()

    values = {
        "url": _env("POCKETBASE_URL") or DEFAULT_URL,
        "token": _env("POCKETBASE_TOKEN"),
        "admin_email": _env("POCKETBASE_ADMIN_EMAIL", "POCKETBASE_EMAIL"),
        "admin_password": _env("POCKETBASE_ADMIN_PASSWORD", "POCKETBASE_PASSWORD"),
        "timeout": _env("POCKETBASE_TIMEOUT"),
        "log_level": _env("LOG_LEVEL"),
    }
    for key, value in overrides.items():
        if key not in values:
            raise TypeError(f"Unknown setting: {key}")
        if value is not None:
            values[key] = value

    return Settings(
        url=values["url"],
        token=values["token"],
        admin_email=values["admin_email"],
        admin_password=values["admin_password"],
        timeout=parse_timeout(values["timeout"]),
        log_level=parse_log_level(values["log_level"]),
    )
