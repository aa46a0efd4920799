"""Archive client configuration settings."""

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

APP_DIR_NAME = "nbm-report"
CACHE_FILE_NAME = "nbm_cache.sqlite3"


def _user_data_dir() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def _parse_timeout(value: str) -> float:
    # Set after field validation, so the gt=0 constraint is checked here
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"NBM_REQUEST_TIMEOUT must be a number, got '{value}'") from None
    if not timeout > 0:
        raise ValueError(f"NBM_REQUEST_TIMEOUT must be greater than 0, got {value}")
    return timeout


def default_cache_path() -> Path:
    """Return the default location of the local store database."""
    return _user_data_dir() / APP_DIR_NAME / CACHE_FILE_NAME


class ArchiveConfig(BaseModel):
    """Configuration for archive retrieval.

    Args:
        cache_path: Local store database path. Overridden by NBM_CACHE_PATH
            env var. None selects the platform default.
        request_timeout: Download timeout in seconds. Overridden by
            NBM_REQUEST_TIMEOUT env var. None uses the transport default.
        max_attempts: How many initialization times to try when looking back
            for the most recent available data.
    """

    cache_path: Path | None = None
    request_timeout: float | None = Field(default=None, gt=0)
    max_attempts: int = Field(default=20, ge=1)

    @model_validator(mode="after")
    def load_env_overrides(self) -> "ArchiveConfig":
        """Override fields from environment variables if set."""
        if env_path := os.environ.get("NBM_CACHE_PATH"):
            self.cache_path = Path(env_path).expanduser()
        if env_timeout := os.environ.get("NBM_REQUEST_TIMEOUT"):
            self.request_timeout = _parse_timeout(env_timeout)
        return self

    @property
    def resolved_cache_path(self) -> Path:
        """Cache path with the platform default filled in."""
        return self.cache_path if self.cache_path is not None else default_cache_path()
