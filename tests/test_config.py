"""Tests for archive configuration."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.archive.config import ArchiveConfig, default_cache_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove archive env overrides so defaults are visible."""
    monkeypatch.delenv("NBM_CACHE_PATH", raising=False)
    monkeypatch.delenv("NBM_REQUEST_TIMEOUT", raising=False)


class TestArchiveConfig:
    """Tests for ArchiveConfig Pydantic model."""

    def test_defaults(self) -> None:
        """Default values are set correctly."""
        config = ArchiveConfig()
        assert config.cache_path is None
        assert config.request_timeout is None
        assert config.max_attempts == 20

    def test_resolved_cache_path_default(self) -> None:
        """No configured path resolves to the platform default."""
        assert ArchiveConfig().resolved_cache_path == default_cache_path()

    def test_explicit_values_kept_without_env(self, tmp_path: Path) -> None:
        """Explicit constructor values are preserved when env vars not set."""
        config = ArchiveConfig(cache_path=tmp_path / "db.sqlite3", request_timeout=10)
        assert config.resolved_cache_path == tmp_path / "db.sqlite3"
        assert config.request_timeout == 10.0

    def test_env_override_cache_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """NBM_CACHE_PATH env var overrides cache_path."""
        monkeypatch.setenv("NBM_CACHE_PATH", str(tmp_path / "env.sqlite3"))
        config = ArchiveConfig(cache_path=Path("ignored.sqlite3"))
        assert config.cache_path == tmp_path / "env.sqlite3"

    def test_env_override_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """NBM_REQUEST_TIMEOUT env var overrides request_timeout."""
        monkeypatch.setenv("NBM_REQUEST_TIMEOUT", "45")
        assert ArchiveConfig().request_timeout == 45.0

    @pytest.mark.parametrize("value", ["-5", "0", "nan"])
    def test_env_timeout_must_be_positive(
        self, value: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A zero, negative or NaN NBM_REQUEST_TIMEOUT is rejected."""
        monkeypatch.setenv("NBM_REQUEST_TIMEOUT", value)

        with pytest.raises(ValidationError, match="greater than 0"):
            ArchiveConfig()

    def test_env_timeout_must_be_numeric(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A non-numeric NBM_REQUEST_TIMEOUT is rejected."""
        monkeypatch.setenv("NBM_REQUEST_TIMEOUT", "soon")

        with pytest.raises(ValidationError, match="must be a number"):
            ArchiveConfig()

    def test_invalid_max_attempts(self) -> None:
        """At least one attempt is required."""
        with pytest.raises(ValidationError):
            ArchiveConfig(max_attempts=0)


class TestDefaultCachePath:
    """Tests for the platform default store location."""

    def test_linux_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """XDG_DATA_HOME is honored on Linux."""
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert default_cache_path() == tmp_path / "nbm-report" / "nbm_cache.sqlite3"

    def test_linux_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without XDG_DATA_HOME the store lives under ~/.local/share."""
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        expected = tmp_path / ".local" / "share" / "nbm-report" / "nbm_cache.sqlite3"
        assert default_cache_path() == expected

    def test_macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """macOS uses Application Support."""
        monkeypatch.setattr(sys, "platform", "darwin")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        expected = (
            tmp_path / "Library" / "Application Support" / "nbm-report" / "nbm_cache.sqlite3"
        )
        assert default_cache_path() == expected
