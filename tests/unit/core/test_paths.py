"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

from pathlib import Path

import pytest
from longpath.core.paths import (
    APP_NAME,
    ensure_config_dir,
    get_config_dir,
    get_settings_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_empty_variable_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty XDG_CONFIG_HOME is treated as unset."""
        monkeypatch.setenv("XDG_CONFIG_HOME", "")

        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / APP_NAME


class TestConveniencePaths:
    """Tests for file path helpers."""

    def test_get_settings_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_settings_path returns config.toml in config dir."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_settings_path() == tmp_path / APP_NAME / "config.toml"

    def test_get_user_theme_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_user_theme_path returns theme.toml in config dir."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_user_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestEnsureConfigDir:
    """Tests for directory creation."""

    def test_creates_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """ensure_config_dir creates the config directory."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))

        result = ensure_config_dir()

        assert result == tmp_path / "config" / APP_NAME
        assert result.is_dir()

    def test_idempotent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """ensure_config_dir can be called multiple times."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))

        assert ensure_config_dir() == ensure_config_dir()

    def test_failure_raises_runtime_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A config home that is a file cannot hold the directory."""
        blocker = tmp_path / "blocker"
        blocker.touch()
        monkeypatch.setenv("XDG_CONFIG_HOME", str(blocker))

        with pytest.raises(RuntimeError, match="Cannot create config directory"):
            ensure_config_dir()
