"""Unit tests for XDG path management."""

import os
from pathlib import Path
from unittest.mock import patch

from cruftctl.core.paths import (
    APP_NAME,
    get_config_dir,
    get_config_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestFilePaths:
    """Tests for file path helpers."""

    def test_config_path(self, isolated_config: Path) -> None:
        assert get_config_path() == isolated_config / "config.toml"

    def test_theme_path(self, isolated_config: Path) -> None:
        assert get_user_theme_path() == isolated_config / "theme.toml"
