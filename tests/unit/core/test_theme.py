"""Unit tests for theme module.

Tests for palette validation, theme file overrides, and Rich styles.
"""

import logging
from pathlib import Path

import pytest
from cruftctl.core.theme import ThemeColors, get_theme, load_theme
from pydantic import ValidationError
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.error == "#f53263"
        assert colors.match_dir == "#c1ff62"

    def test_short_hex_accepted(self) -> None:
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_whitespace_is_stripped(self) -> None:
        assert ThemeColors(text=" #000000 ").text == "#000000"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("ffffff", "expected #RGB or #RRGGBB"),
            ("#ff", "expected #RGB or #RRGGBB"),
            ("#gggggg", "invalid hex color"),
        ],
    )
    def test_invalid_colors_rejected(self, value: str, message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            ThemeColors(text=value)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(text=0xFFFFFF)  # type: ignore[arg-type]

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(unknown="#ffffff")  # type: ignore[call-arg]


class TestStyles:
    """Tests for the Rich style map derived from the palette."""

    def test_every_field_becomes_a_style(self) -> None:
        styles = ThemeColors().styles()

        assert set(styles) == {name.replace("_", ".") for name in ThemeColors.model_fields}

    def test_dotted_names_and_bold(self) -> None:
        styles = ThemeColors(match_dir="#123456", match_file="#654321").styles()

        assert styles["match.dir"] == "bold #123456"
        assert styles["match.file"] == "#654321"
        assert styles["error"].startswith("bold ")
        assert styles["text"] == "#ffffff"

    def test_styles_are_valid_rich_theme(self) -> None:
        theme = Theme(ThemeColors().styles())
        assert "match.dir" in theme.styles
        assert "header" in theme.styles


class TestLoadTheme:
    """Tests for load_theme."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_theme(tmp_path / "missing.toml") == ThemeColors()

    def test_default_path_is_user_theme(self, isolated_config: Path) -> None:
        isolated_config.mkdir()
        (isolated_config / "theme.toml").write_text('[colors]\nmatch_dir = "#123456"\n')

        colors = load_theme()

        assert colors.match_dir == "#123456"
        assert colors.text == "#ffffff"

    def test_file_without_colors_table(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('name = "plain"\n')

        assert load_theme(path) == ThemeColors()

    def test_invalid_toml_falls_back(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        with caplog.at_level(logging.WARNING, logger="cruftctl.core.theme"):
            assert load_theme(path) == ThemeColors()

        assert "Ignoring theme file" in caplog.text

    def test_invalid_color_falls_back(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ntext = "white"\nmatch_dir = "#123456"\n')

        with caplog.at_level(logging.WARNING, logger="cruftctl.core.theme"):
            assert load_theme(path) == ThemeColors()

        assert "Ignoring invalid theme file" in caplog.text

    def test_unknown_color_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nbogus = "#000000"\n')

        assert load_theme(path) == ThemeColors()


class TestGetTheme:
    """Tests for the cached Rich theme."""

    def test_get_theme_caches(self, isolated_config: Path) -> None:
        get_theme.cache_clear()
        try:
            first = get_theme()
            assert isinstance(first, Theme)
            assert get_theme() is first
        finally:
            get_theme.cache_clear()
