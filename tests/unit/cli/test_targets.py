"""Unit tests for the targets command."""

from pathlib import Path

from cruftctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestTargets:
    """Tests for cruftctl targets."""

    def test_lists_builtin_targets(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["targets"])

        assert result.exit_code == 0
        assert "Active Targets" in result.stdout
        assert "node_modules" in result.stdout
        assert ".dart_tool" in result.stdout
        assert ".pnpm-debug.log" in result.stdout

    def test_includes_configured_targets(self, isolated_config: Path) -> None:
        isolated_config.mkdir()
        (isolated_config / "config.toml").write_text(
            '[[targets]]\nkind = "dir"\npattern = "vendor"\ndescend = true\n'
        )

        result = runner.invoke(app, ["targets"])

        assert result.exit_code == 0
        assert "vendor" in result.stdout
        assert "yes" in result.stdout

    def test_empty(self, tmp_path: Path, isolated_config: Path) -> None:
        config = tmp_path / "c.toml"
        config.write_text("use_defaults = false\n")

        result = runner.invoke(app, ["targets", "--config", str(config)])

        assert result.exit_code == 0
        assert "No targets configured" in result.stdout

    def test_invalid_config(self, tmp_path: Path, isolated_config: Path) -> None:
        config = tmp_path / "c.toml"
        config.write_text("unknown = 1\n")

        result = runner.invoke(app, ["targets", "--config", str(config)])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output
