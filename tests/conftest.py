"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


def _build(root: Path, layout: dict[str, object]) -> None:
    for name, content in layout.items():
        path = root / name
        if isinstance(content, dict):
            path.mkdir()
            _build(path, content)
        else:
            path.write_text(str(content))


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, object]], Path]:
    """Build a directory tree under tmp_path.

    Nested dicts become directories, anything else becomes a file with
    that content.
    """

    def factory(layout: dict[str, object]) -> Path:
        root = tmp_path / "root"
        root.mkdir()
        _build(root, layout)
        return root

    return factory


@pytest.fixture
def project_tree(make_tree: Callable[[dict[str, object]], Path]) -> Path:
    """A small JavaScript/Dart workspace with artifacts at several depths."""
    return make_tree(
        {
            "readme.md": "# demo",
            ".pnpm-debug.log": "debug",
            "node_modules": {"left-pad": {"index.js": "module.exports = 1"}},
            "app": {
                ".dart_tool": {"package_config.json": "{}"},
                "lib": {"main.dart": "void main() {}"},
            },
            "web": {
                "node_modules": {"react": {"index.js": ""}},
                "src": {"index.ts": "", ".pnpm-debug.log": "debug"},
            },
        }
    )


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory."""
    config_home = tmp_path / "xdg-config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "cruftctl"
