"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

TreeBuilder = Callable[[list[str]], Path]


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeBuilder:
    """Build a directory tree under ``tmp_path / "tree"``.

    Entries ending in "/" are created as directories, everything else as
    empty files (parents are created as needed).
    """

    def _build(entries: list[str]) -> Path:
        root = tmp_path / "tree"
        root.mkdir(exist_ok=True)
        for entry in entries:
            target = root / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.touch()
        return root

    return _build


@pytest.fixture
def sample_tree(make_tree: TreeBuilder) -> Path:
    """A small tree: two files and a nested directory with one file."""
    return make_tree(["aaa.txt", "bb/cccccccccccccccc.txt"])
