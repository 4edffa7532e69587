"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from scratchctl.workspace.manager import reset_workspace


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point XDG directories and the temp base dir into tmp_path.

    Also tears down the process-wide workspace after each test.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    monkeypatch.delenv("SCRATCHCTL_TEMP_DIR", raising=False)
    yield
    reset_workspace()


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree for walking and deletion.

    Layout:
        tree/
            a.txt
            sub/
                b.txt
                deeper/
                    c.txt
            empty/
    """
    root = tmp_path / "tree"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")
    (root / "sub" / "deeper" / "c.txt").write_text("c")
    return root
