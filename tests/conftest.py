"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("config-home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree with known file sizes.

    Layout (sizes in bytes)::

        root/
            big.bin          300
            docs/
                a.txt        100
                b.txt         50
                nested/
                    c.txt     25
            logs/
                app.log       80
            empty/
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "big.bin").write_bytes(b"x" * 300)

    docs = root / "docs"
    docs.mkdir()
    (docs / "a.txt").write_bytes(b"a" * 100)
    (docs / "b.txt").write_bytes(b"b" * 50)
    nested = docs / "nested"
    nested.mkdir()
    (nested / "c.txt").write_bytes(b"c" * 25)

    logs = root / "logs"
    logs.mkdir()
    (logs / "app.log").write_bytes(b"l" * 80)

    (root / "empty").mkdir()
    return root
