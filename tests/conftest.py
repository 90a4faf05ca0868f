"""Shared fixtures for nodeprune tests."""

import pytest


@pytest.fixture
def project_tree(tmp_path):
    """Two projects: a/node_modules (2 files, 10 bytes), b/node_modules (1 file, 5 bytes)."""
    a = tmp_path / "a" / "node_modules"
    a.mkdir(parents=True)
    (a / "one.js").write_text("12345")
    (a / "two.js").write_text("abcde")

    b = tmp_path / "b" / "node_modules"
    b.mkdir(parents=True)
    (b / "index.js").write_text("xyzzy")

    (tmp_path / "a" / "package.json").write_text("{}")
    return tmp_path
