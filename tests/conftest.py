"""Shared fixtures for treesync tests."""

import os

import pytest
from click.testing import CliRunner

from treesync import walk_tree

FIXED_MTIME_NS = 1_600_000_000_123_456_789


@pytest.fixture
def source(tmp_path):
    """Source tree with one/foo.txt and one/bar/bar.txt.

    Files get a fixed mtime so that metadata checks are deterministic.
    """
    root = tmp_path / "source"
    (root / "one" / "bar").mkdir(parents=True)
    (root / "one" / "foo.txt").write_text("foo\n")
    (root / "one" / "bar" / "bar.txt").write_text("bar\n")
    for rel in ("one/foo.txt", "one/bar/bar.txt"):
        os.utime(root / rel, ns=(FIXED_MTIME_NS, FIXED_MTIME_NS))
    return root


@pytest.fixture
def dest(tmp_path):
    """An empty destination directory."""
    d = tmp_path / "dest"
    d.mkdir()
    return d


@pytest.fixture
def runner():
    return CliRunner()


def tree_paths(root):
    """Relative paths under *root*, directories with a trailing slash."""
    return walk_tree(root).paths


def file_stats(root):
    """{relative_path: (size, mode, mtime_ns)} for files under *root*."""
    return {
        e.relative_path: (e.size, e.mode, e.mtime)
        for e in walk_tree(root)
        if not e.is_directory
    }
