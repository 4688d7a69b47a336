"""Tests for walk_tree."""

import os
import stat

import pytest

from treesync import IncludeFilter, WalkError, walk_tree

from conftest import FIXED_MTIME_NS


class TestWalkTree:
    def test_ordering(self, source):
        assert walk_tree(source).paths == [
            "one/", "one/bar/", "one/bar/bar.txt", "one/foo.txt",
        ]

    def test_entry_metadata(self, source):
        entries = {e.relative_path: e for e in walk_tree(source)}
        foo = entries["one/foo.txt"]
        assert foo.size == 4
        assert foo.mtime == FIXED_MTIME_NS
        assert foo.mode == os.stat(source / "one" / "foo.txt").st_mode
        assert entries["one/"].is_directory

    def test_siblings_lexicographic(self, tmp_path):
        for name in ("b", "a", "c.txt", "a.txt"):
            (tmp_path / name).write_text(name)
        (tmp_path / "b.d").mkdir()
        assert walk_tree(tmp_path).paths == ["a", "a.txt", "b", "b.d/", "c.txt"]

    def test_empty(self, tmp_path):
        assert walk_tree(tmp_path).paths == []

    def test_missing_root(self, tmp_path):
        with pytest.raises(WalkError) as excinfo:
            walk_tree(tmp_path / "nope")
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_missing_ok(self, tmp_path):
        assert len(walk_tree(tmp_path / "nope", missing_ok=True)) == 0

    def test_root_is_file(self, tmp_path):
        f = tmp_path / "f"
        f.write_text("x")
        with pytest.raises(WalkError):
            walk_tree(f)

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt",
                        reason="symlinks")
    def test_symlinked_file_followed(self, tmp_path):
        (tmp_path / "real.txt").write_text("12345")
        os.symlink(tmp_path / "real.txt", tmp_path / "link.txt")
        entries = {e.relative_path: e for e in walk_tree(tmp_path)}
        assert entries["link.txt"].size == 5
        assert not entries["link.txt"].is_directory

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt",
                        reason="symlinks")
    def test_symlink_cycle_not_descended(self, tmp_path):
        (tmp_path / "d").mkdir()
        os.symlink(tmp_path, tmp_path / "d" / "loop")
        paths = walk_tree(tmp_path).paths
        assert paths == ["d/", "d/loop/"]

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt",
                        reason="symlinks")
    def test_broken_symlink_is_walk_error(self, tmp_path):
        os.symlink(tmp_path / "missing", tmp_path / "dangling")
        with pytest.raises(WalkError):
            walk_tree(tmp_path)

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt",
                        reason="symlinks")
    def test_two_links_to_one_directory_both_walked(self, tmp_path):
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "f.txt").write_text("f")
        os.symlink(tmp_path / "real", tmp_path / "a")
        os.symlink(tmp_path / "real", tmp_path / "b")
        paths = walk_tree(tmp_path).paths
        assert paths == ["a/", "a/f.txt", "b/", "b/f.txt", "real/", "real/f.txt"]

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt",
                        reason="symlinks")
    def test_links_not_followed(self, tmp_path):
        outside = tmp_path / "outside"
        (outside / "sub").mkdir(parents=True)
        (outside / "f.txt").write_text("f")
        root = tmp_path / "root"
        root.mkdir()
        os.symlink(outside, root / "dirlink")
        os.symlink(outside / "f.txt", root / "filelink")
        os.symlink(tmp_path / "missing", root / "dangling")
        entries = {e.relative_path: e for e in walk_tree(root, follow_links=False)}
        assert sorted(entries) == ["dangling", "dirlink", "filelink"]
        for entry in entries.values():
            assert not entry.is_directory
            assert stat.S_ISLNK(entry.mode)


class TestWalkInclude:
    def test_literal_globs(self, source):
        snap = walk_tree(source, include=IncludeFilter(["one", "one/foo.txt"]))
        assert snap.paths == ["one/", "one/foo.txt"]

    def test_ancestors_added(self, source):
        snap = walk_tree(source, include=IncludeFilter(["one/bar/bar.txt"]))
        assert snap.paths == ["one/", "one/bar/", "one/bar/bar.txt"]

    def test_directory_match_does_not_include_contents(self, source):
        snap = walk_tree(source, include=IncludeFilter(["one/bar"]))
        assert snap.paths == ["one/", "one/bar/"]

    def test_no_match(self, source):
        assert walk_tree(source, include=IncludeFilter(["*.md"])).paths == []
