"""Tests for ExcludeFilter and its integration with walk_tree."""

from treesync import ExcludeFilter, walk_tree


# ---------------------------------------------------------------------------
# Unit tests for ExcludeFilter
# ---------------------------------------------------------------------------

class TestExcludeFilter:
    def test_no_patterns_not_active(self):
        ef = ExcludeFilter()
        assert ef.active is False
        assert ef.is_excluded("anything") is False

    def test_exclude_pattern_match(self):
        ef = ExcludeFilter(patterns=["*.pyc"])
        assert ef.active is True
        assert ef.is_excluded("foo.pyc") is True
        assert ef.is_excluded("sub/bar.pyc") is True

    def test_exclude_pattern_no_match(self):
        ef = ExcludeFilter(patterns=["*.pyc"])
        assert ef.is_excluded("foo.py") is False

    def test_double_star_directory(self):
        ef = ExcludeFilter(patterns=["**/bar"])
        assert ef.is_excluded("one/bar", is_dir=True) is True
        assert ef.is_excluded("one/bar/", is_dir=True) is True
        assert ef.is_excluded("one/foo.txt") is False

    def test_exclude_directory_pattern(self):
        ef = ExcludeFilter(patterns=["build/"])
        assert ef.is_excluded("build", is_dir=True) is True
        # A file named "build" should not be matched by "build/"
        assert ef.is_excluded("build", is_dir=False) is False

    def test_negation_pattern(self):
        ef = ExcludeFilter(patterns=["*.pyc", "!important.pyc"])
        assert ef.is_excluded("foo.pyc") is True
        assert ef.is_excluded("important.pyc") is False

    def test_anchored_pattern(self):
        ef = ExcludeFilter(patterns=["/build"])
        assert ef.is_excluded("build") is True
        assert ef.is_excluded("src/build") is False

    def test_exclude_from_file(self, tmp_path):
        pfile = tmp_path / "excludes.txt"
        pfile.write_text("*.log\n# comment\n__pycache__/\n")
        ef = ExcludeFilter(exclude_from=str(pfile))
        assert ef.active is True
        assert ef.is_excluded("app.log") is True
        assert ef.is_excluded("__pycache__", is_dir=True) is True
        assert ef.is_excluded("app.py") is False

    def test_patterns_and_file_combined(self, tmp_path):
        pfile = tmp_path / "excludes.txt"
        pfile.write_text("*.log\n")
        ef = ExcludeFilter(patterns=["*.tmp"], exclude_from=str(pfile))
        assert ef.is_excluded("a.log") is True
        assert ef.is_excluded("a.tmp") is True
        assert ef.is_excluded("a.txt") is False


# ---------------------------------------------------------------------------
# Integration with walk_tree
# ---------------------------------------------------------------------------

class TestWalkExclude:
    def test_excluded_directory_not_descended(self, source):
        snap = walk_tree(source, exclude=ExcludeFilter(patterns=["**/bar"]))
        assert snap.paths == ["one/", "one/foo.txt"]

    def test_excluded_file(self, source):
        snap = walk_tree(source, exclude=ExcludeFilter(patterns=["*.txt"]))
        assert snap.paths == ["one/", "one/bar/"]

    def test_inactive_filter(self, source):
        snap = walk_tree(source, exclude=ExcludeFilter())
        assert snap.paths == ["one/", "one/bar/", "one/bar/bar.txt", "one/foo.txt"]
