"""Dotfile-aware glob matching for include patterns."""

from __future__ import annotations

from fnmatch import fnmatch as _fnmatch
from typing import Sequence


def _glob_match(pattern: str, name: str) -> bool:
    """Match *name* against a glob *pattern* segment.

    ``*`` and ``?`` do not match a leading ``.`` unless the pattern itself
    starts with ``.`` (Unix/rsync convention).
    """
    if not pattern.startswith(".") and name.startswith("."):
        return False
    return _fnmatch(name, pattern)


def _split(path: str) -> list[str]:
    path = path.strip("/")
    return path.split("/") if path else []


def _match_segments(pattern: Sequence[str], parts: Sequence[str]) -> bool:
    """True if *parts* matches *pattern* exactly (``**`` spans segments)."""
    if not pattern:
        return not parts
    seg = pattern[0]
    if seg == "**":
        if _match_segments(pattern[1:], parts):
            return True
        # ** never descends through dot-directories
        return (bool(parts) and not parts[0].startswith(".")
                and _match_segments(pattern, parts[1:]))
    if not parts:
        return False
    return _glob_match(seg, parts[0]) and _match_segments(pattern[1:], parts[1:])


def _match_below(pattern: Sequence[str], parts: Sequence[str]) -> bool:
    """True if *pattern* could match some path strictly below *parts*."""
    if not parts:
        return bool(pattern)
    if not pattern:
        return False
    seg = pattern[0]
    if seg == "**":
        if _match_below(pattern[1:], parts):
            return True
        return not parts[0].startswith(".") and _match_below(pattern, parts[1:])
    return _glob_match(seg, parts[0]) and _match_below(pattern[1:], parts[1:])


class IncludeFilter:
    """Include-only filter built from glob patterns.

    Patterns are matched against whole relative paths (without the
    trailing slash of directories).  ``*`` and ``?`` match within one
    segment, ``**`` matches zero or more segments.
    """

    def __init__(self, patterns: Sequence[str] | None = None) -> None:
        self._patterns: list[list[str]] = [
            _split(p) for p in patterns or () if _split(p)
        ]

    @property
    def active(self) -> bool:
        """True if any include pattern is configured."""
        return bool(self._patterns)

    def matches(self, rel_path: str) -> bool:
        """Check whether *rel_path* itself is included.

        Always ``True`` when the filter is inactive.
        """
        if not self._patterns:
            return True
        parts = _split(rel_path)
        return any(_match_segments(p, parts) for p in self._patterns)

    def may_contain(self, rel_dir: str) -> bool:
        """Check whether anything under directory *rel_dir* can be included."""
        if not self._patterns:
            return True
        parts = _split(rel_dir)
        return any(_match_below(p, parts) for p in self._patterns)
