"""Ignore patterns for :func:`treesync.walk.walk_tree`.

Patterns use ``.gitignore`` syntax, evaluated by dulwich: ``**/bar``
skips ``bar`` wherever it appears, ``build/`` skips only directories
named ``build``, and ``!keep.log`` re-includes a path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter


def _read_pattern_file(path: str) -> list[bytes]:
    """Non-blank, non-comment lines of *path*."""
    return [
        line for line in (raw.strip() for raw in Path(path).read_bytes().splitlines())
        if line and not line.startswith(b"#")
    ]


class ExcludeFilter:
    """Decides which walked paths a sync leaves out.

    *patterns* come from the caller (``ignore=`` or ``--ignore``);
    *exclude_from* names a file holding more of them, one per line.
    """

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | None = None,
    ) -> None:
        lines = [p.encode("utf-8") for p in patterns or ()]
        if exclude_from is not None:
            lines.extend(_read_pattern_file(exclude_from))
        self._filter: IgnoreFilter | None = IgnoreFilter(lines) if lines else None

    @property
    def active(self) -> bool:
        return self._filter is not None

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """True if *rel_path* (``/``-separated, relative to the root) is ignored.

        Set *is_dir* for directories; patterns ending in ``/`` match only
        those.
        """
        if self._filter is None:
            return False
        candidate = rel_path.rstrip("/")
        if is_dir:
            candidate += "/"
        return self._filter.is_ignored(candidate) is True
