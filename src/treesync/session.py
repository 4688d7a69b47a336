"""Sync sessions: mirror a source tree into a destination tree.

A :class:`TreeSync` keeps the source snapshot of its last successful
sync and uses it as the baseline of the next one.  Without that cache
(first sync, fresh session, or after a failed apply) the destination is
walked and used as the baseline instead, so both paths converge to the
same destination state.
"""

from __future__ import annotations

import logging
import os
from collections import Counter
from pathlib import Path
from typing import Sequence

from ._exclude import ExcludeFilter
from ._glob import IncludeFilter
from ._types import Operation, OperationKind, Snapshot
from .apply import apply_operations
from .diff import diff_snapshots
from .exceptions import ApplyError
from .walk import walk_tree

logger = logging.getLogger(__name__)


def _format_summary(operations: Sequence[tuple]) -> str:
    """One-line ``kind=N`` summary of operations or pairs, or ``no changes``."""
    if not operations:
        return "no changes"
    counts = Counter(OperationKind(op[0]) for op in operations)
    return " ".join(
        f"{kind}={counts[kind]}" for kind in OperationKind if counts[kind]
    )


class TreeSync:
    """Mirror *source* into *dest* with minimal filesystem operations.

    Args:
        source: Source directory (read only).
        dest: Destination directory (created on first sync if missing).
        ignore: Patterns in gitignore syntax; matching entries and their
            subtrees are skipped.
        globs: Include patterns; when given, only matching entries (and
            the directories leading to them) are synced.
        exclude_from: File with additional ignore patterns, one per line.
        mtime_granularity_ns: Mtimes are floored to a multiple of this
            before comparison.  Use a coarser value when the destination
            filesystem truncates timestamps.
    """

    def __init__(
        self,
        source: str | os.PathLike[str],
        dest: str | os.PathLike[str],
        *,
        ignore: Sequence[str] | None = None,
        globs: Sequence[str] | None = None,
        exclude_from: str | None = None,
        mtime_granularity_ns: int = 1,
    ) -> None:
        if mtime_granularity_ns < 1:
            raise ValueError("mtime_granularity_ns must be >= 1")
        self._source = Path(source)
        self._dest = Path(dest)
        self._exclude = ExcludeFilter(patterns=ignore, exclude_from=exclude_from)
        self._include = IncludeFilter(globs)
        self._granularity = mtime_granularity_ns
        self._last_input: Snapshot | None = None

    def __repr__(self) -> str:
        return f"TreeSync({str(self._source)!r}, {str(self._dest)!r})"

    @property
    def source(self) -> Path:
        return self._source

    @property
    def dest(self) -> Path:
        return self._dest

    @property
    def last_input(self) -> Snapshot | None:
        """Source snapshot of the last successful sync, or ``None``."""
        return self._last_input

    def reset(self) -> None:
        """Forget the cached baseline; the next sync diffs against *dest*."""
        self._last_input = None

    def plan(self) -> list[Operation]:
        """Compute the operations the next :meth:`sync` would apply.

        Nothing is written and the cached baseline is left alone.
        """
        return self._plan(self._walk_source())

    def sync(self, *, dry_run: bool = False) -> list[tuple[OperationKind, str]]:
        """Make *dest* match *source*.

        Returns ``[(kind, relative_path), ...]`` in the order applied.
        With *dry_run*, returns what would be applied without touching
        the destination or the cached baseline.

        Raises:
            WalkError: The source or destination could not be listed.
                Nothing was changed.
            ApplyError: A destination operation failed.  Earlier
                operations stay applied and the cached baseline is
                dropped.
        """
        current = self._walk_source()
        cached = self._last_input is not None
        operations = self._plan(current)
        if dry_run:
            logger.info("Dry run %s -> %s: %s", self._source, self._dest,
                        _format_summary(operations))
            return [op.pair for op in operations]

        try:
            if operations:
                self._create_dest()
            applied = apply_operations(self._source, self._dest, operations)
        except ApplyError:
            self._last_input = None
            raise
        self._last_input = current
        logger.info("Synced %s -> %s (%s baseline): %s", self._source, self._dest,
                    "cached" if cached else "destination",
                    _format_summary(applied))
        return [op.pair for op in applied]

    # ------------------------------------------------------------------
    def _create_dest(self) -> None:
        try:
            self._dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ApplyError(Operation(OperationKind.MKDIR, ""), [],
                             exc.strerror or str(exc)) from exc

    def _walk_source(self) -> Snapshot:
        return walk_tree(self._source, exclude=self._exclude, include=self._include)

    def _plan(self, current: Snapshot) -> list[Operation]:
        baseline = self._last_input
        if baseline is None:
            baseline = walk_tree(self._dest, missing_ok=True, follow_links=False)
        return diff_snapshots(baseline, current,
                              mtime_granularity_ns=self._granularity)
