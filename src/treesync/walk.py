"""Directory walking: build a :class:`Snapshot` for a tree on disk."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from ._types import Entry, Snapshot
from .exceptions import WalkError

if TYPE_CHECKING:
    from ._exclude import ExcludeFilter
    from ._glob import IncludeFilter

logger = logging.getLogger(__name__)


def _raise(exc: OSError) -> None:
    raise exc


def _rel(path: Path, base: Path) -> str:
    rel = str(path.relative_to(base)).replace(os.sep, "/")
    return "" if rel == "." else rel


def walk_tree(
    root: str | os.PathLike[str],
    *,
    exclude: ExcludeFilter | None = None,
    include: IncludeFilter | None = None,
    missing_ok: bool = False,
    follow_links: bool = True,
) -> Snapshot:
    """Return a :class:`Snapshot` of every entry under *root*.

    With *follow_links* (the default) entries are stat'ed through
    symlinks, and a symlinked directory is walked like a real one unless
    it resolves to one of its own ancestors; such a loop is recorded as
    an empty directory.  Without it, symlinks are recorded as
    non-directory entries (``lstat``) and never descended into.

    *exclude* drops matching files and directories (with their subtrees).
    *include*, when active, keeps only matching entries plus the
    directories needed to reach them.

    With *missing_ok*, a nonexistent *root* yields an empty snapshot
    instead of raising :class:`WalkError`.
    """
    base = Path(root)
    try:
        root_st = os.stat(base)
    except FileNotFoundError as exc:
        if missing_ok:
            return Snapshot()
        raise WalkError(str(base), exc.strerror or str(exc)) from exc
    except OSError as exc:
        raise WalkError(str(base), exc.strerror or str(exc)) from exc
    if not stat.S_ISDIR(root_st.st_mode):
        raise WalkError(str(base), "Not a directory")

    stat_fn = os.stat if follow_links else os.lstat
    entries: list[Entry] = []
    # Directories that do not match the include patterns themselves;
    # kept only if something beneath them is included.
    pending: dict[str, Entry] = {}
    # Real paths of the directories above each directory still to visit.
    lineage: dict[str, frozenset[str]] = {}
    filtering = include is not None and include.active

    try:
        for dirpath, dirnames, filenames in os.walk(base, onerror=_raise,
                                                    followlinks=follow_links):
            real = os.path.realpath(dirpath)
            ancestors = lineage.pop(dirpath, frozenset())
            if real in ancestors:
                dirnames.clear()
                continue
            ancestors = ancestors | {real}
            dp = Path(dirpath)
            rel_dir = _rel(dp, base)

            descend: list[str] = []
            for name in dirnames:
                rel = f"{rel_dir}/{name}" if rel_dir else name
                st = stat_fn(dp / name)
                if not stat.S_ISDIR(st.st_mode):
                    # symlink to a directory, not followed
                    filenames.append(name)
                    continue
                if exclude is not None and exclude.is_excluded(rel, is_dir=True):
                    continue
                entry = Entry.from_stat(rel, st)
                if not filtering or include.matches(rel):
                    entries.append(entry)
                else:
                    pending[rel] = entry
                if not filtering or include.may_contain(rel):
                    descend.append(name)
                    lineage[os.path.join(dirpath, name)] = ancestors
            dirnames[:] = descend

            for name in filenames:
                rel = f"{rel_dir}/{name}" if rel_dir else name
                if exclude is not None and exclude.is_excluded(rel):
                    continue
                if filtering and not include.matches(rel):
                    continue
                entries.append(Entry.from_stat(rel, stat_fn(dp / name)))
    except OSError as exc:
        where = os.fspath(exc.filename) if exc.filename else str(base)
        raise WalkError(where, exc.strerror or str(exc)) from exc

    if pending:
        for entry in list(entries):
            parts = entry.key[:-1]
            for depth in range(1, len(parts) + 1):
                ancestor = "/".join(parts[:depth])
                if ancestor in pending:
                    entries.append(pending.pop(ancestor))

    snapshot = Snapshot(entries)
    logger.debug("Walked %s: %d entries", base, len(snapshot))
    return snapshot
