"""Snapshot comparison: compute the ordered operation list between two trees."""

from __future__ import annotations

from ._types import Entry, Operation, OperationKind, Snapshot


def _truncate(mtime: int, granularity_ns: int) -> int:
    return mtime - mtime % granularity_ns


def entries_equal(old: Entry, new: Entry, *, mtime_granularity_ns: int = 1) -> bool:
    """Return True if *new* needs no operation relative to *old*.

    Two directories are always equal; their mtimes follow their contents.
    Files are equal when ``mode``, ``size`` and ``mtime`` (floored to a
    multiple of *mtime_granularity_ns*) all match.
    """
    if old.is_directory != new.is_directory:
        return False
    if new.is_directory:
        return True
    return (
        old.mode == new.mode
        and old.size == new.size
        and _truncate(old.mtime, mtime_granularity_ns)
        == _truncate(new.mtime, mtime_granularity_ns)
    )


def _addition(entry: Entry) -> Operation:
    kind = OperationKind.MKDIR if entry.is_directory else OperationKind.CREATE
    return Operation(kind, entry.relative_path, entry)


def _removal(entry: Entry) -> Operation:
    kind = OperationKind.RMDIR if entry.is_directory else OperationKind.UNLINK
    return Operation(kind, entry.relative_path, entry)


def diff_snapshots(
    baseline: Snapshot | None,
    current: Snapshot,
    *,
    mtime_granularity_ns: int = 1,
) -> list[Operation]:
    """Compute the operations that turn *baseline* into *current*.

    Both snapshots are walked in lockstep by :attr:`Entry.key`.  Removals
    are collected separately and emitted first, in reverse discovery order
    so that children go before their parents.  Creations and changes
    follow in forward order so that parents go before their children.

    A path that switches between file and directory yields a removal of
    the old kind and a creation of the new kind, never a ``change``.
    A ``None`` *baseline* is treated as empty.
    """
    if mtime_granularity_ns < 1:
        raise ValueError("mtime_granularity_ns must be >= 1")
    old = list(baseline) if baseline is not None else []
    new = list(current)

    removals: list[Operation] = []
    additions: list[Operation] = []
    i = j = 0
    while i < len(old) and j < len(new):
        o, n = old[i], new[j]
        if o.key < n.key:
            removals.append(_removal(o))
            i += 1
        elif o.key > n.key:
            additions.append(_addition(n))
            j += 1
        else:
            if o.is_directory != n.is_directory:
                removals.append(_removal(o))
                additions.append(_addition(n))
            elif not entries_equal(o, n, mtime_granularity_ns=mtime_granularity_ns):
                additions.append(Operation(OperationKind.CHANGE, n.relative_path, n))
            i += 1
            j += 1
    for o in old[i:]:
        removals.append(_removal(o))
    for n in new[j:]:
        additions.append(_addition(n))

    removals.reverse()
    return removals + additions
