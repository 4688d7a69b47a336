"""Execute an operation list against a destination tree."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Iterable

from ._types import Entry, Operation, OperationKind
from .exceptions import ApplyError

logger = logging.getLogger(__name__)


def _local(root: Path, rel: str) -> Path:
    rel = rel.rstrip("/")
    return root.joinpath(*rel.split("/")) if rel else root


def _source_entry(source: Path, op: Operation) -> Entry:
    if op.entry is not None:
        return op.entry
    return Entry.from_stat(op.relative_path, os.stat(_local(source, op.relative_path)))


def _mkdir(source: Path, dest: Path, op: Operation) -> None:
    target = _local(dest, op.relative_path)
    entry = _source_entry(source, op)
    try:
        os.mkdir(target, entry.permissions)
    except FileExistsError:
        if target.is_symlink() or not target.is_dir():
            raise


def _rmdir(source: Path, dest: Path, op: Operation) -> None:
    os.rmdir(_local(dest, op.relative_path))


def _unlink(source: Path, dest: Path, op: Operation) -> None:
    os.unlink(_local(dest, op.relative_path))


def _copy(source: Path, dest: Path, op: Operation) -> None:
    """Copy file bytes, then set the source's permission bits and mtime.

    An existing destination file is removed first so that read-only
    files can be replaced.
    """
    src = _local(source, op.relative_path)
    target = _local(dest, op.relative_path)
    entry = _source_entry(source, op)
    try:
        os.unlink(target)
    except FileNotFoundError:
        pass
    shutil.copyfile(src, target)
    os.chmod(target, entry.permissions)
    os.utime(target, ns=(entry.mtime, entry.mtime))


_HANDLERS: dict[OperationKind, Callable[[Path, Path, Operation], None]] = {
    OperationKind.MKDIR: _mkdir,
    OperationKind.RMDIR: _rmdir,
    OperationKind.CREATE: _copy,
    OperationKind.CHANGE: _copy,
    OperationKind.UNLINK: _unlink,
}


def apply_operations(
    source_root: str | os.PathLike[str],
    dest_root: str | os.PathLike[str],
    operations: Iterable[Operation],
) -> list[Operation]:
    """Apply *operations* in order to *dest_root*, copying from *source_root*.

    Returns the operations in the order they were executed.  The source
    tree is only read.  The first failing operation raises
    :class:`ApplyError`; operations already applied are left in place.
    """
    source = Path(source_root)
    dest = Path(dest_root)
    applied: list[Operation] = []
    for op in operations:
        handler = _HANDLERS[OperationKind(op.kind)]
        try:
            handler(source, dest, op)
        except OSError as exc:
            logger.debug("%s %s failed: %s", op.kind, op.relative_path, exc)
            raise ApplyError(op, applied, exc.strerror or str(exc)) from exc
        logger.debug("%s %s", op.kind, op.relative_path)
        applied.append(op)
    return applied
