"""Data structures for tree snapshots and sync operations."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, NamedTuple, Sequence, overload


class OperationKind(str, Enum):
    """Kind of filesystem operation.

    Members: ``MKDIR``, ``RMDIR``, ``CREATE``, ``UNLINK``, ``CHANGE``.
    Members compare equal to their string values (``"mkdir"`` etc.).
    """
    MKDIR = "mkdir"
    RMDIR = "rmdir"
    CREATE = "create"
    UNLINK = "unlink"
    CHANGE = "change"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @property
    def is_removal(self) -> bool:
        """``True`` for ``RMDIR`` and ``UNLINK``."""
        return self in (OperationKind.RMDIR, OperationKind.UNLINK)


@dataclass(frozen=True)
class Entry:
    """One filesystem object inside a tree.

    Attributes:
        relative_path: Path relative to the tree root, forward slashes.
            Directories carry a trailing ``/``.
        is_directory: Whether the entry is a directory.
        size: Byte length (``0`` for directories).
        mode: ``st_mode`` bits (type and permissions).
        mtime: Modification time in integer nanoseconds (``st_mtime_ns``).
    """
    relative_path: str
    is_directory: bool
    size: int
    mode: int
    mtime: int

    @classmethod
    def from_stat(cls, relative_path: str, st) -> Entry:
        """Build an Entry from an ``os.stat_result``.

        A trailing slash is added to *relative_path* for directories.
        """
        is_dir = stat.S_ISDIR(st.st_mode)
        path = relative_path.rstrip("/")
        if is_dir:
            path += "/"
        return cls(
            relative_path=path,
            is_directory=is_dir,
            size=0 if is_dir else st.st_size,
            mode=st.st_mode,
            mtime=st.st_mtime_ns,
        )

    @property
    def key(self) -> tuple[str, ...]:
        """Ordering key: the path segments without the trailing slash.

        A directory's key is a prefix of every nested entry's key, so it
        sorts first.  A file ``a`` and a directory ``a/`` share a key.
        """
        return tuple(self.relative_path.rstrip("/").split("/"))

    @property
    def permissions(self) -> int:
        """Permission bits of :attr:`mode` (as accepted by ``os.chmod``)."""
        return stat.S_IMODE(self.mode)


class Operation(NamedTuple):
    """A single filesystem edit.

    *entry* is the entry the operation acts on: the source entry for
    ``mkdir``/``create``/``change`` and the baseline entry for
    ``rmdir``/``unlink``.
    """
    kind: OperationKind
    relative_path: str
    entry: Entry | None = None

    @property
    def pair(self) -> tuple[OperationKind, str]:
        """``(kind, relative_path)`` as reported to callers."""
        return (self.kind, self.relative_path)

    def __repr__(self) -> str:
        return f"Operation({self.kind.value!r}, {self.relative_path!r})"


class Snapshot(Sequence[Entry]):
    """Immutable, ordered sequence of :class:`Entry` for one tree.

    Entries are sorted by :attr:`Entry.key` so that a directory precedes
    its contents and siblings are in lexicographic order.  Duplicate keys
    raise ``ValueError``.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Entry] = ()):
        ordered = sorted(entries, key=lambda e: e.key)
        for prev, cur in zip(ordered, ordered[1:]):
            if prev.key == cur.key:
                raise ValueError(
                    f"Duplicate path in snapshot: {prev.relative_path!r} "
                    f"and {cur.relative_path!r}"
                )
        self._entries: tuple[Entry, ...] = tuple(ordered)

    @overload
    def __getitem__(self, index: int) -> Entry: ...
    @overload
    def __getitem__(self, index: slice) -> Snapshot: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Snapshot(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Snapshot({len(self._entries)} entries)"

    @property
    def paths(self) -> list[str]:
        """Relative paths in snapshot order."""
        return [e.relative_path for e in self._entries]
