from ._types import Entry, Operation, OperationKind, Snapshot
from ._exclude import ExcludeFilter
from ._glob import IncludeFilter
from .walk import walk_tree
from .diff import diff_snapshots, entries_equal
from .apply import apply_operations
from .session import TreeSync
from .exceptions import TreeSyncError, WalkError, ApplyError

__all__ = [
    "TreeSync",
    "Entry", "Operation", "OperationKind", "Snapshot",
    "ExcludeFilter", "IncludeFilter",
    "walk_tree", "diff_snapshots", "entries_equal", "apply_operations",
    "TreeSyncError", "WalkError", "ApplyError",
]
