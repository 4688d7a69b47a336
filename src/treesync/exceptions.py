"""Exceptions for treesync."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._types import Operation


class TreeSyncError(Exception):
    """Base class for errors raised by treesync."""


class WalkError(TreeSyncError):
    """Raised when a tree cannot be listed (missing root, permission denied).

    Raised before any destination mutation.  The underlying ``OSError``
    is available as ``__cause__``.
    """

    def __init__(self, path: str, message: str):
        super().__init__(f"Cannot walk {path}: {message}")
        self.path = path


class ApplyError(TreeSyncError):
    """Raised when an operation on the destination fails.

    The remaining operations are not attempted and nothing is rolled
    back.  :attr:`applied` lists the operations completed before the
    failure; :attr:`operation` is the one that failed.  The underlying
    ``OSError`` is available as ``__cause__``.
    """

    def __init__(self, operation: Operation, applied: list[Operation], message: str):
        super().__init__(
            f"{operation.kind} {operation.relative_path or '.'} failed: {message}"
        )
        self.operation = operation
        self.applied = applied
