"""treesync CLI: mirror a directory tree with minimal changes."""

from ._helpers import main  # noqa: F401

# Import command modules to register Click commands with the main group.
from . import _sync  # noqa: F401
