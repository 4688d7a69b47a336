"""Console script ``treesync``; reports a missing ``cli`` extra instead of a traceback."""

import sys


def main():
    try:
        from .cli import main as cli_main
    except ImportError:
        sys.exit(
            "treesync: the command line interface needs click.\n"
            "Run  pip install 'treesync[cli]'  to add it."
        )
    cli_main()
