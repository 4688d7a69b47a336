"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
import sys

import click


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _echo_changes(changes) -> None:
    """Print one ``kind path`` line per change, or ``no changes``."""
    if not changes:
        click.echo("no changes")
        return
    for kind, path in changes:
        click.echo(f"{kind} {path}")


def _dry_run_option(f):
    """Shared --dry-run/-n flag."""
    return click.option(
        "-n", "--dry-run", "dry_run", is_flag=True, default=False,
        help="Show what would change without writing anything.",
    )(f)


def _filter_options(f):
    """Shared --ignore / --glob / --exclude-from options."""
    f = click.option("--exclude-from", "exclude_from",
                     type=click.Path(exists=True, dir_okay=False),
                     help="Read ignore patterns from file.")(f)
    f = click.option("--glob", "globs", multiple=True,
                     help="Only sync entries matching pattern (repeatable).")(f)
    f = click.option("--ignore", multiple=True, envvar="TREESYNC_IGNORE",
                     help="Skip entries matching pattern (gitignore syntax, "
                          "repeatable, or set TREESYNC_IGNORE).")(f)
    return f


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """treesync: mirror a directory tree with minimal changes.

    Copies new and changed files, removes deleted ones, and keeps
    source modification times so unchanged files stay untouched.

    \b
    Quick start:
      treesync sync src/ build/out
      treesync sync --dry-run src/ build/out
      treesync sync --watch src/ build/out
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr,
                            format="%(message)s")
