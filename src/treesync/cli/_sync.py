"""The sync command."""

from __future__ import annotations

import click

from ..exceptions import TreeSyncError
from ..session import TreeSync
from ._helpers import (
    main,
    _dry_run_option,
    _echo_changes,
    _filter_options,
    _status,
)


@main.command()
@click.argument("source", type=click.Path(exists=True, file_okay=False))
@click.argument("dest", type=click.Path(file_okay=False))
@_filter_options
@click.option("--mtime-granularity", "mtime_granularity",
              type=click.IntRange(min=1), default=1, show_default=True,
              help="Compare mtimes floored to this many nanoseconds.")
@_dry_run_option
@click.option("--watch", "watch", is_flag=True, default=False,
              help="Watch SOURCE for changes and sync continuously.")
@click.option("--debounce", type=int, default=500,
              help="Debounce delay in ms for --watch (default: 500).")
@click.pass_context
def sync(ctx, source, dest, ignore, globs, exclude_from, mtime_granularity,
         dry_run, watch, debounce):
    """Make DEST identical to SOURCE (like rsync --delete).

    Prints one line per operation applied, in order: mkdir, rmdir,
    create, unlink or change, followed by the relative path.

    \b
    Examples:
        treesync sync src/ out/
        treesync sync --ignore '**/node_modules' src/ out/
        treesync sync --glob '**/*.js' src/ out/
    """
    if watch and dry_run:
        raise click.ClickException("--watch cannot be combined with --dry-run")

    session = TreeSync(
        source, dest,
        ignore=list(ignore), globs=list(globs), exclude_from=exclude_from,
        mtime_granularity_ns=mtime_granularity,
    )

    if watch:
        from ._watch import watch_and_sync
        watch_and_sync(session, debounce=debounce)
        return

    _status(ctx, f"Syncing {source} -> {dest}")
    try:
        changes = session.sync(dry_run=dry_run)
    except TreeSyncError as exc:
        raise click.ClickException(str(exc))
    _echo_changes(changes)
    if dry_run:
        _status(ctx, "Dry run: nothing written")
