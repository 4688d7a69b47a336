"""Watch mode for the sync command."""

from __future__ import annotations

import datetime

import click

from ..exceptions import ApplyError, TreeSyncError
from ..session import _format_summary


def _import_watchfiles():
    """Return the watchfiles module; --watch is unusable without it."""
    try:
        import watchfiles
    except ImportError as exc:
        raise click.ClickException(
            "--watch needs the watchfiles package "
            "(pip install 'treesync[watch]')."
        ) from exc
    return watchfiles


def _run_sync_cycle(session):
    """Run one sync cycle on the long-lived *session*."""
    changes = session.sync()
    now = datetime.datetime.now().strftime("%H:%M:%S")
    click.echo(f"[{now}] Sync: {_format_summary(changes)}")
    return changes


def watch_and_sync(session, *, debounce):
    """Watch the session's source and sync on every change batch.

    The same session is reused, so each cycle diffs against the snapshot
    of the previous one.
    """
    watchfiles = _import_watchfiles()

    click.echo(f"Watching {session.source} -> {session.dest} (debounce {debounce}ms)")
    try:
        _run_sync_cycle(session)
    except ApplyError as exc:
        click.echo(f"ERROR: Initial sync failed after {len(exc.applied)} "
                   f"operation(s): {exc}", err=True)
    except TreeSyncError as exc:
        click.echo(f"ERROR: Initial sync failed: {exc}", err=True)

    try:
        for _changes in watchfiles.watch(str(session.source), debounce=debounce):
            try:
                _run_sync_cycle(session)
            except ApplyError as exc:
                click.echo(f"ERROR: Sync failed after {len(exc.applied)} "
                           f"operation(s): {exc}", err=True)
            except TreeSyncError as exc:
                click.echo(f"ERROR: Sync failed: {exc}", err=True)
    except KeyboardInterrupt:
        click.echo("\nStopped watching.")
