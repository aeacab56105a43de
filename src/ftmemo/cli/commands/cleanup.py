# topmark:header:start
#
#   project      : FtMemo
#   file         : cleanup.py
#   file_relpath : src/ftmemo/cli/commands/cleanup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo `cleanup` command: drop mappings for files that no longer exist.

Exit codes:
    0: store is clean (or was cleaned).
    2: ``--dry-run`` found stale entries (nothing was written).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ftmemo.cli.cmd_common import ensure_saved, get_console, get_effective_verbosity, open_engine
from ftmemo.cli_shared.exit_codes import ExitCode
from ftmemo.resolver import display_path, path_exists

if TYPE_CHECKING:
    from ftmemo.cli.console import ClickConsole
    from ftmemo.engine import FtMemo


@click.command(
    name="cleanup",
    help="Remove mappings whose file no longer exists.",
)
@click.option(
    "--dry-run",
    "dry_run",
    is_flag=True,
    default=False,
    help="List stale entries without removing them (exit 2 if any).",
)
def cleanup_command(*, dry_run: bool) -> None:
    """Remove mappings for non-existent files.

    Args:
        dry_run (bool): Only report stale entries.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    engine: FtMemo = open_engine(ctx)

    if dry_run:
        stale: list[str] = [p for p, _ in engine.mappings() if not path_exists(p)]
        for p in stale:
            console.print(f"Would remove: {display_path(p)}")
        if stale:
            ctx.exit(ExitCode.WOULD_CHANGE)
        if vlevel >= 0:
            console.print("Nothing to clean up.")
        return

    removed: int = engine.cleanup()
    ensure_saved(engine)
    if vlevel >= 0:
        engine.notify("Cleaned up mappings for non-existent files")
        if vlevel > 0:
            console.print(f"Removed {removed} entr{'y' if removed == 1 else 'ies'}.")
