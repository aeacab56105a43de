# topmark:header:start
#
#   project      : FtMemo
#   file         : remember.py
#   file_relpath : src/ftmemo/cli/commands/remember.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo `remember` command: store a filetype for a path explicitly."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ftmemo.cli.cmd_common import ensure_saved, get_console, open_engine
from ftmemo.cli.errors import FtmemoFileNotFoundError, FtmemoUsageError
from ftmemo.config.logging import get_logger
from ftmemo.errors import FtmemoValueError
from ftmemo.resolver import display_path, resolve_path

if TYPE_CHECKING:
    from ftmemo.cli.console import ClickConsole
    from ftmemo.engine import FtMemo

logger = get_logger(__name__)


@click.command(
    name="remember",
    help="Remember FILETYPE for PATH, as if it had been set in the editor.",
)
@click.argument("path", type=click.Path())
@click.argument("filetype")
def remember_command(*, path: str, filetype: str) -> None:
    """Store a filetype for a path.

    Args:
        path (str): File or directory; resolved to an absolute path.
        filetype (str): Filetype name to remember.

    Raises:
        FtmemoUsageError: If the filetype is empty.
        FtmemoFileNotFoundError: If the path does not exist.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = get_console(ctx)

    if not filetype.strip():
        raise FtmemoUsageError("FILETYPE must not be empty.")
    if resolve_path(path) is None:
        raise FtmemoFileNotFoundError(f"No such file or directory: {path}")

    engine: FtMemo = open_engine(ctx)
    try:
        key: str = engine.remember(path, filetype.strip())
    except FtmemoValueError as e:
        raise FtmemoUsageError(str(e)) from e
    ensure_saved(engine)

    logger.info("Remembered %s -> %s", key, filetype)
    console.print(f"Remembered filetype for {display_path(key)}: {filetype.strip()}")
