# topmark:header:start
#
#   project      : FtMemo
#   file         : clear.py
#   file_relpath : src/ftmemo/cli/commands/clear.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo `clear` command: forget the remembered filetype of a path.

The path does not need to exist any more; a vanished file is looked up under
its absolute path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ftmemo.cli.cmd_common import ensure_saved, open_engine

if TYPE_CHECKING:
    from ftmemo.engine import FtMemo


@click.command(
    name="clear",
    help="Forget the remembered filetype of PATH.",
)
@click.argument("path", type=click.Path())
def clear_command(*, path: str) -> None:
    """Forget the remembered filetype of a path.

    Args:
        path (str): File or directory whose mapping is removed.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)

    engine: FtMemo = open_engine(ctx)
    if engine.clear(path):
        ensure_saved(engine)
