# topmark:header:start
#
#   project      : FtMemo
#   file         : show.py
#   file_relpath : src/ftmemo/cli/commands/show.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo `show` command.

Lists the remembered ``path -> filetype`` mappings. The default rendering is
the same listing an editor session shows; ``--format json`` emits the raw
mapping and ``--format markdown`` a table.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from ftmemo.cli.cmd_common import get_console, get_effective_verbosity, open_engine
from ftmemo.cli.options import output_format_option
from ftmemo.cli_shared.utils import OutputFormat
from ftmemo.resolver import display_path

if TYPE_CHECKING:
    from ftmemo.cli.console import ClickConsole
    from ftmemo.engine import FtMemo


@click.command(
    name="show",
    help="List remembered filetypes.",
)
@output_format_option
def show_command(*, output_format: OutputFormat | None = None) -> None:
    """List the remembered filetypes.

    Args:
        output_format (OutputFormat | None): Output format to use
            (``default``, ``json`` or ``markdown``).
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    engine: FtMemo = open_engine(ctx)
    entries: list[tuple[str, str]] = engine.mappings()

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps(dict(entries), indent=2))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# Remembered filetypes\n")
        if not entries:
            console.print("_No saved filetype mappings._")
            return
        console.print("| Path | Filetype |")
        console.print("|---|---|")
        for path, ft in entries:
            console.print(f"| `{display_path(path)}` | `{ft}` |")
    else:
        if vlevel > 0:
            console.print(console.styled(f"Store: {engine.store.path}", dim=True))
        engine.show()
