# topmark:header:start
#
#   project      : FtMemo
#   file         : version.py
#   file_relpath : src/ftmemo/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo `version` command.

Prints the current FtMemo version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from ftmemo.cli.cmd_common import get_console, get_effective_verbosity
from ftmemo.cli.options import output_format_option
from ftmemo.cli_shared.utils import OutputFormat
from ftmemo.constants import FTMEMO_VERSION

if TYPE_CHECKING:
    from ftmemo.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of FtMemo.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of FtMemo.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"version": FTMEMO_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# FtMemo Version\n")
        console.print(f"**FtMemo version: {FTMEMO_VERSION}**")
    elif vlevel > 0:
        console.print(console.styled("FtMemo version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(FTMEMO_VERSION, bold=True)}")
    else:
        console.print(console.styled(FTMEMO_VERSION, bold=True))
