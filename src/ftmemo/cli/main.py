# topmark:header:start
#
#   project      : FtMemo
#   file         : main.py
#   file_relpath : src/ftmemo/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the ``ftmemo`` command.

Key ideas:
- Group-level options are initialized once and placed into ``ctx.obj``
  (console, verbosity, effective configuration).
- Subcommands work on the same mapping store an editor session uses, without
  needing an editor.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from ftmemo.cli.commands.cleanup import cleanup_command
from ftmemo.cli.commands.clear import clear_command
from ftmemo.cli.commands.config import config_command
from ftmemo.cli.commands.remember import remember_command
from ftmemo.cli.commands.show import show_command
from ftmemo.cli.commands.version import version_command
from ftmemo.cli.console import ClickConsole
from ftmemo.cli.options import (
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_verbosity,
)
from ftmemo.config.keys import Toml
from ftmemo.config.logging import get_logger, resolve_env_log_level, setup_logging
from ftmemo.config.model import load_config

if TYPE_CHECKING:
    from ftmemo.cli_shared.console_api import ConsoleLike
    from ftmemo.config.model import Config

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_file: str | None,
    no_config: bool,
    storage_file: str | None,
) -> None:
    """Initialize shared state (verbosity, console, config) on the Click context.

    Values already present in ``ctx.obj`` (e.g. injected by tests) are kept.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
        config_file (str | None): Explicit config file from ``--config``.
        no_config (bool): Skip user config discovery.
        storage_file (str | None): Store override from ``--storage-file``.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured via the environment only.
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    if "console" not in ctx.obj:
        ctx.obj["console"] = ClickConsole(enable_color=not no_color)
    ctx.color = not no_color

    overrides: dict[str, Any] = {Toml.KEY_STORAGE_FILE: storage_file}
    config: Config = load_config(
        config_file=Path(config_file) if config_file else None,
        overrides=overrides,
        use_user_config=not no_config,
    )
    ctx.obj["config"] = config
    logger.debug(
        "CLI state: verbosity=%d, storage=%s", ctx.obj["verbosity_level"], config.storage_file
    )


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="FtMemo CLI: inspect and maintain remembered filetypes.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_file: str | None,
    no_config: bool,
    storage_file: str | None,
) -> None:
    """Entry point for the FtMemo CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_file=config_file,
        no_config=no_config,
        storage_file=storage_file,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'ftmemo show' to list remembered filetypes.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(show_command)

cli.add_command(remember_command)

cli.add_command(clear_command)

cli.add_command(cleanup_command)

if __name__ == "__main__":
    cli()
