# topmark:header:start
#
#   project      : FtMemo
#   file         : cmd_common.py
#   file_relpath : src/ftmemo/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

Small helpers shared by the subcommands: reading the shared state the group
put on the Click context, building an engine over the configured store, and
turning a failed save into a CLI error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ftmemo.cli.errors import FtmemoIOError
from ftmemo.config.logging import get_logger
from ftmemo.engine import FtMemo
from ftmemo.store import MappingStore

if TYPE_CHECKING:
    from ftmemo.cli.console import ClickConsole
    from ftmemo.config.model import Config

logger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity set by the group (0 when absent)."""
    return int(ctx.obj.get("verbosity_level", 0))


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the Click context."""
    return ctx.obj["console"]


def get_config(ctx: click.Context) -> Config:
    """Return the effective configuration stored on the Click context."""
    return ctx.obj["config"]


def open_engine(ctx: click.Context) -> FtMemo:
    """Build an engine over the configured store and load it.

    The engine has no editor host; its notifications go to the console.
    """
    config: Config = get_config(ctx)
    console: ClickConsole = get_console(ctx)
    engine = FtMemo(MappingStore(config.storage_file), notifier=console.notify)
    engine.load()
    logger.debug("Opened store %s (%d mappings)", config.storage_file, len(engine.store.mappings))
    return engine


def ensure_saved(engine: FtMemo) -> None:
    """Raise `FtmemoIOError` if the engine's last save failed."""
    if engine.last_write_error is not None:
        raise FtmemoIOError(str(engine.last_write_error))
