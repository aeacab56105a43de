# topmark:header:start
#
#   project      : FtMemo
#   file         : errors.py
#   file_relpath : src/ftmemo/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the FtMemo CLI.

Raise these in CLI commands to exit with a standardized message and exit code.
They prefer the project console when one is present in the Click context and
fall back to Click's default styling otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from ftmemo.cli_shared.exit_codes import ExitCode


class FtmemoCliError(click.ClickException):
    """Base class for all FtMemo CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized later by `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class FtmemoUsageError(FtmemoCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class FtmemoConfigError(FtmemoCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class FtmemoFileNotFoundError(FtmemoCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class FtmemoIOError(FtmemoCliError):
    """Error when the mapping store cannot be written."""

    exit_code = ExitCode.IO_ERROR
