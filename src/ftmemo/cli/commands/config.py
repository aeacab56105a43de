# topmark:header:start
#
#   project      : FtMemo
#   file         : config.py
#   file_relpath : src/ftmemo/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo `config` command.

Dumps the effective configuration (defaults, config file and CLI overrides
merged) as TOML, and reports the diagnostics collected while loading it.

Exit codes:
    0: configuration is usable.
    78: the config file could not be read or parsed, or (with ``--strict``)
        produced warnings.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from ftmemo.cli.cmd_common import get_config, get_console, get_effective_verbosity
from ftmemo.cli.errors import FtmemoConfigError
from ftmemo.cli.options import output_format_option
from ftmemo.cli_shared.utils import OutputFormat
from ftmemo.config.logging import get_logger
from ftmemo.core.diagnostics import DiagnosticLevel, compute_diagnostic_stats

if TYPE_CHECKING:
    from ftmemo.cli.console import ClickConsole
    from ftmemo.config.model import Config
    from ftmemo.core.diagnostics import DiagnosticStats

logger = get_logger(__name__)


@click.command(
    name="config",
    help="Show the effective configuration as TOML.",
)
@click.option(
    "--provenance",
    is_flag=True,
    default=False,
    help="Include the list of config files that contributed.",
)
@click.option(
    "--strict/--no-strict",
    "strict",
    default=False,
    show_default=True,
    help="Fail if any warnings are present (in addition to errors).",
)
@output_format_option
def config_command(
    *,
    provenance: bool,
    strict: bool,
    output_format: OutputFormat | None = None,
) -> None:
    """Show the effective configuration.

    Args:
        provenance (bool): Include contributing config files.
        strict (bool): Treat warnings as errors.
        output_format (OutputFormat | None): Output format to use.

    Raises:
        FtmemoConfigError: If the configuration has errors, or warnings in strict mode.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = get_console(ctx)
    config: Config = get_config(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    stats: DiagnosticStats = compute_diagnostic_stats(config.diagnostics)
    fail: bool = stats.n_error > 0 or (strict and stats.n_warning > 0)
    logger.debug("Config diagnostics: %s", stats)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        payload = config.to_toml_dict(include_provenance=provenance)
        payload["diagnostics"] = [
            {"level": d.level.value, "message": d.message} for d in config.diagnostics
        ]
        console.print(json.dumps(payload, indent=2))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# FtMemo Config\n")
        console.print("```toml")
        console.print(config.to_toml(include_provenance=provenance).rstrip("\n"))
        console.print("```")
        if config.diagnostics:
            console.print("\n## Diagnostics\n")
            for d in config.diagnostics:
                console.print(f"- **{d.level.value}**: {d.message}")
    else:
        if vlevel > 0:
            console.print(console.styled("FtMemo Config (TOML):\n", bold=True, underline=True))
        console.print(config.to_toml(include_provenance=provenance), nl=False)
        for d in config.diagnostics:
            if d.level is DiagnosticLevel.ERROR:
                console.error(f"{d.level.value}: {d.message}")
            elif d.level is DiagnosticLevel.WARNING:
                console.warn(f"{d.level.value}: {d.message}")
            elif vlevel > 0:
                console.print(f"{d.level.value}: {d.message}")

    if fail:
        raise FtmemoConfigError(
            f"Config diagnostics: {stats.n_error} error(s), {stats.n_warning} warning(s)"
        )
