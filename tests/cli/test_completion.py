# topmark:header:start
#
#   project      : FtMemo
#   file         : test_completion.py
#   file_relpath : tests/cli/test_completion.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shell completion and conversion tests for `EnumChoiceParam`.

These drive the parameter type directly with a minimal Click option and
context instead of going through a shell adapter.
"""

from __future__ import annotations

import click
import pytest

from ftmemo.cli.cli_types import EnumChoiceParam
from ftmemo.cli.main import cli
from ftmemo.cli_shared.utils import OutputFormat
from tests.conftest import mark_cli, parametrize


def _complete(incomplete: str) -> set[str]:
    enum_type: EnumChoiceParam[OutputFormat] = EnumChoiceParam(OutputFormat)
    opt = click.Option(("--format",), type=enum_type)
    ctx = click.Context(cli)
    return {item.value for item in enum_type.shell_complete(ctx, opt, incomplete)}


@mark_cli
def test_completion_lists_all_values() -> None:
    assert _complete("") == {f.value for f in OutputFormat}


@mark_cli
@parametrize(("prefix", "expected"), [("j", {"json"}), ("M", {"markdown"}), ("x", set())])
def test_completion_filters_by_prefix(prefix: str, expected: set[str]) -> None:
    assert _complete(prefix) == expected


def test_convert_is_case_insensitive() -> None:
    enum_type: EnumChoiceParam[OutputFormat] = EnumChoiceParam(OutputFormat)

    assert enum_type.convert("JSON", None, None) is OutputFormat.JSON
    assert enum_type.convert(OutputFormat.DEFAULT, None, None) is OutputFormat.DEFAULT
    assert enum_type.convert(None, None, None) is None


def test_convert_rejects_unknown_value() -> None:
    with pytest.raises(click.BadParameter, match="Must be one of"):
        EnumChoiceParam(OutputFormat).convert("yaml", None, None)
