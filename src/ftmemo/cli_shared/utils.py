# topmark:header:start
#
#   project      : FtMemo
#   file         : utils.py
#   file_relpath : src/ftmemo/cli_shared/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output format enumeration shared by CLI commands."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable, never colored).
      MARKDOWN: A Markdown rendering suitable for notes or issue reports.
    """

    DEFAULT = "default"
    JSON = "json"
    MARKDOWN = "markdown"
