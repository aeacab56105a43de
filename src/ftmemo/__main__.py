# topmark:header:start
#
#   project      : FtMemo
#   file         : __main__.py
#   file_relpath : src/ftmemo/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running FtMemo via ``python -m ftmemo``.

Delegates to :func:`ftmemo.cli.main.cli`, the same entry point as the
``ftmemo`` console script.
"""

from __future__ import annotations

from ftmemo.cli.main import cli

if __name__ == "__main__":
    cli()
