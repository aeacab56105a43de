# topmark:header:start
#
#   project      : FtMemo
#   file         : __init__.py
#   file_relpath : src/ftmemo/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command line interface for FtMemo.

Entry point: `ftmemo.cli.main.cli` (console script ``ftmemo``).
"""
