# topmark:header:start
#
#   project      : FtMemo
#   file         : __init__.py
#   file_relpath : src/ftmemo/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo CLI subcommands."""
