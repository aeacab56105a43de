# topmark:header:start
#
#   project      : FtMemo
#   file         : __init__.py
#   file_relpath : src/ftmemo/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic pieces shared by the CLI (console protocol, exit codes, formats)."""
