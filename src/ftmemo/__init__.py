# topmark:header:start
#
#   project      : FtMemo
#   file         : __init__.py
#   file_relpath : src/ftmemo/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo package.

FtMemo remembers filetypes that a user assigned by hand to individual files
and reapplies them the next time those files are opened in the editor. The
mapping lives in a small JSON store; a click-based CLI inspects and maintains it.
"""

from __future__ import annotations

from ftmemo.engine import FtMemo
from ftmemo.session import FtMemoSession, setup

__all__ = ["FtMemo", "FtMemoSession", "setup"]
