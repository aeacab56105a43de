# topmark:header:start
#
#   project      : FtMemo
#   file         : errors.py
#   file_relpath : src/ftmemo/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the FtMemo core.

The core never lets these escape into the editor host: the engine catches
`StorageWriteError` and turns it into an error notification, and
`MappingStore.load` recovers from `StorageCorruptedError` on its own. The CLI
maps them onto its click exceptions and exit codes.
"""

from __future__ import annotations

from pathlib import Path


class FtmemoError(Exception):
    """Base class for all FtMemo errors."""


class StorageError(FtmemoError):
    """Base class for errors concerning the mapping store file."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class StorageCorruptedError(StorageError):
    """The store file exists but does not decode to a path -> filetype table."""


class StorageWriteError(StorageError):
    """The store file could not be serialized or opened for writing."""


class FtmemoValueError(FtmemoError, ValueError):
    """Invalid argument for an explicit mapping operation (e.g., empty filetype)."""
