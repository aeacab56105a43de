# topmark:header:start
#
#   project      : FtMemo
#   file         : host.py
#   file_relpath : src/ftmemo/host.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Editor host interface.

FtMemo does not talk to an editor directly. Everything it needs from the host
(buffer names, the filetype option, notifications, timers and event
subscriptions) goes through the small `EditorHost` protocol, so the core can be
driven by any editor binding or by an in-memory fake in tests.

Ordering contract:
    The host dispatcher runs callbacks one at a time. `EditorHost.defer` must
    run its callback after the given delay and after the host's own automatic
    filetype detection for the buffer has settled; FtMemo relies on this to
    restore a filetype that the host will not overwrite.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from ftmemo.core.diagnostics import DiagnosticLevel

#: Host-specific buffer handle (e.g., a buffer number).
BufferId = int

#: Severity of a user notification.
NotifyLevel = DiagnosticLevel


class HostEvent(Enum):
    """Events FtMemo subscribes to."""

    BUFFER_OPENED = "buffer_opened"
    """A file was read into a buffer, or a new file buffer was created."""

    FILETYPE_CHANGED = "filetype_changed"
    """The host fired its filetype event for a buffer."""

    FILETYPE_OPTION_SET = "filetype_option_set"
    """The filetype option was assigned; the value may not be committed yet."""


class EditorHost(Protocol):
    """Minimal surface FtMemo needs from an editor."""

    def current_buffer(self) -> BufferId:
        """Return the handle of the buffer the user is working in."""
        ...

    def buffer_name(self, buf: BufferId) -> str:
        """Return the file name associated with *buf*, or ``""`` when unnamed."""
        ...

    def get_filetype(self, buf: BufferId) -> str:
        """Return the filetype option of *buf* (``""`` when unset)."""
        ...

    def set_filetype(self, buf: BufferId, filetype: str) -> None:
        """Assign the filetype option of *buf*."""
        ...

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Show a message to the user."""
        ...

    def defer(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run *callback* once after *delay_ms* milliseconds."""
        ...

    def subscribe(self, event: HostEvent, callback: Callable[[BufferId], None]) -> None:
        """Call *callback* with the affected buffer every time *event* fires."""
        ...
