# topmark:header:start
#
#   project      : FtMemo
#   file         : engine.py
#   file_relpath : src/ftmemo/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Restoration engine and mapping maintenance.

`FtMemo` ties together the `MappingStore`, the `ManualChangeDetector` and an
optional `EditorHost`:

- `FtMemo.restore` applies a remembered filetype when a file is opened, with
  the detector suppressed so the engine's own write is not taken for a user
  action. Without a remembered filetype it seeds the detector's baseline.
- `FtMemo.on_filetype_changed` feeds an observed filetype to the detector and
  persists it when the change is classified as manual.
- `FtMemo.cleanup`, `FtMemo.clear`, `FtMemo.remember` and `FtMemo.mappings`
  maintain and inspect the mapping.

Write failures never propagate: they are reported through the notifier and
the in-memory mapping is kept, so the next mutation retries the save.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from ftmemo.config.logging import FtmemoLogger, get_logger
from ftmemo.constants import NOTIFY_PREFIX
from ftmemo.detector import Classification, DetectorState, ManualChangeDetector
from ftmemo.errors import FtmemoValueError, StorageWriteError
from ftmemo.host import NotifyLevel
from ftmemo.resolver import display_path, path_exists, resolve_path

if TYPE_CHECKING:
    from ftmemo.host import BufferId, EditorHost
    from ftmemo.store import MappingStore

logger: FtmemoLogger = get_logger(__name__)

#: Callable receiving user-facing messages (already prefixed).
Notifier = Callable[[str, NotifyLevel], None]


class RestoreOutcome(Enum):
    """What `FtMemo.restore` did for a buffer."""

    UNRESOLVED = "unresolved"
    SEEDED = "seeded"
    RESTORED = "restored"


class FtMemo:
    """Remember and restore manually assigned filetypes.

    Args:
        store (MappingStore): The mapping store (loaded by `load`).
        host (EditorHost | None): Editor binding; required for buffer-based operations.
        state (DetectorState | None): Detector state to share; a fresh one by default.
        notifier (Notifier | None): Sink for user messages. Defaults to
            ``host.notify`` when a host is given, else to the logger.

    Attributes:
        store (MappingStore): The mapping store.
        host (EditorHost | None): Editor binding.
        state (DetectorState): Baseline table and suppression flag.
        detector (ManualChangeDetector): Classifier bound to ``state``.
        last_write_error (StorageWriteError | None): The most recent save failure,
            cleared by the next successful save.
    """

    def __init__(
        self,
        store: MappingStore,
        host: EditorHost | None = None,
        *,
        state: DetectorState | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.store = store
        self.host = host
        self.state = state or DetectorState()
        self.detector = ManualChangeDetector(self.state)
        self.last_write_error: StorageWriteError | None = None
        if notifier is not None:
            self._notifier: Notifier = notifier
        elif host is not None:
            self._notifier = host.notify
        else:
            self._notifier = _log_notifier

    # ------------------------------ plumbing ------------------------------

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Send a prefixed message to the notifier."""
        self._notifier(f"{NOTIFY_PREFIX} {message}", level)

    def _require_host(self) -> EditorHost:
        if self.host is None:
            raise RuntimeError("This operation needs an editor host")
        return self.host

    def load(self) -> dict[str, str]:
        """Create the storage directory if needed and load the mapping."""
        try:
            self.store.ensure_directory()
        except StorageWriteError as e:
            logger.error("%s", e)
            self.notify(str(e), NotifyLevel.ERROR)
        return self.store.load()

    def persist(self) -> bool:
        """Save the in-memory mapping, reporting failures to the user.

        Returns:
            bool: True if the mapping was written.
        """
        try:
            self.store.save()
        except StorageWriteError as e:
            logger.error("%s", e)
            self.last_write_error = e
            self.notify(str(e), NotifyLevel.ERROR)
            return False
        self.last_write_error = None
        return True

    def resolve_buffer(self, buf: BufferId | None = None) -> str | None:
        """Return the mapping key for *buf* (default: current buffer), or None."""
        host: EditorHost = self._require_host()
        if buf is None:
            buf = host.current_buffer()
        path: Path | None = resolve_path(host.buffer_name(buf))
        return str(path) if path is not None else None

    # ----------------------------- restoration -----------------------------

    def restore(self, buf: BufferId | None = None) -> RestoreOutcome:
        """Apply the remembered filetype to *buf*, or seed the baseline.

        Must run after the host's automatic detection for the buffer has
        completed; the session schedules it through `EditorHost.defer`.

        Args:
            buf (BufferId | None): Target buffer; defaults to the current buffer.

        Returns:
            RestoreOutcome: What was done.
        """
        host: EditorHost = self._require_host()
        if buf is None:
            buf = host.current_buffer()
        path: str | None = self.resolve_buffer(buf)
        if path is None:
            return RestoreOutcome.UNRESOLVED

        saved: str | None = self.store.mappings.get(path)
        if saved is None:
            auto_ft: str = host.get_filetype(buf)
            # An empty seed still counts: "" -> "make" is a manual change.
            self.state.baseline[path] = auto_ft
            logger.trace("Seeded baseline %s -> %r", path, auto_ft)
            return RestoreOutcome.SEEDED

        with self.state.suppress():
            host.set_filetype(buf, saved)
            self.state.baseline[path] = saved
        logger.debug("Restored filetype: %s -> %s", path, saved)
        return RestoreOutcome.RESTORED

    # ------------------------------ detection ------------------------------

    def observe(self, path: str, filetype: str) -> Classification:
        """Classify an observed filetype for *path*; persist it if manual."""
        result: Classification = self.detector.observe(path, filetype)
        if result.is_manual:
            self.store.mappings[path] = filetype
            if self.persist():
                logger.debug("Saved manual filetype: %s -> %s", path, filetype)
        return result

    def on_filetype_changed(self, buf: BufferId | None = None) -> Classification:
        """Handle a filetype event for *buf* (default: current buffer)."""
        host: EditorHost = self._require_host()
        if buf is None:
            buf = host.current_buffer()
        if self.state.suppressed:
            return Classification.SUPPRESSED
        path: str | None = self.resolve_buffer(buf)
        if path is None:
            return Classification.IGNORED
        return self.observe(path, host.get_filetype(buf))

    # ----------------------------- maintenance -----------------------------

    def cleanup(self) -> int:
        """Remove mappings whose path no longer exists.

        Returns:
            int: Number of removed entries.
        """
        stale: list[str] = [p for p in self.store.mappings if not path_exists(p)]
        for p in stale:
            del self.store.mappings[p]
            self.state.forget(p)
            logger.debug("Cleaned up mapping for non-existent file: %s", p)
        if stale:
            self.persist()
        return len(stale)

    def clear(self, path: str | Path | None = None, *, buf: BufferId | None = None) -> bool:
        """Forget the mapping for *path* (default: the buffer's path).

        When a host is attached, the buffer's filetype (default: current
        buffer) is reset to ``""`` whether or not a mapping existed.

        Args:
            path (str | Path | None): Path to forget; resolved like a buffer name.
            buf (BufferId | None): Buffer whose filetype is reset.

        Returns:
            bool: True if a mapping was removed.
        """
        if self.host is not None and buf is None:
            buf = self.host.current_buffer()

        key: str | None
        if path is not None:
            resolved: Path | None = resolve_path(path)
            # A vanished file can still have a stale mapping under its literal path.
            key = str(resolved) if resolved is not None else str(Path(path).absolute())
        elif buf is not None:
            key = self.resolve_buffer(buf)
        else:
            key = None

        removed: bool = False
        if key is not None and key in self.store.mappings:
            removed = True
            del self.store.mappings[key]
            self.state.forget(key)
            self.persist()
            logger.debug("Cleared saved filetype for: %s", key)
            self.notify(f"Cleared saved filetype for: {Path(key).name}")
        elif path is None:
            self.notify("No saved filetype found for current file")
        else:
            self.notify(f"No saved filetype found for: {display_path(key)}")

        if self.host is not None and buf is not None:
            with self.state.suppress():
                self.host.set_filetype(buf, "")
            logger.debug("Cleared current buffer filetype")
        return removed

    def remember(self, path: str | Path, filetype: str) -> str:
        """Store *filetype* for *path* explicitly.

        Returns:
            str: The mapping key that was written.

        Raises:
            FtmemoValueError: If the filetype is empty or the path does not exist.
        """
        if not filetype:
            raise FtmemoValueError("Filetype must not be empty")
        resolved: Path | None = resolve_path(path)
        if resolved is None:
            raise FtmemoValueError(f"Not an existing file or directory: {path}")
        key: str = str(resolved)
        self.store.mappings[key] = filetype
        self.state.baseline[key] = filetype
        self.persist()
        return key

    def mappings(self) -> list[tuple[str, str]]:
        """Return a sorted snapshot of ``(path, filetype)`` pairs."""
        return sorted(self.store.mappings.items())

    def show(self) -> None:
        """Notify the user with the list of remembered filetypes."""
        entries: list[tuple[str, str]] = self.mappings()
        if not entries:
            self.notify("No saved filetype mappings")
            return
        lines: list[str] = ["Saved filetype mappings:"]
        lines.extend(f"  {display_path(p)} -> {ft}" for p, ft in entries)
        self.notify("\n".join(lines))


def _log_notifier(message: str, level: NotifyLevel) -> None:
    if level is NotifyLevel.ERROR:
        logger.error("%s", message)
    elif level is NotifyLevel.WARNING:
        logger.warning("%s", message)
    else:
        logger.info("%s", message)
