# topmark:header:start
#
#   project      : FtMemo
#   file         : session.py
#   file_relpath : src/ftmemo/session.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wire an `FtMemo` engine to an editor host.

`FtMemoSession.start` performs the startup sequence (storage directory,
load, optional cleanup) and subscribes to host events:

- `HostEvent.BUFFER_OPENED`: restore, deferred by ``restore_delay_ms`` so the
  host's own filetype detection runs first.
- `HostEvent.FILETYPE_CHANGED`: observe immediately.
- `HostEvent.FILETYPE_OPTION_SET`: observe, deferred by ``option_set_delay_ms``
  so the committed option value is read.

Callbacks never raise into the host: unexpected errors are logged and
reported as error notifications.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ftmemo.config.logging import FtmemoLogger, apply_debug_flag, get_logger
from ftmemo.config.model import load_config
from ftmemo.engine import FtMemo
from ftmemo.host import HostEvent, NotifyLevel
from ftmemo.store import MappingStore

if TYPE_CHECKING:
    from ftmemo.config.model import Config
    from ftmemo.host import BufferId, EditorHost

logger: FtmemoLogger = get_logger(__name__)


class FtMemoSession:
    """An engine bound to a host and a configuration.

    Args:
        host (EditorHost): The editor binding.
        config (Config): Effective configuration.

    Attributes:
        host (EditorHost): The editor binding.
        config (Config): Effective configuration.
        engine (FtMemo): The engine driven by host events.
        started (bool): True once `start` subscribed to host events.
    """

    def __init__(self, host: EditorHost, config: Config) -> None:
        self.host = host
        self.config = config
        self.engine = FtMemo(MappingStore(config.storage_file), host)
        self.started = False

    def start(self) -> bool:
        """Load the store and subscribe to host events.

        Returns:
            bool: False when FtMemo is disabled (nothing is registered).
        """
        if not self.config.enabled:
            logger.debug("FtMemo disabled by configuration")
            return False
        if self.started:
            return True

        apply_debug_flag(self.config.debug)
        for diag in self.config.diagnostics:
            logger.warning("Config: %s", diag.message)

        self.engine.load()
        if self.config.cleanup_on_startup:
            removed: int = self.engine.cleanup()
            if removed:
                logger.debug("Removed %d stale mapping(s) at startup", removed)

        self.host.subscribe(HostEvent.BUFFER_OPENED, self._on_buffer_opened)
        self.host.subscribe(HostEvent.FILETYPE_CHANGED, self._on_filetype_changed)
        self.host.subscribe(HostEvent.FILETYPE_OPTION_SET, self._on_option_set)
        self.started = True
        logger.debug("FtMemo initialized (storage: %s)", self.config.storage_file)
        return True

    # ------------------------------ handlers ------------------------------

    def _guarded(self, action: Callable[[], Any]) -> None:
        try:
            action()
        except Exception as e:
            logger.exception("Unexpected error in FtMemo callback")
            self.engine.notify(f"Unexpected error: {e}", NotifyLevel.ERROR)

    def _on_buffer_opened(self, buf: BufferId) -> None:
        self.host.defer(
            self.config.restore_delay_ms,
            lambda: self._guarded(lambda: self.engine.restore(buf)),
        )

    def _on_filetype_changed(self, buf: BufferId) -> None:
        self._guarded(lambda: self.engine.on_filetype_changed(buf))

    def _on_option_set(self, buf: BufferId) -> None:
        self.host.defer(
            self.config.option_set_delay_ms,
            lambda: self._guarded(lambda: self.engine.on_filetype_changed(buf)),
        )

    # ------------------------------ commands ------------------------------

    def show(self) -> None:
        """Show all remembered filetypes."""
        self.engine.show()

    def clear(self) -> bool:
        """Forget the current file's filetype and reset the buffer's filetype."""
        return self.engine.clear()

    def cleanup(self) -> int:
        """Drop mappings for files that no longer exist."""
        removed: int = self.engine.cleanup()
        self.engine.notify("Cleaned up mappings for non-existent files")
        return removed


def setup(
    host: EditorHost,
    config: Config | None = None,
    **overrides: Any,
) -> FtMemoSession:
    """Create and start a session.

    Args:
        host (EditorHost): The editor binding.
        config (Config | None): Effective configuration; loaded from the user
            config file and ``overrides`` when omitted.
        **overrides (Any): Config overrides keyed like the TOML keys
            (``enabled``, ``storage_file``, ``debug``, ...).

    Returns:
        FtMemoSession: The session (started unless disabled).
    """
    if config is None:
        config = load_config(overrides=overrides)
    elif overrides:
        config = config.thaw().apply_overrides(overrides).freeze()
    session = FtMemoSession(host, config)
    session.start()
    return session
