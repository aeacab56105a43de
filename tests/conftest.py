# topmark:header:start
#
#   project      : FtMemo
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the FtMemo test suite.

This file sets up global fixtures, an in-memory editor host, and customizes the
logging configuration for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build a
    `MutableConfig`, then `freeze()` it. To tweak a frozen `Config`, call
    `Config.thaw()`, edit, and `freeze()` again (see `make_config`).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from ftmemo.config import logging
from ftmemo.config.model import MutableConfig
from ftmemo.engine import FtMemo
from ftmemo.host import HostEvent, NotifyLevel
from ftmemo.store import MappingStore

if TYPE_CHECKING:
    from ftmemo.config.model import Config
    from ftmemo.host import BufferId

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_ftmemo_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure FtMemo's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop ``FTMEMO_LOG_LEVEL``.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV, raising=False)


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config/data dirs into ``tmp_path`` so no real user files are touched.

    Returns:
        Path: The temporary XDG base directory.
    """
    base: Path = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(base / "data"))
    return base


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


# ------------------------------ Fake host ------------------------------


@dataclass
class FakeBuffer:
    """A buffer of the in-memory host."""

    name: str
    filetype: str = ""


@dataclass
class FakeHost:
    """In-memory `EditorHost`.

    Deferred callbacks are queued and only run by `run_deferred`; events are
    dispatched synchronously by `fire`. Every `set_filetype` call fires
    `HostEvent.FILETYPE_CHANGED` for the buffer, like an editor's filetype
    event would.
    """

    buffers: dict[int, FakeBuffer] = field(default_factory=lambda: {})
    current: int = 0
    notifications: list[tuple[str, NotifyLevel]] = field(default_factory=lambda: [])
    deferred: list[tuple[int, Callable[[], None]]] = field(default_factory=lambda: [])
    handlers: dict[HostEvent, list[Callable[[int], None]]] = field(default_factory=lambda: {})
    set_calls: list[tuple[int, str]] = field(default_factory=lambda: [])

    # --- EditorHost ---

    def current_buffer(self) -> BufferId:
        return self.current

    def buffer_name(self, buf: BufferId) -> str:
        return self.buffers[buf].name

    def get_filetype(self, buf: BufferId) -> str:
        return self.buffers[buf].filetype

    def set_filetype(self, buf: BufferId, filetype: str) -> None:
        self.set_calls.append((buf, filetype))
        self.buffers[buf].filetype = filetype
        self.fire(HostEvent.FILETYPE_CHANGED, buf)

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        self.notifications.append((message, level))

    def defer(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.deferred.append((delay_ms, callback))

    def subscribe(self, event: HostEvent, callback: Callable[[BufferId], None]) -> None:
        self.handlers.setdefault(event, []).append(callback)

    # --- test helpers ---

    def open(self, name: str | Path, filetype: str = "") -> int:
        """Create a buffer, make it current and fire `BUFFER_OPENED`."""
        buf: int = len(self.buffers) + 1
        self.buffers[buf] = FakeBuffer(name=str(name), filetype=filetype)
        self.current = buf
        self.fire(HostEvent.BUFFER_OPENED, buf)
        return buf

    def fire(self, event: HostEvent, buf: int) -> None:
        for cb in list(self.handlers.get(event, [])):
            cb(buf)

    def run_deferred(self) -> None:
        """Run queued callbacks in order (including ones queued meanwhile)."""
        while self.deferred:
            _, cb = self.deferred.pop(0)
            cb()

    def user_sets(self, buf: int, filetype: str) -> None:
        """Simulate ``:set filetype=...`` typed by the user."""
        self.set_filetype(buf, filetype)

    @property
    def messages(self) -> list[str]:
        return [m for m, _ in self.notifications]


@pytest.fixture
def host() -> FakeHost:
    """Return a fresh in-memory host."""
    return FakeHost()


@pytest.fixture
def storage_file(tmp_path: Path) -> Path:
    """Return a store location inside a not-yet-existing directory."""
    return tmp_path / "data" / "ftmemo" / "ftmemo.json"


@pytest.fixture
def store(storage_file: Path) -> MappingStore:
    """Return an empty store at ``storage_file``."""
    return MappingStore(storage_file)


@pytest.fixture
def engine(store: MappingStore, host: FakeHost) -> FtMemo:
    """Return an engine bound to the fake host, with its store directory created."""
    eng = FtMemo(store, host)
    eng.load()
    return eng


def make_file(directory: Path, name: str, content: str = "") -> Path:
    """Create a file and return its resolved path."""
    p: Path = directory / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    return p.resolve()


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and attribute overrides.

    Args:
        **overrides (Any): Attributes set on the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
