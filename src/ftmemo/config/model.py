# topmark:header:start
#
#   project      : FtMemo
#   file         : model.py
#   file_relpath : src/ftmemo/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot consumed by the engine and session.
    - `MutableConfig`: a mutable builder used while merging layers; it can be
      frozen into `Config` and thawed back for edits.

Layering (later wins):
    1. runtime defaults (`MutableConfig.from_defaults`)
    2. the user config file (``$XDG_CONFIG_HOME/ftmemo/ftmemo.toml``) or an
       explicit ``--config`` file
    3. an overrides mapping (CLI flags or API dict)

Path semantics:
    - ``storage_file`` declared in a config file is normalized against that
      file's directory.
    - ``storage_file`` passed as an override is normalized against the CWD.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ftmemo.config.io import (
    extract_ftmemo_table,
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_value_or_none_checked,
    load_toml_dict,
    to_toml,
    warn_unknown_keys,
)
from ftmemo.config.keys import Toml
from ftmemo.config.logging import get_logger
from ftmemo.constants import (
    APP_DIR_NAME,
    DEFAULT_CONFIG_NAME,
    DEFAULT_OPTION_SET_DELAY_MS,
    DEFAULT_RESTORE_DELAY_MS,
    DEFAULT_STORAGE_NAME,
)
from ftmemo.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from ftmemo.config.io import TomlTable
    from ftmemo.config.logging import FtmemoLogger

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: FtmemoLogger = get_logger(__name__)


def default_data_dir() -> Path:
    """Return the FtMemo data directory (``$XDG_DATA_HOME/ftmemo``)."""
    xdg: str | None = os.environ.get("XDG_DATA_HOME")
    base: Path = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def default_storage_file() -> Path:
    """Return the default mapping store location."""
    return default_data_dir() / DEFAULT_STORAGE_NAME


def abs_path_from(base: Path, raw: str | os.PathLike[str]) -> Path:
    """Return an absolute Path for *raw* using *base* if *raw* is relative.

    ``~`` and environment variables are expanded first.
    """
    p = Path(os.path.expandvars(os.path.expanduser(str(raw))))
    return (base / p).resolve() if not p.is_absolute() else p.resolve()


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for FtMemo.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the configuration was built.
        enabled (bool): Master switch; when False the session registers nothing.
        storage_file (Path): Absolute path of the JSON mapping store.
        debug (bool): Emit debug logging from the ``ftmemo`` logger.
        cleanup_on_startup (bool): Drop mappings for vanished files when a session starts.
        restore_delay_ms (int): Deferral between buffer-open and restore.
        option_set_delay_ms (int): Deferral between an option-set event and its observation.
        config_files (tuple[Path | str, ...]): Config sources that contributed to this snapshot.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading and merging.
    """

    timestamp: str
    enabled: bool
    storage_file: Path
    debug: bool
    cleanup_on_startup: bool
    restore_delay_ms: int
    option_set_delay_ms: int
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    def to_toml_dict(self, *, include_provenance: bool = False) -> TomlTable:
        """Convert this Config into a TOML-serializable dict.

        Args:
            include_provenance (bool): Also export the list of contributing config files.

        Returns:
            TomlTable: the TOML-serializable dict representing the Config.
        """
        toml_dict: TomlTable = {
            Toml.KEY_ENABLED: self.enabled,
            Toml.KEY_STORAGE_FILE: str(self.storage_file),
            Toml.KEY_DEBUG: self.debug,
            Toml.KEY_CLEANUP_ON_STARTUP: self.cleanup_on_startup,
            Toml.KEY_RESTORE_DELAY_MS: self.restore_delay_ms,
            Toml.KEY_OPTION_SET_DELAY_MS: self.option_set_delay_ms,
        }
        if include_provenance:
            toml_dict[Toml.KEY_CONFIG_FILES] = [str(p) for p in self.config_files]
        return {Toml.SECTION_FTMEMO: toml_dict}

    def to_toml(self, *, include_provenance: bool = False) -> str:
        """Render this Config as a TOML document."""
        return to_toml(self.to_toml_dict(include_provenance=include_provenance))

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            timestamp=self.timestamp,
            enabled=self.enabled,
            storage_file=self.storage_file,
            debug=self.debug,
            cleanup_on_startup=self.cleanup_on_startup,
            restore_delay_ms=self.restore_delay_ms,
            option_set_delay_ms=self.option_set_delay_ms,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used while merging layers.

    Every setting is tri-state: ``None`` means "inherit from the previous
    layer". `freeze` fills anything still unset from the runtime defaults.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    enabled: bool | None = None
    storage_file: Path | None = None
    debug: bool | None = None
    cleanup_on_startup: bool | None = None
    restore_delay_ms: int | None = None
    option_set_delay_ms: int | None = None

    # Provenance
    config_files: list[Path | str] = field(default_factory=lambda: [])

    # Collected diagnostics while loading / merging.
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this mutable builder into an immutable Config."""
        return Config(
            timestamp=self.timestamp,
            enabled=True if self.enabled is None else self.enabled,
            storage_file=self.storage_file or default_storage_file(),
            debug=False if self.debug is None else self.debug,
            cleanup_on_startup=True if self.cleanup_on_startup is None else self.cleanup_on_startup,
            restore_delay_ms=(
                DEFAULT_RESTORE_DELAY_MS if self.restore_delay_ms is None else self.restore_delay_ms
            ),
            option_set_delay_ms=(
                DEFAULT_OPTION_SET_DELAY_MS
                if self.option_set_delay_ms is None
                else self.option_set_delay_ms
            ),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with FtMemo's runtime defaults."""
        return cls(
            enabled=True,
            storage_file=default_storage_file(),
            debug=False,
            cleanup_on_startup=True,
            restore_delay_ms=DEFAULT_RESTORE_DELAY_MS,
            option_set_delay_ms=DEFAULT_OPTION_SET_DELAY_MS,
        )

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return the user-scoped config path if it exists.

        Looks under XDG config (``$XDG_CONFIG_HOME/ftmemo/ftmemo.toml``).
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        path: Path = base / APP_DIR_NAME / DEFAULT_CONFIG_NAME
        if path.is_file():
            return path
        return None

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig:
        """Load configuration from a single TOML file.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig: The draft parsed from the file (empty if unreadable).
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        load_diagnostics = DiagnosticLog()
        data: TomlTable = load_toml_dict(path, diagnostics=load_diagnostics)
        draft: MutableConfig = cls.from_toml_dict(data, config_file=path)
        draft.diagnostics.extend(load_diagnostics)
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data.
            config_file (Path | None): Source file, used as base for relative paths.

        Returns:
            MutableConfig: The resulting draft.
        """
        table: TomlTable = extract_ftmemo_table(data)
        logger.trace("TOML [ftmemo]: %s", table)

        draft = cls()
        where: str = str(config_file) if config_file else "<dict>"
        if config_file is not None:
            draft.config_files = [config_file]

        warn_unknown_keys(table, where=where, diagnostics=draft.diagnostics)

        draft.enabled = get_bool_value_or_none_checked(
            table, Toml.KEY_ENABLED, where=where, diagnostics=draft.diagnostics
        )
        draft.debug = get_bool_value_or_none_checked(
            table, Toml.KEY_DEBUG, where=where, diagnostics=draft.diagnostics
        )
        draft.cleanup_on_startup = get_bool_value_or_none_checked(
            table, Toml.KEY_CLEANUP_ON_STARTUP, where=where, diagnostics=draft.diagnostics
        )
        draft.restore_delay_ms = get_int_value_or_none_checked(
            table, Toml.KEY_RESTORE_DELAY_MS, where=where, diagnostics=draft.diagnostics, minimum=0
        )
        draft.option_set_delay_ms = get_int_value_or_none_checked(
            table,
            Toml.KEY_OPTION_SET_DELAY_MS,
            where=where,
            diagnostics=draft.diagnostics,
            minimum=0,
        )

        raw_storage: str | None = get_string_value_or_none_checked(
            table, Toml.KEY_STORAGE_FILE, where=where, diagnostics=draft.diagnostics
        )
        if raw_storage is not None:
            base: Path = config_file.parent.resolve() if config_file else Path.cwd()
            draft.storage_file = abs_path_from(base, raw_storage)
            logger.debug("Normalized storage_file '%s' against %s", raw_storage, base)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The config whose values override those of this draft.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """

        def pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        merged = MutableConfig(
            timestamp=self.timestamp,
            enabled=pick(self.enabled, other.enabled),
            storage_file=pick(self.storage_file, other.storage_file),
            debug=pick(self.debug, other.debug),
            cleanup_on_startup=pick(self.cleanup_on_startup, other.cleanup_on_startup),
            restore_delay_ms=pick(self.restore_delay_ms, other.restore_delay_ms),
            option_set_delay_ms=pick(self.option_set_delay_ms, other.option_set_delay_ms),
            config_files=self.config_files + other.config_files,
        )
        merged.diagnostics.extend(self.diagnostics)
        merged.diagnostics.extend(other.diagnostics)
        return merged

    def apply_overrides(self, args: ArgsLike) -> MutableConfig:
        """Update fields from an overrides mapping (CLI or API).

        Keys mirror the TOML keys. ``None`` values are ignored so unset CLI
        options never clobber config-file values. Relative ``storage_file``
        values resolve against the current working directory.

        Args:
            args (ArgsLike): Overrides mapping.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        overrides: TomlTable = {k: v for k, v in args.items() if v is not None}
        if not overrides:
            return self

        raw_storage: Any = overrides.pop(Toml.KEY_STORAGE_FILE, None)
        layer: MutableConfig = MutableConfig.from_toml_dict(overrides)
        if raw_storage is not None:
            layer.storage_file = abs_path_from(Path.cwd(), str(raw_storage))

        merged: MutableConfig = self.merge_with(layer)
        self.enabled = merged.enabled
        self.storage_file = merged.storage_file
        self.debug = merged.debug
        self.cleanup_on_startup = merged.cleanup_on_startup
        self.restore_delay_ms = merged.restore_delay_ms
        self.option_set_delay_ms = merged.option_set_delay_ms
        self.diagnostics.extend(layer.diagnostics)
        return self


def load_config(
    *,
    config_file: Path | None = None,
    overrides: ArgsLike | None = None,
    use_user_config: bool = True,
) -> Config:
    """Build the effective runtime configuration.

    Args:
        config_file (Path | None): Explicit config file; replaces user config discovery.
        overrides (ArgsLike | None): Final override layer (CLI flags or API dict).
        use_user_config (bool): Whether to look for the user config file when
            ``config_file`` is not given.

    Returns:
        Config: The frozen effective configuration.
    """
    draft: MutableConfig = MutableConfig.from_defaults()

    source: Path | None = config_file
    if source is None and use_user_config:
        source = MutableConfig.discover_user_config_file()
    if source is not None:
        draft = draft.merge_with(MutableConfig.from_toml_file(source))

    if overrides:
        draft.apply_overrides(overrides)

    config: Config = draft.freeze()
    logger.debug("Effective config: %s", config)
    return config
