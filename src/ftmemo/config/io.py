# topmark:header:start
#
#   project      : FtMemo
#   file         : io.py
#   file_relpath : src/ftmemo/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and typed value getters for FtMemo configuration.

Parsing and rendering are done with `tomlkit`; parsed documents are returned
as plain ``dict`` structures. The ``*_checked`` getters never raise on a type
mismatch: they log a warning, record a diagnostic and return ``None`` so the
caller keeps the value from the previous configuration layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from ftmemo.config.keys import Toml
from ftmemo.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from ftmemo.config.logging import FtmemoLogger
    from ftmemo.core.diagnostics import DiagnosticLog

TomlTable = dict[str, Any]

logger: FtmemoLogger = get_logger(__name__)


def load_toml_dict(path: Path, *, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (e.g., ``ftmemo.toml``).
        diagnostics (DiagnosticLog | None): Receives an error diagnostic on failure.

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add_error(f"Cannot read {path}: {e}")
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add_error(f"Invalid TOML in {path}: {e}")
        return {}


def extract_ftmemo_table(data: TomlTable) -> TomlTable:
    """Return the ``[ftmemo]`` table if present, else the top-level table."""
    section: Any = data.get(Toml.SECTION_FTMEMO)
    if isinstance(section, dict):
        return cast("TomlTable", section)
    return data


def get_bool_value_or_none_checked(
    table: Mapping[str, Any],
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected bool in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected bool in {loc}, got {type(value).__name__}: {value}")
    return None


def get_int_value_or_none_checked(
    table: Mapping[str, Any],
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    minimum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not `int`.

    Notes:
        - Missing key / None -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values below ``minimum`` are rejected.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    # Note: bool is a subclass of int; exclude it.
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Expected int in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected int in {loc}, got {type(value).__name__}: {value!r}")
        return None

    if minimum is not None and value < minimum:
        logger.warning("Value for %s must be >= %d, got %d", loc, minimum, value)
        diagnostics.add_warning(f"Value for {loc} must be >= {minimum}, got {value}")
        return None

    return value


def get_string_value_or_none_checked(
    table: Mapping[str, Any],
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> str | None:
    """Return an optional non-empty string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if not isinstance(value, str):
        logger.warning("Expected string in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected string in {loc}, got {type(value).__name__}: {value}")
        return None
    if not value.strip():
        logger.warning("Empty string in %s ignored", loc)
        diagnostics.add_warning(f"Empty string in {loc} ignored")
        return None
    return value


def warn_unknown_keys(table: Mapping[str, Any], *, where: str, diagnostics: DiagnosticLog) -> None:
    """Record a warning for every key FtMemo does not recognize."""
    for key in table:
        if key == Toml.SECTION_FTMEMO or key in Toml.ALLOWED_KEYS:
            continue
        logger.warning("Unknown configuration key in %s: %s", where, key)
        diagnostics.add_warning(f"Unknown configuration key in {where}: {key}")


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings/lists.

    TOML has no `null`. For config dumps we omit keys with None values and drop
    None items from lists.
    """
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            k: str = k_any if isinstance(k_any, str) else str(k_any)
            out[k] = _strip_none_for_toml(v_any)
        return out

    if isinstance(value, list):
        seq: list[object] = cast("list[object]", value)
        return [_strip_none_for_toml(v) for v in seq if v is not None]

    return value


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document as a string.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))
