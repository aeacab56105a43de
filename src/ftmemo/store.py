# topmark:header:start
#
#   project      : FtMemo
#   file         : store.py
#   file_relpath : src/ftmemo/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON persistence for the path -> filetype mapping.

File format:
    A single UTF-8 JSON object whose keys are absolute paths and whose values
    are non-empty filetype names. There is no envelope or version field.

Behavior:
    - `MappingStore.load` never fails: a missing file is an empty mapping, and
      content that does not decode to a string table is copied verbatim to a
      sibling ``<name>.backup`` file before starting over with an empty mapping.
    - `MappingStore.save` rewrites the whole file. The payload is serialized
      before the file is opened, so a serialization failure writes nothing.
      Failures raise `StorageWriteError`; the in-memory mapping is kept as is
      so the next save retries with the same content.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from ftmemo.config.logging import FtmemoLogger, get_logger
from ftmemo.constants import BACKUP_SUFFIX
from ftmemo.errors import StorageCorruptedError, StorageWriteError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: FtmemoLogger = get_logger(__name__)


def decode_mapping(text: str) -> dict[str, str]:
    """Decode store text into a mapping.

    Entries whose value is an empty string are dropped.

    Args:
        text (str): Raw file content.

    Returns:
        dict[str, str]: The decoded mapping.

    Raises:
        StorageCorruptedError: If the text is not a JSON object of string values.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageCorruptedError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StorageCorruptedError(f"Expected a JSON object, got {type(data).__name__}")

    table: dict[str, Any] = cast("dict[str, Any]", data)
    mapping: dict[str, str] = {}
    for key, value in table.items():
        if not isinstance(value, str):
            raise StorageCorruptedError(
                f"Expected string filetype for {key!r}, got {type(value).__name__}"
            )
        if value == "":
            logger.debug("Dropping empty filetype for %s", key)
            continue
        mapping[key] = value
    return mapping


def encode_mapping(mapping: Mapping[str, str]) -> str:
    """Encode a mapping as store text.

    Raises:
        StorageWriteError: If the mapping cannot be serialized.
    """
    try:
        return json.dumps(dict(mapping), indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise StorageWriteError(f"Failed to encode filetype mappings: {e}") from e


class MappingStore:
    """Owns the in-memory mapping and its backing JSON file.

    Args:
        path (Path): Location of the JSON store.

    Attributes:
        path (Path): Location of the JSON store.
        mappings (dict[str, str]): The current path -> filetype mapping.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.mappings: dict[str, str] = {}

    @property
    def backup_path(self) -> Path:
        """Sibling file that receives corrupted store content."""
        return self.path.with_name(self.path.name + BACKUP_SUFFIX)

    def ensure_directory(self) -> None:
        """Create the parent directory of the store (and any missing ancestors).

        Raises:
            StorageWriteError: If the directory cannot be created.
        """
        parent: Path = self.path.parent
        if parent.is_dir():
            return
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(
                f"Failed to create storage directory: {parent}", path=parent
            ) from e
        logger.debug("Created storage directory %s", parent)

    def load(self) -> dict[str, str]:
        """Load the mapping from disk, replacing the in-memory mapping.

        Returns:
            dict[str, str]: The loaded mapping (empty when the file is absent,
                blank, unreadable or corrupted).
        """
        if not self.path.exists():
            logger.debug("No existing storage file found at %s, starting fresh", self.path)
            self.mappings = {}
            return self.mappings

        try:
            raw: bytes = self.path.read_bytes()
        except OSError as e:
            logger.error("Cannot read storage file %s: %s", self.path, e)
            self.mappings = {}
            return self.mappings

        try:
            text: str = raw.decode("utf-8")
            if not text.strip():
                logger.debug("Storage file %s is empty", self.path)
                self.mappings = {}
                return self.mappings
            self.mappings = decode_mapping(text)
        except (UnicodeDecodeError, StorageCorruptedError) as e:
            logger.warning("Failed to parse storage file %s (%s), starting fresh", self.path, e)
            self._quarantine(raw)
            self.mappings = {}
            return self.mappings

        logger.debug("Loaded %d filetype mappings", len(self.mappings))
        return self.mappings

    def _quarantine(self, raw: bytes) -> None:
        """Copy corrupted content to the backup file, overwriting any previous backup."""
        try:
            self.backup_path.write_bytes(raw)
        except OSError as e:
            logger.error("Failed to back up corrupted storage file to %s: %s", self.backup_path, e)
            return
        logger.info("Backed up corrupted storage file to: %s", self.backup_path)

    def save(self, mapping: Mapping[str, str] | None = None) -> None:
        """Serialize and overwrite the store file in full.

        Args:
            mapping (Mapping[str, str] | None): Mapping to persist; replaces the
                in-memory mapping when given. Defaults to the in-memory mapping.

        Raises:
            StorageWriteError: If serialization fails (nothing is written) or the
                file cannot be opened for writing.
        """
        if mapping is not None:
            self.mappings = dict(mapping)

        content: str = encode_mapping(self.mappings)
        try:
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise StorageWriteError(
                f"Failed to open storage file for writing: {self.path}", path=self.path
            ) from e
        logger.debug("Saved %d filetype mappings", len(self.mappings))
