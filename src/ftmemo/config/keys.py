# topmark:header:start
#
#   project      : FtMemo
#   file         : keys.py
#   file_relpath : src/ftmemo/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML key names for FtMemo configuration.

Keys may appear at the top level of ``ftmemo.toml`` or inside an ``[ftmemo]``
table. Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by FtMemo configuration."""

    # Optional wrapping table
    SECTION_FTMEMO: Final[str] = "ftmemo"

    KEY_ENABLED: Final[str] = "enabled"
    KEY_STORAGE_FILE: Final[str] = "storage_file"
    KEY_DEBUG: Final[str] = "debug"
    KEY_CLEANUP_ON_STARTUP: Final[str] = "cleanup_on_startup"
    KEY_RESTORE_DELAY_MS: Final[str] = "restore_delay_ms"
    KEY_OPTION_SET_DELAY_MS: Final[str] = "option_set_delay_ms"

    # Export-only provenance key written by `ftmemo config`
    KEY_CONFIG_FILES: Final[str] = "config_files"

    ALLOWED_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_ENABLED,
            KEY_STORAGE_FILE,
            KEY_DEBUG,
            KEY_CLEANUP_ON_STARTUP,
            KEY_RESTORE_DELAY_MS,
            KEY_OPTION_SET_DELAY_MS,
        }
    )
