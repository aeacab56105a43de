# topmark:header:start
#
#   project      : FtMemo
#   file         : constants.py
#   file_relpath : src/ftmemo/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FtMemo Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    FTMEMO_VERSION: str = get_version("ftmemo")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    FTMEMO_VERSION = "0.0.0"

#: Prefix for every user-facing notification.
NOTIFY_PREFIX: str = "[ftmemo]"

#: Application directory name under the XDG data/config homes.
APP_DIR_NAME: str = "ftmemo"

#: Default storage and configuration file names.
DEFAULT_STORAGE_NAME: str = "ftmemo.json"
DEFAULT_CONFIG_NAME: str = "ftmemo.toml"

#: Suffix appended to the storage file name when quarantining corrupted content.
BACKUP_SUFFIX: str = ".backup"

#: Deferral (milliseconds) between a buffer-open event and the restore.
DEFAULT_RESTORE_DELAY_MS: int = 10

#: Deferral (milliseconds) between an option-set event and the observation.
DEFAULT_OPTION_SET_DELAY_MS: int = 1
