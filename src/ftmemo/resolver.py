# topmark:header:start
#
#   project      : FtMemo
#   file         : resolver.py
#   file_relpath : src/ftmemo/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path resolution for buffer names.

Mapping keys are canonical absolute paths: the same physical file must map
to the same key no matter which relative path or symlink was used to open it.
Unresolvable names are not an error; they simply yield ``None``.
"""

from __future__ import annotations

import os
from pathlib import Path

from ftmemo.config.logging import FtmemoLogger, get_logger

logger: FtmemoLogger = get_logger(__name__)


def path_exists(path: str | os.PathLike[str]) -> bool:
    """Return True if *path* is an existing regular file or directory."""
    p = Path(path)
    return p.is_file() or p.is_dir()


def resolve_path(name: str | os.PathLike[str] | None, *, cwd: Path | None = None) -> Path | None:
    """Resolve a buffer name to a canonical absolute path.

    Args:
        name (str | os.PathLike[str] | None): The buffer's file name as reported by
            the host; ``None`` or ``""`` for unnamed/scratch buffers.
        cwd (Path | None): Base for relative names. Defaults to the process CWD.

    Returns:
        Path | None: The resolved path, or ``None`` when the buffer has no name
            or the target is neither an existing file nor an existing directory.
    """
    if name is None:
        return None
    raw: str = os.fspath(name)
    if raw == "":
        return None

    p = Path(os.path.expandvars(os.path.expanduser(raw)))
    if not p.is_absolute():
        p = (cwd or Path.cwd()) / p
    try:
        resolved: Path = p.resolve()
    except (OSError, RuntimeError) as e:
        # RuntimeError: symlink loop on older Pythons
        logger.debug("Cannot resolve %s: %s", p, e)
        return None

    if not path_exists(resolved):
        logger.trace("Not an existing file or directory: %s", resolved)
        return None
    return resolved


def display_path(path: str | os.PathLike[str]) -> str:
    """Return *path* with the home directory abbreviated to ``~``."""
    s: str = os.fspath(path)
    home: str = str(Path.home())
    if s == home:
        return "~"
    if s.startswith(home + os.sep):
        return "~" + s[len(home) :]
    return s
