# topmark:header:start
#
#   project      : FtMemo
#   file         : detector.py
#   file_relpath : src/ftmemo/detector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Manual-vs-automatic filetype change detection.

The detector cannot observe user intent. It only knows, per path, the last
filetype it witnessed (the *baseline*) and whether a restoration is currently
writing the filetype (the *suppression* flag). A change is classified as
manual when the new filetype differs from the baseline while not suppressed.

Rules for an observation ``(path, new_ft)``:
    1. ``new_ft == ""``: ignored; the baseline is left untouched.
    2. Suppressed: never manual; the restoring code sets the baseline itself.
    3. No baseline yet: first sighting, not manual.
    4. Same as baseline: unchanged, not manual.
    5. Different from baseline: manual.

After rules 3 to 5 the baseline becomes ``new_ft``, so each decision compares
only against the immediately preceding observed state. A baseline of
``""`` (seeded by restore when nothing was detected) is a real baseline, so
``"" -> "make"`` is manual.

Known limitations: a filetype changed outside the observed event stream, or
two changes for the same path straddling a suppression window, can be
misclassified. A file opened for the first time with a wrong auto-detected
filetype that the user corrects before any observation is indistinguishable
from the seed event.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum

from ftmemo.config.logging import FtmemoLogger, get_logger

logger: FtmemoLogger = get_logger(__name__)


class Classification(Enum):
    """Outcome of a single filetype-change observation."""

    IGNORED = "ignored"
    SUPPRESSED = "suppressed"
    FIRST_SIGHTING = "first_sighting"
    UNCHANGED = "unchanged"
    MANUAL = "manual"

    @property
    def is_manual(self) -> bool:
        """Return True if the observation should be persisted."""
        return self is Classification.MANUAL


@dataclass
class DetectorState:
    """Per-instance detector state.

    Attributes:
        baseline (dict[str, str]): Last observed filetype per path. In memory only.
        suppressed (bool): True only while a programmatic filetype assignment runs.
            Toggle it through `suppress`, never directly.
    """

    baseline: dict[str, str] = field(default_factory=lambda: {})
    suppressed: bool = False

    @contextmanager
    def suppress(self) -> Iterator[None]:
        """Suppress manual classification for the duration of the block.

        The flag is reset on every exit path, including exceptions.
        Restorations are not reentrant; a nested block keeps the flag set
        until the outermost block exits.
        """
        previous: bool = self.suppressed
        self.suppressed = True
        try:
            yield
        finally:
            self.suppressed = previous

    def forget(self, path: str) -> None:
        """Drop the baseline for *path*, if any."""
        self.baseline.pop(path, None)


class ManualChangeDetector:
    """Classify filetype observations against a `DetectorState`.

    Args:
        state (DetectorState): The state object owned by the caller.
    """

    def __init__(self, state: DetectorState) -> None:
        self.state = state

    def observe(self, path: str, new_ft: str) -> Classification:
        """Classify one observed filetype for *path* and update the baseline.

        Args:
            path (str): Canonical absolute path of the file.
            new_ft (str): The filetype now set on the buffer.

        Returns:
            Classification: How the observation was classified.
        """
        if new_ft == "":
            logger.trace("Ignoring empty filetype for %s", path)
            return Classification.IGNORED

        if self.state.suppressed:
            logger.trace("Suppressed observation %s -> %s", path, new_ft)
            return Classification.SUPPRESSED

        previous: str | None = self.state.baseline.get(path)
        self.state.baseline[path] = new_ft

        if previous is None:
            logger.trace("First sighting %s -> %s", path, new_ft)
            return Classification.FIRST_SIGHTING
        if previous == new_ft:
            return Classification.UNCHANGED

        logger.debug("Manual filetype change detected: %s -> %s", path, new_ft)
        return Classification.MANUAL
