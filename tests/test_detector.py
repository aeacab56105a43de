# topmark:header:start
#
#   project      : FtMemo
#   file         : test_detector.py
#   file_relpath : tests/test_detector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for manual-change classification (`ftmemo.detector`)."""

from __future__ import annotations

import pytest

from ftmemo.detector import Classification, DetectorState, ManualChangeDetector


@pytest.fixture
def state() -> DetectorState:
    return DetectorState()


@pytest.fixture
def detector(state: DetectorState) -> ManualChangeDetector:
    return ManualChangeDetector(state)


def test_first_sighting_is_not_manual(
    detector: ManualChangeDetector, state: DetectorState
) -> None:
    assert detector.observe("/f", "text") is Classification.FIRST_SIGHTING
    assert state.baseline == {"/f": "text"}


def test_same_filetype_is_unchanged(detector: ManualChangeDetector) -> None:
    detector.observe("/f", "text")

    assert detector.observe("/f", "text") is Classification.UNCHANGED


def test_different_filetype_is_manual(
    detector: ManualChangeDetector, state: DetectorState
) -> None:
    detector.observe("/f", "text")

    result: Classification = detector.observe("/f", "python")

    assert result is Classification.MANUAL
    assert result.is_manual
    assert state.baseline["/f"] == "python"


def test_decision_compares_with_previous_observation_only(
    detector: ManualChangeDetector,
) -> None:
    detector.observe("/f", "text")
    detector.observe("/f", "python")

    assert detector.observe("/f", "python") is Classification.UNCHANGED
    assert detector.observe("/f", "text") is Classification.MANUAL


def test_empty_filetype_is_ignored_and_keeps_baseline(
    detector: ManualChangeDetector, state: DetectorState
) -> None:
    detector.observe("/f", "text")

    assert detector.observe("/f", "") is Classification.IGNORED
    assert state.baseline["/f"] == "text"
    assert detector.observe("/g", "") is Classification.IGNORED
    assert "/g" not in state.baseline


def test_suppressed_observation_is_never_manual(
    detector: ManualChangeDetector, state: DetectorState
) -> None:
    detector.observe("/f", "text")

    with state.suppress():
        assert detector.observe("/f", "python") is Classification.SUPPRESSED

    assert state.baseline["/f"] == "text"
    assert not state.suppressed


def test_suppress_resets_flag_on_exception(state: DetectorState) -> None:
    with pytest.raises(RuntimeError), state.suppress():
        assert state.suppressed
        raise RuntimeError("host failure")

    assert state.suppressed is False


def test_nested_suppress_keeps_outer_flag(state: DetectorState) -> None:
    with state.suppress():
        with state.suppress():
            pass
        assert state.suppressed

    assert not state.suppressed


def test_paths_are_independent(detector: ManualChangeDetector) -> None:
    detector.observe("/a", "text")

    assert detector.observe("/b", "python") is Classification.FIRST_SIGHTING


def test_forget_drops_baseline(detector: ManualChangeDetector, state: DetectorState) -> None:
    detector.observe("/f", "text")
    state.forget("/f")
    state.forget("/missing")

    assert detector.observe("/f", "python") is Classification.FIRST_SIGHTING
