# topmark:header:start
#
#   project      : FtMemo
#   file         : test_config.py
#   file_relpath : tests/config/test_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for configuration loading, layering and export (`ftmemo.config`)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import tomlkit

from ftmemo.config.model import Config, MutableConfig, load_config
from ftmemo.constants import DEFAULT_OPTION_SET_DELAY_MS, DEFAULT_RESTORE_DELAY_MS
from ftmemo.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from pathlib import Path


def write_toml(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults(isolated_xdg: Path) -> None:
    config: Config = load_config()

    assert config.enabled is True
    assert config.debug is False
    assert config.cleanup_on_startup is True
    assert config.restore_delay_ms == DEFAULT_RESTORE_DELAY_MS
    assert config.option_set_delay_ms == DEFAULT_OPTION_SET_DELAY_MS
    assert config.storage_file == isolated_xdg / "data" / "ftmemo" / "ftmemo.json"
    assert config.config_files == ()
    assert config.diagnostics == ()


def test_default_storage_without_xdg(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("XDG_DATA_HOME")
    monkeypatch.setenv("HOME", str(tmp_path))

    config: Config = load_config(use_user_config=False)

    assert config.storage_file == tmp_path / ".local" / "share" / "ftmemo" / "ftmemo.json"


def test_user_config_is_discovered(isolated_xdg: Path) -> None:
    path: Path = write_toml(
        isolated_xdg / "config" / "ftmemo" / "ftmemo.toml",
        "debug = true\nrestore_delay_ms = 50\n",
    )

    config: Config = load_config()

    assert config.debug is True
    assert config.restore_delay_ms == 50
    assert config.config_files == (path,)


def test_user_config_can_be_skipped(isolated_xdg: Path) -> None:
    write_toml(isolated_xdg / "config" / "ftmemo" / "ftmemo.toml", "debug = true\n")

    assert load_config(use_user_config=False).debug is False


def test_section_table_is_accepted(tmp_path: Path) -> None:
    path: Path = write_toml(tmp_path / "c.toml", "[ftmemo]\ncleanup_on_startup = false\n")

    assert load_config(config_file=path).cleanup_on_startup is False


def test_relative_storage_file_resolves_against_config_dir(tmp_path: Path) -> None:
    path: Path = write_toml(tmp_path / "cfg" / "c.toml", 'storage_file = "state/map.json"\n')

    config: Config = load_config(config_file=path)

    assert config.storage_file == (tmp_path / "cfg" / "state" / "map.json").resolve()


def test_override_storage_file_resolves_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    config: Config = load_config(overrides={"storage_file": "m.json"})

    assert config.storage_file == (tmp_path / "m.json").resolve()


def test_overrides_win_and_none_is_ignored(tmp_path: Path) -> None:
    path: Path = write_toml(tmp_path / "c.toml", "enabled = false\nrestore_delay_ms = 30\n")

    config: Config = load_config(
        config_file=path, overrides={"enabled": True, "restore_delay_ms": None}
    )

    assert config.enabled is True
    assert config.restore_delay_ms == 30


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ('enabled = "yes"\n', "Expected bool"),
        ("restore_delay_ms = -1\n", "must be >= 0"),
        ("option_set_delay_ms = true\n", "Expected int"),
        ("storage_file = 3\n", "Expected"),
        ("colour = 'red'\n", "colour"),
    ],
)
def test_bad_values_warn_and_fall_back(tmp_path: Path, text: str, fragment: str) -> None:
    path: Path = write_toml(tmp_path / "c.toml", text)

    config: Config = load_config(config_file=path)
    defaults: Config = MutableConfig.from_defaults().freeze()

    assert config.enabled == defaults.enabled
    assert config.restore_delay_ms == defaults.restore_delay_ms
    assert config.option_set_delay_ms == defaults.option_set_delay_ms
    assert len(config.diagnostics) == 1
    assert config.diagnostics[0].level is DiagnosticLevel.WARNING
    assert fragment in config.diagnostics[0].message


def test_invalid_toml_is_an_error_diagnostic(tmp_path: Path) -> None:
    path: Path = write_toml(tmp_path / "c.toml", "enabled = \n")

    config: Config = load_config(config_file=path)

    assert config.enabled is True
    assert [d.level for d in config.diagnostics] == [DiagnosticLevel.ERROR]


def test_to_toml_round_trips_through_loader(tmp_path: Path) -> None:
    config: Config = load_config(
        overrides={"storage_file": str(tmp_path / "s.json"), "option_set_delay_ms": 3}
    )
    exported: Path = write_toml(tmp_path / "export.toml", config.to_toml())

    reloaded: Config = load_config(config_file=exported)

    assert reloaded.storage_file == config.storage_file
    assert reloaded.option_set_delay_ms == 3


def test_to_toml_dict_provenance(tmp_path: Path) -> None:
    path: Path = write_toml(tmp_path / "c.toml", "debug = false\n")
    config: Config = load_config(config_file=path)

    table = tomlkit.parse(config.to_toml(include_provenance=True)).unwrap()["ftmemo"]

    assert table["config_files"] == [str(path)]
    assert "config_files" not in config.to_toml_dict()["ftmemo"]


def test_thaw_freeze_preserves_values(tmp_path: Path) -> None:
    config: Config = load_config(overrides={"storage_file": str(tmp_path / "x.json")})

    again: Config = config.thaw().freeze()

    assert again == config


def test_frozen_config_is_immutable() -> None:
    config: Config = MutableConfig.from_defaults().freeze()

    with pytest.raises(AttributeError):
        config.debug = True  # type: ignore[misc]
