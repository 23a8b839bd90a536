"""Tests for roster configuration loading."""

import json
from pathlib import Path

import pytest

from roster.config import (
    DEFAULT_FLEX_PRIORITY,
    RosterConfig,
    config_from_dict,
    default_machines,
    default_staff,
)
from roster.domain.entities import Machine, Worker
from roster.io.config import load_config


REPO_ROOT = Path(__file__).resolve().parent.parent


def test_default_config():
    cfg = RosterConfig()

    assert len(cfg.staff) == 45
    assert all(w.retired for w in cfg.staff[:15])
    assert not any(w.retired for w in cfg.staff[15:])
    assert [m.id for m in cfg.machines] == [f"T{n:02d}" for n in range(3, 18)]
    assert {m.id for m in cfg.machines if m.three_shift} == {"T04", "T06", "T10", "T13", "T16"}
    assert {m.id for m in cfg.machines if m.flex_to_general} == {"T03", "T11", "T15", "T17"}
    assert cfg.flex_priority == DEFAULT_FLEX_PRIORITY
    assert cfg.max_days_per_week == 6


def test_load_config_without_path_returns_defaults():
    cfg = load_config()
    assert cfg.staff == default_staff()
    assert cfg.machines == default_machines()


def test_repo_config_matches_defaults():
    cfg = load_config(REPO_ROOT / "roster_config.yaml")

    assert cfg.staff == default_staff()
    assert cfg.machines == default_machines()
    assert cfg.flex_priority == ["T15", "T11", "T17", "T03"]


def test_load_yaml_partial(tmp_path):
    """Keys missing from the file keep their defaults."""
    path = tmp_path / "roster.yaml"
    path.write_text(
        "staff:\n"
        "  - {name: Ann, retired: true}\n"
        "  - Ben\n"
        "max_days_per_week: 5\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.staff == [Worker("Ann", retired=True), Worker("Ben")]
    assert cfg.machines == default_machines()
    assert cfg.max_days_per_week == 5


def test_load_json(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(
        json.dumps(
            {
                "staff": ["Ann", "Ben"],
                "machines": [{"id": "T01", "three_shift": True}, {"id": "T02", "flex_to_general": True}],
                "flex_priority": ["T02"],
            }
        ),
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.machines == [Machine("T01", three_shift=True), Machine("T02", flex_to_general=True)]
    assert cfg.flex_priority == ["T02"]


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path).staff == default_staff()


@pytest.mark.parametrize(
    "data, message",
    [
        ({"staff": ["Ann", "Ann"]}, "Duplicate staff name"),
        ({"staff": ["Ann", "  "]}, "empty name"),
        ({"machines": [{"id": "T01"}, {"id": "T01"}]}, "Duplicate machine id"),
        ({"machines": [{"id": "T01", "three_shift": True, "flex_to_general": True}]}, "both three-shift"),
        ({"max_days_per_week": 0}, "must be positive"),
    ],
)
def test_invalid_config_raises(data, message):
    with pytest.raises(ValueError, match=message):
        config_from_dict(data)


def test_unknown_flex_id_warns(capsys):
    cfg = config_from_dict({"flex_priority": ["T15", "T99"]})

    assert cfg.flex_priority == ["T15", "T99"]
    assert "[WARN]" in capsys.readouterr().out


def test_custom_machines_derive_flex_priority(tmp_path):
    """Without a flex_priority key, custom machines flex in declared order."""
    path = tmp_path / "roster.yaml"
    path.write_text(
        "machines:\n"
        "  - {id: A2, flex_to_general: true}\n"
        "  - {id: A1, three_shift: true}\n"
        "  - {id: A3, flex_to_general: true}\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.flex_priority == ["A2", "A3"]


def test_explicit_empty_flex_priority_is_kept():
    cfg = config_from_dict({"machines": [{"id": "T01", "flex_to_general": True}], "flex_priority": []})
    assert cfg.flex_priority == []


def test_config_built_in_code_derives_flex_priority():
    cfg = RosterConfig(machines=[Machine("T09"), Machine("T08", flex_to_general=True)])
    assert cfg.flex_priority == ["T08"]
