from __future__ import annotations

import json

import pytest

from backend.core.scenarios import ScenarioNotFoundError, ScenarioStore
from factories import make_inputs


@pytest.fixture()
def store(tmp_path) -> ScenarioStore:
    return ScenarioStore(tmp_path / "scenarios.json")


def test_empty_store_lists_nothing(store):
    assert store.list_scenarios() == []


def test_save_and_reload_from_disk(store, tmp_path):
    saved = store.save_scenario("  Retirement  ", make_inputs(), target_today=250000, preset_name="Robo-investor")

    assert saved.name == "Retirement"
    assert saved.createdAt == saved.updatedAt

    reopened = ScenarioStore(tmp_path / "scenarios.json")
    [loaded] = reopened.list_scenarios()
    assert loaded == saved
    assert loaded.inputs == make_inputs()

    raw = json.loads((tmp_path / "scenarios.json").read_text(encoding="utf-8"))
    assert isinstance(raw, list)
    assert raw[0]["inputs"]["compoundFrequency"] == "monthly"


def test_blank_name_becomes_untitled(store):
    assert store.save_scenario("   ", make_inputs()).name == "Untitled"


def test_duplicate_gets_new_identity(store):
    original = store.save_scenario("Base", make_inputs(apr=0.07))
    copy = store.duplicate_scenario(original.id)

    assert copy.id != original.id
    assert copy.name == "Base (Copy)"
    assert copy.inputs == original.inputs
    assert [s.id for s in store.list_scenarios()] == [original.id, copy.id]


def test_update_changes_only_given_fields(store):
    original = store.save_scenario("Base", make_inputs())
    updated = store.update_scenario(original.id, name="Renamed", inputs=make_inputs(apr=0.08))

    assert updated.name == "Renamed"
    assert updated.inputs.apr == 0.08
    assert updated.createdAt == original.createdAt
    assert store.get_scenario(original.id) == updated


def test_delete(store):
    keep = store.save_scenario("Keep", make_inputs())
    drop = store.save_scenario("Drop", make_inputs())

    store.delete_scenario(drop.id)

    assert [s.id for s in store.list_scenarios()] == [keep.id]
    with pytest.raises(ScenarioNotFoundError):
        store.delete_scenario(drop.id)


def test_unknown_ids_raise(store):
    with pytest.raises(ScenarioNotFoundError):
        store.get_scenario("missing")
    with pytest.raises(ScenarioNotFoundError):
        store.update_scenario("missing", name="x")
    with pytest.raises(ScenarioNotFoundError):
        store.duplicate_scenario("missing")


def test_corrupt_file_is_treated_as_empty(tmp_path, caplog):
    path = tmp_path / "scenarios.json"
    path.write_text("{not json", encoding="utf-8")
    store = ScenarioStore(path)

    assert store.list_scenarios() == []
    assert "unreadable scenario store" in caplog.text

    store.save_scenario("Fresh", make_inputs())
    assert len(store.list_scenarios()) == 1


def test_invalid_record_is_skipped_without_losing_the_rest(store, tmp_path, caplog):
    kept = store.save_scenario("Keep me", make_inputs())
    path = tmp_path / "scenarios.json"
    records = json.loads(path.read_text(encoding="utf-8"))
    legacy = dict(records[0], id="legacy", name="Too long")
    legacy["inputs"] = dict(legacy["inputs"], years=61)
    records.append(legacy)
    path.write_text(json.dumps(records), encoding="utf-8")

    assert [s.id for s in store.list_scenarios()] == [kept.id]
    assert "skipping invalid scenario" in caplog.text

    fresh = store.save_scenario("New", make_inputs())
    assert [s.name for s in store.list_scenarios()] == ["Keep me", "New"]
    assert [r["id"] for r in json.loads(path.read_text(encoding="utf-8"))] == [kept.id, fresh.id]


def test_non_utf8_file_is_treated_as_empty(tmp_path, caplog):
    path = tmp_path / "scenarios.json"
    path.write_bytes(b"\xff\xfe[\x80]")
    store = ScenarioStore(path)

    assert store.list_scenarios() == []
    assert "unreadable scenario store" in caplog.text

    store.save_scenario("Fresh", make_inputs())
    assert [s.name for s in store.list_scenarios()] == ["Fresh"]


def test_update_clears_optional_fields_only_when_passed(store):
    saved = store.save_scenario("Goal", make_inputs(), target_today=50000, preset_name="Savings account")

    renamed = store.update_scenario(saved.id, name="Goal v2")
    assert renamed.targetToday == 50000
    assert renamed.presetName == "Savings account"

    cleared = store.update_scenario(saved.id, target_today=None, preset_name=None)
    assert cleared.name == "Goal v2"
    assert cleared.targetToday is None
    assert cleared.presetName is None
    assert store.get_scenario(saved.id).targetToday is None
