import json

import pytest

import stepwise.goal_store as goal_store_module
from stepwise.exceptions import StoreError
from stepwise.goal_store import GoalStore
from stepwise.models import Goal, Step


def _goal(goal_id="g1", order=0) -> Goal:
    child = Step(id="s2", title="Child", parent_id="s1", completed=True)
    root = Step(id="s1", title="Root", description="root step", children=(child,))
    return Goal(
        id=goal_id,
        title="Learn piano",
        description=None,
        created_at="2026-01-01T00:00:00",
        updated_at="2026-01-02T00:00:00",
        steps=(root,),
        order=order,
    )


def test_put_then_load_through_a_real_file(store):
    goal = _goal()
    store.put(goal)

    reopened = GoalStore(path=store.path)
    assert reopened.load("g1") == goal
    assert reopened.load_all() == [goal]

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw["goals"][0]["steps"][0]["children"][0]["parent_id"] == "s1"


def test_put_replaces_whole_record(store):
    store.put(_goal())
    store.put(Goal(id="g1", title="Replaced"))

    assert store.load("g1") == Goal(id="g1", title="Replaced")
    assert len(store.load_all()) == 1


def test_missing_file_and_missing_record(store):
    assert store.load_all() == []
    assert store.load("nope") is None
    store.delete("nope")
    assert not store.path.exists()


def test_delete(store):
    store.put(_goal("g1"))
    store.put(_goal("g2", order=1))
    store.delete("g1")
    assert [g.id for g in store.load_all()] == ["g2"]


def test_writes_leave_no_temp_files(store):
    store.put(_goal())
    store.put(_goal("g2"))
    assert sorted(p.name for p in store.path.parent.iterdir()) == ["goals.json"]


def test_corrupted_file_raises_instead_of_dropping_data(store):
    store.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        store.load_all()
    with pytest.raises(StoreError):
        store.put(_goal())
    assert store.path.read_text(encoding="utf-8") == "{not json"


def test_corrupted_record_raises(store):
    store.path.write_text(json.dumps({"goals": [{"id": "g1"}]}), encoding="utf-8")
    with pytest.raises(StoreError):
        store.load_all()


def test_unwritable_location_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = GoalStore(path=blocker / "goals.json")
    with pytest.raises(StoreError):
        store.put(_goal())


def test_default_path_follows_data_dir(data_dir):
    assert GoalStore().path == data_dir / "goals.json"
    assert goal_store_module.default_store_path() == data_dir / "goals.json"
