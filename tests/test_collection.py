from stepwise.models import Goal
from stepwise.tree_engine.collection import (
    append_goal,
    find_goal,
    remove_goal,
    reorder_goals,
    replace_goal,
    sort_goals,
)


def _goals(*ids):
    return [Goal(id=goal_id, title=goal_id.upper(), order=i) for i, goal_id in enumerate(ids)]


def test_reorder_goals_moves_and_renumbers():
    goals = _goals("a", "b", "c", "d")
    reordered = reorder_goals(goals, 3, 1)

    assert [(g.id, g.order) for g in reordered] == [("a", 0), ("d", 1), ("b", 2), ("c", 3)]
    assert [g.id for g in goals] == ["a", "b", "c", "d"]
    assert reordered[0] is goals[0]


def test_reorder_goals_forward():
    reordered = reorder_goals(_goals("a", "b", "c"), 0, 2)
    assert [(g.id, g.order) for g in reordered] == [("b", 0), ("c", 1), ("a", 2)]


def test_append_goal_uses_next_order():
    goals = [Goal(id="a", title="A", order=0), Goal(id="b", title="B", order=4)]
    appended = append_goal(goals, Goal(id="c", title="C"))
    assert appended[-1].order == 5
    assert append_goal([], Goal(id="x", title="X", order=9))[0].order == 0


def test_find_replace_remove():
    goals = _goals("a", "b")
    assert find_goal(goals, "b").title == "B"
    assert find_goal(goals, "z") is None

    renamed = replace_goal(goals, Goal(id="b", title="Renamed", order=1))
    assert [g.title for g in renamed] == ["A", "Renamed"]

    remaining = remove_goal(_goals("a", "b", "c"), "b")
    assert [(g.id, g.order) for g in remaining] == [("a", 0), ("c", 2)]


def test_sort_goals_by_order():
    goals = [Goal(id="a", title="A", order=2), Goal(id="b", title="B", order=0), Goal(id="c", title="C", order=1)]
    assert [g.id for g in sort_goals(goals)] == ["b", "c", "a"]
