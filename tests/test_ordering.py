import pytest

from stepwise.models import Step
from stepwise.tree_engine.ordering import is_dense, next_order, renumber, sort_by_order, splice_move


def _steps(*orders):
    return tuple(Step(id=f"s{i}", title=f"step {i}", order=o) for i, o in enumerate(orders))


def test_next_order_empty_and_with_gaps():
    assert next_order(()) == 0
    assert next_order(_steps(0, 1, 2)) == 3
    assert next_order(_steps(0, 5, 2)) == 6


def test_renumber_assigns_positions_and_reuses_items_in_place():
    steps = _steps(0, 4, 9)
    renumbered = renumber(steps)

    assert [s.order for s in renumbered] == [0, 1, 2]
    assert renumbered[0] is steps[0]
    assert [s.id for s in renumbered] == ["s0", "s1", "s2"]


@pytest.mark.parametrize(
    "source, destination, expected",
    [
        (2, 0, ["c", "a", "b"]),
        (0, 2, ["b", "c", "a"]),
        (1, 1, ["a", "b", "c"]),
        (0, 10, ["b", "c", "a"]),
        (2, -1, ["c", "a", "b"]),
        (1, -7, ["b", "a", "c"]),
    ],
)
def test_splice_move(source, destination, expected):
    assert splice_move(["a", "b", "c"], source, destination) == expected


def test_splice_move_does_not_touch_input():
    items = ["a", "b", "c"]
    splice_move(items, 0, 2)
    assert items == ["a", "b", "c"]


def test_sort_by_order_and_density():
    steps = _steps(2, 0, 1)
    assert [s.id for s in sort_by_order(steps)] == ["s1", "s2", "s0"]
    assert is_dense(steps)
    assert not is_dense(_steps(0, 2))
    assert not is_dense(_steps(0, 0))
