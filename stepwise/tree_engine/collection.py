"""
Goal Collection Manager: operations over the ordered list of goals.
"""
from dataclasses import replace
from typing import List, Optional, Sequence

from stepwise.models import Goal
from stepwise.tree_engine.ordering import next_order, renumber, sort_by_order, splice_move


def sort_goals(goals: Sequence[Goal]) -> List[Goal]:
    return sort_by_order(goals)


def find_goal(goals: Sequence[Goal], goal_id: str) -> Optional[Goal]:
    return next((g for g in goals if g.id == goal_id), None)


def append_goal(goals: Sequence[Goal], goal: Goal) -> List[Goal]:
    """Append with the next free top-level order."""
    return list(goals) + [replace(goal, order=next_order(goals))]


def replace_goal(goals: Sequence[Goal], goal: Goal) -> List[Goal]:
    return [goal if g.id == goal.id else g for g in goals]


def remove_goal(goals: Sequence[Goal], goal_id: str) -> List[Goal]:
    """Drop a goal. Like step deletion, the remaining orders are left as-is."""
    return [g for g in goals if g.id != goal_id]


def reorder_goals(goals: Sequence[Goal], source_index: int, destination_index: int) -> List[Goal]:
    """
    Move the goal at ``source_index`` to ``destination_index`` and renumber.

    Purely positional; indices come from a bounded UI gesture and are not
    range checked.
    """
    return list(renumber(splice_move(goals, source_index, destination_index)))
