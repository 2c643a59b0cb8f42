"""
Tree Locator: read-only queries over a goal's step forest.
"""
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from stepwise.models import Goal, Step


def iter_steps(steps: Sequence[Step]) -> Iterator[Step]:
    """Depth-first pre-order walk over a forest."""
    for step in steps:
        yield step
        yield from iter_steps(step.children)


def find_step(goal: Goal, step_id: str) -> Optional[Step]:
    """Return the step with ``step_id`` anywhere in the goal, or None."""
    return next((s for s in iter_steps(goal.steps) if s.id == step_id), None)


def find_siblings(goal: Goal, parent_id: Optional[str]) -> Optional[Tuple[Step, ...]]:
    """
    Return the sibling set under ``parent_id``.

    ``None`` selects the goal's root steps. Returns None when the parent
    does not exist, so callers can tell "missing" apart from "empty".
    """
    if parent_id is None:
        return goal.steps
    parent = find_step(goal, parent_id)
    if parent is None:
        return None
    return parent.children


def is_descendant(goal: Goal, ancestor_id: str, candidate_id: str) -> bool:
    """True iff ``candidate_id`` is reachable from ``ancestor_id`` via children."""
    ancestor = find_step(goal, ancestor_id)
    if ancestor is None:
        return False
    return any(s.id == candidate_id for s in iter_steps(ancestor.children))


def ancestor_ids(goal: Goal, step_id: str) -> List[str]:
    """Ids from the root down to the step's parent; empty if root or missing."""

    def walk(steps: Sequence[Step], path: List[str]) -> Optional[List[str]]:
        for step in steps:
            if step.id == step_id:
                return path
            found = walk(step.children, path + [step.id])
            if found is not None:
                return found
        return None

    return walk(goal.steps, []) or []


def collect_ids(goal: Goal) -> Set[str]:
    return {s.id for s in iter_steps(goal.steps)}
