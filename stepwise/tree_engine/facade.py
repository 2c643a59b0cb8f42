"""
Engine facade: goal-id based entry points over locator, mutator and
collection manager.

Callers pass their current collection of goals. Step operations return a
StepResult (the new goal plus the ids they touched); goal-level operations
return the new goal or the new collection. Nothing here performs I/O.
"""
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from stepwise.config_manager import config
from stepwise.exceptions import GoalNotFoundError
from stepwise.identity import IdentityProvider, resolve
from stepwise.models import Goal, Step, validate_title
from stepwise.tree_engine import collection, locator, mutator
from stepwise.tree_engine.ordering import next_order


@dataclass(frozen=True)
class StepResult:
    goal: Goal
    affected_ids: Tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.affected_ids)


def require_goal(goals: Sequence[Goal], goal_id: str) -> Goal:
    goal = collection.find_goal(goals, goal_id)
    if goal is None:
        raise GoalNotFoundError(goal_id)
    return goal


def _result(before: Goal, after: Goal, *ids: str) -> StepResult:
    if after is before:
        return StepResult(goal=before)
    return StepResult(goal=after, affected_ids=tuple(ids))


# ---------------------------------------------------------------------
# Goal-level operations
# ---------------------------------------------------------------------
def create_goal(
    goals: Sequence[Goal],
    title: str,
    description: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """Build an empty goal placed after every existing goal."""
    validate_title(title)
    identity = resolve(identity)
    now = identity.now()
    return Goal(
        id=identity.new_id(config.GOAL_ID_PREFIX),
        title=title,
        description=description,
        created_at=now,
        updated_at=now,
        steps=(),
        order=next_order(goals),
    )


def update_goal_details(
    goals: Sequence[Goal],
    goal_id: str,
    title: str,
    description: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    validate_title(title)
    goal = require_goal(goals, goal_id)
    return replace(goal, title=title, description=description, updated_at=resolve(identity).now())


def delete_goal(goals: Sequence[Goal], goal_id: str) -> List[Goal]:
    require_goal(goals, goal_id)
    return collection.remove_goal(goals, goal_id)


def reorder_goals(goals: Sequence[Goal], source_index: int, destination_index: int) -> List[Goal]:
    return collection.reorder_goals(goals, source_index, destination_index)


# ---------------------------------------------------------------------
# Step operations
# ---------------------------------------------------------------------
def add_step(
    goals: Sequence[Goal],
    goal_id: str,
    title: str,
    description: Optional[str] = None,
    parent_id: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    """Create an empty leaf step at the end of the target sibling set."""
    validate_title(title)
    goal = require_goal(goals, goal_id)
    identity = resolve(identity)
    step = Step(
        id=identity.new_id(config.STEP_ID_PREFIX),
        title=title,
        description=description,
        completed=False,
        parent_id=parent_id,
    )
    updated = mutator.insert_step(goal, step, parent_id, identity=identity)
    return _result(goal, updated, step.id)


def update_step(
    goals: Sequence[Goal],
    goal_id: str,
    step_id: str,
    title: str,
    description: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    goal = require_goal(goals, goal_id)
    updated = mutator.update_step(goal, step_id, title, description, identity=identity)
    return _result(goal, updated, step_id)


def delete_step(
    goals: Sequence[Goal],
    goal_id: str,
    step_id: str,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    goal = require_goal(goals, goal_id)
    removed = locator.find_step(goal, step_id)
    updated = mutator.delete_step(goal, step_id, identity=identity)
    if removed is None:
        return _result(goal, updated)
    return _result(goal, updated, *(s.id for s in locator.iter_steps((removed,))))


def toggle_step_completion(
    goals: Sequence[Goal],
    goal_id: str,
    step_id: str,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    goal = require_goal(goals, goal_id)
    updated = mutator.toggle_completion(goal, step_id, identity=identity)
    toggled = locator.find_step(updated, step_id)
    if toggled is None:
        return _result(goal, updated)
    return _result(goal, updated, *(s.id for s in locator.iter_steps((toggled,))))


def duplicate_step(
    goals: Sequence[Goal],
    goal_id: str,
    step_id: str,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    """Duplicate a subtree; ``affected_ids[0]`` is the id of the new root copy."""
    goal = require_goal(goals, goal_id)
    updated = mutator.duplicate_subtree(goal, step_id, identity=identity)
    if updated is goal:
        return _result(goal, updated)
    parent_id = (locator.ancestor_ids(goal, step_id) or [None])[-1]
    copy = locator.find_siblings(updated, parent_id)[-1]
    return _result(goal, updated, *(s.id for s in locator.iter_steps((copy,))))


def reorder_steps(
    goals: Sequence[Goal],
    goal_id: str,
    step_id: str,
    new_index: int,
    parent_id: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    goal = require_goal(goals, goal_id)
    updated = mutator.reorder_siblings(goal, step_id, new_index, parent_id, identity=identity)
    return _result(goal, updated, step_id)


def move_step_to_parent(
    goals: Sequence[Goal],
    goal_id: str,
    step_id: str,
    new_parent_id: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> StepResult:
    goal = require_goal(goals, goal_id)
    updated = mutator.move_to_parent(goal, step_id, new_parent_id, identity=identity)
    return _result(goal, updated, step_id)
