"""
Tree Mutator: structural Goal -> Goal transforms.

Every operation returns a new Goal with ``updated_at`` refreshed on
success, and the very same Goal object on a no-op (missing step, missing
parent, illegal move). Only the path from the root to the changed node is
rebuilt; untouched subtrees are shared between the old and new value.
"""
from dataclasses import replace
from typing import Callable, Optional, Tuple

from stepwise.config_manager import config
from stepwise.exceptions import ValidationError
from stepwise.identity import IdentityProvider, resolve
from stepwise.logger import get_logger
from stepwise.models import Goal, Step, validate_title
from stepwise.tree_engine.locator import (
    ancestor_ids,
    collect_ids,
    find_siblings,
    find_step,
    is_descendant,
)
from stepwise.tree_engine.ordering import next_order, renumber, splice_move

logger = get_logger("mutator")

Steps = Tuple[Step, ...]


# ---------------------------------------------------------------------
# Rebuild helpers
# ---------------------------------------------------------------------
def _replace_step(
    steps: Steps, step_id: str, transform: Callable[[Step], Step]
) -> Tuple[Steps, bool]:
    """Apply ``transform`` to the step with ``step_id``, rebuilding its path."""
    rebuilt = []
    found = False
    for step in steps:
        if found:
            rebuilt.append(step)
        elif step.id == step_id:
            rebuilt.append(transform(step))
            found = True
        elif step.children:
            children, found = _replace_step(step.children, step_id, transform)
            rebuilt.append(replace(step, children=children) if found else step)
        else:
            rebuilt.append(step)
    return tuple(rebuilt), found


def _replace_siblings(
    steps: Steps, parent_id: Optional[str], transform: Callable[[Steps], Steps]
) -> Optional[Steps]:
    """Apply ``transform`` to a sibling set; None when the parent is missing."""
    if parent_id is None:
        return transform(steps)
    rebuilt, found = _replace_step(
        steps, parent_id, lambda parent: replace(parent, children=transform(parent.children))
    )
    return rebuilt if found else None


def _structural_parent(goal: Goal, step_id: str) -> Optional[str]:
    path = ancestor_ids(goal, step_id)
    return path[-1] if path else None


def _touch(goal: Goal, steps: Steps, identity: IdentityProvider) -> Goal:
    return replace(goal, steps=steps, updated_at=identity.now())


def _force_completion(step: Step, completed: bool) -> Step:
    return replace(
        step,
        completed=completed,
        children=tuple(_force_completion(c, completed) for c in step.children),
    )


def _clone(
    step: Step,
    parent_id: Optional[str],
    identity: IdentityProvider,
    title_suffix: str = "",
) -> Step:
    new_id = identity.new_id(config.STEP_ID_PREFIX)
    return replace(
        step,
        id=new_id,
        title=f"{step.title}{title_suffix}",
        parent_id=parent_id,
        children=tuple(_clone(c, new_id, identity) for c in step.children),
    )


# ---------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------
def insert_step(
    goal: Goal,
    new_step: Step,
    parent_id: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """Append ``new_step`` to the root list or to ``parent_id``'s children."""
    validate_title(new_step.title)
    if new_step.children:
        raise ValidationError("A new step must not have children", field="children")
    if new_step.id in collect_ids(goal):
        raise ValidationError(f"Step id already exists: {new_step.id}", field="id")

    def append(siblings: Steps) -> Steps:
        placed = replace(new_step, parent_id=parent_id, order=next_order(siblings))
        return siblings + (placed,)

    steps = _replace_siblings(goal.steps, parent_id, append)
    if steps is None:
        logger.debug("insert_step: parent %s not found in goal %s", parent_id, goal.id)
        return goal
    return _touch(goal, steps, resolve(identity))


def update_step(
    goal: Goal,
    step_id: str,
    title: str,
    description: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """Replace title and description; everything else is preserved."""
    validate_title(title)
    steps, found = _replace_step(
        goal.steps, step_id, lambda s: replace(s, title=title, description=description)
    )
    if not found:
        logger.debug("update_step: step %s not found in goal %s", step_id, goal.id)
        return goal
    return _touch(goal, steps, resolve(identity))


def delete_step(
    goal: Goal,
    step_id: str,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """Remove a step and its subtree. Remaining siblings keep their order values."""
    if find_step(goal, step_id) is None:
        logger.debug("delete_step: step %s not found in goal %s", step_id, goal.id)
        return goal

    def prune(steps: Steps) -> Steps:
        return tuple(
            replace(s, children=prune(s.children)) if s.children else s
            for s in steps
            if s.id != step_id
        )

    return _touch(goal, prune(goal.steps), resolve(identity))


def toggle_completion(
    goal: Goal,
    step_id: str,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """Flip a step's completion and force the new value onto every descendant."""
    steps, found = _replace_step(
        goal.steps, step_id, lambda s: _force_completion(s, not s.completed)
    )
    if not found:
        logger.debug("toggle_completion: step %s not found in goal %s", step_id, goal.id)
        return goal
    return _touch(goal, steps, resolve(identity))


def duplicate_subtree(
    goal: Goal,
    step_id: str,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """
    Deep-copy a step with fresh ids and append it as a sibling of the source.

    Only the root copy gets the copy suffix; descendants keep their titles,
    descriptions, completion flags and order.
    """
    source = find_step(goal, step_id)
    if source is None:
        logger.debug("duplicate_subtree: step %s not found in goal %s", step_id, goal.id)
        return goal

    identity = resolve(identity)
    parent_id = _structural_parent(goal, step_id)
    copy = _clone(source, parent_id, identity, title_suffix=config.COPY_SUFFIX)

    steps = _replace_siblings(
        goal.steps,
        parent_id,
        lambda siblings: siblings + (replace(copy, order=next_order(siblings)),),
    )
    return _touch(goal, steps, identity)


def reorder_siblings(
    goal: Goal,
    step_id: str,
    new_index: int,
    parent_id: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """Move a step to ``new_index`` within its sibling set and renumber 0..N-1."""
    siblings = find_siblings(goal, parent_id)
    if siblings is None:
        logger.debug("reorder_siblings: parent %s not found in goal %s", parent_id, goal.id)
        return goal

    source_index = next((i for i, s in enumerate(siblings) if s.id == step_id), None)
    if source_index is None:
        logger.debug("reorder_siblings: step %s is not a child of %s", step_id, parent_id)
        return goal

    reordered = renumber(splice_move(siblings, source_index, new_index))
    steps = _replace_siblings(goal.steps, parent_id, lambda _: reordered)
    return _touch(goal, steps, resolve(identity))


def can_move(goal: Goal, step_id: str, new_parent_id: Optional[str]) -> bool:
    """Whether re-parenting ``step_id`` under ``new_parent_id`` is legal."""
    if find_step(goal, step_id) is None:
        return False
    if new_parent_id is None:
        return True
    if new_parent_id == step_id or is_descendant(goal, step_id, new_parent_id):
        return False
    return find_step(goal, new_parent_id) is not None


def move_to_parent(
    goal: Goal,
    step_id: str,
    new_parent_id: Optional[str] = None,
    identity: Optional[IdentityProvider] = None,
) -> Goal:
    """
    Re-parent a step, subtree intact, to ``new_parent_id`` (root when None).

    Rejected as a no-op when the target is the step itself or one of its
    descendants. The source sibling set is renumbered after detaching.
    """
    if not can_move(goal, step_id, new_parent_id):
        logger.debug(
            "move_to_parent: rejected move of %s under %s in goal %s",
            step_id, new_parent_id, goal.id,
        )
        return goal

    source = find_step(goal, step_id)
    old_parent_id = _structural_parent(goal, step_id)

    detached = _replace_siblings(
        goal.steps,
        old_parent_id,
        lambda siblings: renumber(tuple(s for s in siblings if s.id != step_id)),
    )

    def attach(siblings: Steps) -> Steps:
        moved = replace(source, parent_id=new_parent_id, order=next_order(siblings))
        return siblings + (moved,)

    steps = _replace_siblings(detached, new_parent_id, attach)
    return _touch(goal, steps, resolve(identity))
