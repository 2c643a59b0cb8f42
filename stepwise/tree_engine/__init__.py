# Tree engine: pure operations over Goal/Step values.
# ordering -> locator -> mutator -> collection -> facade, leaf first.

from stepwise.tree_engine.facade import StepResult
from stepwise.tree_engine.locator import find_step, is_descendant
from stepwise.tree_engine.mutator import (
    delete_step,
    duplicate_subtree,
    insert_step,
    move_to_parent,
    reorder_siblings,
    toggle_completion,
    update_step,
)
from stepwise.tree_engine.collection import reorder_goals

__all__ = [
    "StepResult",
    "find_step",
    "is_descendant",
    "insert_step",
    "update_step",
    "delete_step",
    "toggle_completion",
    "duplicate_subtree",
    "reorder_siblings",
    "move_to_parent",
    "reorder_goals",
]
