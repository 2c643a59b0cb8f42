"""
Core data models: Goal and its Step tree.

Both are frozen dataclasses. Children are tuples, so a Goal value can be
shared freely; every engine operation builds a new Goal instead of editing
one in place.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from stepwise.exceptions import ValidationError


@dataclass(frozen=True)
class Step:
    """A node in a goal's step tree."""
    id: str
    title: str
    description: Optional[str] = None
    completed: bool = False
    parent_id: Optional[str] = None  # None means root level
    children: Tuple["Step", ...] = ()
    order: int = 0


@dataclass(frozen=True)
class Goal:
    """Top-level objective owning an ordered list of root steps."""
    id: str
    title: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    steps: Tuple[Step, ...] = field(default_factory=tuple)
    order: int = 0


def validate_title(title: Any, field_name: str = "title") -> str:
    """Reject missing, empty or whitespace-only titles."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title must not be empty", field=field_name)
    return title


# ---------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------
def step_to_dict(step: Step) -> Dict[str, Any]:
    return {
        "id": step.id,
        "title": step.title,
        "description": step.description,
        "completed": step.completed,
        "parent_id": step.parent_id,
        "order": step.order,
        "children": [step_to_dict(c) for c in step.children],
    }


def step_from_dict(d: Dict[str, Any]) -> Step:
    return Step(
        id=d["id"],
        title=d["title"],
        description=d.get("description"),
        completed=bool(d.get("completed", False)),
        parent_id=d.get("parent_id"),
        children=tuple(step_from_dict(c) for c in d.get("children", [])),
        order=int(d.get("order", 0)),
    )


def goal_to_dict(goal: Goal) -> Dict[str, Any]:
    return {
        "id": goal.id,
        "title": goal.title,
        "description": goal.description,
        "created_at": goal.created_at,
        "updated_at": goal.updated_at,
        "order": goal.order,
        "steps": [step_to_dict(s) for s in goal.steps],
    }


def goal_from_dict(d: Dict[str, Any]) -> Goal:
    return Goal(
        id=d["id"],
        title=d["title"],
        description=d.get("description"),
        created_at=d.get("created_at"),
        updated_at=d.get("updated_at"),
        steps=tuple(step_from_dict(s) for s in d.get("steps", [])),
        order=int(d.get("order", 0)),
    )
