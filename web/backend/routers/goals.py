from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from stepwise.exceptions import (
    GoalNotFoundError,
    PersistenceError,
    StepwiseError,
    StoreError,
    ValidationError,
)
from stepwise.goal_service import GoalService
from stepwise.models import goal_to_dict
from stepwise.tree_engine.facade import StepResult

router = APIRouter()


def get_goal_service() -> GoalService:
    return GoalService()


class GoalRequest(BaseModel):
    title: str
    description: Optional[str] = None


class ReorderGoalsRequest(BaseModel):
    source_index: int
    destination_index: int


class StepRequest(BaseModel):
    title: str
    description: Optional[str] = None
    parent_id: Optional[str] = None


class StepUpdateRequest(BaseModel):
    title: str
    description: Optional[str] = None


class ReorderStepRequest(BaseModel):
    new_index: int
    parent_id: Optional[str] = None


class MoveStepRequest(BaseModel):
    new_parent_id: Optional[str] = None


def _raise_http(err: StepwiseError):
    if isinstance(err, GoalNotFoundError):
        raise HTTPException(status_code=404, detail=err.message)
    if isinstance(err, ValidationError):
        raise HTTPException(status_code=400, detail=err.message)
    if isinstance(err, (PersistenceError, StoreError)):
        raise HTTPException(status_code=503, detail=err.get_user_message())
    raise HTTPException(status_code=500, detail=err.message)


def _step_payload(result: StepResult) -> Dict[str, Any]:
    return {
        "success": True,
        "changed": result.changed,
        "affected_ids": list(result.affected_ids),
        "goal": goal_to_dict(result.goal),
    }


# ---------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------
@router.get("")
def list_goals():
    try:
        service = get_goal_service()
    except StepwiseError as e:
        _raise_http(e)
    return {"goals": [goal_to_dict(g) for g in service.goals]}


@router.post("")
def create_goal(req: GoalRequest):
    try:
        goal = get_goal_service().add_goal(req.title, req.description)
    except StepwiseError as e:
        _raise_http(e)
    return {"success": True, "goal": goal_to_dict(goal)}


@router.post("/reorder")
def reorder_goals(req: ReorderGoalsRequest):
    """Drag a goal from one position to another in the top-level list."""
    try:
        service = get_goal_service()
        count = len(service.goals)
        if not (0 <= req.source_index < count and 0 <= req.destination_index < count):
            raise HTTPException(status_code=400, detail="Index out of range")
        goals = service.reorder_goals(req.source_index, req.destination_index)
    except StepwiseError as e:
        _raise_http(e)
    return {"success": True, "goals": [goal_to_dict(g) for g in goals]}


@router.get("/{goal_id}")
def get_goal(goal_id: str):
    try:
        goal = get_goal_service().require_goal(goal_id)
    except StepwiseError as e:
        _raise_http(e)
    return {"goal": goal_to_dict(goal)}


@router.put("/{goal_id}")
def update_goal(goal_id: str, req: GoalRequest):
    try:
        goal = get_goal_service().update_goal_details(goal_id, req.title, req.description)
    except StepwiseError as e:
        _raise_http(e)
    return {"success": True, "goal": goal_to_dict(goal)}


@router.delete("/{goal_id}")
def delete_goal(goal_id: str):
    try:
        get_goal_service().delete_goal(goal_id)
    except StepwiseError as e:
        _raise_http(e)
    return {"success": True}


# ---------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------
@router.post("/{goal_id}/steps")
def add_step(goal_id: str, req: StepRequest):
    try:
        result = get_goal_service().add_step(goal_id, req.title, req.description, req.parent_id)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)


@router.put("/{goal_id}/steps/{step_id}")
def update_step(goal_id: str, step_id: str, req: StepUpdateRequest):
    try:
        result = get_goal_service().update_step(goal_id, step_id, req.title, req.description)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)


@router.delete("/{goal_id}/steps/{step_id}")
def delete_step(goal_id: str, step_id: str):
    try:
        result = get_goal_service().delete_step(goal_id, step_id)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)


@router.post("/{goal_id}/steps/{step_id}/toggle")
def toggle_step(goal_id: str, step_id: str):
    """Flip completion; every sub-step follows."""
    try:
        result = get_goal_service().toggle_step_completion(goal_id, step_id)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)


@router.post("/{goal_id}/steps/{step_id}/duplicate")
def duplicate_step(goal_id: str, step_id: str):
    try:
        result = get_goal_service().duplicate_step(goal_id, step_id)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)


@router.post("/{goal_id}/steps/{step_id}/reorder")
def reorder_step(goal_id: str, step_id: str, req: ReorderStepRequest):
    if req.new_index < 0:
        raise HTTPException(status_code=400, detail="Index out of range")
    try:
        result = get_goal_service().reorder_steps(goal_id, step_id, req.new_index, req.parent_id)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)


@router.post("/{goal_id}/steps/{step_id}/move")
def move_step(goal_id: str, step_id: str, req: MoveStepRequest):
    """Re-parent a step. Moving under itself or a descendant leaves the goal as-is."""
    try:
        result = get_goal_service().move_step_to_parent(goal_id, step_id, req.new_parent_id)
    except StepwiseError as e:
        _raise_http(e)
    return _step_payload(result)
