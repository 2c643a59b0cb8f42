"""
CLI: stepwise
Manage goals and their step trees from the terminal.
"""
from typing import Optional, Sequence

import click

from stepwise.exceptions import StepwiseError
from stepwise.goal_service import GoalService
from stepwise.models import Step
from stepwise.tree_engine.facade import StepResult


def _service() -> GoalService:
    return GoalService()


def _echo_steps(steps: Sequence[Step], depth: int = 1) -> None:
    for step in sorted(steps, key=lambda s: s.order):
        mark = "x" if step.completed else " "
        click.echo(f"{'  ' * depth}[{mark}] {step.title}  ({step.id})")
        _echo_steps(step.children, depth + 1)


def _report(result: StepResult, done: str) -> None:
    if result.changed:
        click.echo(f"✅ {done}: {', '.join(result.affected_ids)}")
    else:
        click.echo("ℹ️ Nothing changed (step not found or move not allowed)")


@click.group()
def stepwise():
    """Goal and step management commands"""
    pass


@stepwise.command("list")
def list_goals():
    """Show every goal with its step tree"""
    try:
        goals = _service().goals
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return

    if not goals:
        click.echo("ℹ️ No goals yet")
        return

    for goal in goals:
        click.echo(f"{goal.order}. {goal.title}  ({goal.id})")
        _echo_steps(goal.steps)


@stepwise.command("add-goal")
@click.argument("title")
@click.option("--description", "-d", default=None)
def add_goal(title: str, description: Optional[str]):
    """Create an empty goal at the end of the list"""
    try:
        goal = _service().add_goal(title, description)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    click.echo(f"✅ Goal created: {goal.id}")


@stepwise.command("delete-goal")
@click.argument("goal_id")
@click.confirmation_option(prompt="Delete this goal and all of its steps?")
def delete_goal(goal_id: str):
    """Delete a goal"""
    try:
        _service().delete_goal(goal_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    click.echo(f"✅ Goal deleted: {goal_id}")


@stepwise.command("reorder-goals")
@click.argument("source_index", type=int)
@click.argument("destination_index", type=int)
def reorder_goals(source_index: int, destination_index: int):
    """Move the goal at SOURCE_INDEX to DESTINATION_INDEX"""
    try:
        service = _service()
        count = len(service.goals)
        if not (0 <= source_index < count and 0 <= destination_index < count):
            click.echo(f"❌ Index out of range (0..{count - 1})", err=True)
            return
        goals = service.reorder_goals(source_index, destination_index)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    for goal in goals:
        click.echo(f"{goal.order}. {goal.title}")


@stepwise.command("add-step")
@click.argument("goal_id")
@click.argument("title")
@click.option("--description", "-d", default=None)
@click.option("--parent", "parent_id", default=None, help="Parent step id")
def add_step(goal_id: str, title: str, description: Optional[str], parent_id: Optional[str]):
    """Append a step to a goal, or under a parent step"""
    try:
        result = _service().add_step(goal_id, title, description, parent_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Step added")


@stepwise.command("edit-step")
@click.argument("goal_id")
@click.argument("step_id")
@click.argument("title")
@click.option("--description", "-d", default=None)
def edit_step(goal_id: str, step_id: str, title: str, description: Optional[str]):
    """Change a step's title and description"""
    try:
        result = _service().update_step(goal_id, step_id, title, description)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Step updated")


@stepwise.command("delete-step")
@click.argument("goal_id")
@click.argument("step_id")
def delete_step(goal_id: str, step_id: str):
    """Delete a step together with its sub-steps"""
    try:
        result = _service().delete_step(goal_id, step_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Steps deleted")


@stepwise.command()
@click.argument("goal_id")
@click.argument("step_id")
def toggle(goal_id: str, step_id: str):
    """Toggle completion of a step and all of its sub-steps"""
    try:
        result = _service().toggle_step_completion(goal_id, step_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Completion toggled")


@stepwise.command()
@click.argument("goal_id")
@click.argument("step_id")
def duplicate(goal_id: str, step_id: str):
    """Copy a step with its whole subtree"""
    try:
        result = _service().duplicate_step(goal_id, step_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Step duplicated")


@stepwise.command()
@click.argument("goal_id")
@click.argument("step_id")
@click.option("--parent", "new_parent_id", default=None, help="New parent step id (root if omitted)")
def move(goal_id: str, step_id: str, new_parent_id: Optional[str]):
    """Move a step under another step, or to the root level"""
    try:
        result = _service().move_step_to_parent(goal_id, step_id, new_parent_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Step moved")


@stepwise.command()
@click.argument("goal_id")
@click.argument("step_id")
@click.argument("new_index", type=click.IntRange(min=0))
@click.option("--parent", "parent_id", default=None, help="Parent of the sibling set (root if omitted)")
def reorder(goal_id: str, step_id: str, new_index: int, parent_id: Optional[str]):
    """Move a step to NEW_INDEX among its siblings"""
    try:
        result = _service().reorder_steps(goal_id, step_id, new_index, parent_id)
    except StepwiseError as e:
        click.echo(f"❌ {e.get_user_message()}", err=True)
        return
    _report(result, "Step reordered")


if __name__ == "__main__":
    stepwise()
