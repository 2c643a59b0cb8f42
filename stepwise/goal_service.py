"""
Canonical goal application service.

Owns the authoritative, ordered goal collection. Every command computes a
new value with the tree engine, persists it through the GoalStore, and only
then replaces the in-memory collection. When persistence fails the new
value is discarded and the previous state stays authoritative.
"""
from typing import List, Optional

from stepwise.exceptions import PersistenceError, StoreError
from stepwise.goal_store import GoalStore
from stepwise.identity import IdentityProvider, resolve
from stepwise.logger import get_logger
from stepwise.models import Goal
from stepwise.tree_engine import collection, facade
from stepwise.tree_engine.facade import StepResult

logger = get_logger("goal_service")


class GoalService:
    """Application service for goal and step commands."""

    def __init__(
        self,
        store: Optional[GoalStore] = None,
        identity: Optional[IdentityProvider] = None,
    ):
        self.store = store or GoalStore()
        self.identity = resolve(identity)
        self._goals: List[Goal] = []
        self.reload()

    # ---------------------------------------------------------------------
    # Query operations
    # ---------------------------------------------------------------------
    def reload(self) -> List[Goal]:
        self._goals = collection.sort_goals(self.store.load_all())
        logger.debug("Loaded %d goals from %s", len(self._goals), self.store.path)
        return self.goals

    @property
    def goals(self) -> List[Goal]:
        return list(self._goals)

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return collection.find_goal(self._goals, goal_id)

    def require_goal(self, goal_id: str) -> Goal:
        return facade.require_goal(self._goals, goal_id)

    # ---------------------------------------------------------------------
    # Commit helpers
    # ---------------------------------------------------------------------
    def _put(self, goal: Goal, action: str) -> None:
        try:
            self.store.put(goal)
        except StoreError as e:
            logger.error("Failed to %s (goal %s): %s", action, goal.id, e)
            raise PersistenceError(f"Failed to {action}", goal_id=goal.id) from e

    def _commit_step_result(self, result: StepResult, action: str) -> StepResult:
        if not result.changed:
            logger.info("%s: nothing changed in goal %s", action, result.goal.id)
            return result
        self._put(result.goal, action)
        self._goals = collection.replace_goal(self._goals, result.goal)
        logger.info("%s: goal %s, steps %s", action, result.goal.id, list(result.affected_ids))
        return result

    # ---------------------------------------------------------------------
    # Goal commands
    # ---------------------------------------------------------------------
    def add_goal(self, title: str, description: Optional[str] = None) -> Goal:
        goal = facade.create_goal(self._goals, title, description, identity=self.identity)
        self._put(goal, "add goal")
        self._goals = self._goals + [goal]
        logger.info("add goal: %s", goal.id)
        return goal

    def update_goal_details(
        self, goal_id: str, title: str, description: Optional[str] = None
    ) -> Goal:
        goal = facade.update_goal_details(
            self._goals, goal_id, title, description, identity=self.identity
        )
        self._put(goal, "update goal")
        self._goals = collection.replace_goal(self._goals, goal)
        logger.info("update goal: %s", goal.id)
        return goal

    def delete_goal(self, goal_id: str) -> None:
        remaining = facade.delete_goal(self._goals, goal_id)
        try:
            self.store.delete(goal_id)
        except StoreError as e:
            logger.error("Failed to delete goal %s: %s", goal_id, e)
            raise PersistenceError("Failed to delete goal", goal_id=goal_id) from e
        self._goals = remaining
        logger.info("delete goal: %s", goal_id)

    def reorder_goals(self, source_index: int, destination_index: int) -> List[Goal]:
        before = {g.id: g for g in self._goals}
        reordered = facade.reorder_goals(self._goals, source_index, destination_index)
        changed = [g for g in reordered if before[g.id].order != g.order]

        written: List[Goal] = []
        try:
            for goal in changed:
                self.store.put(goal)
                written.append(goal)
        except StoreError as e:
            logger.error("Failed to reorder goals: %s", e)
            self._restore([before[g.id] for g in written])
            raise PersistenceError("Failed to reorder goals") from e

        self._goals = reordered
        logger.info("reorder goals: %d -> %d", source_index, destination_index)
        return self.goals

    def _restore(self, goals: List[Goal]) -> None:
        for goal in goals:
            try:
                self.store.put(goal)
            except StoreError as e:
                logger.warning("Could not restore goal %s after failed reorder: %s", goal.id, e)

    # ---------------------------------------------------------------------
    # Step commands
    # ---------------------------------------------------------------------
    def add_step(
        self,
        goal_id: str,
        title: str,
        description: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> StepResult:
        result = facade.add_step(
            self._goals, goal_id, title, description, parent_id, identity=self.identity
        )
        return self._commit_step_result(result, "add step")

    def update_step(
        self, goal_id: str, step_id: str, title: str, description: Optional[str] = None
    ) -> StepResult:
        result = facade.update_step(
            self._goals, goal_id, step_id, title, description, identity=self.identity
        )
        return self._commit_step_result(result, "update step")

    def delete_step(self, goal_id: str, step_id: str) -> StepResult:
        result = facade.delete_step(self._goals, goal_id, step_id, identity=self.identity)
        return self._commit_step_result(result, "delete step")

    def toggle_step_completion(self, goal_id: str, step_id: str) -> StepResult:
        result = facade.toggle_step_completion(
            self._goals, goal_id, step_id, identity=self.identity
        )
        return self._commit_step_result(result, "toggle step completion")

    def duplicate_step(self, goal_id: str, step_id: str) -> StepResult:
        result = facade.duplicate_step(self._goals, goal_id, step_id, identity=self.identity)
        return self._commit_step_result(result, "duplicate step")

    def reorder_steps(
        self,
        goal_id: str,
        step_id: str,
        new_index: int,
        parent_id: Optional[str] = None,
    ) -> StepResult:
        result = facade.reorder_steps(
            self._goals, goal_id, step_id, new_index, parent_id, identity=self.identity
        )
        return self._commit_step_result(result, "reorder steps")

    def move_step_to_parent(
        self, goal_id: str, step_id: str, new_parent_id: Optional[str] = None
    ) -> StepResult:
        result = facade.move_step_to_parent(
            self._goals, goal_id, step_id, new_parent_id, identity=self.identity
        )
        return self._commit_step_result(result, "move step")
