"""
Stepwise exception hierarchy.

- StepwiseError: base class for every known error
- ConfigError: malformed configuration file
- GoalNotFoundError: a goal id is missing from the collection
- ValidationError: input rejected before any tree mutation
- StoreError: the goal store could not read or write its file
- PersistenceError: a computed change could not be committed

A missing step or an illegal move is not an exception: the engine returns
the goal unchanged.
"""
from typing import Optional


class StepwiseError(Exception):
    """Base exception.

    Catching this handles every expected failure in the system.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: error description
            hint: suggestion shown to the user
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """Return a user facing message."""
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigError(StepwiseError):
    """Configuration file is unreadable or malformed."""

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"Check the config file: {config_path}" if config_path else "Check the config file format"
        super().__init__(message, hint)
        self.config_path = config_path


class GoalNotFoundError(StepwiseError):
    """Referenced goal does not exist in the collection."""

    def __init__(self, goal_id: str):
        super().__init__(f"Goal not found: {goal_id}", hint="Reload the goal list and try again")
        self.goal_id = goal_id


class ValidationError(StepwiseError):
    """Input rejected before mutating anything."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StoreError(StepwiseError):
    """Goal store I/O or decode failure."""

    def __init__(self, message: str, path: Optional[str] = None):
        hint = f"Check the data file: {path}" if path else None
        super().__init__(message, hint)
        self.path = path


class PersistenceError(StepwiseError):
    """A change was computed but could not be persisted.

    The previously committed state stays authoritative.
    """

    def __init__(self, message: str, goal_id: Optional[str] = None):
        super().__init__(message, hint="Nothing was changed; retry the operation")
        self.goal_id = goal_id
