"""
GoalStore: one JSON record per goal, keyed by goal id.
Path: <data dir>/goals.json. Every write replaces the whole file
atomically, so a record is never observed half written.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from stepwise import paths
from stepwise.config_manager import config
from stepwise.exceptions import StoreError
from stepwise.logger import get_logger
from stepwise.models import Goal, goal_from_dict, goal_to_dict

logger = get_logger("goal_store")


def default_store_path() -> Path:
    return paths.DATA_DIR / config.GOALS_FILENAME


class GoalStore:
    """Key-value goal store with JSON persistence."""

    def __init__(self, path: Optional[Path] = None):
        self._path = path if path is not None else default_store_path()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, dict]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Cannot read goal store %s: %s", self._path, e)
            raise StoreError(f"Cannot read goal store: {e}", path=str(self._path)) from e

        records = data.get("goals", []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise StoreError("Goal store has an unexpected layout", path=str(self._path))
        return {r["id"]: r for r in records if isinstance(r, dict) and "id" in r}

    def _write(self, records: Dict[str, dict]) -> None:
        payload = {"goals": list(records.values())}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self._path.parent), prefix=".goals_", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error("Cannot write goal store %s: %s", self._path, e)
            raise StoreError(f"Cannot write goal store: {e}", path=str(self._path)) from e

    def load_all(self) -> List[Goal]:
        try:
            return [goal_from_dict(r) for r in self._read().values()]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Corrupted goal record: {e}", path=str(self._path)) from e

    def load(self, goal_id: str) -> Optional[Goal]:
        record = self._read().get(goal_id)
        if record is None:
            return None
        try:
            return goal_from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Corrupted goal record {goal_id}: {e}", path=str(self._path)) from e

    def put(self, goal: Goal) -> None:
        records = self._read()
        records[goal.id] = goal_to_dict(goal)
        self._write(records)

    def delete(self, goal_id: str) -> None:
        records = self._read()
        if records.pop(goal_id, None) is not None:
            self._write(records)
