import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import stepwise.paths as paths_module  # noqa: E402
from stepwise.goal_store import GoalStore  # noqa: E402
from stepwise.identity import IdentityProvider  # noqa: E402


class SequentialIdentity(IdentityProvider):
    """Deterministic ids and strictly increasing timestamps."""

    def __init__(self):
        super().__init__()
        self.ids = 0
        self.ticks = 0

    def new_id(self, prefix: str = "s") -> str:
        self.ids += 1
        return f"{prefix}_new{self.ids}"

    def now(self) -> str:
        self.ticks += 1
        return f"2026-01-01T00:00:00.{self.ticks:06d}"


@pytest.fixture
def identity():
    return SequentialIdentity()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    runtime_dir = tmp_path / "data"
    runtime_dir.mkdir()
    monkeypatch.setattr(paths_module, "DATA_DIR", runtime_dir)
    return runtime_dir


@pytest.fixture
def store(tmp_path):
    return GoalStore(path=tmp_path / "goals.json")
