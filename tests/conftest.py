# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest

from taskdeck.engine.model import Task
from taskdeck.engine.seed import seed_tasks
from taskdeck.engine.store import TaskStore

# Two days after the urgent contract task (id 3) fell due.
SEED_NOW = date(2026, 1, 7)


@pytest.fixture()
def now() -> date:
    return SEED_NOW


@pytest.fixture()
def seeded() -> list[Task]:
    return seed_tasks()


@pytest.fixture()
def store(seeded: list[Task]) -> TaskStore:
    return TaskStore(seeded)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """
    Keep a developer's TASKDECK_* variables and .env file out of tests.
    """
    for name in ("SEED_FILE", "COLOR", "VIEW", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"TASKDECK_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
