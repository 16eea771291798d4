"""
Pytest configuration and fixtures
"""

import os

# Keep tasks in memory unless a test opts into a data file
os.environ["DATA_FILE"] = ""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from tasknotes.api.tasks_client import TasksClient
from tasknotes.models.task import Task, Importance, TaskStatus
from tasknotes.services.task_store import TaskStore
from tasknotes.services.task_service import TaskService
from tasknotes.web.main import create_app


@pytest.fixture
def draft():
    """Valid task draft as a client would send it"""
    return {
        "title": "Write report",
        "description": "Quarterly numbers",
        "importance": "Important",
        "dueDate": "2030-05-01",
    }


@pytest.fixture
def task_store():
    """In-memory task store"""
    return TaskStore()


@pytest.fixture
def task_service(task_store):
    """Task service over the in-memory store"""
    return TaskService(task_store)


@pytest.fixture
def api_client(task_service):
    """HTTP test client for a fresh app"""
    with TestClient(create_app(task_service)) as client:
        yield client


@pytest.fixture
def make_task():
    """Factory for Task objects without a store"""
    counter = {"n": 0}

    def _make(
        title: str = "Task",
        status: TaskStatus = TaskStatus.PENDING,
        importance: Importance = Importance.NORMAL,
        due_date: date = date(2030, 1, 1),
    ) -> Task:
        counter["n"] += 1
        return Task(
            id=f"task{counter['n']:04d}",
            title=title,
            description=f"{title} description",
            importance=importance,
            status=status,
            due_date=due_date,
            created_at=datetime(2024, 1, 1, 12, counter["n"], tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def mock_tasks_client(make_task):
    """Mock tasks API client"""
    client = MagicMock(spec=TasksClient)
    client.get_tasks = AsyncMock(return_value=[make_task("First")])
    client.create_task = AsyncMock(return_value=make_task("Created"))
    client.update_task = AsyncMock(return_value=make_task("Updated"))
    client.delete_task = AsyncMock(return_value="Task deleted successfully")
    return client
