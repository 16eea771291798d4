"""
Tests for the command-line client against the real app
"""

import httpx
import pytest
from tasknotes import cli
from tasknotes.api.tasks_client import TasksClient
from tasknotes.services.task_store import TaskStore
from tasknotes.services.task_service import TaskService
from tasknotes.web.main import create_app


@pytest.fixture
def app_service(monkeypatch):
    """Point the CLI at an in-process app"""
    service = TaskService(TaskStore())
    app = create_app(service)

    def client_factory(base_url=None):
        return TasksClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))

    monkeypatch.setattr(cli, "TasksClient", client_factory)
    return service


def test_add_list_done_report(app_service, capsys):
    """Full round through the API"""
    assert cli.main(["add", "Pay rent", "-d", "March", "--due", "2020-03-01", "--important"]) == 0
    assert "Added task: Pay rent" in capsys.readouterr().out

    assert cli.main(["list"]) == 0
    assert "Pay rent" in capsys.readouterr().out

    assert cli.main(["report"]) == 0
    out = capsys.readouterr().out
    assert "Overdue: 1" in out
    assert "Important: 1" in out

    task_id = app_service.list_tasks()[0].id
    assert cli.main(["done", task_id[:10]]) == 0
    assert app_service.get_task(task_id).status.value == "Completed"


def test_edit_and_delete(app_service, capsys):
    """Edit changes fields, delete removes"""
    task = app_service.create_task({"title": "Old", "description": "d", "dueDate": "2030-01-01"})

    assert cli.main(["edit", task.id, "--title", "New", "--due", "2031-01-01"]) == 0
    updated = app_service.get_task(task.id)
    assert updated.title == "New"
    assert updated.due_date.isoformat() == "2031-01-01"

    assert cli.main(["delete", task.id]) == 0
    assert app_service.list_tasks() == []


def test_unknown_task(app_service, capsys):
    """Unknown id exits non-zero"""
    assert cli.main(["delete", "nope"]) == 1
    assert "not found" in capsys.readouterr().err


def test_empty_list(app_service, capsys):
    """Empty list prints the placeholder"""
    assert cli.main(["list"]) == 0
    assert "No tasks added yet!" in capsys.readouterr().out


def test_invalid_due_date(app_service):
    """Bad dates are rejected by argument parsing"""
    with pytest.raises(SystemExit):
        cli.main(["add", "A", "-d", "d", "--due", "someday"])


def test_empty_id_matches_nothing(app_service, capsys):
    """An empty id is reported as not found instead of picking the only task"""
    task = app_service.create_task({"title": "Only", "description": "d", "dueDate": "2030-01-01"})

    assert cli.main(["done", ""]) == 1
    assert "not found" in capsys.readouterr().err
    assert app_service.get_task(task.id).status.value == "Pending"
