"""
Tests for task store
"""

import json
import pytest
from datetime import date, datetime, timezone
from tasknotes.models.task import Importance, TaskStatus
from tasknotes.services.task_store import TaskStore
from tasknotes.utils.error_handler import ValidationError, NotFoundError, StoreError


def test_insert_then_find(task_store, draft):
    """Stored task equals the draft plus id and createdAt"""
    task = task_store.insert(draft)
    found = task_store.find_by_id(task.id)
    
    assert found == task
    assert found.title == "Write report"
    assert found.description == "Quarterly numbers"
    assert found.importance == Importance.IMPORTANT
    assert found.status == TaskStatus.PENDING
    assert found.due_date == date(2030, 5, 1)
    assert found.id
    assert found.created_at.tzinfo is not None


def test_list_all_newest_first(task_store, draft):
    """N inserts give N tasks ordered by createdAt descending"""
    ids = [task_store.insert({**draft, "title": f"T{i}"}).id for i in range(5)]
    
    tasks = task_store.list_all()
    
    assert [t.id for t in tasks] == list(reversed(ids))
    created = [t.created_at for t in tasks]
    assert created == sorted(created, reverse=True)
    assert len(set(created)) == 5


def test_list_all_empty(task_store):
    """Empty store lists nothing"""
    assert task_store.list_all() == []


def test_ids_are_unique(task_store, draft):
    """Every insert gets a fresh id"""
    ids = {task_store.insert(draft).id for _ in range(20)}
    assert len(ids) == 20


def test_created_at_increases_with_frozen_clock(task_store, draft, monkeypatch):
    """createdAt strictly increases even when the clock stands still"""
    frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
    monkeypatch.setattr("tasknotes.services.task_store.get_current_datetime", lambda: frozen)
    
    first = task_store.insert(draft)
    second = task_store.insert(draft)
    
    assert second.created_at > first.created_at
    assert task_store.list_all()[0].id == second.id


def test_insert_invalid_draft(task_store, draft):
    """Invalid drafts raise ValidationError and store nothing"""
    with pytest.raises(ValidationError):
        task_store.insert({**draft, "title": "   "})
    
    with pytest.raises(ValidationError):
        task_store.insert({**draft, "importance": "Urgent"})
    
    assert task_store.count() == 0


def test_update_changes_only_given_fields(task_store, draft):
    """Omitted fields keep their values; id and createdAt never change"""
    task = task_store.insert(draft)
    
    updated = task_store.update_by_id(task.id, {
        "status": "Completed",
        "id": "hijack",
        "createdAt": "2000-01-01T00:00:00Z",
    })
    
    assert updated.status == TaskStatus.COMPLETED
    assert updated.id == task.id
    assert updated.created_at == task.created_at
    assert updated.title == task.title
    assert updated.description == task.description
    assert updated.importance == task.importance
    assert updated.due_date == task.due_date
    assert task_store.find_by_id(task.id) == updated


def test_update_unknown_id(task_store):
    """Updating a missing task raises NotFoundError"""
    with pytest.raises(NotFoundError):
        task_store.update_by_id("missing", {"title": "B"})


def test_update_invalid_value_leaves_task(task_store, draft):
    """Invalid update is rejected and the task is unchanged"""
    task = task_store.insert(draft)
    
    with pytest.raises(ValidationError):
        task_store.update_by_id(task.id, {"status": "Done"})
    
    with pytest.raises(ValidationError):
        task_store.update_by_id(task.id, {"title": ""})
    
    assert task_store.find_by_id(task.id) == task


def test_delete(task_store, draft):
    """Deleted task can no longer be found"""
    task = task_store.insert(draft)
    
    removed = task_store.delete_by_id(task.id)
    
    assert removed.id == task.id
    with pytest.raises(NotFoundError):
        task_store.find_by_id(task.id)
    assert task_store.count() == 0


def test_delete_unknown_id(task_store, draft):
    """Deleting a missing task raises NotFoundError and keeps contents"""
    task_store.insert(draft)
    
    with pytest.raises(NotFoundError):
        task_store.delete_by_id("missing")
    
    assert task_store.count() == 1


def test_data_file_round_trip(tmp_path, draft):
    """Tasks survive reopening the data file"""
    data_file = tmp_path / "data" / "tasks.json"
    store = TaskStore(data_file)
    first = store.insert(draft)
    second = store.insert({**draft, "title": "Second"})
    store.update_by_id(first.id, {"status": "Completed"})
    
    reopened = TaskStore(data_file)
    
    assert [t.id for t in reopened.list_all()] == [second.id, first.id]
    assert reopened.find_by_id(first.id).status == TaskStatus.COMPLETED
    assert reopened.find_by_id(first.id).created_at == first.created_at
    
    with open(data_file, "r", encoding="utf-8") as f:
        data = json.load(f)
    assert len(data["tasks"]) == 2
    assert data["tasks"][0]["dueDate"] == "2030-05-01"


def test_corrupt_data_file(tmp_path):
    """Unreadable data file raises StoreError"""
    data_file = tmp_path / "tasks.json"
    data_file.write_text("{not json", encoding="utf-8")
    
    with pytest.raises(StoreError):
        TaskStore(data_file)


def test_failed_write_rolls_back(tmp_path, draft):
    """A write failure raises StoreError and leaves the store unchanged"""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = TaskStore(blocker / "tasks.json")
    
    with pytest.raises(StoreError):
        store.insert(draft)
    
    assert store.count() == 0
    assert store.list_all() == []


def _fail_replace(src, dst):
    raise OSError("disk full")


def test_failed_update_write_rolls_back(tmp_path, draft, monkeypatch):
    """A failed write during update keeps the previous record in memory and on disk"""
    data_file = tmp_path / "tasks.json"
    store = TaskStore(data_file)
    task = store.insert(draft)
    monkeypatch.setattr("tasknotes.services.task_store.os.replace", _fail_replace)
    
    with pytest.raises(StoreError):
        store.update_by_id(task.id, {"title": "Changed", "status": "Completed"})
    
    assert store.find_by_id(task.id) == task
    assert store.list_all() == [task]
    assert json.loads(data_file.read_text(encoding="utf-8"))["tasks"][0]["title"] == "Write report"


def test_failed_delete_write_rolls_back(tmp_path, draft, monkeypatch):
    """A failed write during delete keeps the task"""
    data_file = tmp_path / "tasks.json"
    store = TaskStore(data_file)
    task = store.insert(draft)
    monkeypatch.setattr("tasknotes.services.task_store.os.replace", _fail_replace)
    
    with pytest.raises(StoreError):
        store.delete_by_id(task.id)
    
    assert store.count() == 1
    assert store.find_by_id(task.id) == task
    assert len(json.loads(data_file.read_text(encoding="utf-8"))["tasks"]) == 1
