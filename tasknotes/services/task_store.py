"""
Task store: a JSON document collection of tasks
"""

import json
import os
import threading
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError as PydanticValidationError
from tasknotes.models.task import Task, TaskCreate, TaskUpdate
from tasknotes.utils.date_utils import get_current_datetime
from tasknotes.utils.error_handler import (
    ValidationError,
    NotFoundError,
    StoreError,
    describe_validation_error,
)
from tasknotes.utils.logger import logger


class TaskStore:
    """
    Durable collection of tasks keyed by a generated id

    Tasks are kept in memory in insertion order. When a data file is given,
    the whole collection is rewritten to it after every mutation; without one
    the store lives in memory only.
    """

    def __init__(self, data_file: Optional[Union[str, Path]] = None):
        """
        Initialize task store

        Args:
            data_file: Path to the JSON data file (None keeps tasks in memory)
        """
        self.data_file = Path(data_file) if data_file else None
        self.logger = logger
        self._lock = threading.Lock()
        self._tasks: Dict[str, Task] = {}
        self._last_created: Optional[datetime] = None
        self._load()
        self.logger.info(f"TaskStore ready file={self.data_file or ':memory:'} total={self.count()}")

    def _load(self):
        """Load tasks from the data file"""
        if self.data_file is None or not self.data_file.exists():
            return

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
            tasks = [Task.model_validate(item) for item in raw.get("tasks", [])]
        except (OSError, ValueError, AttributeError) as e:
            self.logger.error(f"Failed to load tasks from {self.data_file}: {e}")
            raise StoreError(f"Cannot read data file {self.data_file}: {e}") from e

        self._tasks = {task.id: task for task in tasks}
        if tasks:
            self._last_created = max(task.created_at for task in tasks)
        self.logger.debug(f"Loaded {len(self._tasks)} tasks from {self.data_file}")

    def _save(self):
        """Write the whole collection to the data file"""
        if self.data_file is None:
            return

        payload = {"tasks": [task.to_json() for task in self._tasks.values()]}
        tmp_file = self.data_file.with_name(self.data_file.name + ".tmp")
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_file, self.data_file)
        except OSError as e:
            self.logger.error(f"Failed to save tasks to {self.data_file}: {e}")
            raise StoreError(f"Cannot write data file {self.data_file}: {e}") from e

    def _commit(self, snapshot: Dict[str, Task], last_created: Optional[datetime]):
        """Persist current state, restoring the snapshot if the write fails"""
        try:
            self._save()
        except StoreError:
            self._tasks = snapshot
            self._last_created = last_created
            raise

    def _next_created_at(self) -> datetime:
        # createdAt must strictly increase even when the clock does not
        now = get_current_datetime()
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now

    def _new_id(self) -> str:
        while True:
            task_id = uuid.uuid4().hex
            if task_id not in self._tasks:
                return task_id

    @staticmethod
    def _as_draft(draft: Union[TaskCreate, Dict[str, Any]]) -> TaskCreate:
        if isinstance(draft, TaskCreate):
            return draft
        try:
            return TaskCreate.model_validate(draft)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e)) from e

    def count(self) -> int:
        """Number of stored tasks"""
        return len(self._tasks)

    def insert(self, draft: Union[TaskCreate, Dict[str, Any]]) -> Task:
        """
        Store a new task

        Args:
            draft: Task fields without id and createdAt

        Returns:
            Stored task with generated id and createdAt

        Raises:
            ValidationError: If the draft is invalid
            StoreError: If the data file cannot be written
        """
        draft = self._as_draft(draft)

        with self._lock:
            snapshot = dict(self._tasks)
            last_created = self._last_created

            task = Task(
                id=self._new_id(),
                created_at=self._next_created_at(),
                **draft.model_dump(),
            )
            self._tasks[task.id] = task
            self._commit(snapshot, last_created)

        self.logger.debug(f"Task added id={task.id} title={task.title!r} status={task.status.value}")
        return task

    def list_all(self) -> List[Task]:
        """
        All tasks, most recently created first

        Returns:
            List of tasks (empty if none)
        """
        with self._lock:
            tasks = list(self._tasks.values())

        # Reverse first so that equal timestamps keep newest insertion first
        tasks.reverse()
        return sorted(tasks, key=lambda task: task.created_at, reverse=True)

    def find_by_id(self, task_id: str) -> Task:
        """
        Get task by id

        Raises:
            NotFoundError: If no task has this id
        """
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def update_by_id(self, task_id: str, changes: Union[TaskUpdate, Dict[str, Any]]) -> Task:
        """
        Apply the given fields to an existing task

        Fields that are not set keep their values; id and createdAt never change.

        Args:
            task_id: Task ID
            changes: Fields to change

        Returns:
            Updated task

        Raises:
            NotFoundError: If no task has this id
            ValidationError: If a field value is invalid
            StoreError: If the data file cannot be written
        """
        if not isinstance(changes, TaskUpdate):
            try:
                changes = TaskUpdate.model_validate(changes)
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

        with self._lock:
            current = self.find_by_id(task_id)

            merged = current.model_dump()
            merged.update(changes.changes())
            merged["id"] = current.id
            merged["created_at"] = current.created_at
            try:
                updated = Task.model_validate(merged)
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            snapshot = dict(self._tasks)
            self._tasks[task_id] = updated
            self._commit(snapshot, self._last_created)

        self.logger.debug(f"Task updated id={task_id} fields={sorted(changes.changes())}")
        return updated

    def delete_by_id(self, task_id: str) -> Task:
        """
        Remove a task permanently

        Returns:
            The removed task

        Raises:
            NotFoundError: If no task has this id
            StoreError: If the data file cannot be written
        """
        with self._lock:
            task = self.find_by_id(task_id)

            snapshot = dict(self._tasks)
            del self._tasks[task_id]
            self._commit(snapshot, self._last_created)

        self.logger.debug(f"Task deleted id={task_id}")
        return task
