"""
Task management service
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from tasknotes.models.task import Task, TaskCreate, TaskUpdate
from tasknotes.models.response import MessageResponse
from tasknotes.models.stats import TaskStats
from tasknotes.services.task_store import TaskStore
from tasknotes.services.analytics_service import compute_stats
from tasknotes.config.constants import MSG_TASK_DELETED
from tasknotes.utils.error_handler import (
    TaskNotesError,
    ValidationError,
    StoreError,
    describe_validation_error,
)
from tasknotes.utils.logger import logger


class TaskService:
    """Stateless handlers translating CRUD requests into store operations"""

    def __init__(self, store: TaskStore):
        """
        Initialize task service

        Args:
            store: Task store
        """
        self.store = store
        self.logger = logger

    @staticmethod
    def _require_object(payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise ValidationError("request body must be a JSON object")
        return payload

    def list_tasks(self) -> List[Task]:
        """
        Get all tasks, most recently created first

        Raises:
            StoreError: If the store fails
        """
        try:
            return self.store.list_all()
        except TaskNotesError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to list tasks: {e}") from e

    def get_task(self, task_id: str) -> Task:
        """
        Get one task

        Raises:
            NotFoundError: If task does not exist
        """
        return self.store.find_by_id(task_id)

    def create_task(self, payload: Any) -> Task:
        """
        Create task from a request payload

        Args:
            payload: Task draft (title, description, importance?, status?, dueDate)

        Returns:
            Created task

        Raises:
            ValidationError: If the payload is invalid
            StoreError: If the store fails
        """
        payload = self._require_object(payload)

        try:
            draft = TaskCreate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e)) from e

        try:
            task = self.store.insert(draft)
        except TaskNotesError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to create task: {e}") from e

        self.logger.info(f"Task created: {task.id} '{task.title}'")
        return task

    def update_task(self, task_id: str, payload: Any) -> Task:
        """
        Update task fields from a request payload

        Args:
            task_id: Task ID
            payload: Any subset of title, description, importance, status, dueDate

        Returns:
            Updated task

        Raises:
            NotFoundError: If task does not exist
            ValidationError: If a field is invalid
            StoreError: If the store fails
        """
        payload = self._require_object(payload)

        # Unknown id wins over a bad payload
        self.store.find_by_id(task_id)

        try:
            changes = TaskUpdate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e)) from e

        try:
            task = self.store.update_by_id(task_id, changes)
        except TaskNotesError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to update task {task_id}: {e}") from e

        self.logger.info(f"Task updated: {task_id}")
        return task

    def delete_task(self, task_id: str) -> MessageResponse:
        """
        Delete task permanently

        Args:
            task_id: Task ID

        Returns:
            Confirmation message

        Raises:
            NotFoundError: If task does not exist
            StoreError: If the store fails
        """
        try:
            task = self.store.delete_by_id(task_id)
        except TaskNotesError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to delete task {task_id}: {e}") from e

        self.logger.info(f"Task deleted: {task.id} '{task.title}'")
        return MessageResponse(message=MSG_TASK_DELETED)

    def get_stats(self, now: Optional[datetime] = None) -> TaskStats:
        """Report counts over the full task list"""
        return compute_stats(self.list_tasks(), now)
