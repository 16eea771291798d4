"""
Client-side task board state

Consistency policy: the board is only as fresh as its last full list fetch.
Every mutation sends its request and then re-fetches the whole list; the local
list is never patched in place. Failures are not retried, they are logged and
recorded on the snapshot while the previous task list stays visible.
"""

from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict
from tasknotes.api.tasks_client import TasksClient
from tasknotes.models.task import Task, Importance, TaskStatus
from tasknotes.models.stats import TaskStats
from tasknotes.services.analytics_service import compute_stats
from tasknotes.config.constants import MSG_FILL_ALL_FIELDS
from tasknotes.utils.date_utils import get_current_datetime
from tasknotes.utils.error_handler import ClientError, format_error_message
from tasknotes.utils.logger import logger


class BoardState(BaseModel):
    """Immutable snapshot of what the client knows"""

    model_config = ConfigDict(frozen=True)

    tasks: Tuple[Task, ...] = ()
    error: Optional[str] = None
    fetched_at: Optional[datetime] = None

    def stats(self, now: Optional[datetime] = None) -> TaskStats:
        """Report counts over the fetched list"""
        return compute_stats(self.tasks, now)


class TaskForm(BaseModel):
    """Create/edit form fields as typed by the user"""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    importance: Importance = Importance.NORMAL
    status: TaskStatus = TaskStatus.PENDING
    due_date: str = ""
    editing_id: Optional[str] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskForm":
        """Form pre-filled for editing a task"""
        return cls(
            title=task.title,
            description=task.description,
            importance=task.importance,
            status=task.status,
            due_date=task.due_date.isoformat(),
            editing_id=task.id,
        )

    def validate_fields(self) -> Optional[str]:
        """
        Check required fields after trimming

        Returns:
            Error message, or None when the form can be sent
        """
        if not self.title.strip() or not self.description.strip() or not self.due_date.strip():
            return MSG_FILL_ALL_FIELDS
        return None

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create or update"""
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "importance": self.importance.value,
            "status": self.status.value,
            "dueDate": self.due_date.strip(),
        }


class TaskBoard:
    """Client data layer: fetch, create, update and delete through the API"""

    def __init__(self, client: TasksClient, state: Optional[BoardState] = None):
        """
        Initialize task board

        Args:
            client: Tasks API client
            state: Initial snapshot (empty by default)
        """
        self.client = client
        self.logger = logger
        self._state = state or BoardState()

    @property
    def state(self) -> BoardState:
        """Current snapshot"""
        return self._state

    def _fail(self, message: str) -> BoardState:
        self.logger.warning(message)
        self._state = self._state.model_copy(update={"error": message})
        return self._state

    async def refresh(self) -> BoardState:
        """
        Fetch the full list and replace the snapshot

        Returns:
            New snapshot; on failure the previous tasks with `error` set
        """
        try:
            tasks = await self.client.get_tasks()
        except ClientError as e:
            return self._fail(f"Failed to fetch tasks: {format_error_message(e)}")

        self._state = BoardState(tasks=tuple(tasks), fetched_at=get_current_datetime())
        self.logger.debug(f"Board refreshed: {len(tasks)} tasks")
        return self._state

    async def _mutate(self, action: str, call: Callable[[], Awaitable[Any]]) -> BoardState:
        try:
            await call()
        except ClientError as e:
            return self._fail(f"Failed to {action} task: {format_error_message(e)}")
        return await self.refresh()

    async def create(self, draft: Dict[str, Any]) -> BoardState:
        """Create task, then re-fetch"""
        return await self._mutate("create", lambda: self.client.create_task(draft))

    async def update(self, task_id: str, changes: Dict[str, Any]) -> BoardState:
        """Update task, then re-fetch"""
        return await self._mutate("update", lambda: self.client.update_task(task_id, changes))

    async def delete(self, task_id: str) -> BoardState:
        """Delete task, then re-fetch"""
        return await self._mutate("delete", lambda: self.client.delete_task(task_id))

    async def submit(self, form: TaskForm) -> BoardState:
        """
        Send a filled form as create or update

        Blank required fields are reported without sending a request.
        """
        problem = form.validate_fields()
        if problem:
            return self._fail(problem)

        if form.editing_id:
            return await self.update(form.editing_id, form.to_payload())
        return await self.create(form.to_payload())

    def find(self, task_id: str) -> Optional[Task]:
        """Task from the snapshot by full id or unique id prefix"""
        if not task_id or not task_id.strip():
            return None
        matches = [task for task in self._state.tasks if task.id == task_id or task.id.startswith(task_id)]
        exact = [task for task in matches if task.id == task_id]
        if exact:
            return exact[0]
        return matches[0] if len(matches) == 1 else None
