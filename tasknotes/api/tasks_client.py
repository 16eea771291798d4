"""
Client for the tasks REST API
"""

from typing import Optional, Dict, Any, List
import httpx
from pydantic import ValidationError as PydanticValidationError
from tasknotes.api.base_client import BaseAPIClient
from tasknotes.config.settings import settings
from tasknotes.config.constants import TASKS_ENDPOINT
from tasknotes.models.task import Task
from tasknotes.utils.error_handler import ClientError


def _to_task(data: Any) -> Task:
    try:
        return Task.model_validate(data)
    except PydanticValidationError as e:
        raise ClientError(f"Unexpected task payload from server: {e.error_count()} errors") from e


class TasksClient(BaseAPIClient):
    """Client for the tasks API"""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize tasks client
        
        Args:
            base_url: Server root URL (defaults to API_BASE_URL setting)
            timeout: Request timeout in seconds
            transport: Custom httpx transport
        """
        super().__init__(
            base_url or settings.API_BASE_URL,
            timeout=timeout or settings.API_TIMEOUT,
            transport=transport,
        )
    
    async def get_tasks(self) -> List[Task]:
        """
        Get the full task list
        
        Returns:
            Tasks, most recently created first
        """
        data = await self.get(TASKS_ENDPOINT)
        if not isinstance(data, list):
            raise ClientError("Expected a list of tasks from server")
        return [_to_task(item) for item in data]
    
    async def create_task(self, draft: Dict[str, Any]) -> Task:
        """
        Create a new task
        
        Args:
            draft: title, description, dueDate and optional importance/status
            
        Returns:
            Created task
        """
        return _to_task(await self.post(TASKS_ENDPOINT, json_data=draft))
    
    async def update_task(self, task_id: str, changes: Dict[str, Any]) -> Task:
        """
        Update existing task
        
        Args:
            task_id: Task ID
            changes: Fields to change
            
        Returns:
            Updated task
        """
        return _to_task(await self.put(f"{TASKS_ENDPOINT}/{task_id}", json_data=changes))
    
    async def delete_task(self, task_id: str) -> str:
        """
        Delete task
        
        Args:
            task_id: Task ID
            
        Returns:
            Confirmation message from the server
        """
        data = await self.delete(f"{TASKS_ENDPOINT}/{task_id}")
        if isinstance(data, dict):
            return str(data.get("message", ""))
        return ""
