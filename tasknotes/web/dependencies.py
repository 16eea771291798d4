"""
Request dependencies shared by routers
"""

from fastapi import Request
from tasknotes.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """Task service attached to the running app"""
    return request.app.state.task_service
