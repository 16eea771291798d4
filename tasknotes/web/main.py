"""
Web application: tasks REST API and HTML pages
"""

import json
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tasknotes.models.task import Task
from tasknotes.models.response import MessageResponse
from tasknotes.models.stats import TaskStats
from tasknotes.services.task_store import TaskStore
from tasknotes.services.task_service import TaskService
from tasknotes.config.settings import settings
from tasknotes.config.constants import API_PREFIX
from tasknotes.utils.error_handler import (
    TaskNotesError,
    ValidationError,
    handle_error,
    status_code_for,
)
from tasknotes.utils.logger import logger
from tasknotes.web.dependencies import get_task_service
from tasknotes.web.pages import pages_router

api_router = APIRouter(prefix=API_PREFIX)


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"malformed JSON body: {e}") from e


@api_router.get("/tasks", response_model=List[Task])
def list_tasks(service: TaskService = Depends(get_task_service)):
    """All tasks, most recently created first"""
    return service.list_tasks()


@api_router.post("/tasks", status_code=201, response_model=Task)
async def create_task(request: Request, service: TaskService = Depends(get_task_service)):
    """Create task"""
    payload = await _json_body(request)
    return await run_in_threadpool(service.create_task, payload)


@api_router.get("/tasks/stats", response_model=TaskStats)
def task_stats(service: TaskService = Depends(get_task_service)):
    """Report counts: total, pending, completed, important, overdue"""
    return service.get_stats()


@api_router.put("/tasks/{task_id}", response_model=Task)
async def update_task(task_id: str, request: Request, service: TaskService = Depends(get_task_service)):
    """Update any subset of task fields"""
    payload = await _json_body(request)
    return await run_in_threadpool(service.update_task, task_id, payload)


@api_router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Delete task permanently"""
    return service.delete_task(task_id)


@api_router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


async def _task_error_handler(request: Request, exc: TaskNotesError) -> JSONResponse:
    body = handle_error(exc)
    return JSONResponse(
        status_code=status_code_for(exc),
        content=body.model_dump(exclude_none=True),
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(f"Unhandled error on {request.method} {request.url.path}")
    body = handle_error(exc)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def create_app(service: Optional[TaskService] = None) -> FastAPI:
    """
    Build the web application

    Args:
        service: Task service (defaults to one backed by the DATA_FILE setting)

    Returns:
        Configured FastAPI app
    """
    if service is None:
        service = TaskService(TaskStore(settings.DATA_FILE or None))

    app = FastAPI(
        title="Task Notes",
        description="Personal task manager with a tasks report",
        version="0.1.0",
    )
    app.state.task_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TaskNotesError, _task_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(api_router)
    app.include_router(pages_router)
    return app


def run():
    """Serve the app with uvicorn"""
    import uvicorn
    settings.validate()
    logger.info(f"Server running on {settings.WEB_HOST}:{settings.WEB_PORT}")
    uvicorn.run(
        "tasknotes.web.main:create_app",
        factory=True,
        host=settings.WEB_HOST,
        port=settings.WEB_PORT,
    )


if __name__ == "__main__":
    run()
