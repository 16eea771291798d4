"""
Server-rendered HTML pages: home, tasks table with form, edit form, report, quotes

Handlers are plain functions so the blocking store calls run in the threadpool.
"""

import random
from pathlib import Path
from typing import Optional
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from tasknotes.models.task import Importance, TaskStatus
from tasknotes.services.task_board import TaskForm
from tasknotes.services.task_service import TaskService
from tasknotes.services.analytics_service import is_overdue
from tasknotes.config.constants import QUOTES, QUOTE_GROUPS, MSG_NO_TASKS
from tasknotes.utils.date_utils import get_current_datetime
from tasknotes.utils.error_handler import NotFoundError, ValidationError
from tasknotes.utils.formatters import format_stats
from tasknotes.web.dependencies import get_task_service

pages_router = APIRouter(include_in_schema=False)
templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

IMPORTANCE_VALUES = [item.value for item in Importance]
STATUS_VALUES = [item.value for item in TaskStatus]


def _render_tasks(
    request: Request,
    service: TaskService,
    form: Optional[TaskForm] = None,
    error: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    now = get_current_datetime()
    tasks = service.list_tasks()
    return templates.TemplateResponse(
        request,
        "tasks.html",
        {
            "tasks": tasks,
            "overdue_ids": {task.id for task in tasks if is_overdue(task, now)},
            "form": form or TaskForm(),
            "error": error,
            "empty_message": MSG_NO_TASKS,
            "importance_choices": IMPORTANCE_VALUES,
            "status_choices": STATUS_VALUES,
        },
        status_code=status_code,
    )


def _form_from_fields(
    title: str,
    description: str,
    importance: str,
    status: str,
    due_date: str,
    editing_id: Optional[str] = None,
) -> TaskForm:
    """
    Build a form from posted fields

    Raises:
        ValidationError: If importance or status is not an allowed value
    """
    if importance not in IMPORTANCE_VALUES:
        raise ValidationError(f"importance: must be one of {', '.join(IMPORTANCE_VALUES)}")
    if status not in STATUS_VALUES:
        raise ValidationError(f"status: must be one of {', '.join(STATUS_VALUES)}")
    return TaskForm(
        title=title,
        description=description,
        importance=Importance(importance),
        status=TaskStatus(status),
        due_date=due_date,
        editing_id=editing_id,
    )


@pages_router.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Home page with a motivational quote"""
    return templates.TemplateResponse(request, "index.html", {"quote": random.choice(QUOTES)})


@pages_router.get("/quotes", response_class=HTMLResponse)
def quotes_page(request: Request):
    """All quotes by section"""
    return templates.TemplateResponse(request, "quotes.html", {"groups": QUOTE_GROUPS})


@pages_router.get("/tasks", response_class=HTMLResponse)
def tasks_page(request: Request, service: TaskService = Depends(get_task_service)):
    """Tasks table and creation form"""
    return _render_tasks(request, service)


@pages_router.post("/tasks", response_class=HTMLResponse)
def submit_new_task(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    importance: str = Form(Importance.NORMAL.value),
    status: str = Form(TaskStatus.PENDING.value),
    due_date: str = Form(""),
    service: TaskService = Depends(get_task_service),
):
    """Create task from the form"""
    try:
        form = _form_from_fields(title, description, importance, status, due_date)
    except ValidationError as e:
        kept = TaskForm(title=title, description=description, due_date=due_date)
        return _render_tasks(request, service, form=kept, error=e.message, status_code=400)

    problem = form.validate_fields()
    if problem:
        return _render_tasks(request, service, form=form, error=problem, status_code=400)

    try:
        service.create_task(form.to_payload())
    except ValidationError as e:
        return _render_tasks(request, service, form=form, error=e.message, status_code=400)

    return RedirectResponse("/tasks", status_code=303)


@pages_router.get("/tasks/{task_id}/edit", response_class=HTMLResponse)
def edit_task_page(task_id: str, request: Request, service: TaskService = Depends(get_task_service)):
    """Tasks page with the form pre-filled for one task"""
    try:
        task = service.get_task(task_id)
    except NotFoundError as e:
        return _render_tasks(request, service, error=e.message, status_code=404)
    return _render_tasks(request, service, form=TaskForm.from_task(task))


@pages_router.post("/tasks/{task_id}/edit", response_class=HTMLResponse)
def submit_task_edit(
    task_id: str,
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    importance: str = Form(Importance.NORMAL.value),
    status: str = Form(TaskStatus.PENDING.value),
    due_date: str = Form(""),
    service: TaskService = Depends(get_task_service),
):
    """Save the edit form"""
    try:
        form = _form_from_fields(title, description, importance, status, due_date, editing_id=task_id)
    except ValidationError as e:
        kept = TaskForm(title=title, description=description, due_date=due_date, editing_id=task_id)
        return _render_tasks(request, service, form=kept, error=e.message, status_code=400)

    problem = form.validate_fields()
    if problem:
        return _render_tasks(request, service, form=form, error=problem, status_code=400)

    try:
        service.update_task(task_id, form.to_payload())
    except NotFoundError as e:
        return _render_tasks(request, service, error=e.message, status_code=404)
    except ValidationError as e:
        return _render_tasks(request, service, form=form, error=e.message, status_code=400)

    return RedirectResponse("/tasks", status_code=303)


@pages_router.post("/tasks/{task_id}/delete", response_class=HTMLResponse)
def submit_task_delete(task_id: str, request: Request, service: TaskService = Depends(get_task_service)):
    """Delete task from the table"""
    try:
        service.delete_task(task_id)
    except NotFoundError as e:
        return _render_tasks(request, service, error=e.message, status_code=404)
    return RedirectResponse("/tasks", status_code=303)


@pages_router.get("/report", response_class=HTMLResponse)
def report_page(request: Request, service: TaskService = Depends(get_task_service)):
    """Task statistics"""
    stats = service.get_stats()
    return templates.TemplateResponse(request, "report.html", {"lines": format_stats(stats), "stats": stats})
