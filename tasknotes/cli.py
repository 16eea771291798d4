"""
Command-line client for the tasks API
"""

import argparse
import asyncio
import sys
from typing import Optional, List
from tasknotes.api.tasks_client import TasksClient
from tasknotes.models.task import Importance, TaskStatus
from tasknotes.services.task_board import TaskBoard, TaskForm, BoardState
from tasknotes.utils.date_utils import parse_due_date
from tasknotes.utils.formatters import format_task_table, format_stats


def _due_date_arg(value: str) -> str:
    try:
        parse_due_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Use YYYY-MM-DD.") from e
    return value


def _report_state(state: BoardState) -> int:
    if state.error:
        print(state.error, file=sys.stderr)
        return 1
    return 0


async def _with_board(ns: argparse.Namespace, action) -> int:
    async with TasksClient(base_url=ns.api) as client:
        board = TaskBoard(client)
        return await action(board)


def cmd_list(ns: argparse.Namespace) -> int:
    async def action(board: TaskBoard) -> int:
        state = await board.refresh()
        if state.error:
            return _report_state(state)
        print(format_task_table(state.tasks))
        return 0

    return asyncio.run(_with_board(ns, action))


def cmd_add(ns: argparse.Namespace) -> int:
    form = TaskForm(
        title=ns.title,
        description=ns.description or "",
        importance=Importance.IMPORTANT if ns.important else Importance.NORMAL,
        due_date=ns.due or "",
    )

    async def action(board: TaskBoard) -> int:
        state = await board.submit(form)
        if state.error:
            return _report_state(state)
        print(f"Added task: {form.title.strip()}")
        return 0

    return asyncio.run(_with_board(ns, action))


async def _resolve(board: TaskBoard, task_id: str):
    state = await board.refresh()
    if state.error:
        return None, _report_state(state)
    task = board.find(task_id)
    if task is None:
        print(f"Task {task_id} not found.", file=sys.stderr)
        return None, 1
    return task, 0


def cmd_done(ns: argparse.Namespace) -> int:
    async def action(board: TaskBoard) -> int:
        task, code = await _resolve(board, ns.task_id)
        if task is None:
            return code
        state = await board.update(task.id, {"status": TaskStatus.COMPLETED.value})
        if state.error:
            return _report_state(state)
        print(f"Marked '{task.title}' as completed.")
        return 0

    return asyncio.run(_with_board(ns, action))


def cmd_edit(ns: argparse.Namespace) -> int:
    async def action(board: TaskBoard) -> int:
        task, code = await _resolve(board, ns.task_id)
        if task is None:
            return code

        current = TaskForm.from_task(task)
        form = current.model_copy(update={
            "title": ns.title if ns.title is not None else current.title,
            "description": ns.description if ns.description is not None else current.description,
            "importance": Importance(ns.importance) if ns.importance else current.importance,
            "status": TaskStatus(ns.status) if ns.status else current.status,
            "due_date": ns.due if ns.due else current.due_date,
        })
        state = await board.submit(form)
        if state.error:
            return _report_state(state)
        print(f"Updated task {task.id}.")
        return 0

    return asyncio.run(_with_board(ns, action))


def cmd_delete(ns: argparse.Namespace) -> int:
    async def action(board: TaskBoard) -> int:
        task, code = await _resolve(board, ns.task_id)
        if task is None:
            return code
        state = await board.delete(task.id)
        if state.error:
            return _report_state(state)
        print(f"Deleted '{task.title}'.")
        return 0

    return asyncio.run(_with_board(ns, action))


def cmd_report(ns: argparse.Namespace) -> int:
    async def action(board: TaskBoard) -> int:
        state = await board.refresh()
        if state.error:
            return _report_state(state)
        print("\n".join(format_stats(state.stats())))
        return 0

    return asyncio.run(_with_board(ns, action))


def cmd_serve(ns: argparse.Namespace) -> int:
    from tasknotes.web.main import run
    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tasknotes",
        description="Task Notes: personal task manager.",
    )
    p.add_argument(
        "--api",
        help="Server root URL (default: API_BASE_URL env var or http://127.0.0.1:5000)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("list", help="List tasks, newest first.")
    s.set_defaults(func=cmd_list)

    s = sub.add_parser("add", help="Add a new task.")
    s.add_argument("title", help="Task title.")
    s.add_argument("-d", "--description", required=True, help="Task description.")
    s.add_argument("--due", required=True, type=_due_date_arg, help="Due date in YYYY-MM-DD.")
    s.add_argument("--important", action="store_true", help="Mark as Important.")
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("done", help="Mark a task as completed.")
    s.add_argument("task_id", help="Task ID or unique ID prefix.")
    s.set_defaults(func=cmd_done)

    s = sub.add_parser("edit", help="Change task fields.")
    s.add_argument("task_id", help="Task ID or unique ID prefix.")
    s.add_argument("--title")
    s.add_argument("-d", "--description")
    s.add_argument("--importance", choices=[item.value for item in Importance])
    s.add_argument("--status", choices=[item.value for item in TaskStatus])
    s.add_argument("--due", type=_due_date_arg, help="Due date in YYYY-MM-DD.")
    s.set_defaults(func=cmd_edit)

    s = sub.add_parser("delete", help="Delete a task permanently.")
    s.add_argument("task_id", help="Task ID or unique ID prefix.")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("report", help="Show task statistics.")
    s.set_defaults(func=cmd_report)

    s = sub.add_parser("serve", help="Run the web server.")
    s.set_defaults(func=cmd_serve)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    return int(ns.func(ns))


if __name__ == "__main__":
    sys.exit(main())
