"""
Message formatting utilities
"""

from typing import List, Sequence
from tasknotes.models.task import Task, Importance, TaskStatus
from tasknotes.models.stats import TaskStats
from tasknotes.config.constants import MSG_NO_TASKS


def format_stats(stats: TaskStats) -> List[str]:
    """
    Format report lines
    
    Args:
        stats: Computed task statistics
        
    Returns:
        One line per count, in report order
    """
    return [
        f"Total Tasks: {stats.total}",
        f"Pending: {stats.pending}",
        f"Completed: {stats.completed}",
        f"Important: {stats.important}",
        f"Overdue: {stats.overdue}",
    ]


def format_task_line(task: Task) -> str:
    """Single table row for the terminal"""
    status = "DONE" if task.status == TaskStatus.COMPLETED else "TODO"
    flag = "!" if task.importance == Importance.IMPORTANT else " "
    return f"{task.id[:8]}  {status:<4} {flag}  {task.due_date.isoformat():<10}  {task.title} ({task.description})"


def format_task_table(tasks: Sequence[Task]) -> str:
    """
    Format tasks as a plain-text table
    
    Args:
        tasks: Tasks in display order
        
    Returns:
        Table text, or the empty-list message
    """
    if not tasks:
        return MSG_NO_TASKS
    
    lines = [f"{'ID':<8}  {'ST':<4} {'!'}  {'DUE':<10}  TITLE", "-" * 60]
    lines.extend(format_task_line(task) for task in tasks)
    return "\n".join(lines)
