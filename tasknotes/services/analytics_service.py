"""
Analytics service
"""

from datetime import datetime
from typing import Iterable, Optional
from tasknotes.models.task import Task, Importance, TaskStatus
from tasknotes.models.stats import TaskStats
from tasknotes.utils.date_utils import get_current_datetime, is_past_due


def is_overdue(task: Task, now: datetime) -> bool:
    """Pending task whose due date has passed; never stored"""
    return task.status == TaskStatus.PENDING and is_past_due(task.due_date, now)


def compute_stats(tasks: Iterable[Task], now: Optional[datetime] = None) -> TaskStats:
    """
    Count tasks for the report page
    
    Args:
        tasks: Full task list
        now: Evaluation moment for the overdue count (defaults to current UTC time)
        
    Returns:
        TaskStats with total, pending, completed, important and overdue counts
    """
    if now is None:
        now = get_current_datetime()
    
    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        
        if task.status == TaskStatus.PENDING:
            stats.pending += 1
            if is_past_due(task.due_date, now):
                stats.overdue += 1
        elif task.status == TaskStatus.COMPLETED:
            stats.completed += 1
        
        if task.importance == Importance.IMPORTANT:
            stats.important += 1
    
    return stats
