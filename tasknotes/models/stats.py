"""
Task statistics model
"""

from pydantic import BaseModel


class TaskStats(BaseModel):
    """Counts shown on the report page"""
    
    total: int = 0
    pending: int = 0
    completed: int = 0
    important: int = 0
    overdue: int = 0
