"""
Task model
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Dict, Optional
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from tasknotes.config.constants import (
    IMPORTANCE_NORMAL,
    IMPORTANCE_IMPORTANT,
    STATUS_PENDING,
    STATUS_COMPLETED,
)
from tasknotes.utils.date_utils import parse_due_date, ensure_utc


class Importance(str, Enum):
    """Task importance"""
    NORMAL = IMPORTANCE_NORMAL
    IMPORTANT = IMPORTANCE_IMPORTANT


class TaskStatus(str, Enum):
    """Task status"""
    PENDING = STATUS_PENDING
    COMPLETED = STATUS_COMPLETED


def _clean_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise ValueError("title must not be empty")
    return title


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("description must not be empty")
    return value


def _coerce_due_date(value: Any) -> date:
    due_date = parse_due_date(value)
    if due_date is None:
        raise ValueError("dueDate is required")
    return due_date


Title = Annotated[str, AfterValidator(_clean_title)]
Description = Annotated[str, AfterValidator(_require_text)]
DueDate = Annotated[date, BeforeValidator(_coerce_due_date)]
Timestamp = Annotated[datetime, AfterValidator(ensure_utc)]


class Task(BaseModel):
    """Stored task"""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    id: str
    title: Title
    description: Description
    importance: Importance = Importance.NORMAL
    status: TaskStatus = TaskStatus.PENDING
    due_date: DueDate = Field(alias="dueDate")
    created_at: Timestamp = Field(alias="createdAt")
    
    def to_json(self) -> Dict[str, Any]:
        """JSON-ready dict using the wire field names"""
        return self.model_dump(mode="json", by_alias=True)


class TaskCreate(BaseModel):
    """Task creation model (a draft without id and createdAt)"""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    title: Title
    description: Description
    importance: Importance = Importance.NORMAL
    status: TaskStatus = TaskStatus.PENDING
    due_date: DueDate = Field(alias="dueDate")
    
    @model_validator(mode="before")
    @classmethod
    def _default_nulls(cls, data: Any) -> Any:
        # Explicit null for an enum falls back to its default
        if isinstance(data, dict):
            data = {
                key: value for key, value in data.items()
                if not (key in ("importance", "status") and value is None)
            }
        return data


class TaskUpdate(BaseModel):
    """Task update model; only the fields that were sent are applied"""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    title: Optional[Title] = None
    description: Optional[Description] = None
    importance: Optional[Importance] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[DueDate] = Field(None, alias="dueDate")
    
    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = sorted(key for key, value in data.items() if value is None and key in _UPDATABLE_KEYS)
            if nulls:
                raise ValueError(f"{', '.join(nulls)} may not be null")
        return data
    
    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually set, keyed by attribute name"""
        return self.model_dump(exclude_unset=True)


_UPDATABLE_KEYS = {"title", "description", "importance", "status", "due_date", "dueDate"}
