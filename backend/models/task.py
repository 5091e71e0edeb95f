from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class Category(str, Enum):
    ASSIGNMENT = "Assignment"
    PROJECT = "Project"
    EXAM = "Exam"
    PERSONAL_STUDY = "Personal Study"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def ordinal(self) -> int:
        """Sort rank: High=0, Medium=1, Low=2."""
        return _PRIORITY_ORDER[self]


_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class Status(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


def _require_title(value: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError("title must not be empty")
    return str(value).strip()


class Task(BaseModel):
    """A task row as returned by the `tasks` table."""
    id: str
    user_id: str
    title: str
    description: Optional[str] = ""
    subject: Optional[str] = ""
    category: Category = Category.ASSIGNMENT
    priority: Priority = Priority.MEDIUM
    status: Status = Status.PENDING
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.status == Status.COMPLETED


class TaskCreate(BaseModel):
    title: str
    description: str = ""
    subject: str = ""
    category: Category = Category.ASSIGNMENT
    priority: Priority = Priority.MEDIUM
    status: Status = Status.PENDING
    start_date: Optional[date] = None
    due_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _require_title(v)


class TaskUpdate(BaseModel):
    """Partial edit. Only fields the client actually sent are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    subject: Optional[str] = None
    category: Optional[Category] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_empty(cls, v):
        return _require_title(v)

    # Dates may be cleared with null; the classification fields may not.
    @field_validator("category", "priority", "status", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("value must not be null")
        return v


class StatusUpdate(BaseModel):
    status: Status


class Profile(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
