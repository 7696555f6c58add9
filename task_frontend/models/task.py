# models/task.py
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from task_frontend.utils.formatting import is_overdue


# -----------------------------
# API Enums (must match backend)
# -----------------------------
class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def label(self) -> str:
        return self.value.lower().replace("_", " ")

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TaskStatus"]:
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# -----------------------------
# Task Models
# -----------------------------
class Task(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    created_date: Optional[str] = Field(default=None, alias="createdDate")
    updated_date: Optional[str] = Field(default=None, alias="updatedDate")

    class Config:
        populate_by_name = True
        extra = "ignore"

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        if self.status == TaskStatus.COMPLETED:
            return False
        return is_overdue(self.due_date, now)


class TaskCreate(BaseModel):
    """Outbound body for POST {base}/api/tasks."""

    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    due_date: Optional[str] = Field(default=None, alias="dueDate")

    class Config:
        populate_by_name = True

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class TaskSummary(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
    overdue: int = 0

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task], now: Optional[datetime] = None) -> "TaskSummary":
        summary = cls()
        for task in tasks:
            summary.total += 1
            if task.status == TaskStatus.PENDING:
                summary.pending += 1
            elif task.status == TaskStatus.IN_PROGRESS:
                summary.in_progress += 1
            elif task.status == TaskStatus.COMPLETED:
                summary.completed += 1
            elif task.status == TaskStatus.CANCELLED:
                summary.cancelled += 1
            if task.is_overdue(now):
                summary.overdue += 1
        return summary
