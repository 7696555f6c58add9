# utils/validation.py
from typing import Dict, Optional

from task_frontend.models.task import TaskCreate, TaskStatus
from task_frontend.utils.formatting import to_backend_datetime

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


def validate_task_form(
    title: Optional[str],
    description: Optional[str] = None,
    status: Optional[str] = None,
) -> Dict[str, str]:
    """
    Check the create-task form. Returns a mapping of field name to message;
    an empty mapping means the form can be sent to the backend.
    """
    errors: Dict[str, str] = {}

    if not title or not title.strip():
        errors["title"] = "Task title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Task title must be less than {TITLE_MAX_LENGTH} characters"

    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = f"Task description must be less than {DESCRIPTION_MAX_LENGTH} characters"

    if status and TaskStatus.parse(status) is None:
        errors["status"] = "Invalid status"

    return errors


def build_task_create(
    title: str,
    description: Optional[str] = None,
    status: Optional[str] = None,
    due_date: Optional[str] = None,
) -> TaskCreate:
    """Turn an already-validated form into the backend payload."""
    return TaskCreate(
        title=title.strip(),
        description=(description or "").strip() or None,
        status=TaskStatus.parse(status) or TaskStatus.PENDING,
        due_date=to_backend_datetime(due_date),
    )
