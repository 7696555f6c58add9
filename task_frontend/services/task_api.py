# task_frontend/services/task_api.py

import functools
import logging
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import ValidationError

from task_frontend.config import settings
from task_frontend.models.task import Task, TaskCreate, TaskStatus

logger = logging.getLogger("task-api")

TaskId = Union[int, str]


# -----------------------------
# Errors
# -----------------------------
class InvalidTaskId(ValueError):
    """Raised for identifiers that are not numeric; no request is made."""

    def __init__(self, task_id: Any):
        super().__init__(f"Invalid task ID: {task_id!r}")
        self.task_id = task_id


class TaskApiError(Exception):
    """
    Any failure talking to the task backend.

    status_code is the HTTP status the backend answered with, or None when
    no usable response came back. unreachable is set when the connection
    itself failed.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, unreachable: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.unreachable = unreachable

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


# -----------------------------
# Helpers
# -----------------------------
def parse_task_id(task_id: Any) -> Optional[int]:
    if isinstance(task_id, bool):
        return None
    if isinstance(task_id, int):
        return task_id
    if isinstance(task_id, str) and task_id.isascii() and task_id.isdigit():
        return int(task_id)
    return None


def _task_url(task_id: TaskId, suffix: str = "") -> str:
    parsed = parse_task_id(task_id)
    if parsed is None:
        raise InvalidTaskId(task_id)
    return f"{settings.tasks_url}/{parsed}{suffix}"


def _request(method: str, url: str, **kwargs) -> requests.Response:
    try:
        resp = requests.request(method, url, **kwargs)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        body = exc.response.text[:300] if exc.response is not None else ""
        logger.warning("%s %s -> %s | body=%s", method, url, status, body)
        raise TaskApiError(f"Backend responded with status {status}", status_code=status) from exc
    except requests.ConnectionError as exc:
        logger.warning("%s %s -> unreachable | error=%s", method, url, exc)
        raise TaskApiError("Backend server is not reachable", unreachable=True) from exc
    except requests.RequestException as exc:
        logger.warning("%s %s -> failed | error=%s", method, url, exc)
        raise TaskApiError(f"Request to backend failed: {exc}") from exc
    return resp


def _json(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise TaskApiError("Backend returned invalid JSON", status_code=resp.status_code) from exc


def _to_task(data: Any) -> Task:
    try:
        return Task.model_validate(data)
    except ValidationError as exc:
        raise TaskApiError(f"Backend returned a malformed task: {exc.error_count()} error(s)") from exc


def log_response(func):
    """
    Decorator to log the outcome of backend API calls.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        result = func(*args, **kwargs)
        if isinstance(result, list):
            logger.info("Task API %s -> %d item(s)", func.__name__, len(result))
        else:
            logger.info("Task API %s -> ok", func.__name__)
        return result
    return wrapper


# -----------------------------
# Tasks
# -----------------------------
@log_response
def list_tasks() -> List[Task]:
    data = _json(_request("GET", settings.tasks_url))
    if not isinstance(data, list):
        raise TaskApiError("Backend returned a non-list task collection")

    tasks = []
    for item in data:
        try:
            tasks.append(Task.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping malformed task in list | item=%r | errors=%s", item, exc.error_count())
    return tasks


@log_response
def get_task(task_id: TaskId) -> Task:
    url = _task_url(task_id)
    return _to_task(_json(_request("GET", url)))


@log_response
def create_task(task: TaskCreate) -> Task:
    resp = _request("POST", settings.tasks_url, json=task.to_payload())
    return _to_task(_json(resp))


@log_response
def update_task_status(task_id: TaskId, status: TaskStatus) -> None:
    # Any 2xx means the change was applied; the body is not relied on.
    url = _task_url(task_id, "/status")
    _request("PUT", url, json={"status": TaskStatus(status).value})


@log_response
def delete_task(task_id: TaskId) -> None:
    url = _task_url(task_id)
    _request("DELETE", url)


# -----------------------------
# Home page / health
# -----------------------------
@log_response
def get_example_case() -> Dict[str, Any]:
    return _json(_request("GET", settings.example_case_url))


def ping() -> Optional[str]:
    """
    Return None when the backend answers, else the error message.
    """
    try:
        _request("GET", settings.tasks_url)
    except TaskApiError as exc:
        return str(exc)
    return None
