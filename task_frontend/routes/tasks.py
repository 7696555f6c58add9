# routes/tasks.py
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from task_frontend.config import settings
from task_frontend.models.task import TaskStatus
from task_frontend.services import task_api
from task_frontend.services.task_api import TaskApiError, parse_task_id
from task_frontend.templating import render_error, templates
from task_frontend.utils.validation import build_task_create, validate_task_form

router = APIRouter(tags=["Tasks"])
logger = logging.getLogger("task-routes")


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def redirect_with(path: str, **params: str) -> RedirectResponse:
    url = f"{path}?{urlencode(params)}" if params else path
    return RedirectResponse(url, status_code=303)


def list_error_message(exc: TaskApiError) -> str:
    message = "Failed to load tasks. "
    if exc.unreachable:
        return message + f"Please check if the backend is running on {settings.API_BASE_URL}"
    if exc.status_code:
        return message + f"Server responded with status {exc.status_code}"
    return message + "Please try again."


def create_error_message(exc: TaskApiError) -> str:
    message = "Failed to create task. "
    if exc.status_code == 400:
        return message + "Please check your input data."
    if exc.unreachable:
        return message + "Backend server is not reachable."
    return message


def render_new_form(request: Request, task: dict, errors: dict) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "tasks/new.html",
        {
            "page_title": "Create New Task",
            "task": task,
            "errors": errors,
            "statuses": list(TaskStatus),
        },
    )


# -------------------------------------------------
# List
# -------------------------------------------------
@router.get("/tasks", response_class=HTMLResponse)
def list_tasks(request: Request, success: Optional[str] = None, error: Optional[str] = None):
    try:
        tasks = task_api.list_tasks()
    except TaskApiError as exc:
        logger.error("Error fetching tasks | status=%s | error=%s", exc.status_code, exc)
        return templates.TemplateResponse(
            request,
            "tasks/index.html",
            {
                "tasks": [],
                "page_title": "Task Management",
                "error_message": list_error_message(exc),
            },
        )

    return templates.TemplateResponse(
        request,
        "tasks/index.html",
        {
            "tasks": tasks,
            "page_title": "Task Management",
            "success_message": success,
            "error_message": error,
        },
    )


# -------------------------------------------------
# Create
# -------------------------------------------------
@router.get("/tasks/new", response_class=HTMLResponse)
def new_task(request: Request):
    return render_new_form(request, task={}, errors={})


@router.post("/tasks", response_class=HTMLResponse)
def create_task(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    status: str = Form(""),
    due_date: str = Form("", alias="dueDate"),
):
    submitted = {
        "title": title,
        "description": description,
        "status": status,
        "due_date": due_date,
    }

    errors = validate_task_form(title, description, status)
    if errors:
        return render_new_form(request, task=submitted, errors=errors)

    payload = build_task_create(title, description, status, due_date)
    try:
        created = task_api.create_task(payload)
    except TaskApiError as exc:
        logger.error("Error creating task | status=%s | error=%s", exc.status_code, exc)
        return render_new_form(request, task=submitted, errors={"general": create_error_message(exc)})

    logger.info("Task created | id=%s", created.id)
    return redirect_with("/tasks", success=f'Task "{payload.title}" created successfully')


# -------------------------------------------------
# Detail
# -------------------------------------------------
@router.get("/tasks/{task_id}", response_class=HTMLResponse)
def show_task(request: Request, task_id: str, success: Optional[str] = None, error: Optional[str] = None):
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return render_error(request, "Invalid task ID", 404)

    try:
        task = task_api.get_task(parsed_id)
    except TaskApiError as exc:
        logger.error("Error fetching task | id=%s | status=%s | error=%s", parsed_id, exc.status_code, exc)
        if exc.not_found:
            return render_error(request, "Task not found", 404)
        return redirect_with("/tasks", error="Failed to load task")

    return templates.TemplateResponse(
        request,
        "tasks/show.html",
        {
            "task": task,
            "page_title": f"Task: {task.title}",
            "statuses": list(TaskStatus),
            "success_message": success,
            "error_message": error,
        },
    )


# -------------------------------------------------
# Status update
# -------------------------------------------------
@router.post("/tasks/{task_id}/status")
def update_task_status(task_id: str, status: Optional[str] = Form(None)):
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return redirect_with("/tasks", error="Invalid task ID")

    new_status = TaskStatus.parse(status)
    if new_status is None:
        return redirect_with(f"/tasks/{parsed_id}", error="Invalid status")

    try:
        task_api.update_task_status(parsed_id, new_status)
    except TaskApiError as exc:
        logger.error("Error updating task status | id=%s | status=%s | error=%s", parsed_id, exc.status_code, exc)
        return redirect_with(f"/tasks/{parsed_id}", error="Failed to update task status")

    return redirect_with(f"/tasks/{parsed_id}", success=f"Task status updated to {new_status.label}")


# -------------------------------------------------
# Delete
# -------------------------------------------------
@router.post("/tasks/{task_id}/delete")
def delete_task(task_id: str):
    parsed_id = parse_task_id(task_id)
    if parsed_id is None:
        return redirect_with("/tasks", error="Invalid task ID")

    try:
        # Fetched first so the confirmation can name the task.
        task = task_api.get_task(parsed_id)
        task_api.delete_task(parsed_id)
    except TaskApiError as exc:
        logger.error("Error deleting task | id=%s | status=%s | error=%s", parsed_id, exc.status_code, exc)
        if exc.not_found:
            return redirect_with("/tasks", error="Task not found")
        return redirect_with("/tasks", error="Failed to delete task")

    return redirect_with("/tasks", success=f'Task "{task.title}" deleted successfully')
