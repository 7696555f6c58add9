# routes/home.py
import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from task_frontend.config import settings
from task_frontend.models.task import TaskSummary
from task_frontend.services import task_api
from task_frontend.services.task_api import TaskApiError
from task_frontend.templating import templates

router = APIRouter(tags=["Home"])
logger = logging.getLogger("task-routes")


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    """
    Landing page: the backend's example case plus a task summary.
    Each backend call fails on its own without hiding the other.
    """
    context = {
        "page_title": settings.SERVICE_NAME,
        "example": None,
        "task_summary": None,
    }

    try:
        context["example"] = task_api.get_example_case()
    except TaskApiError as exc:
        logger.error("Error loading example case | error=%s", exc)
        context["error_message"] = "Some services may be unavailable"

    try:
        context["task_summary"] = TaskSummary.from_tasks(task_api.list_tasks())
    except TaskApiError as exc:
        logger.warning("Could not fetch task summary | error=%s", exc)

    return templates.TemplateResponse(request, "home.html", context)
