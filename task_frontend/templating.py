# task_frontend/templating.py
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from task_frontend.config import settings
from task_frontend.utils.formatting import format_date, is_overdue, nl2br, truncate

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def page_context(request: Request) -> dict:
    return {"page_path": request.url.path}


def configure_templates(development_mode: bool = False) -> Jinja2Templates:
    """
    Build the Jinja2 environment and register the filters and globals the
    views rely on.
    """
    templates = Jinja2Templates(
        directory=str(TEMPLATES_DIR),
        context_processors=[page_context],
    )
    env = templates.env
    env.autoescape = True
    env.auto_reload = development_mode

    env.filters["truncate"] = truncate
    env.filters["nl2br"] = nl2br
    env.filters["format_date"] = format_date
    env.filters["date"] = format_date
    env.filters["is_overdue"] = is_overdue

    env.globals["now"] = datetime.now
    return templates


templates = configure_templates(settings.DEVELOPMENT_MODE)


def render_error(request: Request, message: str, status_code: int, headers: Optional[dict] = None):
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "page_title": "Error",
            "message": message,
            "error": {"status": status_code},
        },
        status_code=status_code,
        headers=headers,
    )
