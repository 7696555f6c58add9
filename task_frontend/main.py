import logging
import time

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_frontend.config import settings
from task_frontend.routes import health, home, tasks
from task_frontend.templating import render_error

# ---------------- Logging ----------------
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger("task-frontend")
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ---------------- FastAPI App ----------------
app = FastAPI(
    title="Task Management Front-end",
    version="1.0.0",
    docs_url="/docs" if settings.DEVELOPMENT_MODE else None,
    redoc_url=None,
)


@app.middleware("http")
async def log_request(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# ---------------- Error pages ----------------
@app.exception_handler(StarletteHTTPException)
async def http_error_page(request: Request, exc: StarletteHTTPException):
    headers = getattr(exc, "headers", None)
    if exc.status_code == 404:
        return render_error(request, "Page not found", 404, headers)
    return render_error(request, str(exc.detail), exc.status_code, headers)


@app.exception_handler(Exception)
async def server_error_page(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return render_error(request, "Something went wrong", 500)


# ---------------- Routes ----------------
app.include_router(home.router)
app.include_router(tasks.router)
app.include_router(health.router)


@app.on_event("startup")
def on_startup():
    logger.info("Task front-end started | backend=%s", settings.tasks_url)


def run():
    import uvicorn

    uvicorn.run(
        "task_frontend.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.DEVELOPMENT_MODE,
    )


# For running directly: python -m task_frontend.main
if __name__ == "__main__":
    run()
