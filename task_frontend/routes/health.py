from datetime import datetime, timezone

from fastapi import APIRouter

from task_frontend.services import task_api

router = APIRouter(tags=["Health"])


def build_health_snapshot() -> dict:
    error = task_api.ping()

    payload = {
        "status": "healthy" if error is None else "degraded",
        "service": "task-frontend",
        "backend": "connected" if error is None else "error",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if error:
        payload["error"] = error
    return payload


@router.get("/health")
def health_check():
    return build_health_snapshot()
