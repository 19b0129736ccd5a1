from datetime import datetime, timezone

from fastapi import APIRouter

from taskmaster import db

router = APIRouter(tags=["Health"])


def build_health_snapshot() -> dict:
    db_status = db.ping()
    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "service": "taskmaster-api",
        "database": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health", summary="Service health check")
def health_check():
    return build_health_snapshot()
