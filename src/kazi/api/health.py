"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and the
document store is reachable. The store error itself goes to the log,
not to the caller.
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request

from kazi import __version__
from kazi.db.engine import ping

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and store connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await ping(request.app.state.engine)
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("health.database_unavailable", error=str(e))
        checks["database"] = "unavailable"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {
        "success": True,
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **checks,
    }
