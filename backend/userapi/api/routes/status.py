"""Status & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /status always returns 200 {"Status": "OK"} if the process is up (liveness)
    - GET /status/ready returns 503 if the relational store's database is unreachable
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/status", tags=["status"])


@router.get("", status_code=status.HTTP_200_OK)
async def status_check():
    """Basic liveness probe."""
    return {"Status": "OK"}


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity when a database is configured."""
    db = getattr(request.app.state, "db", None)
    if db is not None and not await db.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"Status": "NOT_READY", "Reason": "database_unavailable"},
        )
    return {"Status": "READY"}
