"""Health & Readiness Probes — liveness message and store readiness.

Invariants:
    - GET / always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the store is unreachable (readiness), never raises

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load
      balancer (ADR: production readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from users_api.core.repository_protocols import UserStore
from users_api.infrastructure.database import get_user_store
from users_api.schemas.user import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def home():
    """Basic liveness probe. Returns 200 if the process is up."""
    return MessageResponse(message="🚀 FastAPI + MongoDB API running")


@router.get("/health/ready")
async def readiness_check(store: UserStore = Depends(get_user_store)):
    """Readiness probe — includes store connectivity."""
    if not await store.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
