"""Health endpoint — reports whether the local model server answers."""

import logging

from fastapi import APIRouter, Request

from careassist.errors import BackendUnavailable
from careassist.schemas.requests import HealthResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    gateway = request.app.state.gateway
    try:
        version = await gateway.probe_health()
    except BackendUnavailable as e:
        logger.warning("Health check degraded: %s", e)
        return HealthResponse(status="degraded", backend={"error": str(e)})
    return HealthResponse(status="ok", backend=version)
