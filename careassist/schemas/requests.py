"""Response schemas for the assistance-request and health endpoints."""

from typing import Any

from pydantic import BaseModel


class AssistanceRequestOut(BaseModel):
    request_id: str
    priority: str  # "LOW", "MEDIUM", "HIGH"
    description: str
    department: str
    room: str
    patient: str | None = None
    status: str
    created_at: str


class HealthResponse(BaseModel):
    status: str  # "ok" or "degraded"
    backend: dict[str, Any] = {}
