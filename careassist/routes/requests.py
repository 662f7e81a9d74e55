"""Assistance request endpoints — read access for nursing staff dashboards."""

from fastapi import APIRouter, HTTPException, Request

from careassist.persistence.store import AssistanceRequestRecord, RequestStore
from careassist.schemas.requests import AssistanceRequestOut

router = APIRouter()


def _get_store(request: Request) -> RequestStore:
    store = getattr(request.app.state, "request_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Request store not available")
    return store


def _to_out(record: AssistanceRequestRecord) -> AssistanceRequestOut:
    return AssistanceRequestOut(
        request_id=record.request_id,
        priority=record.priority,
        description=record.description,
        department=record.department,
        room=record.room,
        patient=record.patient,
        status=record.status,
        created_at=record.created_at,
    )


@router.get("/requests", response_model=list[AssistanceRequestOut])
async def list_requests(
    request: Request, status: str | None = None, room: str | None = None
):
    """List assistance requests, newest first."""
    store = _get_store(request)
    records = await store.list_requests(status=status, room=room)
    return [_to_out(r) for r in records]


@router.get("/requests/{request_id}", response_model=AssistanceRequestOut)
async def get_request(request_id: str, request: Request):
    """Fetch a single assistance request."""
    store = _get_store(request)
    record = await store.get_request(request_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return _to_out(record)
