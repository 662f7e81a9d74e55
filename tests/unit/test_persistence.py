"""Unit tests for SQLite-backed assistance request persistence."""

import os
import tempfile
from unittest.mock import AsyncMock

import aiosqlite
import pytest

from careassist.errors import PersistenceFailure
from careassist.persistence.store import AssistanceRequestRecord, RequestStore
from careassist.schemas.chat import PendingRequest


def _record(**overrides) -> AssistanceRequestRecord:
    fields = {
        "priority": "high",
        "description": "Needs help sitting up",
        "department": "Orthopedics",
        "room": "221",
        "patient": "pat-3",
    }
    fields.update(overrides)
    return AssistanceRequestRecord(**fields)


def test_record_uppercases_priority():
    assert _record(priority="medium").priority == "MEDIUM"
    assert _record(priority="HIGH").priority == "HIGH"


def test_record_defaults():
    record = _record()
    assert record.status == "PENDING"
    assert record.request_id
    assert record.created_at


def test_record_from_pending():
    pending = PendingRequest(
        priority="low", description="Water", department="Maternity", room="5"
    )
    record = AssistanceRequestRecord.from_pending(pending)
    assert record.priority == "LOW"
    assert record.description == "Water"
    assert record.department == "Maternity"
    assert record.room == "5"
    assert record.patient is None
    assert record.status == "PENDING"


@pytest.mark.asyncio
async def test_create_and_get_request(request_store):
    """Creating a request and retrieving it returns matching data."""
    record = _record()
    await request_store.create_assistance_request(record)

    result = await request_store.get_request(record.request_id)
    assert result is not None
    assert result.priority == "HIGH"
    assert result.description == "Needs help sitting up"
    assert result.department == "Orthopedics"
    assert result.room == "221"
    assert result.patient == "pat-3"
    assert result.status == "PENDING"


@pytest.mark.asyncio
async def test_get_missing_request(request_store):
    """Looking up a non-existent request returns None."""
    assert await request_store.get_request("nonexistent") is None


@pytest.mark.asyncio
async def test_list_requests_newest_first(request_store):
    await request_store.create_assistance_request(
        _record(description="first", created_at="2026-01-01T08:00:00+00:00")
    )
    await request_store.create_assistance_request(
        _record(description="second", created_at="2026-01-01T09:00:00+00:00")
    )
    results = await request_store.list_requests()
    assert [r.description for r in results] == ["second", "first"]


@pytest.mark.asyncio
async def test_list_requests_filters(request_store):
    await request_store.create_assistance_request(_record(room="101"))
    await request_store.create_assistance_request(_record(room="102"))
    await request_store.create_assistance_request(_record(room="101", status="COMPLETED"))

    by_room = await request_store.list_requests(room="101")
    assert len(by_room) == 2

    pending = await request_store.list_requests(status="pending", room="101")
    assert len(pending) == 1
    assert pending[0].status == "PENDING"


@pytest.mark.asyncio
async def test_duplicate_id_raises_persistence_failure(request_store):
    record = _record()
    await request_store.create_assistance_request(record)
    with pytest.raises(PersistenceFailure):
        await request_store.create_assistance_request(record)


@pytest.mark.asyncio
async def test_driver_error_wrapped(request_store):
    conn = AsyncMock()
    conn.execute.side_effect = aiosqlite.OperationalError("database is locked")
    request_store._conn = conn
    with pytest.raises(PersistenceFailure, match="database is locked"):
        await request_store.create_assistance_request(_record())


@pytest.mark.asyncio
async def test_init_creates_table():
    """init_db creates the assistance_requests table from scratch."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    s = RequestStore(db_path)
    await s.init_db()
    # Should be able to insert immediately
    await s.create_assistance_request(_record(request_id="init-test"))
    result = await s.get_request("init-test")
    assert result is not None
    await s.close()
    os.unlink(db_path)


@pytest.mark.asyncio
async def test_lazy_connect():
    """Store connects on first use if init_db was not called."""
    s = RequestStore(":memory:")
    await s.create_assistance_request(_record(request_id="lazy"))
    assert await s.get_request("lazy") is not None
    await s.close()
