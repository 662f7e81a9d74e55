"""SQLite-backed persistence for assistance requests.

The conversation core only needs ``create_assistance_request``; the find
operations back the request listing endpoints used by nursing staff.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol

import aiosqlite

from careassist.errors import PersistenceFailure

if TYPE_CHECKING:
    from careassist.schemas.chat import PendingRequest

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "/app/data/requests.db"

_COLUMNS = (
    "request_id, priority, description, department, room, patient, status, created_at"
)


@dataclass
class AssistanceRequestRecord:
    """A persisted assistance request row. Priority is always stored uppercase."""

    priority: str
    description: str
    department: str
    room: str
    patient: str | None = None
    status: str = "PENDING"
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=lambda: _now_iso())

    def __post_init__(self) -> None:
        self.priority = self.priority.upper()

    @classmethod
    def from_pending(cls, pending: PendingRequest) -> AssistanceRequestRecord:
        return cls(
            priority=pending.priority,
            description=pending.description,
            department=pending.department,
            room=pending.room,
            patient=pending.patient,
            status=pending.status,
        )


class AssistanceRequestStore(Protocol):
    """What the conversation core needs from a record store."""

    async def create_assistance_request(self, record: AssistanceRequestRecord) -> None:
        ...


class RequestStore:
    """Async SQLite-backed assistance request store."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH) -> None:
        self.db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    async def init_db(self) -> None:
        """Create tables if they don't exist."""
        try:
            self._conn = await aiosqlite.connect(self.db_path)
            await self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS assistance_requests (
                    request_id TEXT PRIMARY KEY,
                    priority TEXT NOT NULL,
                    description TEXT NOT NULL,
                    department TEXT NOT NULL,
                    room TEXT NOT NULL,
                    patient TEXT,
                    status TEXT NOT NULL DEFAULT 'PENDING',
                    created_at TEXT NOT NULL
                )
                """
            )
            await self._conn.commit()
        except aiosqlite.Error as e:
            raise PersistenceFailure(f"Could not initialize request store: {e}") from e

    async def _ensure_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            await self.init_db()
        assert self._conn is not None
        return self._conn

    async def create_assistance_request(self, record: AssistanceRequestRecord) -> None:
        """Insert a new assistance request."""
        conn = await self._ensure_conn()
        try:
            await conn.execute(
                f"INSERT INTO assistance_requests ({_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.request_id,
                    record.priority,
                    record.description,
                    record.department,
                    record.room,
                    record.patient,
                    record.status,
                    record.created_at,
                ),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            raise PersistenceFailure(f"Could not save assistance request: {e}") from e
        logger.info(
            "Assistance request %s saved (priority=%s, room=%s)",
            record.request_id,
            record.priority,
            record.room,
        )

    async def get_request(self, request_id: str) -> AssistanceRequestRecord | None:
        """Look up a request by id."""
        conn = await self._ensure_conn()
        try:
            cursor = await conn.execute(
                f"SELECT {_COLUMNS} FROM assistance_requests WHERE request_id = ?",
                (request_id,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceFailure(f"Could not read assistance request: {e}") from e
        if row is None:
            return None
        return _to_record(row)

    async def list_requests(
        self, status: str | None = None, room: str | None = None
    ) -> list[AssistanceRequestRecord]:
        """List requests, newest first, optionally filtered by status and room."""
        conn = await self._ensure_conn()
        clauses: list[str] = []
        params: list[str] = []
        if status:
            clauses.append("status = ?")
            params.append(status.upper())
        if room:
            clauses.append("room = ?")
            params.append(room)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        try:
            cursor = await conn.execute(
                f"SELECT {_COLUMNS} FROM assistance_requests{where} "
                "ORDER BY created_at DESC",
                params,
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise PersistenceFailure(f"Could not list assistance requests: {e}") from e
        return [_to_record(r) for r in rows]

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None


def _to_record(row: tuple) -> AssistanceRequestRecord:
    return AssistanceRequestRecord(
        request_id=row[0],
        priority=row[1],
        description=row[2],
        department=row[3],
        room=row[4],
        patient=row[5],
        status=row[6],
        created_at=row[7],
    )


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(timezone.utc).isoformat()
