"""Executes the domain action behind a model tool call."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from careassist.agent import replies
from careassist.errors import UnknownTool, ValidationGap
from careassist.persistence.store import AssistanceRequestRecord, AssistanceRequestStore
from careassist.schemas.chat import (
    ConversationContext,
    FunctionCallResult,
    PendingRequest,
    ToolCall,
)
from careassist.tools.arguments import (
    AssistanceRequestArgs,
    NurseAssistanceArgs,
    ScheduleAppointmentArgs,
)
from careassist.tools.base import persistence_guard
from careassist.tools.catalog import ToolName

logger = logging.getLogger(__name__)

_ARGUMENT_MODELS: dict[ToolName, type[BaseModel]] = {
    ToolName.SCHEDULE_APPOINTMENT: ScheduleAppointmentArgs,
    ToolName.REQUEST_NURSE_ASSISTANCE: NurseAssistanceArgs,
    ToolName.CREATE_ASSISTANCE_REQUEST: AssistanceRequestArgs,
}


def parse_tool_call(tool_call: ToolCall) -> tuple[ToolName, BaseModel]:
    """Resolve the tool name and validate its arguments against the catalog.

    Raises UnknownTool for names outside the catalog and ValidationGap when
    required fields are missing or an enum value is out of range.
    """
    try:
        name = ToolName(tool_call.name)
    except ValueError:
        raise UnknownTool(tool_call.name) from None
    try:
        args = _ARGUMENT_MODELS[name].model_validate(tool_call.arguments)
    except ValidationError as e:
        raise ValidationGap(name, e.errors()) from e
    return name, args


class FunctionCallDispatcher:
    """Maps each catalog tool to its action.

    Only ``create_assistance_request`` touches the store, and only when the
    model says no confirmation is needed; otherwise it hands a
    ``PendingRequest`` back for the caller to carry into the next turn.
    """

    def __init__(self, store: AssistanceRequestStore) -> None:
        self.store = store

    async def dispatch(
        self, tool_call: ToolCall, context: ConversationContext
    ) -> FunctionCallResult:
        name, args = parse_tool_call(tool_call)
        return await _HANDLERS[name](self, args, context)

    async def submit(self, pending: PendingRequest) -> FunctionCallResult:
        """Persist a request the patient has just confirmed."""
        return await self._persist(pending, replies.request_submitted)

    async def _schedule_appointment(
        self, args: ScheduleAppointmentArgs, context: ConversationContext
    ) -> FunctionCallResult:
        # Scheduling is acknowledged only; nothing is booked.
        return FunctionCallResult(
            text=replies.appointment_scheduled(args.symptoms, args.severity)
        )

    async def _request_nurse_assistance(
        self, args: NurseAssistanceArgs, context: ConversationContext
    ) -> FunctionCallResult:
        return FunctionCallResult(text=replies.nurse_requested(args.reason, args.urgency))

    async def _create_assistance_request(
        self, args: AssistanceRequestArgs, context: ConversationContext
    ) -> FunctionCallResult:
        pending = PendingRequest(
            priority=args.priority,
            description=args.description,
            department=args.department,
            room=context.room or "Unknown",
            patient=context.patient_id,
        )
        if args.requires_confirmation:
            return FunctionCallResult(
                text=replies.confirmation_prompt(pending),
                pending_request=pending,
            )
        return await self._persist(pending, replies.request_created)

    @persistence_guard
    async def _persist(
        self, pending: PendingRequest, describe: Callable[[PendingRequest], str]
    ) -> FunctionCallResult:
        record = AssistanceRequestRecord.from_pending(pending)
        await self.store.create_assistance_request(record)
        logger.info("Created %s priority request for room %s", record.priority, record.room)
        return FunctionCallResult(text=describe(pending))


_Handler = Callable[
    [FunctionCallDispatcher, Any, ConversationContext], Awaitable[FunctionCallResult]
]

_HANDLERS: dict[ToolName, _Handler] = {
    ToolName.SCHEDULE_APPOINTMENT: FunctionCallDispatcher._schedule_appointment,
    ToolName.REQUEST_NURSE_ASSISTANCE: FunctionCallDispatcher._request_nurse_assistance,
    ToolName.CREATE_ASSISTANCE_REQUEST: FunctionCallDispatcher._create_assistance_request,
}

_unhandled = (set(ToolName) - set(_HANDLERS)) | (set(ToolName) - set(_ARGUMENT_MODELS))
if _unhandled:
    raise RuntimeError(f"No dispatcher handler for tools: {sorted(_unhandled)}")
