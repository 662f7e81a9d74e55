"""Conversation schemas and request/response models for the chat endpoints."""

from typing import Any, Literal

from pydantic import BaseModel

from careassist.tools.arguments import Department, Priority


class PendingRequest(BaseModel):
    """An assistance request awaiting the patient's yes/no answer.

    The core keeps no memory between turns: the caller carries this value
    forward and sends it back in the next turn's context.
    """

    priority: Priority
    description: str
    department: Department
    room: str
    patient: str | None = None
    status: Literal["PENDING"] = "PENDING"


class ConversationContext(BaseModel):
    room: str | None = None
    department: str | None = None
    previous_requests: str | None = None
    pending_request: PendingRequest | None = None
    patient_id: str | None = None


class ToolCall(BaseModel):
    name: str
    arguments: dict[str, Any] = {}


class FunctionCallResult(BaseModel):
    text: str
    pending_request: PendingRequest | None = None


class ChatRequest(BaseModel):
    message: str
    context: ConversationContext = ConversationContext()


class ChatResponse(BaseModel):
    response: str
    pending_request: PendingRequest | None = None


class StreamRequest(BaseModel):
    message: str
