"""LangGraph turn state definition."""

from typing_extensions import TypedDict

from careassist.schemas.chat import ConversationContext, PendingRequest, ToolCall


class TurnState(TypedDict, total=False):
    """State for a single conversation turn. Nothing here outlives the turn."""

    user_message: str
    conversation: ConversationContext
    tool_call: ToolCall | None
    reply: str
    pending_request: PendingRequest | None
