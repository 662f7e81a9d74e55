"""LangGraph turn graph — confirm / decline / reason → dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from langgraph.graph import END, START, StateGraph
from langgraph.graph.state import CompiledStateGraph

from careassist.agent.confirmation import MatchMode, classify_confirmation
from careassist.agent.prompts import build_turn_prompt
from careassist.agent.replies import COULD_NOT_PROCESS_REPLY, DECLINED_REPLY
from careassist.agent.state import TurnState
from careassist.errors import UnknownTool, ValidationGap

if TYPE_CHECKING:
    from careassist.clients.ollama import ModelGateway
    from careassist.tools.dispatcher import FunctionCallDispatcher

logger = logging.getLogger(__name__)


def _route_turn(mode: MatchMode):
    """Entry edge: a yes/no answer to a pending request skips the model."""

    def route(state: TurnState) -> str:
        if state["conversation"].pending_request is None:
            return "reason"
        answer = classify_confirmation(state["user_message"], mode)
        if answer == "affirm":
            return "submit_pending"
        if answer == "decline":
            return "decline"
        # Ambiguous reply: treat it as a fresh request.
        return "reason"

    return route


def _should_dispatch(state: TurnState) -> str:
    """Edge function: route to dispatch if the model chose a tool."""
    if state.get("tool_call") is not None:
        return "dispatch"
    return END


async def _decline(state: TurnState) -> dict[str, Any]:
    return {"reply": DECLINED_REPLY, "pending_request": None}


def build_turn_graph(
    gateway: ModelGateway,
    dispatcher: FunctionCallDispatcher,
    confirmation_match: MatchMode = "substring",
) -> CompiledStateGraph:
    """Build the per-turn graph.

    Args:
        gateway: Model gateway used for the non-streamed completion.
        dispatcher: Executes tool calls and persists confirmed requests.
        confirmation_match: "substring" or "word" yes/no detection.
    """

    async def submit_pending(state: TurnState) -> dict[str, Any]:
        """Persist the request the patient just confirmed. No model call."""
        pending = state["conversation"].pending_request
        assert pending is not None
        result = await dispatcher.submit(pending)
        return {"reply": result.text, "pending_request": None}

    async def reason(state: TurnState) -> dict[str, Any]:
        """Invoke the model with the context-enriched system prompt."""
        prompt = build_turn_prompt(state["conversation"])
        reply = await gateway.chat_once(prompt, state["user_message"])
        return {"reply": reply.text, "tool_call": reply.tool_call}

    async def dispatch(state: TurnState) -> dict[str, Any]:
        """Run the selected tool; a bad tool call becomes a polite refusal."""
        tool_call = state["tool_call"]
        assert tool_call is not None
        try:
            result = await dispatcher.dispatch(tool_call, state["conversation"])
        except (UnknownTool, ValidationGap) as e:
            logger.warning("Could not process tool call %s: %s", tool_call.name, e)
            return {"reply": COULD_NOT_PROCESS_REPLY, "pending_request": None}
        return {"reply": result.text, "pending_request": result.pending_request}

    graph = StateGraph(TurnState)
    graph.add_node("submit_pending", submit_pending)
    graph.add_node("decline", _decline)
    graph.add_node("reason", reason)
    graph.add_node("dispatch", dispatch)
    graph.add_conditional_edges(
        START,
        _route_turn(confirmation_match),
        {"submit_pending": "submit_pending", "decline": "decline", "reason": "reason"},
    )
    graph.add_conditional_edges(
        "reason",
        _should_dispatch,
        {"dispatch": "dispatch", END: END},
    )
    graph.add_edge("submit_pending", END)
    graph.add_edge("decline", END)
    graph.add_edge("dispatch", END)

    return graph.compile()
