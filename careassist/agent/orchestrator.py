"""Conversation orchestrator — the entry point the transport layer calls."""

from __future__ import annotations

import logging
from typing import Callable

from careassist.agent.confirmation import MatchMode
from careassist.agent.graph import build_turn_graph
from careassist.agent.prompts import STREAMING_SYSTEM_PROMPT
from careassist.agent.replies import EMPTY_MESSAGE_REPLY, GENERIC_ERROR_REPLY
from careassist.clients.ollama import END_SENTINEL, START_SENTINEL, ModelGateway
from careassist.clients.retry import RetryExecutor
from careassist.schemas.chat import ConversationContext, FunctionCallResult
from careassist.tools.dispatcher import FunctionCallDispatcher

logger = logging.getLogger(__name__)


class ConversationOrchestrator:
    """Turns one patient message into a reply.

    Built once at startup and shared by all requests. It keeps no per-turn
    fields: continuity (the pending request) travels in the caller's
    ``ConversationContext``.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        dispatcher: FunctionCallDispatcher,
        executor: RetryExecutor | None = None,
        confirmation_match: MatchMode = "substring",
    ) -> None:
        self.gateway = gateway
        self.dispatcher = dispatcher
        self.executor = executor or gateway.executor
        self.graph = build_turn_graph(gateway, dispatcher, confirmation_match)

    async def process_message(
        self, user_message: str, context: ConversationContext | None = None
    ) -> FunctionCallResult:
        """Run one turn. Never raises: failures become an apology."""
        input_state = {
            "user_message": user_message,
            "conversation": context or ConversationContext(),
        }
        try:
            result = await self.graph.ainvoke(input_state)
        except Exception:
            logger.exception("Error in process_message")
            return FunctionCallResult(text=GENERIC_ERROR_REPLY)

        return FunctionCallResult(
            text=result.get("reply", ""),
            pending_request=result.get("pending_request"),
        )

    async def stream_message(
        self, user_message: str, on_token: Callable[[str], None]
    ) -> None:
        """Stream a text-only reply through ``on_token``.

        Every attempt is framed by [START] ... [END]. If the backend stays
        unreachable, each attempt emits the error reply before [END] and the
        final failure is raised after the last attempt.
        """
        if not user_message or not user_message.strip():
            on_token(START_SENTINEL)
            on_token(EMPTY_MESSAGE_REPLY)
            on_token(END_SENTINEL)
            raise ValueError("Empty message provided")

        logger.info("Streaming reply (%d chars in)", len(user_message))
        await self.executor.execute(
            lambda: self.gateway.chat_stream(
                STREAMING_SYSTEM_PROMPT, user_message, on_token
            )
        )
