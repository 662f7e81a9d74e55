"""Gateway to the local Ollama model server.

Non-streamed completions go through LangChain's ChatOllama with the tool
catalog bound; streamed completions are text-only and framed by start/end
sentinels so callers always see a bounded session.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Sequence

import httpx
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from careassist.agent.replies import EMPTY_STREAM_REPLY, STREAM_ERROR_REPLY
from careassist.clients.retry import RetryExecutor
from careassist.config import Settings
from careassist.errors import BackendUnavailable
from careassist.schemas.chat import ToolCall
from careassist.tools import TOOL_CATALOG

logger = logging.getLogger(__name__)

START_SENTINEL = "[START]"
END_SENTINEL = "[END]"


@dataclass
class ModelReply:
    """One non-streamed completion: free text and at most one tool call."""

    text: str
    tool_call: ToolCall | None = None


class ModelGateway:
    """Async adapter over the Ollama chat and version endpoints."""

    def __init__(
        self,
        settings: Settings,
        chat_model: BaseChatModel,
        stream_model: BaseChatModel,
        http: httpx.AsyncClient | None = None,
        executor: RetryExecutor | None = None,
    ) -> None:
        self.settings = settings
        self.chat_model = chat_model
        self.stream_model = stream_model
        self.executor = executor or RetryExecutor(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay_seconds,
        )
        self.http = http or httpx.AsyncClient(
            base_url=settings.ollama_host.rstrip("/"),
            timeout=settings.request_timeout_seconds,
        )

    # --- Completions ---

    async def chat_once(
        self,
        system_prompt: str,
        user_message: str,
        tools: Sequence[dict[str, Any]] = TOOL_CATALOG,
    ) -> ModelReply:
        """Single completion with tools bound, retried with backoff."""
        model = self.chat_model.bind_tools(list(tools))
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_message),
        ]
        response = await self.executor.execute(lambda: model.ainvoke(messages))

        text = response.content if isinstance(response.content, str) else ""
        tool_call = None
        if getattr(response, "tool_calls", None):
            first = response.tool_calls[0]
            tool_call = ToolCall(name=first["name"], arguments=first.get("args") or {})
            logger.info("Model selected tool %s", tool_call.name)
        return ModelReply(text=text, tool_call=tool_call)

    async def probe_health(self) -> dict[str, Any]:
        """GET /api/version within the probe timeout.

        Raises BackendUnavailable on timeout, transport error, or non-2xx.
        """
        timeout = self.settings.health_probe_timeout_seconds
        try:
            resp = await asyncio.wait_for(
                self.http.get("/api/version", timeout=timeout), timeout=timeout
            )
        except (httpx.HTTPError, TimeoutError) as e:
            raise BackendUnavailable(f"Ollama service is not available: {e!r}") from e

        if not resp.is_success:
            raise BackendUnavailable(
                f"Ollama service not responding (HTTP {resp.status_code})"
            )
        try:
            version: dict[str, Any] = resp.json()
        except ValueError as e:
            raise BackendUnavailable("Ollama returned a malformed version body") from e
        logger.info("Ollama version: %s", version.get("version", "unknown"))
        return version

    async def iter_tokens(
        self, system_prompt: str, user_message: str
    ) -> AsyncIterator[str]:
        """Yield content chunks in order. The stream is never opened if the probe fails."""
        await self.probe_health()
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_message),
        ]
        async with aclosing(self.stream_model.astream(messages)) as stream:
            async for chunk in stream:
                if isinstance(chunk.content, str) and chunk.content:
                    yield chunk.content

    async def chat_stream(
        self,
        system_prompt: str,
        user_message: str,
        on_token: Callable[[str], None],
    ) -> None:
        """One framed streaming session: [START], tokens, [END].

        On failure the error reply and [END] are emitted before re-raising.
        """
        on_token(START_SENTINEL)
        has_content = False
        try:
            async with aclosing(self.iter_tokens(system_prompt, user_message)) as tokens:
                async for token in tokens:
                    has_content = True
                    on_token(token)
        except Exception as e:
            logger.error("Streaming error: %s", e)
            on_token(STREAM_ERROR_REPLY)
            on_token(END_SENTINEL)
            raise

        if not has_content:
            on_token(EMPTY_STREAM_REPLY)
        on_token(END_SENTINEL)

    async def close(self) -> None:
        await self.http.aclose()
