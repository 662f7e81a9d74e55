"""Chat endpoints — hand patient messages to the conversation orchestrator."""

import asyncio
import json
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from careassist.agent.orchestrator import ConversationOrchestrator
from careassist.schemas.chat import ChatRequest, ChatResponse, StreamRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_orchestrator(request: Request) -> ConversationOrchestrator:
    return request.app.state.orchestrator


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, request: Request):
    """Process one patient message; echo back any request awaiting confirmation."""
    orchestrator = _get_orchestrator(request)
    result = await orchestrator.process_message(req.message, req.context)
    return ChatResponse(
        response=result.text,
        pending_request=result.pending_request,
    )


async def relay_tokens(
    orchestrator: ConversationOrchestrator, message: str
) -> AsyncIterator[str]:
    """Bridge the orchestrator's token callback to an async iterator.

    Yields every token in emission order, including sentinels. A stream
    failure is logged once all of its tokens have been yielded.
    """
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    async def produce() -> None:
        try:
            await orchestrator.stream_message(message, queue.put_nowait)
        except Exception as e:
            logger.warning("Stream ended with error: %s", e)
        finally:
            queue.put_nowait(None)

    task = asyncio.create_task(produce())
    try:
        while True:
            token = await queue.get()
            if token is None:
                break
            yield token
    finally:
        if not task.done():
            task.cancel()


@router.post("/chat/stream")
async def chat_stream(req: StreamRequest, request: Request):
    """Stream a conversational reply as server-sent events."""
    orchestrator = _get_orchestrator(request)

    async def events() -> AsyncIterator[str]:
        async for token in relay_tokens(orchestrator, req.message):
            yield f"data: {json.dumps({'token': token})}\n\n"

    return StreamingResponse(events(), media_type="text/event-stream")
