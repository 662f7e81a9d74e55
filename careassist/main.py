"""CareAssist FastAPI application with lifespan-managed clients and orchestrator."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careassist.agent.models import get_chat_model, get_stream_model
from careassist.agent.orchestrator import ConversationOrchestrator
from careassist.clients.ollama import ModelGateway
from careassist.clients.recovery import OllamaRelauncher, noop_recovery
from careassist.clients.retry import RetryExecutor
from careassist.config import settings
from careassist.middleware.turn_latency import TurnLatencyMiddleware
from careassist.persistence.store import RequestStore
from careassist.routes.chat import router as chat_router
from careassist.routes.health import router as health_router
from careassist.routes.requests import router as requests_router
from careassist.tools.dispatcher import FunctionCallDispatcher

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store, gateway and orchestrator once; share via app.state."""
    # Initialize persistence (SQLite for assistance requests)
    db_dir = os.path.dirname(settings.request_db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    store = RequestStore(settings.request_db_path)
    await store.init_db()
    app.state.request_store = store
    logger.info("SQLite persistence initialized at %s", settings.request_db_path)

    # Retry policy with best-effort Ollama relaunch
    recovery = (
        OllamaRelauncher(executable=settings.ollama_executable)
        if settings.recovery_enabled
        else noop_recovery
    )
    executor = RetryExecutor(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay_seconds,
        recovery=recovery,
    )

    gateway = ModelGateway(
        settings,
        chat_model=get_chat_model(settings),
        stream_model=get_stream_model(settings),
        executor=executor,
    )
    app.state.gateway = gateway
    logger.info("Using Ollama host %s", settings.ollama_host)

    app.state.orchestrator = ConversationOrchestrator(
        gateway,
        FunctionCallDispatcher(store),
        executor=executor,
        confirmation_match=settings.confirmation_match,
    )

    logger.info("CareAssist started — orchestrator ready")
    yield

    # Cleanup
    await gateway.close()
    await store.close()
    logger.info("CareAssist shutdown — clients closed")


app = FastAPI(title="CareAssist Bedside Patient Assistant", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TurnLatencyMiddleware, log_dir=settings.log_dir)

app.include_router(health_router)
app.include_router(chat_router)
app.include_router(requests_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.agent_port)
