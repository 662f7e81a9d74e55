"""Shared test fixtures for CareAssist unit tests."""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
from fakes import OLLAMA_TEST_HOST, VERSION_URL, make_stream_model
from langchain_core.messages import AIMessage

from careassist.clients.ollama import ModelGateway
from careassist.clients.retry import RetryExecutor
from careassist.config import Settings
from careassist.persistence.store import RequestStore
from careassist.tools.dispatcher import FunctionCallDispatcher


@pytest.fixture
def settings():
    """Settings with explicit values so env/.env never leaks into tests."""
    return Settings(
        ollama_host=OLLAMA_TEST_HOST,
        chat_model="mistral",
        stream_model="nemotron-mini",
        retry_max_attempts=3,
        retry_base_delay_seconds=1.0,
        health_probe_timeout_seconds=5.0,
        recovery_enabled=False,
        confirmation_match="substring",
        log_dir=tempfile.gettempdir(),
    )


@pytest.fixture
def sleeps():
    """Backoff delays recorded by the executor fixture instead of sleeping."""
    return []


@pytest.fixture
def recovery():
    return MagicMock()


@pytest.fixture
def executor(sleeps, recovery):
    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    return RetryExecutor(
        max_attempts=3, base_delay=1.0, recovery=recovery, sleep=fake_sleep
    )


@pytest.fixture
def mock_chat_model():
    """ChatOllama stand-in: bind_tools() returns a model whose ainvoke is an AsyncMock."""
    model = MagicMock()
    bound = MagicMock()
    bound.ainvoke = AsyncMock(return_value=AIMessage(content="How can I help you today?"))
    model.bind_tools.return_value = bound
    return model


@pytest.fixture
def stream_model():
    return make_stream_model(["Hello", ", how are you feeling?"])


@pytest.fixture
def ollama_up(httpx_mock):
    """Ollama answers every version probe."""
    httpx_mock.add_response(url=VERSION_URL, json={"version": "0.5.1"}, is_reusable=True)
    return httpx_mock


@pytest.fixture
async def gateway(settings, mock_chat_model, stream_model, executor):
    gw = ModelGateway(
        settings,
        chat_model=mock_chat_model,
        stream_model=stream_model,
        executor=executor,
    )
    yield gw
    await gw.close()


@pytest.fixture
def mock_store():
    """AsyncMock of the assistance request store."""
    store = AsyncMock()
    store.create_assistance_request.return_value = None
    return store


@pytest.fixture
def dispatcher(mock_store):
    return FunctionCallDispatcher(mock_store)


@pytest.fixture
async def request_store():
    """Temporary SQLite-backed RequestStore for tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    store = RequestStore(db_path)
    await store.init_db()
    yield store
    await store.close()
    os.unlink(db_path)
