"""Retry with exponential backoff for calls to the local model server."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from careassist.clients.recovery import RecoveryHook, noop_recovery
from careassist.errors import OperationExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CONNECTION_MARKERS = (
    "econnrefused",
    "connection refused",
    "failed to connect",
    "fetch failed",
)


def is_connection_failure(error: BaseException) -> bool:
    """True if the error means the model server could not be reached at all."""
    if isinstance(error, (ConnectionError, httpx.ConnectError)):
        return True
    message = str(error).lower()
    if any(marker in message for marker in _CONNECTION_MARKERS):
        return True
    # e.g. BackendUnavailable raised from the probe's ConnectError
    cause = error.__cause__
    return cause is not None and is_connection_failure(cause)


class RetryExecutor:
    """Runs an async operation up to ``max_attempts`` times.

    After failed attempt ``n`` it waits ``2**n * base_delay`` seconds before
    the next one. Connection failures also fire the recovery hook, which
    tries to bring the model server back; the hook's own errors never stop
    the retry loop. When every attempt fails, ``OperationExhausted`` is raised.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        recovery: RecoveryHook | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.recovery = recovery or noop_recovery
        self._sleep = sleep

    def backoff(self, attempt: int) -> float:
        """Delay in seconds after failed attempt ``attempt`` (1-based)."""
        return float(2**attempt) * self.base_delay

    async def execute(
        self, operation: Callable[[], Awaitable[T]], max_attempts: int | None = None
    ) -> T:
        attempts = max_attempts if max_attempts is not None else self.max_attempts
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except Exception as e:
                last_error = e
                logger.warning("Attempt %d/%d failed: %s", attempt, attempts, e)

                if is_connection_failure(e):
                    logger.error(
                        "Model server connection failed. Ensure Ollama is running."
                    )
                    self._recover(e)

                if attempt < attempts:
                    await self._sleep(self.backoff(attempt))

        raise OperationExhausted(attempts) from last_error

    def _recover(self, error: Exception) -> None:
        try:
            self.recovery(error)
        except Exception:
            logger.exception("Recovery hook failed")
