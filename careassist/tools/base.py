"""Shared tool utilities — persistence error handler decorator."""

import functools
import logging
from typing import Any, Awaitable, Callable

from careassist.agent.replies import REQUEST_FAILED_REPLY
from careassist.errors import PersistenceFailure
from careassist.schemas.chat import FunctionCallResult

logger = logging.getLogger(__name__)


def persistence_guard(
    func: Callable[..., Awaitable[FunctionCallResult]],
) -> Callable[..., Awaitable[FunctionCallResult]]:
    """Decorator that turns a failed store write into the patient-facing apology."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> FunctionCallResult:
        try:
            return await func(*args, **kwargs)
        except PersistenceFailure as e:
            logger.exception("Error creating request in %s: %s", func.__name__, e)
            return FunctionCallResult(text=REQUEST_FAILED_REPLY)

    return wrapper
