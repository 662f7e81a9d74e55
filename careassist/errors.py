"""Error taxonomy for the conversation core.

Every error here is converted to a user-safe reply at the orchestrator
boundary; only the streaming path re-raises after emitting its error token.
"""

from __future__ import annotations

from typing import Any


class CareAssistError(Exception):
    """Base class for all CareAssist errors."""


class BackendUnavailable(CareAssistError):
    """The model server did not answer its health probe."""


class OperationExhausted(CareAssistError):
    """A retried operation failed on every attempt."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Operation failed after {attempts} attempts")
        self.attempts = attempts


class UnknownTool(CareAssistError):
    """The model invoked a function that is not in the tool catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown function: {name}")
        self.name = name


class ValidationGap(CareAssistError):
    """Tool-call arguments do not match the declared parameter schema."""

    def __init__(self, tool: str, errors: list[dict[str, Any]]) -> None:
        fields = ", ".join(
            ".".join(str(p) for p in err.get("loc", ())) or "<root>" for err in errors
        )
        super().__init__(f"Invalid arguments for {tool}: {fields}")
        self.tool = tool
        self.errors = errors


class PersistenceFailure(CareAssistError):
    """The assistance-request store could not write or read a record."""
