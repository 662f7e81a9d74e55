"""Declarative tool catalog bound to every non-streamed model call."""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping

from careassist.tools.arguments import DEPARTMENTS, PRIORITIES, SEVERITIES, URGENCIES


class ToolName(StrEnum):
    SCHEDULE_APPOINTMENT = "schedule_appointment"
    REQUEST_NURSE_ASSISTANCE = "request_nurse_assistance"
    CREATE_ASSISTANCE_REQUEST = "create_assistance_request"


@dataclass(frozen=True)
class ToolDefinition:
    """A callable action as advertised to the model."""

    name: ToolName
    description: str
    properties: Mapping[str, Mapping[str, Any]]
    required: frozenset[str]

    def to_ollama(self) -> dict[str, Any]:
        """Render in the Ollama / OpenAI function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": str(self.name),
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {k: dict(v) for k, v in self.properties.items()},
                    # Keep declaration order so the payload is stable across calls
                    "required": [k for k in self.properties if k in self.required],
                },
            },
        }


def _string(description: str, enum: tuple[str, ...] | None = None) -> Mapping[str, Any]:
    prop: dict[str, Any] = {"type": "string", "description": description}
    if enum is not None:
        prop["enum"] = list(enum)
    return MappingProxyType(prop)


SCHEDULE_APPOINTMENT = ToolDefinition(
    name=ToolName.SCHEDULE_APPOINTMENT,
    description="Schedule a medical appointment",
    properties=MappingProxyType({
        "symptoms": _string("Patient symptoms"),
        "severity": _string("Severity", SEVERITIES),
        "preferredDate": _string("Preferred date"),
    }),
    required=frozenset({"symptoms", "severity"}),
)

REQUEST_NURSE_ASSISTANCE = ToolDefinition(
    name=ToolName.REQUEST_NURSE_ASSISTANCE,
    description="Request nurse help",
    properties=MappingProxyType({
        "urgency": _string("Urgency level", URGENCIES),
        "reason": _string("Reason for help"),
    }),
    required=frozenset({"urgency", "reason"}),
)

CREATE_ASSISTANCE_REQUEST = ToolDefinition(
    name=ToolName.CREATE_ASSISTANCE_REQUEST,
    description=(
        "Create a nursing assistance request after confirming with the patient"
    ),
    properties=MappingProxyType({
        "priority": _string("Priority level of the request", PRIORITIES),
        "description": _string("Detailed description of the assistance needed"),
        "department": _string(
            "Department responsible for handling the request", DEPARTMENTS
        ),
        "requiresConfirmation": MappingProxyType({
            "type": "boolean",
            "description": (
                "Whether to ask for patient confirmation before creating the request"
            ),
        }),
    }),
    required=frozenset(
        {"priority", "description", "department", "requiresConfirmation"}
    ),
)

TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    SCHEDULE_APPOINTMENT,
    REQUEST_NURSE_ASSISTANCE,
    CREATE_ASSISTANCE_REQUEST,
)

# Wire format sent to the model; rendered once at import.
TOOL_CATALOG: tuple[dict[str, Any], ...] = tuple(t.to_ollama() for t in TOOL_DEFINITIONS)
