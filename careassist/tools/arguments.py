"""Closed enumerations and argument models for the assistant's tools.

The catalog advertises these shapes to the model; the dispatcher validates
every tool call against them before acting on it.
"""

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["low", "medium", "high"]
Urgency = Literal["routine", "urgent", "emergency"]
Priority = Literal["low", "medium", "high"]
Department = Literal[
    "Emergency",
    "Intensive Care",
    "Pediatrics",
    "Maternity",
    "Oncology",
    "Cardiology",
    "Neurology",
    "Orthopedics",
    "Psychiatry",
    "Rehabilitation",
    "Geriatrics",
    "Surgery",
    "Outpatient",
]

SEVERITIES: tuple[str, ...] = get_args(Severity)
URGENCIES: tuple[str, ...] = get_args(Urgency)
PRIORITIES: tuple[str, ...] = get_args(Priority)
DEPARTMENTS: tuple[str, ...] = get_args(Department)


class ScheduleAppointmentArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symptoms: str = Field(min_length=1)
    severity: Severity
    preferred_date: str | None = Field(default=None, alias="preferredDate")


class NurseAssistanceArgs(BaseModel):
    urgency: Urgency
    reason: str = Field(min_length=1)


class AssistanceRequestArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    priority: Priority
    description: str = Field(min_length=1)
    department: Department
    requires_confirmation: bool = Field(alias="requiresConfirmation")
