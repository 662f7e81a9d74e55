"""Patient-facing reply text."""

from careassist.schemas.chat import PendingRequest

GENERIC_ERROR_REPLY = (
    "I apologize, but I encountered an error. Please try again or call for "
    "assistance using your bedside button."
)

REQUEST_FAILED_REPLY = (
    "I apologize, but I encountered an error while creating your request. "
    "Please try again or call for assistance using your bedside button."
)

COULD_NOT_PROCESS_REPLY = (
    "I apologize, but I couldn't process that request. "
    "Is there something else I can help you with?"
)

DECLINED_REPLY = (
    "I understand. I won't submit the request. "
    "Is there something else you'd like me to help you with?"
)

EMPTY_STREAM_REPLY = (
    "I apologize, but I was unable to generate a response. Please try again."
)

STREAM_ERROR_REPLY = "An error occurred while processing your message."

EMPTY_MESSAGE_REPLY = "Please type a message so I can help you."

NURSE_NOTIFIED = "A nurse will be notified and will assist you soon."


def _summary(request: PendingRequest) -> str:
    return (
        f"Priority: {request.priority}\n"
        f"Department: {request.department}\n"
        f"Description: {request.description}\n"
        f"Room: {request.room}"
    )


def confirmation_prompt(request: PendingRequest) -> str:
    return (
        "I'll help you create a request for nursing assistance. "
        "Here's what I understand:\n\n"
        f"{_summary(request)}\n\n"
        'Would you like me to submit this request? Please confirm with "yes" or "no".'
    )


def request_created(request: PendingRequest) -> str:
    return (
        "I've created a request for nursing assistance:\n\n"
        f"{_summary(request)}\n\n{NURSE_NOTIFIED}"
    )


def request_submitted(request: PendingRequest) -> str:
    return (
        "Perfect! I've submitted your request for assistance:\n\n"
        f"{_summary(request)}\n\n{NURSE_NOTIFIED}"
    )


def appointment_scheduled(symptoms: str, severity: str) -> str:
    return f"✓ Appointment scheduled: {symptoms} ({severity} severity)"


def nurse_requested(reason: str, urgency: str) -> str:
    return f"⚡ Nurse requested: {reason} ({urgency})"
