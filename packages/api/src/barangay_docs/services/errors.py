# This project was developed with assistance from AI tools.
"""Typed errors raised by the document request engine.

Business-rule failures subclass ``DocumentRequestError`` and are always
recoverable by the caller. ``InfrastructureError`` sits outside that
hierarchy: it means "try again later", not "your request was invalid".
"""


class DocumentRequestError(Exception):
    """Base class for business-rule failures."""


class ValidationError(DocumentRequestError):
    """Required input missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class UnknownDocumentTypeError(DocumentRequestError):
    """No fee rule is configured for the document type."""

    def __init__(self, document_type: object):
        self.document_type = document_type
        super().__init__(f"Unknown document type: {document_type!r}")


class InvalidTransitionError(DocumentRequestError):
    """The requested transition is not allowed from the current status."""

    def __init__(self, request_id: int, current_status, action: str, allowed=frozenset()):
        self.request_id = request_id
        self.current_status = current_status
        self.action = action
        allowed_text = (
            ", ".join(sorted(s.value for s in allowed)) if allowed else "none (terminal status)"
        )
        super().__init__(
            f"Cannot {action} request {request_id} in status '{current_status.value}'. "
            f"Allowed next statuses: {allowed_text}."
        )


class NotFoundError(DocumentRequestError):
    """Unknown request id, reference number, or resident."""

    def __init__(self, resource: str, key: object):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} {key!r} not found")


class ConcurrentModificationError(DocumentRequestError):
    """Another transition updated the request first; safe to retry."""

    def __init__(self, request_id: int, expected_version: int):
        self.request_id = request_id
        self.expected_version = expected_version
        super().__init__(
            f"Request {request_id} was modified concurrently "
            f"(expected version {expected_version}). Reload and retry."
        )


class InfrastructureError(Exception):
    """Storage or upstream service failure unrelated to the request's content."""
