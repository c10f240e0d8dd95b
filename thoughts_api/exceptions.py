"""
Happy Thoughts API — Custom Exception Hierarchy
=================================================

What:  Typed error taxonomy raised by the service layer.
How:   Each exception carries what its HTTP response needs (label, detail,
       status). Global exception handlers registered in main.py render them
       as JSON, so route handlers never build error bodies themselves.
Who:   Raised by ThoughtService; caught by the handlers in main.py.

Exception Hierarchy:
    ThoughtsAPIError (base)        → 500 Internal Server Error
    ├── ThoughtValidationError     → 400 {"error": "Validation failed", "messages": [...]}
    ├── ThoughtNotFoundError       → 404 {"error": "Thought not found"}
    ├── MalformedIdError           → 400 {"error": "Invalid thought ID", "message": ...}
    └── StorageError               → 500, or the status the operation asks for
"""

from typing import Any, Dict, List, Optional


class ThoughtsAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        label:    Value of the "error" key in the response body
        message:  Human-readable detail
        context:  Extra debug info (logged, never returned to the client)
    """

    status_code: int = 500

    def __init__(
        self,
        label: str = "Internal server error",
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.label = label
        self.message = message
        self.context = context or {}
        super().__init__(message or label)

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.label}
        if self.message:
            body["message"] = self.message
        return body


class ThoughtValidationError(ThoughtsAPIError):
    """
    One or more field rules failed.

    Carries every failed rule, not just the first, so the client can fix
    all of them in one round trip.
    """

    status_code = 400

    def __init__(self, messages: List[str], context: Optional[Dict[str, Any]] = None):
        self.messages = list(messages)
        super().__init__(
            label="Validation failed",
            message="; ".join(self.messages),
            context=context,
        )

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.label, "messages": self.messages}


class ThoughtNotFoundError(ThoughtsAPIError):
    """The identifier is well formed but no thought has it."""

    status_code = 404

    def __init__(self, thought_id: Optional[str] = None):
        ctx = {"thought_id": thought_id} if thought_id else {}
        super().__init__(label="Thought not found", context=ctx)
        self.thought_id = thought_id


class MalformedIdError(ThoughtsAPIError):
    """The identifier cannot be parsed as a thought id (a UUID)."""

    status_code = 400

    def __init__(self, thought_id: str):
        super().__init__(
            label="Invalid thought ID",
            message=f"'{thought_id}' is not a valid thought ID",
            context={"thought_id": thought_id},
        )
        self.thought_id = thought_id


class StorageError(ThoughtsAPIError):
    """
    The database rejected or failed an operation.

    The status defaults to 500; PUT /thoughts/{id} reports storage failures
    as 400, so the update operation passes status_code=400.
    """

    def __init__(
        self,
        label: str,
        message: Optional[str] = None,
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(label=label, message=message, context=context)
        self.status_code = status_code
