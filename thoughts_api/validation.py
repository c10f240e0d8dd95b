"""
Happy Thoughts API — Thought Validation
=========================================

What:  Field rules for a Thought, checked before anything reaches the database.
How:   validate_thought() runs every rule and returns a ValidationResult with
       one human-readable message per failed rule.
Who:   ThoughtService (create, update) and the seed loader.

Only `message` is client-settable. `hearts` and `createdAt` are owned by the
server and never read from a request body, so they have no rules here.
"""

import unicodedata
from typing import Any, List, Mapping

from pydantic import BaseModel, Field

MESSAGE_MIN_LENGTH = 5
MESSAGE_MAX_LENGTH = 140

MESSAGE_REQUIRED = "Message is required"
MESSAGE_NOT_TEXT = "Message must be text"
MESSAGE_TOO_SHORT = f"Message must be at least {MESSAGE_MIN_LENGTH} characters"
MESSAGE_TOO_LONG = f"Message cannot exceed {MESSAGE_MAX_LENGTH} characters"
MESSAGE_CONTROL_CHARS = "Message cannot contain control characters"

# Line breaks and tabs are allowed inside a message
ALLOWED_CONTROL_CHARS = {"\n", "\r", "\t"}


class ValidationResult(BaseModel):
    """Outcome of validate_thought(); `errors` is empty when `valid` is True."""

    valid: bool
    errors: List[str] = Field(default_factory=list)


def normalize_message(value: str) -> str:
    """Trim surrounding whitespace; stored messages are always trimmed."""
    return value.strip()


def _get_message(candidate: Any) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get("message")
    return getattr(candidate, "message", None)


def message_errors(message: Any) -> List[str]:
    """Every rule the given message value violates, in rule order."""
    if message is None:
        return [MESSAGE_REQUIRED]
    if not isinstance(message, str):
        return [MESSAGE_NOT_TEXT]

    trimmed = normalize_message(message)
    if not trimmed:
        return [MESSAGE_REQUIRED]

    errors = []
    if len(trimmed) < MESSAGE_MIN_LENGTH:
        errors.append(MESSAGE_TOO_SHORT)
    if len(trimmed) > MESSAGE_MAX_LENGTH:
        errors.append(MESSAGE_TOO_LONG)
    # NUL and friends are rejected by PostgreSQL text columns
    if any(
        unicodedata.category(ch) == "Cc" and ch not in ALLOWED_CONTROL_CHARS
        for ch in trimmed
    ):
        errors.append(MESSAGE_CONTROL_CHARS)
    return errors


def validate_thought(candidate: Any) -> ValidationResult:
    """
    Validate a thought candidate (a mapping or an object with `message`).

    Examples:
        validate_thought({"message": "Hello world"})  → valid
        validate_thought({"message": "hi"})           → ["Message must be at least 5 characters"]
        validate_thought({})                          → ["Message is required"]
    """
    errors = message_errors(_get_message(candidate))
    return ValidationResult(valid=not errors, errors=errors)
