"""
Exception hierarchy for the companion engine.

Every failure raised by this package derives from 'CompanionError' and is
recoverable at the session level: the session records 'str(error)' on its
'error' attribute and the caller decides whether to retry.

    'StoreError'         - a persistence call failed (backend fault, constraint
                           violation, timeout).
    'ValidationError'    - user input was rejected before anything was written.
    'SessionBusyError'   - a message was submitted while a reply is in flight.
    'NoActiveUserError'  - an action needing a user profile ran without one.
"""

from typing import Any


class CompanionError(Exception):
    """Base exception carrying a human-readable message and optional context."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(CompanionError):
    """Raised by repositories when a read or write cannot be completed."""


class ValidationError(CompanionError):
    """Raised when message content is empty or longer than the configured cap."""


class SessionBusyError(ValidationError):
    """Raised when input arrives while the companion is still responding."""

    def __init__(self) -> None:
        super().__init__("The companion is still responding to the previous message")


class NoActiveUserError(CompanionError):
    """Raised when an action requires a user profile and none is set."""

    def __init__(self, action: str) -> None:
        super().__init__(f"A signed-in user is required to {action}", context={"action": action})
