"""Exceptions raised by the gateway and the form flow."""

from __future__ import annotations


class EditorError(Exception):
    """Base class for employee editor errors."""


class StoreError(EditorError):
    """Raised when the record store rejects or fails a call.

    The message is whatever the store (or transport) reported and is shown
    to the operator unchanged.
    """

    def __init__(self, message: str, operation: str | None = None):
        self.message = message
        self.operation = operation
        super().__init__(message)


class ValidationError(EditorError):
    """Raised when a draft fails a save-time rule."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnknownFieldError(EditorError, KeyError):
    """Raised when an edit names a field the draft does not have."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(field)

    def __str__(self) -> str:
        return f"Unknown employee field '{self.field}'"


class InvalidTransitionError(EditorError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: str, event: str, reason: str | None = None):
        self.from_state = from_state
        self.event = event
        self.reason = reason
        msg = f"Invalid event '{event}' in state '{from_state}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
