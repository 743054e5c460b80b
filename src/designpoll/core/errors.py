"""Domain exceptions.

Domain code raises these; the API layer maps them to HTTP status codes.
"""

from __future__ import annotations


class DesignPollError(Exception):
    """Base class for all designpoll errors."""


class SurveyValidationError(DesignPollError, ValueError):
    """Input was rejected before reaching the store."""


class NotFoundError(DesignPollError, LookupError):
    """A referenced record does not exist."""


class AuthorizationError(DesignPollError):
    """Placeholder password check failed."""


class OperationInProgressError(DesignPollError):
    """The same admin operation is already running."""

    def __init__(self, operation: str):
        super().__init__(f"Operation already in progress: {operation}")
        self.operation = operation


class StoreError(DesignPollError):
    """A record or blob store call failed."""


class StoreUnavailableError(StoreError):
    """The record store timed out or is locked."""


class ResetFailedError(StoreError):
    """Bulk reset rolled back; nothing was deleted."""

    def __init__(self, requested: int, detail: str):
        super().__init__(f"Reset failed, {requested} responses left untouched: {detail}")
        self.requested = requested
        self.detail = detail
