"""Mapping from domain errors to HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException

from designpoll.core.errors import (
    AuthorizationError,
    DesignPollError,
    NotFoundError,
    OperationInProgressError,
    ResetFailedError,
    StoreUnavailableError,
    SurveyValidationError,
)


def to_http_exception(error: DesignPollError) -> HTTPException:
    """Translate a domain error into an HTTPException with a readable detail."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, SurveyValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, AuthorizationError):
        return HTTPException(status_code=401, detail=str(error))
    if isinstance(error, OperationInProgressError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, StoreUnavailableError):
        return HTTPException(status_code=503, detail=str(error))
    if isinstance(error, ResetFailedError):
        return HTTPException(
            status_code=500,
            detail={"message": str(error), "requested": error.requested, "deleted": 0},
        )
    return HTTPException(status_code=500, detail=str(error))
