"""Bulk reset of survey responses.

Deletes every stored response in a single transaction after an explicit
confirmation and a placeholder password check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from designpoll.admin.auth import check_password
from designpoll.core.errors import ResetFailedError, SurveyValidationError
from designpoll.db import repo
from designpoll.db.repo import DbSession

logger = logging.getLogger(__name__)


@dataclass
class ResetOutcome:
    """Result of a bulk reset."""

    requested: int
    deleted: int


def reset_responses(
    session: DbSession,
    password: str,
    expected_password: str,
    confirm: bool,
) -> ResetOutcome:
    """Delete all responses, all or nothing.

    Args:
        session: Database session.
        password: Password supplied by the admin.
        expected_password: Configured reset password.
        confirm: Explicit confirmation from the admin.

    Returns:
        ResetOutcome with requested and deleted counts.

    Raises:
        AuthorizationError: If the password does not match. Nothing is deleted.
        SurveyValidationError: If the reset was not confirmed.
        ResetFailedError: If the batch failed and was rolled back.
    """
    check_password(password, expected_password, purpose="reset")
    if not confirm:
        raise SurveyValidationError("Reset must be confirmed")

    with repo.store_call(session, "list responses"):
        response_ids = repo.list_response_ids(session)

    try:
        deleted = repo.delete_responses(session, response_ids)
        repo.commit(session)
    except SQLAlchemyError as e:
        repo.rollback(session)
        logger.exception(f"Reset of {len(response_ids)} responses rolled back")
        raise ResetFailedError(requested=len(response_ids), detail=str(e)) from e

    if deleted != len(response_ids):
        # Rows removed concurrently; the batch itself still committed
        logger.warning(f"Reset deleted {deleted} of {len(response_ids)} listed responses")

    logger.info(f"Reset deleted {deleted} responses")
    return ResetOutcome(requested=len(response_ids), deleted=deleted)

