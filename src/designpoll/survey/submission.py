"""Survey submission for respondents.

Gates progress on complete ratings and stores one response per finished
survey. Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from designpoll.core.errors import SurveyValidationError
from designpoll.db import repo
from designpoll.db.repo import DbSession
from designpoll.models.domain import (
    DesignEntity,
    RatingValue,
    RespondentAttributes,
    ResponseEntity,
)

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Result of survey submission."""

    response_id: str
    submitted_at: datetime


def is_rating_complete(rating: RatingValue | None) -> bool:
    """True once both stars are set for a design."""
    return bool(rating and rating.design_quality and rating.buy_intention)


def missing_designs(
    designs: list[DesignEntity], ratings: dict[str, RatingValue]
) -> list[DesignEntity]:
    """Designs that still need a complete rating, in display order."""
    return [d for d in designs if not is_rating_complete(ratings.get(d.design_id))]


def submit_response(
    session: DbSession,
    user_data: RespondentAttributes,
    ratings: dict[str, RatingValue],
) -> SubmissionResult:
    """Store a finished survey.

    Every design currently listed must carry a complete rating, and no
    rating may reference an unknown design. Nothing is stored otherwise.

    Args:
        session: Database session.
        user_data: Validated respondent attributes.
        ratings: Ratings keyed by design_id.

    Returns:
        SubmissionResult with the new response ID.

    Raises:
        SurveyValidationError: If ratings are incomplete or reference unknown designs.
        StoreError: If the insert fails.
    """
    with repo.store_call(session, "load designs"):
        designs = repo.list_designs(session)

    if not designs:
        raise SurveyValidationError("No designs available to rate")

    missing = missing_designs(designs, ratings)
    if missing:
        names = ", ".join(d.name for d in missing)
        raise SurveyValidationError(f"All designs must be rated before submitting: {names}")

    known_ids = {d.design_id for d in designs}
    unknown = sorted(set(ratings) - known_ids)
    if unknown:
        raise SurveyValidationError(f"Ratings reference unknown designs: {', '.join(unknown)}")

    response = _create_response_entity(user_data, ratings)

    with repo.store_call(session, "submit response"):
        repo.create_response(session, response)
        repo.commit(session)

    logger.info(
        f"Stored response {response.response_id} with {len(ratings)} ratings"
    )
    return SubmissionResult(
        response_id=response.response_id,
        submitted_at=response.submitted_at,
    )


def _create_response_entity(
    user_data: RespondentAttributes, ratings: dict[str, RatingValue]
) -> ResponseEntity:
    """Create response entity from input.

    Pure function - no database access.
    """
    return ResponseEntity(
        response_id=str(uuid.uuid4()),
        user_data=user_data,
        ratings=dict(ratings),
        submitted_at=datetime.now(timezone.utc),
    )
