"""Responses API endpoint.

POST /api/responses - Submit a finished survey
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from designpoll.api.app import get_db_session
from designpoll.api.errors import to_http_exception
from designpoll.core.errors import DesignPollError
from designpoll.db.repo import DbSession
from designpoll.models.domain import RatingValue, RespondentAttributes
from designpoll.models.types import ResponseCreated, ResponseSubmission
from designpoll.survey.submission import submit_response

router = APIRouter()


@router.post("/responses", response_model=ResponseCreated, status_code=201)
def create_response(
    submission: ResponseSubmission,
    session: DbSession = Depends(get_db_session),
) -> ResponseCreated:
    """Submit respondent data with a rating for every design.

    Args:
        submission: Validated survey payload.
        session: Database session (injected).

    Returns:
        ResponseCreated with response_id.

    Raises:
        HTTPException: 400 if any design is unrated or unknown.
    """
    # Build typed input for domain layer
    user_data = RespondentAttributes(
        name=submission.user_data.name,
        age=submission.user_data.age,
        gender=submission.user_data.gender,
        contact=submission.user_data.contact,
    )
    ratings = {
        design_id: RatingValue(
            design_quality=rating.design_quality,
            buy_intention=rating.buy_intention,
        )
        for design_id, rating in submission.ratings.items()
    }

    try:
        result = submit_response(session=session, user_data=user_data, ratings=ratings)
    except DesignPollError as e:
        raise to_http_exception(e) from e

    return ResponseCreated(
        response_id=result.response_id,
        submitted_at=result.submitted_at,
    )
