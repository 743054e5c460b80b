"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Generator

from sqlalchemy import func
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from designpoll.core.errors import StoreError, StoreUnavailableError
from designpoll.db.schema import Design, SurveyResponse
from designpoll.models.domain import (
    DesignEntity,
    RatingValue,
    RespondentAttributes,
    ResponseEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

logger = logging.getLogger(__name__)


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _design_to_entity(design: Design) -> DesignEntity:
    """Convert SQLAlchemy Design to domain entity."""
    return DesignEntity(
        design_id=design.design_id,
        name=design.name,
        image_ref=design.image_ref,
        storage_key=design.storage_key or "",
        uploaded_at=design.uploaded_at,
    )


def _ratings_from_json(ratings_json: str | None) -> dict[str, RatingValue]:
    """Decode the ratings document.

    Entries that are not objects are dropped; scores are passed through
    as stored and validated by the aggregation layer.
    """
    if not ratings_json:
        return {}
    try:
        raw: Any = json.loads(ratings_json)
    except json.JSONDecodeError:
        logger.warning("Unreadable ratings document, treating as empty")
        return {}
    if not isinstance(raw, dict):
        return {}
    return {
        design_id: RatingValue(
            design_quality=value.get("design_quality"),
            buy_intention=value.get("buy_intention"),
        )
        for design_id, value in raw.items()
        if isinstance(value, dict)
    }


def _ratings_to_json(ratings: dict[str, RatingValue]) -> str:
    """Encode the ratings document."""
    return json.dumps(
        {
            design_id: {
                "design_quality": rating.design_quality,
                "buy_intention": rating.buy_intention,
            }
            for design_id, rating in ratings.items()
        },
        sort_keys=True,
    )


def _response_to_entity(response: SurveyResponse) -> ResponseEntity:
    """Convert SQLAlchemy SurveyResponse to domain entity."""
    return ResponseEntity(
        response_id=response.response_id,
        user_data=RespondentAttributes(
            name=response.respondent_name or "",
            age=response.respondent_age,
            gender=response.respondent_gender,
            contact=response.respondent_contact,
        ),
        ratings=_ratings_from_json(response.ratings_json),
        submitted_at=response.submitted_at,
    )


# ============================================================================
# Error translation
# ============================================================================


@contextmanager
def store_call(session: DbSession, action: str) -> Generator[None, None, None]:
    """Roll back and translate SQLAlchemy failures into store errors.

    Args:
        session: Database session used inside the block.
        action: Short description used in logs and error messages.

    Raises:
        StoreUnavailableError: On lock timeout or connection failure.
        StoreError: On any other database failure.
    """
    try:
        yield
    except OperationalError as e:
        session.rollback()
        logger.warning(f"Record store unavailable during {action}: {e}")
        raise StoreUnavailableError(f"Record store unavailable: {action}") from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Record store failure during {action}")
        raise StoreError(f"Failed to {action}") from e


# ============================================================================
# Design Repository
# ============================================================================


def get_design(session: DbSession, design_id: str) -> DesignEntity | None:
    """Get design by ID."""
    design = session.query(Design).filter(Design.design_id == design_id).first()
    return _design_to_entity(design) if design else None


def list_designs(session: DbSession) -> list[DesignEntity]:
    """Get all designs ordered by name."""
    designs = session.query(Design).order_by(Design.name).all()
    return [_design_to_entity(d) for d in designs]


def count_designs(session: DbSession) -> int:
    """Count stored designs."""
    return session.query(func.count(Design.design_id)).scalar() or 0


def create_design(session: DbSession, entity: DesignEntity) -> DesignEntity:
    """Create a new design."""
    design = Design(
        design_id=entity.design_id,
        name=entity.name,
        image_ref=entity.image_ref,
        storage_key=entity.storage_key,
        uploaded_at=entity.uploaded_at,
    )
    session.add(design)
    return entity


def update_design(
    session: DbSession,
    design_id: str,
    *,
    name: str | None = None,
    image_ref: str | None = None,
    storage_key: str | None = None,
) -> DesignEntity | None:
    """Update design fields. Returns the updated design, or None if missing."""
    design = session.query(Design).filter(Design.design_id == design_id).first()
    if design is None:
        return None
    if name is not None:
        design.name = name
    if image_ref is not None:
        design.image_ref = image_ref
    if storage_key is not None:
        design.storage_key = storage_key
    return _design_to_entity(design)


def delete_design(session: DbSession, design_id: str) -> bool:
    """Delete a design. Returns False if it did not exist."""
    deleted = session.query(Design).filter(Design.design_id == design_id).delete()
    return deleted > 0


# ============================================================================
# Response Repository
# ============================================================================


def create_response(session: DbSession, entity: ResponseEntity) -> ResponseEntity:
    """Create a new survey response."""
    response = SurveyResponse(
        response_id=entity.response_id,
        respondent_name=entity.user_data.name,
        respondent_age=entity.user_data.age,
        respondent_gender=entity.user_data.gender,
        respondent_contact=entity.user_data.contact,
        ratings_json=_ratings_to_json(entity.ratings),
        submitted_at=entity.submitted_at,
    )
    session.add(response)
    return entity


def list_responses(session: DbSession) -> list[ResponseEntity]:
    """Get all responses, most recently submitted first."""
    responses = session.query(SurveyResponse).order_by(SurveyResponse.submitted_at.desc()).all()
    return [_response_to_entity(r) for r in responses]


def list_response_ids(session: DbSession) -> list[str]:
    """Get all response IDs."""
    rows = session.query(SurveyResponse.response_id).all()
    return [r[0] for r in rows]


def delete_responses(session: DbSession, response_ids: list[str]) -> int:
    """Delete responses by ID within the current transaction.

    Nothing is committed here; the caller commits or rolls back the batch.

    Returns:
        Number of rows deleted.
    """
    if not response_ids:
        return 0
    return (
        session.query(SurveyResponse)
        .filter(SurveyResponse.response_id.in_(response_ids))
        .delete(synchronize_session=False)
    )


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
