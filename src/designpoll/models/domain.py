"""Domain models for designpoll.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

# ============================================================================
# Design Domain
# ============================================================================


@dataclass
class DesignEntity:
    """Domain model for an uploaded design."""

    design_id: str
    name: str
    image_ref: str
    storage_key: str
    uploaded_at: datetime


# ============================================================================
# Response Domain
# ============================================================================

Gender = Literal["male", "female", "other", "prefer-not-to-say"]


@dataclass
class RespondentAttributes:
    """Respondent data embedded in a response."""

    name: str
    age: int
    gender: Gender
    contact: str | None = None


@dataclass
class RatingValue:
    """One design's two-axis rating."""

    design_quality: int
    buy_intention: int


@dataclass
class ResponseEntity:
    """Domain model for a submitted survey response.

    ratings is keyed by design_id. Keys may reference designs that were
    deleted after submission.
    """

    response_id: str
    user_data: RespondentAttributes
    ratings: dict[str, RatingValue] = field(default_factory=dict)
    submitted_at: datetime | None = None
