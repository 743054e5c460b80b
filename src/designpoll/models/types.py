"""Pydantic models for the designpoll API.

Request models validate respondent and admin input; response models shape
the analytics payloads returned to the dashboard.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class RespondentData(BaseModel):
    """Respondent attributes collected before rating."""

    name: str
    age: int = Field(ge=1)
    gender: Literal["male", "female", "other", "prefer-not-to-say"]
    contact: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value.strip()

    @field_validator("contact")
    @classmethod
    def blank_contact_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class RatingIn(BaseModel):
    """Star ratings for a single design."""

    design_quality: int = Field(ge=1, le=5)
    buy_intention: int = Field(ge=1, le=5)


class ResponseSubmission(BaseModel):
    """A finished survey: respondent data plus a rating per design."""

    user_data: RespondentData
    ratings: dict[str, RatingIn]


class ResponseCreated(BaseModel):
    """Response for survey submission."""

    response_id: str
    submitted_at: datetime


class DesignDetail(BaseModel):
    """Design details for API response."""

    design_id: str
    name: str
    image_ref: str
    storage_key: str
    uploaded_at: datetime


class DesignStats(BaseModel):
    """Aggregate rating statistics for one design."""

    avg_quality: float
    avg_purchase: float
    total_ratings: int
    quality_distribution: dict[int, int]
    purchase_distribution: dict[int, int]


class DesignRowOut(BaseModel):
    """Design analytics row."""

    design: DesignDetail
    stats: DesignStats


class RespondentInfo(BaseModel):
    """Stored respondent attributes, as persisted."""

    name: str
    age: int
    gender: str
    contact: str | None = None


class RespondentStats(BaseModel):
    """Statistics over a respondent's representative response."""

    avg_quality: float
    avg_purchase: float
    total_ratings: int


class RespondentRowOut(BaseModel):
    """Respondent analytics row."""

    display_name: str
    user_data: RespondentInfo
    stats: RespondentStats
    submitted_at: datetime | None
    response_count: int
    response_ids: list[str]


class LoginRequest(BaseModel):
    """Admin gate password."""

    password: str


class ResetRequest(BaseModel):
    """Bulk reset request."""

    password: str
    confirm: bool = False


class ResetResult(BaseModel):
    """Outcome of a bulk reset."""

    requested: int
    deleted: int


class StoreStatus(BaseModel):
    """Record store connectivity check."""

    status: Literal["connected"]
    design_count: int
