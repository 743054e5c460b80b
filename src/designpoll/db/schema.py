"""Database schema for designpoll.

Two collections: uploaded designs and submitted survey responses.
A response's ratings mapping is stored as a JSON document keyed by
design_id, with no foreign key, so deleting a design leaves historical
ratings in place.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Design(Base):
    """An image uploaded for rating."""

    __tablename__ = "designs"

    design_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    image_ref: Mapped[str] = mapped_column(String(512), nullable=False)
    storage_key: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class SurveyResponse(Base):
    """One respondent's complete submission (append-only)."""

    __tablename__ = "survey_responses"

    response_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    respondent_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    respondent_age: Mapped[int] = mapped_column(Integer, nullable=False)
    respondent_gender: Mapped[str] = mapped_column(String(32), nullable=False)
    respondent_contact: Mapped[str | None] = mapped_column(String(256), nullable=True)
    ratings_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True, default=lambda: datetime.now(timezone.utc)
    )
