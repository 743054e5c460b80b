"""Shared pytest fixtures for designpoll tests."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from designpoll.config import Settings
from designpoll.db.schema import Base
from designpoll.models.domain import (
    DesignEntity,
    RatingValue,
    RespondentAttributes,
    ResponseEntity,
)
from designpoll.storage import LocalBlobStore

ADMIN_PASSWORD = "test-admin"
RESET_PASSWORD = "test-reset"
ADMIN_HEADERS = {"X-Admin-Password": ADMIN_PASSWORD}

BASE_TIME = datetime(2025, 9, 25, 12, 0, 0)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def blob_store(tmp_path):
    """Blob store rooted in a temporary directory."""
    return LocalBlobStore(tmp_path / "blobs")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at temporary paths with test passwords."""
    return Settings(
        db_path=tmp_path / "designpoll.db",
        blob_dir=tmp_path / "blobs",
        admin_password=ADMIN_PASSWORD,
        reset_password=RESET_PASSWORD,
    )


@pytest.fixture
def client(engine, settings):
    """API client backed by the in-memory engine."""
    from designpoll.api.app import create_app, get_db_session

    app = create_app(settings)

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    return TestClient(app)


def make_design(design_id: str, name: str, minutes: int = 0) -> DesignEntity:
    """Build a design entity uploaded `minutes` after BASE_TIME."""
    return DesignEntity(
        design_id=design_id,
        name=name,
        image_ref=f"/blobs/designs/{design_id}.png",
        storage_key=f"designs/{design_id}.png",
        uploaded_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_response(
    response_id: str,
    name: str,
    ratings: dict[str, tuple[int, int]],
    minutes: int = 0,
    age: int = 30,
    gender: str = "other",
    contact: str | None = None,
) -> ResponseEntity:
    """Build a response from (quality, purchase) tuples keyed by design_id."""
    return ResponseEntity(
        response_id=response_id,
        user_data=RespondentAttributes(name=name, age=age, gender=gender, contact=contact),
        ratings={
            design_id: RatingValue(design_quality=q, buy_intention=p)
            for design_id, (q, p) in ratings.items()
        },
        submitted_at=BASE_TIME + timedelta(minutes=minutes),
    )
