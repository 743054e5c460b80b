"""Tests for the respondent-facing API endpoints."""

from sqlalchemy.orm import Session

from conftest import make_design
from designpoll.db import repo


def seed_designs(engine) -> None:
    with Session(engine) as session:
        repo.create_design(session, make_design("a", "Alpha"))
        repo.create_design(session, make_design("b", "Beta"))
        repo.commit(session)


USER = {"name": "Sam", "age": 31, "gender": "other", "contact": ""}


class TestHealth:
    """Test liveness and store status."""

    def test_health(self, client):
        """Health endpoint answers without touching the store."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_store_status(self, client, engine):
        """Status reports a connected store and the design count."""
        seed_designs(engine)

        response = client.get("/api/status")

        assert response.status_code == 200
        assert response.json() == {"status": "connected", "design_count": 2}


class TestListDesigns:
    """Test GET /api/designs."""

    def test_ordered_by_name(self, client, engine):
        """Designs are listed by name with image locators."""
        seed_designs(engine)

        response = client.get("/api/designs")

        assert response.status_code == 200
        body = response.json()
        assert [d["name"] for d in body] == ["Alpha", "Beta"]
        assert body[0]["image_ref"] == "/blobs/designs/a.png"

    def test_empty(self, client):
        """No designs gives an empty list."""
        assert client.get("/api/designs").json() == []


class TestSubmitResponse:
    """Test POST /api/responses."""

    def test_complete_submission(self, client, engine):
        """A fully rated survey is stored."""
        seed_designs(engine)
        payload = {
            "user_data": USER,
            "ratings": {
                "a": {"design_quality": 4, "buy_intention": 5},
                "b": {"design_quality": 2, "buy_intention": 1},
            },
        }

        response = client.post("/api/responses", json=payload)

        assert response.status_code == 201
        with Session(engine) as session:
            [stored] = repo.list_responses(session)
        assert stored.response_id == response.json()["response_id"]
        assert stored.user_data.contact is None

    def test_incomplete_submission(self, client, engine):
        """An unrated design is a 400 and nothing is stored."""
        seed_designs(engine)
        payload = {
            "user_data": USER,
            "ratings": {"a": {"design_quality": 4, "buy_intention": 5}},
        }

        response = client.post("/api/responses", json=payload)

        assert response.status_code == 400
        assert "Beta" in response.json()["detail"]
        with Session(engine) as session:
            assert repo.list_responses(session) == []

    def test_invalid_respondent(self, client, engine):
        """Missing name or out-of-range stars fail validation."""
        seed_designs(engine)
        ratings = {
            "a": {"design_quality": 4, "buy_intention": 5},
            "b": {"design_quality": 2, "buy_intention": 1},
        }

        blank_name = client.post(
            "/api/responses", json={"user_data": {**USER, "name": " "}, "ratings": ratings}
        )
        bad_star = client.post(
            "/api/responses",
            json={
                "user_data": USER,
                "ratings": {**ratings, "b": {"design_quality": 6, "buy_intention": 1}},
            },
        )

        assert blank_name.status_code == 422
        assert bad_star.status_code == 422
