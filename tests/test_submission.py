"""Tests for survey submission."""

import pytest

from conftest import make_design
from designpoll.core.errors import SurveyValidationError
from designpoll.db import repo
from designpoll.models.domain import RatingValue, RespondentAttributes
from designpoll.survey.submission import is_rating_complete, missing_designs, submit_response

RESPONDENT = RespondentAttributes(name="Sam", age=31, gender="other")


@pytest.fixture
def seeded(session):
    """Two designs in the store."""
    repo.create_design(session, make_design("a", "Alpha"))
    repo.create_design(session, make_design("b", "Beta"))
    repo.commit(session)
    return session


class TestRatingCompleteness:
    """Test Next/Submit gating helpers."""

    def test_complete_requires_both_scores(self):
        """A rating needs quality and purchase intent."""
        assert is_rating_complete(RatingValue(design_quality=3, buy_intention=4))
        assert not is_rating_complete(RatingValue(design_quality=3, buy_intention=0))
        assert not is_rating_complete(None)

    def test_missing_designs_in_display_order(self):
        """Unrated designs are reported in the given order."""
        designs = [make_design("a", "Alpha"), make_design("b", "Beta"), make_design("c", "Cat")]
        ratings = {"b": RatingValue(design_quality=2, buy_intention=2)}

        assert [d.design_id for d in missing_designs(designs, ratings)] == ["a", "c"]


class TestSubmitResponse:
    """Test storing a finished survey."""

    def test_stores_complete_response(self, seeded):
        """A response rating every design is stored once."""
        ratings = {
            "a": RatingValue(design_quality=5, buy_intention=4),
            "b": RatingValue(design_quality=2, buy_intention=1),
        }

        result = submit_response(seeded, RESPONDENT, ratings)

        [stored] = repo.list_responses(seeded)
        assert stored.response_id == result.response_id
        assert stored.user_data.name == "Sam"
        assert stored.ratings["a"].design_quality == 5
        assert stored.submitted_at is not None

    def test_rejects_incomplete_ratings(self, seeded):
        """Nothing is stored while a design is unrated."""
        ratings = {"a": RatingValue(design_quality=5, buy_intention=4)}

        with pytest.raises(SurveyValidationError, match="Beta"):
            submit_response(seeded, RESPONDENT, ratings)

        assert repo.list_responses(seeded) == []

    def test_rejects_unknown_design(self, seeded):
        """Ratings for designs that are not listed are rejected."""
        ratings = {
            "a": RatingValue(design_quality=5, buy_intention=4),
            "b": RatingValue(design_quality=2, buy_intention=1),
            "zzz": RatingValue(design_quality=1, buy_intention=1),
        }

        with pytest.raises(SurveyValidationError, match="zzz"):
            submit_response(seeded, RESPONDENT, ratings)

        assert repo.list_responses(seeded) == []

    def test_rejects_when_no_designs(self, session):
        """There is nothing to submit without designs."""
        with pytest.raises(SurveyValidationError):
            submit_response(session, RESPONDENT, {})
