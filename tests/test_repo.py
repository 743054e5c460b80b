"""Tests for the record store repository, schema and sessions."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from conftest import make_design, make_response
from designpoll.core.errors import StoreError, StoreUnavailableError
from designpoll.db import repo
from designpoll.db.schema import Base, SurveyResponse
from designpoll.db.session import get_engine, get_session, init_db


class TestSchemaCreation:
    """Test that schema can be created without errors."""

    def test_all_tables_created(self, engine):
        """Both collections exist after creation."""
        assert {"designs", "survey_responses"}.issubset(Base.metadata.tables.keys())


class TestDesignRepository:
    """Test design CRUD."""

    def test_list_orders_by_name(self, session):
        """Designs are listed alphabetically."""
        for design in [make_design("b", "Beta"), make_design("a", "Alpha")]:
            repo.create_design(session, design)
        repo.commit(session)

        assert [d.name for d in repo.list_designs(session)] == ["Alpha", "Beta"]
        assert repo.count_designs(session) == 2

    def test_update_partial_fields(self, session):
        """Only provided fields change."""
        repo.create_design(session, make_design("a", "Alpha"))
        repo.commit(session)

        updated = repo.update_design(session, "a", name="Alpha Two")
        repo.commit(session)

        assert updated.name == "Alpha Two"
        assert repo.get_design(session, "a").storage_key == "designs/a.png"

    def test_update_missing_returns_none(self, session):
        """Updating an unknown design returns None."""
        assert repo.update_design(session, "missing", name="x") is None

    def test_delete(self, session):
        """Deleted designs are gone; a second delete reports False."""
        repo.create_design(session, make_design("a", "Alpha"))
        repo.commit(session)

        assert repo.delete_design(session, "a") is True
        repo.commit(session)
        assert repo.get_design(session, "a") is None
        assert repo.delete_design(session, "a") is False

    def test_duplicate_id_rejected(self, session):
        """Design IDs are unique."""
        repo.create_design(session, make_design("a", "Alpha"))
        repo.commit(session)
        repo.create_design(session, make_design("a", "Again"))
        with pytest.raises(IntegrityError):
            repo.commit(session)


class TestResponseRepository:
    """Test response storage."""

    def test_ratings_mapping_preserved(self, session):
        """Stored ratings come back keyed by design_id."""
        repo.create_response(
            session, make_response("r1", "Ana", {"a": (5, 3), "b": (2, 4)}, contact="ana@x.io")
        )
        repo.commit(session)

        [response] = repo.list_responses(session)

        assert response.ratings["a"].design_quality == 5
        assert response.ratings["b"].buy_intention == 4
        assert response.user_data.contact == "ana@x.io"

    def test_list_newest_first(self, session):
        """Responses are listed by submission time, newest first."""
        for response in [
            make_response("old", "Ana", {}, minutes=0),
            make_response("new", "Ben", {}, minutes=5),
            make_response("mid", "Cleo", {}, minutes=2),
        ]:
            repo.create_response(session, response)
        repo.commit(session)

        assert [r.response_id for r in repo.list_responses(session)] == ["new", "mid", "old"]

    def test_unreadable_ratings_document(self, session):
        """A corrupt ratings document reads as no ratings."""
        repo.create_response(session, make_response("r1", "Ana", {"a": (1, 1)}))
        repo.commit(session)
        session.query(SurveyResponse).update({"ratings_json": "{not json"})
        repo.commit(session)

        assert repo.list_responses(session)[0].ratings == {}

    def test_delete_responses_in_one_batch(self, session):
        """Listed IDs are deleted once the caller commits."""
        for i in range(3):
            repo.create_response(session, make_response(f"r{i}", "Ana", {}))
        repo.commit(session)

        deleted = repo.delete_responses(session, ["r0", "r2"])
        repo.rollback(session)
        assert len(repo.list_responses(session)) == 3

        deleted = repo.delete_responses(session, ["r0", "r2"])
        repo.commit(session)
        assert deleted == 2
        assert repo.list_response_ids(session) == ["r1"]

    def test_delete_nothing(self, session):
        """An empty ID list deletes nothing."""
        assert repo.delete_responses(session, []) == 0


class TestStoreCall:
    """Test translation of database failures."""

    def test_operational_error_is_unavailable(self, session):
        """Lock timeouts become StoreUnavailableError."""
        with pytest.raises(StoreUnavailableError):
            with repo.store_call(session, "probe"):
                raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    def test_other_errors_are_store_errors(self, session):
        """Other SQLAlchemy errors become StoreError."""
        repo.create_design(session, make_design("a", "Alpha"))
        repo.commit(session)

        with pytest.raises(StoreError):
            with repo.store_call(session, "create design"):
                repo.create_design(session, make_design("a", "Again"))
                repo.commit(session)

        assert repo.count_designs(session) == 1


class TestFileSessions:
    """Test sessions on a file-backed database."""

    def test_sessions_do_not_share_transactions(self, tmp_path):
        """Closing one session keeps another session's pending insert."""
        db_path = tmp_path / "store.db"
        init_db(db_path)
        writer = get_session(db_path)
        reader = get_session(db_path)
        try:
            repo.create_design(writer, make_design("d1", "Alpha"))
            writer.flush()

            repo.list_designs(reader)
            reader.close()

            repo.commit(writer)
        finally:
            writer.close()

        check = get_session(db_path)
        try:
            assert [d.design_id for d in repo.list_designs(check)] == ["d1"]
        finally:
            check.close()

    def test_engine_cache_keyed_by_timeout(self, tmp_path):
        """A different timeout builds a separate engine."""
        db_path = tmp_path / "store.db"

        first = get_engine(db_path, timeout_s=1.0)

        assert get_engine(db_path, timeout_s=1.0) is first
        assert get_engine(db_path, timeout_s=2.0) is not first
