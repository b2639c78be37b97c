"""Tests for content store engine and session handling."""

import pytest

from calcsite.database import Faq, create_tables, get_engine, get_session, session_scope
from calcsite.database.base import _engine_options


@pytest.fixture
def tables(app_env):
    create_tables()


def _faq_count() -> int:
    with session_scope() as session:
        return session.query(Faq).count()


class TestSessionScope:
    """Test cases for session_scope()."""

    def test_commits_on_success(self, tables):
        with session_scope() as session:
            session.add(Faq(question="Q?", answer="A"))

        assert _faq_count() == 1

    def test_rolls_back_on_error(self, tables):
        """A failure inside the block leaves nothing committed."""
        with pytest.raises(RuntimeError):
            with session_scope() as session:
                session.add(Faq(question="Q?", answer="A"))
                session.flush()
                raise RuntimeError("boom")

        assert _faq_count() == 0

    def test_uses_given_factory(self, tables):
        opened = []

        def factory():
            session = get_session()
            opened.append(session)
            return session

        with session_scope(factory) as session:
            assert session is opened[0]


class TestEngine:
    def test_engine_from_settings(self, app_env):
        assert get_engine().url.get_backend_name() == "sqlite"
        assert get_engine() is get_engine()

    def test_sqlite_allows_cross_thread_use(self):
        options = _engine_options("sqlite:///content.db", echo=False)

        assert options["connect_args"] == {"check_same_thread": False}
        assert "pool_recycle" not in options

    def test_server_database_recycles_connections(self):
        options = _engine_options("postgresql://user:pw@localhost/calcsite", echo=True)

        assert options["pool_recycle"] == 3600
        assert options["pool_pre_ping"] is True
        assert options["echo"] is True
        assert "connect_args" not in options
