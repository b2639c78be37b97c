"""
Database base configuration and session management for the content store.

The content store is optional at runtime: calculator pages fall back to their
default content when it is unreachable, so sessions are short-lived and opened
per operation through ``session_scope``.
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from calcsite.config import get_global_settings

Base = declarative_base()

SessionFactory = Callable[[], Session]

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _engine_options(db_url: str, echo: bool) -> dict:
    options: dict = {"echo": echo, "pool_pre_ping": True}
    if make_url(db_url).get_backend_name() == "sqlite":
        # Flask serves requests from several threads
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_recycle"] = 3600
    return options


def get_engine() -> Engine:
    """Get or create the content store engine from DB_URL."""
    global _engine
    if _engine is None:
        settings = get_global_settings()
        _engine = create_engine(
            settings.db_url,
            **_engine_options(settings.db_url, echo=settings.log_level == "DEBUG"),
        )
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def get_session() -> Session:
    """Get a new database session."""
    return get_session_factory()()  # type: ignore[no-any-return]


@contextmanager
def session_scope(factory: Optional[SessionFactory] = None) -> Iterator[Session]:
    """
    Open a session that commits on success and rolls back on error.

    Args:
        factory: Callable returning a new session; defaults to get_session

    Yields:
        The open session, closed when the block exits
    """
    session = (factory or get_session)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create the content store tables."""
    Base.metadata.create_all(bind=get_engine())


def reset_engine() -> None:
    """Dispose of the engine and session factory (useful for testing)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
