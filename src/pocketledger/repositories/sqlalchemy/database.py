"""Engines and sessions for the relational stores.

Two databases may exist side by side: the server store behind ``/api/data``
and ``/api/sync`` (module-level engine below, from ``database_url``) and the
local ledger cache owned by ``LocalAdapter`` (``local_database_url``).
"""

from typing import Generator, Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from pocketledger.config.settings import get_settings

Base = declarative_base()

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

# Server store, created on first use and dropped by reset_database()
_server_engine: Optional[Engine] = None
_server_sessions: Optional[sessionmaker] = None


def build_engine(database_url: str) -> Engine:
    """Create an engine, applying SQLite-specific connection arguments."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False)

    kwargs = {"connect_args": {"check_same_thread": False}}
    # In-memory databases live in a single connection
    if database_url in _MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=False, **kwargs)


def create_schema(engine: Engine) -> None:
    """Create the ledger tables on ``engine`` if they are missing."""
    from pocketledger.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_engine() -> Engine:
    """Return the server store engine."""
    global _server_engine
    if _server_engine is None:
        _server_engine = build_engine(get_settings().get_database_url())
    return _server_engine


def get_session_factory() -> sessionmaker:
    global _server_sessions
    if _server_sessions is None:
        _server_sessions = session_factory(get_engine())
    return _server_sessions


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a server store session."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the server store tables."""
    create_schema(get_engine())


def reset_database() -> None:
    """Dispose the server store engine so the next use reads fresh settings."""
    global _server_engine, _server_sessions

    if _server_engine is not None:
        _server_engine.dispose()
    _server_engine = None
    _server_sessions = None
