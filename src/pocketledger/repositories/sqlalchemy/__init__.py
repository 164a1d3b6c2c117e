"""SQLAlchemy repository implementations."""

from pocketledger.repositories.sqlalchemy.database import (
    Base,
    build_engine,
    create_schema,
    get_db,
    get_engine,
    get_session_factory,
    init_db,
    reset_database,
    session_factory,
)
from pocketledger.repositories.sqlalchemy.ledger_store import SqlAlchemyLedgerStore
from pocketledger.repositories.sqlalchemy.local_adapter import LocalAdapter

__all__ = [
    "Base",
    "build_engine",
    "create_schema",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_database",
    "session_factory",
    "SqlAlchemyLedgerStore",
    "LocalAdapter",
]
