"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from pocketledger.app_context import AppContext, get_app_context
from pocketledger.repositories.sqlalchemy import SqlAlchemyLedgerStore
from pocketledger.repositories.sqlalchemy.database import get_db
from pocketledger.services import LedgerService, NotificationCenter, SummaryService


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_ledger_service(context: AppContext = Depends(get_context)) -> LedgerService:
    """Provide the started LedgerService instance."""
    return context.ledger


def get_notification_center(context: AppContext = Depends(get_context)) -> NotificationCenter:
    return context.notifications


def get_summary_service(context: AppContext = Depends(get_context)) -> SummaryService:
    """Provide SummaryService instance."""
    return context.summary


def get_ledger_store(db: Session = Depends(get_db)) -> SqlAlchemyLedgerStore:
    """Provide the relational store behind /api/data and /api/sync."""
    return SqlAlchemyLedgerStore(db)
