"""
Pytest configuration and fixtures for the ledger tests.

This module provides:
- Isolated settings and in-memory SQLite database fixtures
- In-memory and failing persistence adapters
- A controllable clock for notification timeouts
- A started ledger service over a small known ledger
- FastAPI test client wired to that ledger
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy.orm import Session
from fastapi.testclient import TestClient

from pocketledger.app_context import AppContext, set_app_context
from pocketledger.config.settings import Settings, reset_settings, set_settings
from pocketledger.core.exceptions import PersistenceError
from pocketledger.domain.models import (
    Account,
    AccountType,
    Category,
    CategoryType,
    LedgerState,
    TransactionSplit,
    TransactionType,
)
from pocketledger.main import app
from pocketledger.repositories.sqlalchemy.database import (
    build_engine,
    create_schema,
    get_db,
    reset_database,
    session_factory,
)
from pocketledger.services import LedgerService, NotificationCenter, TransactionData


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path) -> Settings:
    """Point every test at its own data directory, ignoring .env files."""
    settings = Settings(_env_file=None, data_dir=tmp_path, timezone="UTC")
    set_settings(settings)
    yield settings
    set_app_context(None)
    reset_database()
    reset_settings()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Server store on a single shared in-memory SQLite connection."""
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    session = session_factory(test_engine)()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# PERSISTENCE ADAPTER FIXTURES
# =============================================================================


class InMemoryAdapter:
    """
    Persistence adapter keeping the stored state in memory.

    Records every persist, can be told to fail, and lets a test push remote
    updates to the subscribed ledger.
    """

    def __init__(self, state: Optional[LedgerState] = None):
        self.stored = state.copy() if state else LedgerState()
        self.persisted: list[LedgerState] = []
        self.fail_persist = False
        self.closed = False
        self._listeners = []

    def load(self) -> LedgerState:
        return self.stored.copy()

    def persist(self, state: LedgerState) -> None:
        if self.fail_persist:
            raise PersistenceError("Store unavailable")
        self.stored = state.copy()
        self.persisted.append(state.copy())

    def subscribe(self, on_change):
        self._listeners.append(on_change)
        return lambda: self._listeners.remove(on_change)

    def close(self) -> None:
        self.closed = True

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def push_remote(self, state: LedgerState) -> None:
        """Deliver ``state`` as if another client had written it."""
        self.stored = state.copy()
        for listener in list(self._listeners):
            listener(state.copy())


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_ledger_state() -> LedgerState:
    """
    Small known ledger.

    - acc-a: bank, 1000
    - acc-b: bank, 500
    - acc-card: credit, 0, limit 2000
    """
    return LedgerState(
        accounts=[
            Account(id="acc-a", name="Checking", type=AccountType.BANK,
                    balance=Decimal("1000"), opening_balance=Decimal("1000")),
            Account(id="acc-b", name="Savings", type=AccountType.BANK,
                    balance=Decimal("500"), opening_balance=Decimal("500")),
            Account(id="acc-card", name="Visa", type=AccountType.CREDIT,
                    balance=Decimal("0"), credit_limit=Decimal("2000"), due_date="15th"),
        ],
        categories=[
            Category(id="cat-salary", name="Salary", type=CategoryType.INCOME),
            Category(id="cat-food", name="Food", type=CategoryType.EXPENSE),
            Category(id="cat-rent", name="Rent", type=CategoryType.EXPENSE),
        ],
        transactions=[],
    )


@pytest.fixture
def ledger_state() -> LedgerState:
    return make_ledger_state()


@pytest.fixture
def memory_adapter(ledger_state) -> InMemoryAdapter:
    """Provide an in-memory adapter preloaded with the known ledger."""
    return InMemoryAdapter(ledger_state)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifications(clock) -> NotificationCenter:
    return NotificationCenter(auto_dismiss_ms=5000, clock=clock)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(memory_adapter, notifications) -> LedgerService:
    """Provide a started LedgerService over the known ledger."""
    service = LedgerService(
        adapter=memory_adapter,
        notifications=notifications,
        seed_defaults=False,
        reconcile_on_load=False,
    )
    service.start()
    yield service
    service.close()


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, memory_adapter, isolated_settings) -> TestClient:
    """Provide FastAPI test client with test database and in-memory ledger."""
    sessions = session_factory(test_engine)

    def override_get_db():
        session = sessions()
        try:
            yield session
        finally:
            session.close()

    settings = isolated_settings.model_copy(update={"seed_defaults": False, "reconcile_on_load": False})
    set_app_context(AppContext(settings=settings, adapter=memory_adapter))

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def balances(ledger: LedgerService) -> dict[str, Decimal]:
    """Map account id to balance."""
    return {a.id: a.balance for a in ledger.accounts}


def income(
    amount: str,
    account_id: str = "acc-a",
    category_id: str = "cat-salary",
    on: Optional[date] = None,
    description: str = "",
) -> TransactionData:
    return TransactionData(
        amount=Decimal(amount),
        type=TransactionType.INCOME,
        from_account_id=account_id,
        date=on or date(2024, 6, 15),
        category_id=category_id,
        description=description,
    )


def expense(
    amount: str,
    account_id: str = "acc-a",
    category_id: str = "cat-food",
    on: Optional[date] = None,
    splits: Optional[list[TransactionSplit]] = None,
) -> TransactionData:
    return TransactionData(
        amount=Decimal(amount),
        type=TransactionType.EXPENSE,
        from_account_id=account_id,
        date=on or date(2024, 6, 15),
        category_id=category_id,
        splits=splits or [],
    )


def transfer(
    amount: str,
    from_account_id: str = "acc-a",
    to_account_id: str = "acc-b",
    on: Optional[date] = None,
) -> TransactionData:
    return TransactionData(
        amount=Decimal(amount),
        type=TransactionType.TRANSFER,
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        date=on or date(2024, 6, 15),
    )
