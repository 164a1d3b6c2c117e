"""SQLAlchemy storage for a complete ledger."""

import logging
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocketledger.core.exceptions import PersistenceError
from pocketledger.domain.models import (
    Account,
    Category,
    LedgerState,
    Transaction,
    TransactionSplit,
)
from pocketledger.repositories.sqlalchemy.orm_models import AccountORM, CategoryORM, TransactionORM

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyLedgerStore:
    """
    SQLAlchemy-backed ledger storage.

    Writes are full replacements: delete every row, reinsert the given state
    and commit, all inside one database transaction that is rolled back on
    any failure.
    """

    def __init__(self, db: Session):
        self._db = db

    def load_state(self) -> LedgerState:
        """Read every account, category and transaction."""
        try:
            accounts = self._db.query(AccountORM).order_by(AccountORM.position).all()
            categories = self._db.query(CategoryORM).order_by(CategoryORM.position).all()
            transactions = self._db.query(TransactionORM).order_by(TransactionORM.position).all()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise PersistenceError(f"Failed to load ledger: {exc}") from exc

        return LedgerState(
            accounts=[self._account_to_domain(a) for a in accounts],
            categories=[self._category_to_domain(c) for c in categories],
            transactions=[self._transaction_to_domain(t) for t in transactions],
        )

    def replace_state(self, state: LedgerState) -> None:
        """Replace the stored ledger with ``state`` atomically."""
        try:
            self._db.query(TransactionORM).delete()
            self._db.query(AccountORM).delete()
            self._db.query(CategoryORM).delete()

            self._db.add_all(
                self._account_to_orm(account, position)
                for position, account in enumerate(state.accounts)
            )
            self._db.add_all(
                self._category_to_orm(category, position)
                for position, category in enumerate(state.categories)
            )
            self._db.add_all(
                self._transaction_to_orm(tx, position)
                for position, tx in enumerate(state.transactions)
            )
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Ledger replace rolled back: %s", exc)
            raise PersistenceError(f"Failed to store ledger: {exc}") from exc

        logger.debug(
            "Stored %d accounts, %d categories, %d transactions",
            len(state.accounts),
            len(state.categories),
            len(state.transactions),
        )

    @staticmethod
    def _account_to_orm(account: Account, position: int) -> AccountORM:
        return AccountORM(
            id=account.id,
            position=position,
            name=account.name,
            type=account.type,
            balance=account.balance,
            opening_balance=account.opening_balance,
            color=account.color,
            credit_limit=account.credit_limit,
            due_date=account.due_date,
        )

    @staticmethod
    def _category_to_orm(category: Category, position: int) -> CategoryORM:
        return CategoryORM(
            id=category.id,
            position=position,
            name=category.name,
            type=category.type,
            icon=category.icon,
        )

    @staticmethod
    def _transaction_to_orm(tx: Transaction, position: int) -> TransactionORM:
        return TransactionORM(
            id=tx.id,
            position=position,
            amount=tx.amount,
            type=tx.type,
            category_id=tx.category_id,
            description=tx.description,
            date=tx.date,
            from_account_id=tx.from_account_id,
            to_account_id=tx.to_account_id,
            splits=[
                {"categoryId": s.category_id, "amount": str(s.amount), "description": s.description}
                for s in tx.splits
            ] or None,
        )

    @staticmethod
    def _account_to_domain(orm: AccountORM) -> Account:
        return Account(
            id=orm.id,
            name=orm.name,
            type=orm.type,
            balance=_to_decimal(orm.balance) or Decimal("0"),
            opening_balance=_to_decimal(orm.opening_balance) or Decimal("0"),
            color=orm.color or "#71717a",
            credit_limit=_to_decimal(orm.credit_limit),
            due_date=orm.due_date,
        )

    @staticmethod
    def _category_to_domain(orm: CategoryORM) -> Category:
        return Category(id=orm.id, name=orm.name, type=orm.type, icon=orm.icon)

    @staticmethod
    def _transaction_to_domain(orm: TransactionORM) -> Transaction:
        return Transaction(
            id=orm.id,
            amount=_to_decimal(orm.amount),
            type=orm.type,
            from_account_id=orm.from_account_id,
            date=orm.date,
            category_id=orm.category_id,
            description=orm.description or "",
            to_account_id=orm.to_account_id,
            splits=[
                TransactionSplit(
                    category_id=s["categoryId"],
                    amount=Decimal(s["amount"]),
                    description=s.get("description"),
                )
                for s in (orm.splits or [])
            ],
        )
