"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    Date,
    Index,
    Integer,
    JSON,
    String,
    Text,
    TypeDecorator,
    Enum as SqlEnum,
)

from pocketledger.repositories.sqlalchemy.database import Base
from pocketledger.domain.models.enums import AccountType, CategoryType, TransactionType


class Money(TypeDecorator):
    """
    Decimal stored as its exact text form.

    SQLite has no decimal type and would round-trip ``Numeric`` through
    float, so amounts are kept as strings and parsed back into Decimal.
    """

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    type = Column(SqlEnum(AccountType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    balance = Column(Money(), nullable=False, default=Decimal("0"))
    opening_balance = Column(Money(), nullable=False, default=Decimal("0"))
    color = Column(String(32), nullable=True)
    credit_limit = Column(Money(), nullable=True)
    due_date = Column(String(32), nullable=True)


class CategoryORM(Base):
    """SQLAlchemy model for Category."""

    __tablename__ = "categories"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    type = Column(SqlEnum(CategoryType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    icon = Column(String(64), nullable=True)


class TransactionORM(Base):
    """
    SQLAlchemy model for Transaction (ledger entry).

    Account and category references are plain strings: accounts and
    categories may be deleted while transactions still point at them.
    """

    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    amount = Column(Money(), nullable=False)
    type = Column(SqlEnum(TransactionType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    category_id = Column(String(64), nullable=True)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    from_account_id = Column(String(64), nullable=False)
    to_account_id = Column(String(64), nullable=True)
    splits = Column(JSON, nullable=True)

    __table_args__ = (Index("idx_tx_date", "date"),)
