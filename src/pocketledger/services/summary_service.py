"""Summary service for dashboard and account overview figures."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from pocketledger.core.dates import days_ending
from pocketledger.domain.models import Account, LedgerState, Transaction, TransactionType
from pocketledger.domain.views import (
    CategoryTotalView,
    CreditUtilizationView,
    DailyFlowView,
    LedgerSummaryView,
)
from pocketledger.services.ledger_service import LedgerService

DEFAULT_FLOW_DAYS = 15


class SummaryService:
    """
    Service for ledger summaries.

    Computes income/expense totals, liquid funds, credit utilisation,
    category breakdowns and the recent daily flow. Transfers move money
    between accounts and never count as income or expense.
    """

    def __init__(self, ledger_service: LedgerService):
        self._ledger = ledger_service

    def summarize(self, days: int = DEFAULT_FLOW_DAYS, end: Optional[date] = None) -> LedgerSummaryView:
        """
        Build the full summary from the current ledger.

        Args:
            days: Length of the daily flow
            end: Last day of the daily flow; defaults to today

        Returns:
            LedgerSummaryView with totals, credit use, categories and flow
        """
        state = self._ledger.state()

        total_income = self._total(state.transactions, TransactionType.INCOME)
        total_expense = self._total(state.transactions, TransactionType.EXPENSE)

        return LedgerSummaryView(
            total_income=total_income,
            total_expense=total_expense,
            net_flow=total_income - total_expense,
            liquid_total=self.liquid_total(state.accounts),
            credit=self.credit_utilization(state.accounts),
            categories=self.category_totals(state),
            daily_flow=self.daily_flow(state.transactions, days, end),
        )

    @staticmethod
    def liquid_total(accounts: list[Account]) -> Decimal:
        """Sum of every non-credit balance."""
        return sum((a.balance for a in accounts if not a.is_credit), Decimal("0"))

    @staticmethod
    def credit_utilization(accounts: list[Account]) -> list[CreditUtilizationView]:
        """
        Outstanding amount per credit account against its limit.

        A negative credit balance is debt. Utilisation is None when the
        account has no positive limit.
        """
        views = []
        for account in accounts:
            if not account.is_credit:
                continue
            outstanding = -account.balance if account.balance < 0 else Decimal("0")
            percent: Optional[Decimal] = None
            if account.credit_limit and account.credit_limit > 0:
                percent = (outstanding / account.credit_limit * 100).quantize(Decimal("0.01"))
            views.append(
                CreditUtilizationView(
                    account_id=account.id,
                    name=account.name,
                    outstanding=outstanding,
                    credit_limit=account.credit_limit,
                    utilization_percent=percent,
                    due_date=account.due_date,
                )
            )
        return views

    @staticmethod
    def category_totals(state: LedgerState) -> list[CategoryTotalView]:
        """
        Totals per category, largest first.

        Split transactions contribute each part to its own category.
        Categories without bookings are omitted.
        """
        totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        for tx in state.transactions:
            if tx.is_transfer:
                continue
            if tx.splits:
                for split in tx.splits:
                    totals[split.category_id] += split.amount
            else:
                totals[tx.category_id] += tx.amount

        views = [
            CategoryTotalView(
                category_id=category.id,
                name=category.name,
                type=category.type.value,
                amount=totals[category.id],
            )
            for category in state.categories
            if totals.get(category.id, Decimal("0")) > 0
        ]
        views.sort(key=lambda v: v.amount, reverse=True)
        return views

    @staticmethod
    def daily_flow(
        transactions: list[Transaction],
        days: int = DEFAULT_FLOW_DAYS,
        end: Optional[date] = None,
    ) -> list[DailyFlowView]:
        """Income and expense per day for ``days`` days ending at ``end`` (today by default)."""
        flow = {day: DailyFlowView(day=day) for day in days_ending(end, days)}
        for tx in transactions:
            view = flow.get(tx.date)
            if view is None:
                continue
            if tx.type == TransactionType.INCOME:
                view.income += tx.amount
            elif tx.type == TransactionType.EXPENSE:
                view.expense += tx.amount
        return list(flow.values())

    @staticmethod
    def _total(transactions: list[Transaction], txn_type: TransactionType) -> Decimal:
        return sum((tx.amount for tx in transactions if tx.type == txn_type), Decimal("0"))
