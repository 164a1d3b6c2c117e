"""
Unit tests for export period resolution and snapshots.

Tests cover:
- Daily, weekly, monthly, yearly and all periods
- Malformed date values
- Type filtering and ordering
"""

from datetime import date

import pytest

from pocketledger.core.exceptions import ValidationError
from pocketledger.domain.models import TransactionType
from pocketledger.domain.views import ExportFormat, ExportPeriod, ExportRequest
from pocketledger.services import LedgerService, build_export_snapshot, resolve_period
from tests.conftest import expense, income, transfer


class TestResolvePeriod:
    """Tests for date range resolution."""

    @pytest.mark.parametrize(
        "period, value, expected",
        [
            (ExportPeriod.DAILY, "2024-06-15", (date(2024, 6, 15), date(2024, 6, 15))),
            # Saturday -> Monday..Sunday
            (ExportPeriod.WEEKLY, "2024-06-15", (date(2024, 6, 10), date(2024, 6, 16))),
            (ExportPeriod.WEEKLY, "2024-06-10", (date(2024, 6, 10), date(2024, 6, 16))),
            (ExportPeriod.MONTHLY, "2024-02", (date(2024, 2, 1), date(2024, 2, 29))),
            (ExportPeriod.MONTHLY, "2023-12", (date(2023, 12, 1), date(2023, 12, 31))),
            (ExportPeriod.YEARLY, "2024", (date(2024, 1, 1), date(2024, 12, 31))),
            (ExportPeriod.ALL, "all", (None, None)),
            (ExportPeriod.ALL, None, (None, None)),
        ],
    )
    def test_ranges(self, period, value, expected):
        assert resolve_period(period, value) == expected

    @pytest.mark.parametrize(
        "period, value",
        [
            (ExportPeriod.DAILY, "yesterday-ish"),
            (ExportPeriod.MONTHLY, "2024-13"),
            (ExportPeriod.MONTHLY, "2024"),
            (ExportPeriod.YEARLY, "twenty"),
            (ExportPeriod.WEEKLY, "all"),
            (ExportPeriod.DAILY, ""),
        ],
    )
    def test_malformed_values_rejected(self, period, value):
        with pytest.raises(ValidationError):
            resolve_period(period, value)


class TestExportRequest:
    """Tests for request coercion."""

    def test_strings_are_coerced(self):
        request = ExportRequest(format="pdf", period="weekly", date_value="2024-06-15", types=["income"])

        assert request.format == ExportFormat.PDF
        assert request.period == ExportPeriod.WEEKLY
        assert request.types == [TransactionType.INCOME]

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            ExportRequest(format="docx", period="all")


class TestExportSnapshot:
    """Tests for building the filtered snapshot."""

    def test_type_filter_and_newest_first(self, ledger_service: LedgerService):
        """
        GIVEN income, expense and transfer entries in 2024
        WHEN a yearly export restricted to income and expense is built
        THEN the transfer is excluded and entries are newest first
        """
        first = ledger_service.create_transaction(income("1", on=date(2024, 1, 5)))
        second = ledger_service.create_transaction(expense("2", on=date(2024, 7, 5)))
        ledger_service.create_transaction(transfer("3", on=date(2024, 8, 5)))
        ledger_service.create_transaction(income("4", on=date(2023, 12, 31)))

        snapshot = build_export_snapshot(
            ledger_service.state(),
            ExportRequest("xlsx", "yearly", "2024", types=["income", "expense"]),
        )

        assert [t.id for t in snapshot.transactions] == [second.id, first.id]
        assert snapshot.start == date(2024, 1, 1)
        assert snapshot.end == date(2024, 12, 31)
        assert len(snapshot.categories) == 3

    def test_all_period_keeps_everything(self, ledger_service: LedgerService):
        ledger_service.create_transaction(income("1", on=date(2020, 1, 1)))
        ledger_service.create_transaction(income("2", on=date(2024, 1, 1)))

        snapshot = ledger_service.export_snapshot(ExportRequest("json", "all"))

        assert len(snapshot.transactions) == 2
        assert snapshot.start is None and snapshot.end is None
