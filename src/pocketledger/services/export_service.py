"""Export boundary: resolve a period filter and snapshot the matching ledger."""

import copy
from datetime import date
from typing import Optional

from pocketledger.core.dates import month_bounds, parse_date, week_bounds, year_bounds
from pocketledger.core.exceptions import ValidationError
from pocketledger.domain.models import LedgerState
from pocketledger.domain.views import ExportPeriod, ExportRequest, ExportSnapshot


def resolve_period(period: ExportPeriod, date_value: Optional[str]) -> tuple[Optional[date], Optional[date]]:
    """
    Translate an export period and its date value into an inclusive range.

    Returns ``(None, None)`` for the whole ledger.
    """
    if period == ExportPeriod.ALL:
        return None, None
    if not date_value or date_value == "all":
        raise ValidationError(f"A date value is required for {period.value} exports")

    try:
        if period == ExportPeriod.DAILY:
            day = parse_date(date_value)
            return day, day
        if period == ExportPeriod.WEEKLY:
            return week_bounds(parse_date(date_value))
        if period == ExportPeriod.MONTHLY:
            year, month = date_value.split("-")[:2]
            return month_bounds(int(year), int(month))
        if period == ExportPeriod.YEARLY:
            return year_bounds(int(date_value[:4]))
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid date value for {period.value} export: {date_value}") from exc

    raise ValidationError(f"Unsupported export period: {period}")


def build_export_snapshot(state: LedgerState, request: ExportRequest) -> ExportSnapshot:
    """Filter the ledger for an export request; transactions newest first."""
    start, end = resolve_period(request.period, request.date_value)
    types = set(request.types) if request.types else None

    transactions = [
        tx
        for tx in state.transactions
        if (start is None or tx.date >= start)
        and (end is None or tx.date <= end)
        and (types is None or tx.type in types)
    ]
    transactions.sort(key=lambda tx: (tx.date, tx.id), reverse=True)

    return ExportSnapshot(
        request=request,
        start=start,
        end=end,
        transactions=copy.deepcopy(transactions),
        accounts=copy.deepcopy(state.accounts),
        categories=copy.deepcopy(state.categories),
    )
