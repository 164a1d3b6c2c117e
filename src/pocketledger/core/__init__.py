"""Core utilities and shared functionality."""

from pocketledger.core.dates import (
    now_local,
    today_local,
    parse_date,
    week_bounds,
    month_bounds,
    year_bounds,
    days_ending,
)
from pocketledger.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PersistenceError,
)
from pocketledger.core.ids import new_id

__all__ = [
    "now_local",
    "today_local",
    "parse_date",
    "week_bounds",
    "month_bounds",
    "year_bounds",
    "days_ending",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "new_id",
]
