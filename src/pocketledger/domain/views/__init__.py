"""View models for summaries and exports."""

from pocketledger.domain.views.summary import (
    CreditUtilizationView,
    CategoryTotalView,
    DailyFlowView,
    LedgerSummaryView,
)
from pocketledger.domain.views.export import (
    ExportFormat,
    ExportPeriod,
    ExportRequest,
    ExportSnapshot,
)

__all__ = [
    "CreditUtilizationView",
    "CategoryTotalView",
    "DailyFlowView",
    "LedgerSummaryView",
    "ExportFormat",
    "ExportPeriod",
    "ExportRequest",
    "ExportSnapshot",
]
