"""Journal services: entry management and monthly analytics."""

from pulih.services.journal.analytics import (
    analyze_month,
    available_months,
    build_time_series,
    compute_summary,
    filter_by_month,
    newest_first,
    rank_tags,
)
from pulih.services.journal.journal_service import JournalService

__all__ = [
    "analyze_month",
    "available_months",
    "build_time_series",
    "compute_summary",
    "filter_by_month",
    "newest_first",
    "rank_tags",
    "JournalService",
]
