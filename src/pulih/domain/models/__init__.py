"""Domain models package."""

from pulih.domain.models.episode import (
    EpisodeDraft,
    EpisodeRecord,
    TaggableField,
    TAG_EXTRACTORS,
    parse_occurred_at,
    split_tags,
)
from pulih.domain.models.user import OwnerContext, User
from pulih.domain.models.analytics import (
    ConditionSeries,
    JournalSummary,
    MonthlyAnalytics,
    TagCount,
)

__all__ = [
    # Episode models
    "EpisodeDraft",
    "EpisodeRecord",
    "TaggableField",
    "TAG_EXTRACTORS",
    "parse_occurred_at",
    "split_tags",
    # User models
    "OwnerContext",
    "User",
    # Analytics output
    "ConditionSeries",
    "JournalSummary",
    "MonthlyAnalytics",
    "TagCount",
]
