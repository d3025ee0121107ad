"""
PULIH Domain Layer

Core business entities and value objects.
These models represent the domain logic independent of infrastructure.
"""

from pulih.domain.models.episode import EpisodeDraft, EpisodeRecord, TaggableField
from pulih.domain.models.user import OwnerContext, User
from pulih.domain.models.analytics import (
    ConditionSeries,
    JournalSummary,
    MonthlyAnalytics,
    TagCount,
)
from pulih.domain.enums import Condition, TimeOfDay, UserRole

__all__ = [
    # Episode
    "EpisodeDraft",
    "EpisodeRecord",
    "TaggableField",
    # User
    "OwnerContext",
    "User",
    # Analytics
    "ConditionSeries",
    "JournalSummary",
    "MonthlyAnalytics",
    "TagCount",
    # Enums
    "Condition",
    "TimeOfDay",
    "UserRole",
]
