"""
Journal Analytics Models

Value objects produced by the journal analytics aggregator and
consumed by the API layer for dashboards and charts.

Fields that cannot be computed for the selected period are ``None``
("not applicable") rather than zero.
"""

from dataclasses import dataclass, field
from typing import Optional

from pulih.domain.enums.condition import Condition, TimeOfDay
from pulih.domain.models.episode import EpisodeRecord


@dataclass(frozen=True)
class TagCount:
    """One ranked tag and how many times it was recorded."""

    tag: str
    count: int

    def to_dict(self) -> dict:
        return {"tag": self.tag, "count": self.count}


@dataclass(frozen=True)
class JournalSummary:
    """
    Summary statistics for a set of episodes.

    Attributes:
        total_count: Number of episodes
        average_gap_days: Mean days between consecutive episodes
        dominant_time_of_day: Day part with the most episodes
        average_condition: Condition level closest to the mean
        average_condition_value: Raw mean condition (0.0-2.0)
    """

    total_count: int = 0
    average_gap_days: Optional[int] = None
    dominant_time_of_day: Optional[TimeOfDay] = None
    average_condition: Optional[Condition] = None
    average_condition_value: Optional[float] = None

    @property
    def average_condition_label(self) -> Optional[str]:
        if self.average_condition is None:
            return None
        return self.average_condition.label

    def to_dict(self) -> dict:
        return {
            "total_count": self.total_count,
            "average_gap_days": self.average_gap_days,
            "dominant_time_of_day": (
                self.dominant_time_of_day.value if self.dominant_time_of_day else None
            ),
            "average_condition": self.average_condition_label,
            "average_condition_value": self.average_condition_value,
        }


@dataclass(frozen=True)
class ConditionSeries:
    """Chart series: one label and one condition value per episode."""

    labels: tuple[str, ...] = ()
    values: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.values):
            raise ValueError("labels and values must have the same length")

    def to_dict(self) -> dict:
        return {"labels": list(self.labels), "values": list(self.values)}


@dataclass(frozen=True)
class MonthlyAnalytics:
    """
    Complete analytics bundle for one month of a user's journal.

    Attributes:
        month: Selected month (YYYY-MM)
        entries: Episodes in the month, oldest first
        summary: Summary statistics
        top_triggers: Most frequent trigger tags
        top_symptoms: Most frequent symptom tags
        top_strategies: Most frequent strategy tags
        series: Condition chart series
    """

    month: str
    entries: tuple[EpisodeRecord, ...] = ()
    summary: JournalSummary = field(default_factory=JournalSummary)
    top_triggers: tuple[TagCount, ...] = ()
    top_symptoms: tuple[TagCount, ...] = ()
    top_strategies: tuple[TagCount, ...] = ()
    series: ConditionSeries = field(default_factory=ConditionSeries)

    @property
    def has_data(self) -> bool:
        """False when the month has no episodes."""
        return self.summary.total_count > 0

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "has_data": self.has_data,
            "summary": self.summary.to_dict(),
            "top_triggers": [t.to_dict() for t in self.top_triggers],
            "top_symptoms": [t.to_dict() for t in self.top_symptoms],
            "top_strategies": [t.to_dict() for t in self.top_strategies],
            "series": self.series.to_dict(),
        }
