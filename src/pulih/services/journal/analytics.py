"""
Journal Analytics

Aggregates a user's journal entries into monthly trend data:
- Entries of the selected month, oldest first
- Summary statistics (count, spacing, time of day, average condition)
- Most frequent trigger, symptom and strategy tags
- Condition-over-time chart series

All functions are pure: no I/O, no shared state. Calling them twice
with the same input returns equal output.

Local time: ``tz`` is the zone used for hour buckets and chart labels.
Offset-qualified timestamps are converted into it; naive timestamps
are taken as already local. With ``tz=None`` each timestamp's own
wall clock is used.
"""

import math
from collections import Counter
from datetime import datetime, timezone, tzinfo
from typing import Iterable, Optional, Sequence

from pulih.config.logging_config import get_logger
from pulih.domain.enums.condition import Condition, TimeOfDay
from pulih.domain.models.analytics import (
    ConditionSeries,
    JournalSummary,
    MonthlyAnalytics,
    TagCount,
)
from pulih.domain.models.episode import (
    EpisodeRecord,
    TaggableField,
    TAG_EXTRACTORS,
    split_tags,
)

logger = get_logger(__name__)

SECONDS_PER_DAY = 86_400

DEFAULT_TOP_N = 3

# Abbreviated month names for chart labels, indexed by month - 1
MONTH_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "id": ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
           "Jul", "Agu", "Sep", "Okt", "Nov", "Des"),
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}


def occurrence_instant(record: EpisodeRecord, tz: Optional[tzinfo] = None) -> datetime:
    """
    Comparable aware datetime for ordering and gaps.

    Naive timestamps are placed in ``tz`` (UTC when no zone is given).
    """
    occurred = record.occurred_at_datetime
    if occurred.tzinfo is None:
        return occurred.replace(tzinfo=tz or timezone.utc)
    return occurred


def _local(record: EpisodeRecord, tz: Optional[tzinfo]) -> datetime:
    """Wall-clock datetime used for hour buckets and labels."""
    occurred = record.occurred_at_datetime
    if tz is None or occurred.tzinfo is None:
        return occurred
    return occurred.astimezone(tz)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def filter_by_month(
    records: Iterable[EpisodeRecord],
    month: str,
    tz: Optional[tzinfo] = None,
) -> list[EpisodeRecord]:
    """
    Select the entries of one month, oldest first.

    An entry belongs to ``month`` when its ``occurred_at`` string starts
    with it. Entries with the same instant keep their input order.

    Args:
        records: Entries in any order
        month: Year-month selector (YYYY-MM)
        tz: Zone for naive timestamps

    Returns:
        Matching entries sorted ascending by time
    """
    selected = [record for record in records if record.occurred_at.startswith(month)]
    selected.sort(key=lambda record: occurrence_instant(record, tz))
    return selected


def compute_summary(
    filtered: Sequence[EpisodeRecord],
    tz: Optional[tzinfo] = None,
) -> JournalSummary:
    """
    Compute summary statistics for a set of entries.

    - average gap: mean days between consecutive entries, rounded
      half-up; needs at least two entries
    - dominant time of day: bucket with the strictly highest count,
      earlier bucket wins ties
    - average condition: mean condition mapped to the nearest level

    Args:
        filtered: Entries of the selected period
        tz: Zone for local hours

    Returns:
        Summary; fields that cannot be computed are None
    """
    total = len(filtered)
    if total == 0:
        return JournalSummary(total_count=0)

    average_gap_days: Optional[int] = None
    if total > 1:
        instants = sorted(occurrence_instant(record, tz) for record in filtered)
        gaps = [
            (later - earlier).total_seconds()
            for earlier, later in zip(instants, instants[1:])
        ]
        average_gap_days = _round_half_up(sum(gaps) / len(gaps) / SECONDS_PER_DAY)

    bucket_counts = {bucket: 0 for bucket in TimeOfDay}
    for record in filtered:
        bucket_counts[TimeOfDay.from_hour(_local(record, tz).hour)] += 1

    dominant: Optional[TimeOfDay] = None
    highest = 0
    for bucket in TimeOfDay:
        if bucket_counts[bucket] > highest:
            highest = bucket_counts[bucket]
            dominant = bucket

    mean_condition = sum(int(record.condition) for record in filtered) / total

    return JournalSummary(
        total_count=total,
        average_gap_days=average_gap_days,
        dominant_time_of_day=dominant,
        average_condition=Condition.from_average(mean_condition),
        average_condition_value=mean_condition,
    )


def rank_tags(
    filtered: Sequence[EpisodeRecord],
    field: TaggableField | str,
    top_n: int = DEFAULT_TOP_N,
) -> tuple[TagCount, ...]:
    """
    Rank the tags of one field by frequency.

    Tags are split on commas and semicolons and merged
    case-insensitively. A tag counts once per entry however often the
    entry repeats it, so a count is the number of entries mentioning
    the tag. Equal counts keep the order in which the tags were first
    seen while scanning ``filtered``.

    Args:
        filtered: Entries to scan, in order
        field: triggers, symptoms or strategies
        top_n: Maximum number of tags to return

    Returns:
        Up to ``top_n`` tags, most frequent first

    Raises:
        ValueError: If ``field`` is not a taggable field
    """
    extract = TAG_EXTRACTORS[TaggableField(field)]
    if top_n <= 0:
        return ()

    counts: Counter[str] = Counter()
    for record in filtered:
        counts.update(dict.fromkeys(split_tags(extract(record)), 1))

    return tuple(TagCount(tag=tag, count=count) for tag, count in counts.most_common(top_n))


def build_time_series(
    filtered: Sequence[EpisodeRecord],
    tz: Optional[tzinfo] = None,
    locale: str = "id",
) -> ConditionSeries:
    """
    Build the condition chart series.

    One point per entry, in the given order. Labels are the local day
    number and abbreviated month name, e.g. ``"5 Mei"``.

    Args:
        filtered: Entries, oldest first
        tz: Zone for local dates
        locale: Month name language (id or en)
    """
    month_names = MONTH_ABBREVIATIONS.get(locale, MONTH_ABBREVIATIONS["id"])
    labels = []
    values = []
    for record in filtered:
        local = _local(record, tz)
        labels.append(f"{local.day} {month_names[local.month - 1]}")
        values.append(int(record.condition))
    return ConditionSeries(labels=tuple(labels), values=tuple(values))


def analyze_month(
    records: Iterable[EpisodeRecord],
    month: str,
    *,
    top_n: int = DEFAULT_TOP_N,
    tz: Optional[tzinfo] = None,
    locale: str = "id",
) -> MonthlyAnalytics:
    """
    Run the full analytics pass for one month.

    Args:
        records: All of a user's entries
        month: Year-month selector (YYYY-MM)
        top_n: Size of each tag ranking
        tz: Zone for local time
        locale: Chart label language

    Returns:
        MonthlyAnalytics bundle (``has_data`` is False for an empty month)
    """
    filtered = filter_by_month(records, month, tz)

    analytics = MonthlyAnalytics(
        month=month,
        entries=tuple(filtered),
        summary=compute_summary(filtered, tz),
        top_triggers=rank_tags(filtered, TaggableField.TRIGGERS, top_n),
        top_symptoms=rank_tags(filtered, TaggableField.SYMPTOMS, top_n),
        top_strategies=rank_tags(filtered, TaggableField.STRATEGIES, top_n),
        series=build_time_series(filtered, tz, locale),
    )

    logger.debug(
        "Monthly analytics computed",
        month=month,
        entry_count=len(filtered),
    )

    return analytics


def newest_first(
    records: Iterable[EpisodeRecord],
    tz: Optional[tzinfo] = None,
) -> list[EpisodeRecord]:
    """Entries ordered newest first, on the same timeline as the analytics."""
    return sorted(records, key=lambda record: occurrence_instant(record, tz), reverse=True)


def available_months(records: Iterable[EpisodeRecord]) -> list[str]:
    """Distinct YYYY-MM months that have entries, newest first."""
    return sorted({record.occurred_at[:7] for record in records}, reverse=True)
