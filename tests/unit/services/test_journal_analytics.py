"""
Unit Tests for Journal Analytics

Covers month filtering, summary statistics, tag ranking and
chart series construction.
"""

from zoneinfo import ZoneInfo

import pytest

from pulih.domain.enums.condition import Condition, TimeOfDay
from pulih.domain.models.analytics import TagCount
from pulih.domain.models.episode import TaggableField
from pulih.services.journal.analytics import (
    analyze_month,
    available_months,
    build_time_series,
    compute_summary,
    filter_by_month,
    newest_first,
    rank_tags,
)

JAKARTA = ZoneInfo("Asia/Jakarta")


class TestFilterByMonth:
    """Tests for month selection."""

    def test_keeps_only_matching_month_sorted_ascending(self, make_record) -> None:
        """Output is the month's entries, oldest first."""
        records = [
            make_record("2024-05-20T08:00:00"),
            make_record("2024-04-30T23:00:00"),
            make_record("2024-05-02"),
            make_record("2024-06-01T00:00:00"),
            make_record("2024-05-10T12:30:00"),
        ]

        filtered = filter_by_month(records, "2024-05")

        assert [r.occurred_at for r in filtered] == [
            "2024-05-02",
            "2024-05-10T12:30:00",
            "2024-05-20T08:00:00",
        ]
        assert all(r.occurred_at.startswith("2024-05") for r in filtered)

    def test_orders_mixed_offsets_by_instant(self, make_record) -> None:
        """Entries with different UTC offsets sort by actual instant."""
        later = make_record("2024-05-03T08:00:00+07:00")  # 01:00 UTC
        earlier = make_record("2024-05-03T00:30:00Z")

        filtered = filter_by_month([later, earlier], "2024-05", JAKARTA)

        assert filtered == [earlier, later]

    def test_equal_instants_keep_input_order(self, make_record) -> None:
        first = make_record("2024-05-03T10:00:00")
        second = make_record("2024-05-03T10:00:00")

        assert filter_by_month([first, second], "2024-05") == [first, second]

    def test_empty_input(self) -> None:
        assert filter_by_month([], "2024-05") == []

    def test_unknown_month_matches_nothing(self, make_record) -> None:
        assert filter_by_month([make_record("2024-05-01")], "2023-01") == []


class TestComputeSummary:
    """Tests for summary statistics."""

    def test_empty_summary_has_no_derived_fields(self) -> None:
        summary = compute_summary([])

        assert summary.total_count == 0
        assert summary.average_gap_days is None
        assert summary.dominant_time_of_day is None
        assert summary.average_condition is None
        assert summary.average_condition_value is None
        assert summary.average_condition_label is None

    def test_three_entries_two_days_apart(self, make_record) -> None:
        """Conditions 0, 1, 2 average to improved; gap rounds to 2 days."""
        filtered = filter_by_month(
            [
                make_record("2024-05-01T09:00:00", Condition.STILL_ANXIOUS),
                make_record("2024-05-03T09:00:00", Condition.IMPROVED),
                make_record("2024-05-05T09:00:00", Condition.CALM),
            ],
            "2024-05",
        )

        summary = compute_summary(filtered)

        assert summary.total_count == 3
        assert summary.average_gap_days == 2
        assert summary.average_condition == Condition.IMPROVED
        assert summary.average_condition_label == "improved"
        assert summary.average_condition_value == pytest.approx(1.0)

    def test_single_morning_entry(self, make_record) -> None:
        summary = compute_summary([make_record("2024-05-01T09:00:00")])

        assert summary.total_count == 1
        assert summary.dominant_time_of_day == TimeOfDay.MORNING
        assert summary.average_gap_days is None

    def test_gap_rounds_half_up(self, make_record) -> None:
        """A mean gap of 1.5 days rounds to 2."""
        filtered = [
            make_record("2024-05-01T00:00:00"),
            make_record("2024-05-02T12:00:00"),
        ]

        assert compute_summary(filtered).average_gap_days == 2

    def test_gap_below_half_rounds_down(self, make_record) -> None:
        filtered = [
            make_record("2024-05-01T00:00:00"),
            make_record("2024-05-01T10:00:00"),
        ]

        assert compute_summary(filtered).average_gap_days == 0

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (5, TimeOfDay.MORNING),
            (11, TimeOfDay.MORNING),
            (12, TimeOfDay.AFTERNOON),
            (16, TimeOfDay.AFTERNOON),
            (17, TimeOfDay.EVENING),
            (21, TimeOfDay.EVENING),
            (22, TimeOfDay.NIGHT),
            (0, TimeOfDay.NIGHT),
            (4, TimeOfDay.NIGHT),
        ],
    )
    def test_hour_buckets(self, make_record, hour: int, expected: TimeOfDay) -> None:
        record = make_record(f"2024-05-01T{hour:02d}:15:00")

        assert compute_summary([record]).dominant_time_of_day == expected

    def test_time_of_day_tie_prefers_earlier_bucket(self, make_record) -> None:
        filtered = [
            make_record("2024-05-01T23:00:00"),
            make_record("2024-05-02T14:00:00"),
        ]

        assert compute_summary(filtered).dominant_time_of_day == TimeOfDay.AFTERNOON

    def test_aware_timestamps_use_configured_zone(self, make_record) -> None:
        """02:00 UTC is 09:00 in Jakarta."""
        record = make_record("2024-05-01T02:00:00Z")

        assert compute_summary([record], JAKARTA).dominant_time_of_day == TimeOfDay.MORNING
        assert compute_summary([record]).dominant_time_of_day == TimeOfDay.NIGHT

    @pytest.mark.parametrize(
        "conditions,expected",
        [
            ([0, 0, 1], Condition.STILL_ANXIOUS),
            ([0, 1], Condition.IMPROVED),
            ([1, 2, 2, 1], Condition.CALM),
            ([2], Condition.CALM),
        ],
    )
    def test_average_condition_thresholds(
        self, make_record, conditions: list[int], expected: Condition
    ) -> None:
        filtered = [
            make_record(f"2024-05-{day:02d}T10:00:00", condition)
            for day, condition in enumerate(conditions, start=1)
        ]

        assert compute_summary(filtered).average_condition == expected


class TestRankTags:
    """Tests for tag frequency ranking."""

    def test_merges_case_insensitively(self, make_record) -> None:
        filtered = [
            make_record("2024-05-01", triggers="Crowds, crowds"),
            make_record("2024-05-02", triggers="CROWDS"),
        ]

        assert rank_tags(filtered, TaggableField.TRIGGERS) == (TagCount("crowds", 2),)

    def test_respects_top_n(self, make_record) -> None:
        """Five tags with distinct counts; top 3 are the three most frequent."""
        spread = {"a": 1, "b": 2, "c": 3, "d": 4, "e": 5}
        filtered = [
            make_record(f"2024-05-{i + 1:02d}", symptoms=", ".join(
                tag for tag, count in spread.items() if count > i
            ))
            for i in range(5)
        ]

        ranked = rank_tags(filtered, "symptoms", top_n=3)

        assert ranked == (TagCount("e", 5), TagCount("d", 4), TagCount("c", 3))

    def test_fewer_tags_than_top_n(self, make_record) -> None:
        filtered = [make_record("2024-05-01", strategies="breathing")]

        assert rank_tags(filtered, TaggableField.STRATEGIES, top_n=3) == (
            TagCount("breathing", 1),
        )

    def test_splits_on_semicolons_and_drops_empty_tokens(self, make_record) -> None:
        filtered = [make_record("2024-05-01", symptoms=" Dizziness ;; sweating, ,")]

        assert rank_tags(filtered, TaggableField.SYMPTOMS) == (
            TagCount("dizziness", 1),
            TagCount("sweating", 1),
        )

    def test_ties_keep_first_seen_order(self, make_record) -> None:
        filtered = [
            make_record("2024-05-01", triggers="work, traffic"),
            make_record("2024-05-02", triggers="caffeine, traffic, work"),
        ]

        assert rank_tags(filtered, TaggableField.TRIGGERS) == (
            TagCount("work", 2),
            TagCount("traffic", 2),
            TagCount("caffeine", 1),
        )

    def test_non_positive_top_n_returns_nothing(self, make_record) -> None:
        filtered = [make_record("2024-05-01", triggers="work")]

        assert rank_tags(filtered, TaggableField.TRIGGERS, top_n=0) == ()

    def test_unknown_field_rejected(self, make_record) -> None:
        with pytest.raises(ValueError):
            rank_tags([make_record("2024-05-01")], "notes")


class TestBuildTimeSeries:
    """Tests for the condition chart series."""

    def test_labels_and_values_follow_input_order(self, make_record) -> None:
        filtered = [
            make_record("2024-05-01T09:00:00", Condition.STILL_ANXIOUS),
            make_record("2024-05-03T09:00:00", Condition.IMPROVED),
            make_record("2024-05-05T09:00:00", Condition.CALM),
        ]

        series = build_time_series(filtered)

        assert series.labels == ("1 Mei", "3 Mei", "5 Mei")
        assert series.values == (0, 1, 2)

    def test_english_locale(self, make_record) -> None:
        series = build_time_series([make_record("2024-08-17T10:00:00")], locale="en")

        assert series.labels == ("17 Aug",)

    def test_labels_use_local_date(self, make_record) -> None:
        """20:00 UTC on 31 May is 1 June in Jakarta."""
        series = build_time_series([make_record("2024-05-31T20:00:00Z")], JAKARTA)

        assert series.labels == ("1 Jun",)

    def test_empty_series(self) -> None:
        series = build_time_series([])

        assert series.labels == ()
        assert series.values == ()


class TestAnalyzeMonth:
    """Tests for the combined analytics pass."""

    def test_empty_month_has_no_data(self, make_record) -> None:
        report = analyze_month([make_record("2024-04-01")], "2024-05")

        assert report.has_data is False
        assert report.entries == ()
        assert report.top_triggers == ()
        assert report.summary.total_count == 0

    def test_full_report(self, make_record) -> None:
        records = [
            make_record("2024-05-05T09:00:00", Condition.CALM, triggers="crowds"),
            make_record("2024-05-01T09:00:00", Condition.STILL_ANXIOUS, triggers="Crowds, work"),
            make_record("2024-05-03T09:00:00", Condition.IMPROVED, triggers="work"),
            make_record("2024-04-28T09:00:00", Condition.CALM, triggers="travel"),
        ]

        report = analyze_month(records, "2024-05", top_n=3, tz=JAKARTA)

        assert report.has_data is True
        assert [r.occurred_at[:10] for r in report.entries] == [
            "2024-05-01",
            "2024-05-03",
            "2024-05-05",
        ]
        assert report.summary.average_condition_label == "improved"
        assert report.top_triggers == (TagCount("crowds", 2), TagCount("work", 2))
        assert report.series.values == (0, 1, 2)
        assert report.to_dict()["summary"]["dominant_time_of_day"] == "morning"

    def test_idempotent(self, make_record) -> None:
        records = [
            make_record("2024-05-01T09:00:00", Condition.IMPROVED, triggers="work"),
            make_record("2024-05-02T22:00:00", Condition.CALM, symptoms="nausea"),
        ]

        first = analyze_month(records, "2024-05", tz=JAKARTA)
        second = analyze_month(records, "2024-05", tz=JAKARTA)

        assert first == second


class TestAvailableMonths:
    def test_distinct_months_newest_first(self, make_record) -> None:
        records = [
            make_record("2024-03-01"),
            make_record("2024-05-01"),
            make_record("2024-03-15"),
            make_record("2023-12-31T23:00:00"),
        ]

        assert available_months(records) == ["2024-05", "2024-03", "2023-12"]


class TestNewestFirst:
    def test_reverse_of_month_order(self, make_record) -> None:
        records = [
            make_record("2024-05-03T08:00:00"),
            make_record("2024-05-03T03:00:00Z"),
            make_record("2024-05-01"),
        ]

        ordered = newest_first(records, JAKARTA)

        assert ordered == list(reversed(filter_by_month(records, "2024-05", JAKARTA)))
        assert ordered[0].occurred_at == "2024-05-03T03:00:00Z"
