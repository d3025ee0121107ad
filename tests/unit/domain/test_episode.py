"""
Unit Tests for Episode Models

Tests validation and tag parsing of journal entries.
"""

from uuid import uuid4

import pytest

from pulih.domain.enums.condition import Condition
from pulih.domain.models.episode import (
    EpisodeDraft,
    EpisodeRecord,
    parse_occurred_at,
    split_tags,
)


class TestParseOccurredAt:
    """Tests for timestamp parsing."""

    @pytest.mark.parametrize(
        "value",
        [
            "2024-05-01",
            "2024-05-01T09:00:00",
            "2024-05-01T09:00:00+07:00",
            "2024-05-01T02:00:00Z",
            "2024-05-01T09:00:00.123456",
        ],
    )
    def test_accepts_iso_8601(self, value: str) -> None:
        assert parse_occurred_at(value).year == 2024

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "   ",
            "yesterday",
            "2024-13-01",
            "01/05/2024",
            "20240501T090000",
            "20240501",
            "2024-W18-3T09:00",
            "2024-W18",
            "2024-05-01T09:00:00.123456+05:30:15.123456",
        ],
    )
    def test_rejects_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_occurred_at(value)


class TestSplitTags:
    def test_normalizes_tokens(self) -> None:
        assert split_tags(" Crowds ; WORK,  ,caffeine ") == ["crowds", "work", "caffeine"]

    def test_empty_value(self) -> None:
        assert split_tags("") == []


class TestEpisodeDraft:
    """Tests for draft validation."""

    def test_invalid_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError):
            EpisodeDraft(occurred_at="not a date")

    def test_basic_and_week_dates_rejected(self) -> None:
        """Only the extended YYYY-MM-DD form can be matched to a month."""
        with pytest.raises(ValueError):
            EpisodeDraft(occurred_at="20240501T090000")
        with pytest.raises(ValueError):
            EpisodeDraft(occurred_at="2024-W18-3T09:00")

    def test_whitespace_stripped_so_month_prefix_matches(self) -> None:
        draft = EpisodeDraft(occurred_at=" 2024-05-01T09:00:00\n")

        assert draft.occurred_at == "2024-05-01T09:00:00"
        assert draft.occurred_at.startswith("2024-05")

    @pytest.mark.parametrize("condition", [-1, 3, True])
    def test_invalid_condition_rejected(self, condition) -> None:
        with pytest.raises(ValueError):
            EpisodeDraft(occurred_at="2024-05-01", condition=condition)

    def test_condition_coerced_from_int(self) -> None:
        draft = EpisodeDraft(occurred_at="2024-05-01", condition=2)

        assert draft.condition is Condition.CALM

    def test_from_dict_accepts_legacy_timestamp_key(self) -> None:
        draft = EpisodeDraft.from_dict({
            "timestamp": "2024-05-01T09:00:00",
            "triggers": "crowds",
            "condition": 1,
            "notes": None,
        })

        assert draft.occurred_at == "2024-05-01T09:00:00"
        assert draft.notes == ""
        assert draft.condition is Condition.IMPROVED


class TestEpisodeRecord:
    """Tests for stored entries."""

    def test_with_draft_keeps_identity(self) -> None:
        owner_id = uuid4()
        record = EpisodeRecord.create(owner_id, EpisodeDraft(occurred_at="2024-05-01"))

        updated = record.with_draft(
            EpisodeDraft(occurred_at="2024-05-02T10:00:00", triggers="work", condition=2)
        )

        assert updated.id == record.id
        assert updated.owner_id == owner_id
        assert updated.created_at == record.created_at
        assert updated.triggers == "work"
        assert updated.condition is Condition.CALM

    def test_surrounding_whitespace_stripped(self) -> None:
        record = EpisodeRecord(owner_id=uuid4(), occurred_at="  2024-05-01T09:00:00 ")

        assert record.occurred_at == "2024-05-01T09:00:00"

    def test_to_dict(self) -> None:
        record = EpisodeRecord(owner_id=uuid4(), occurred_at="2024-05-01", condition=1)

        data = record.to_dict()

        assert data["condition"] == 1
        assert data["occurred_at"] == "2024-05-01"
        assert data["id"] == str(record.id)
