"""
Episode Domain Model

Represents one panic episode logged by a user in their journal:
when it happened, what triggered it, what it felt like, what
helped, and how the user felt afterwards.

PRIVACY: Triggers, symptoms, strategies and notes are personal
health notes. They are never logged and never shared across users.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import StrEnum
from typing import Callable
from uuid import UUID, uuid4

from pulih.domain.enums.condition import Condition

# Separators accepted between tags in a free-text field
TAG_SEPARATOR = re.compile(r"[,;]")

# Extended calendar date prefix (YYYY-MM-DD); month selection matches on it
EXTENDED_DATE = re.compile(r"\d{4}-\d{2}-\d{2}(?:[T ]|$)")

# Column width of the stored timestamp
MAX_OCCURRED_AT_LENGTH = 40


def parse_occurred_at(value: str) -> datetime:
    """
    Parse an ISO 8601 episode timestamp.

    Accepts date-only values, naive local timestamps and
    offset-qualified timestamps (including a trailing ``Z``), all in
    the extended ``YYYY-MM-DD`` form. Basic (``20240501``) and week
    (``2024-W18-3``) dates are rejected.

    Raises:
        ValueError: If the value is not a valid ISO 8601 date
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("occurred_at must be a non-empty ISO 8601 string")
    value = value.strip()
    if len(value) > MAX_OCCURRED_AT_LENGTH:
        raise ValueError(f"occurred_at must be at most {MAX_OCCURRED_AT_LENGTH} characters")
    if not EXTENDED_DATE.match(value):
        raise ValueError(f"occurred_at must start with a YYYY-MM-DD date: {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"occurred_at is not a valid ISO 8601 date: {value!r}") from e


def split_tags(value: str) -> list[str]:
    """
    Split a delimited free-text field into normalized tags.

    Tags are separated by commas or semicolons, trimmed and
    lower-cased. Empty tokens are dropped.
    """
    if not value:
        return []
    tags = []
    for token in TAG_SEPARATOR.split(value):
        token = token.strip().lower()
        if token:
            tags.append(token)
    return tags


def _coerce_condition(value: int) -> Condition:
    if isinstance(value, bool):
        raise ValueError(f"condition must be 0, 1 or 2, got {value!r}")
    try:
        return Condition(value)
    except ValueError as e:
        raise ValueError(f"condition must be 0, 1 or 2, got {value!r}") from e


@dataclass(frozen=True)
class EpisodeDraft:
    """
    User-editable episode fields.

    Used for both creating and updating entries. Validation happens
    on construction so an invalid draft never reaches storage.

    Attributes:
        occurred_at: ISO 8601 timestamp of the episode
        triggers: Delimited trigger tags
        symptoms: Delimited symptom tags
        strategies: Delimited coping strategy tags
        notes: Optional free-form notes
        condition: Outcome after the episode
    """

    occurred_at: str
    triggers: str = ""
    symptoms: str = ""
    strategies: str = ""
    notes: str = ""
    condition: Condition = Condition.STILL_ANXIOUS

    def __post_init__(self) -> None:
        parse_occurred_at(self.occurred_at)
        object.__setattr__(self, "occurred_at", self.occurred_at.strip())
        object.__setattr__(self, "condition", _coerce_condition(self.condition))

    @classmethod
    def from_dict(cls, data: dict) -> "EpisodeDraft":
        """Create draft from dictionary (e.g. a legacy journal export)."""
        return cls(
            occurred_at=data.get("occurred_at") or data.get("timestamp", ""),
            triggers=data.get("triggers") or "",
            symptoms=data.get("symptoms") or "",
            strategies=data.get("strategies") or "",
            notes=data.get("notes") or "",
            condition=data.get("condition", Condition.STILL_ANXIOUS),
        )


@dataclass(frozen=True)
class EpisodeRecord:
    """
    Stored journal entry.

    ``id`` and ``owner_id`` are fixed at creation. Updates produce a
    new record through :meth:`with_draft`, which carries both over.

    Attributes:
        id: Unique entry identifier
        owner_id: Owning user ID
        occurred_at: ISO 8601 timestamp of the episode
        triggers: Delimited trigger tags
        symptoms: Delimited symptom tags
        strategies: Delimited coping strategy tags
        notes: Optional free-form notes
        condition: Outcome after the episode
        created_at: When the entry was first saved
    """

    owner_id: UUID
    occurred_at: str
    triggers: str = ""
    symptoms: str = ""
    strategies: str = ""
    notes: str = ""
    condition: Condition = Condition.STILL_ANXIOUS
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        parse_occurred_at(self.occurred_at)
        object.__setattr__(self, "occurred_at", self.occurred_at.strip())
        object.__setattr__(self, "condition", _coerce_condition(self.condition))

    @classmethod
    def create(cls, owner_id: UUID, draft: EpisodeDraft) -> "EpisodeRecord":
        """Create a new record for ``owner_id`` from a draft."""
        return cls(
            owner_id=owner_id,
            occurred_at=draft.occurred_at,
            triggers=draft.triggers,
            symptoms=draft.symptoms,
            strategies=draft.strategies,
            notes=draft.notes,
            condition=draft.condition,
        )

    def with_draft(self, draft: EpisodeDraft) -> "EpisodeRecord":
        """Return a copy with all editable fields replaced."""
        return replace(
            self,
            occurred_at=draft.occurred_at,
            triggers=draft.triggers,
            symptoms=draft.symptoms,
            strategies=draft.strategies,
            notes=draft.notes,
            condition=draft.condition,
        )

    @property
    def occurred_at_datetime(self) -> datetime:
        """Parsed ``occurred_at``."""
        return parse_occurred_at(self.occurred_at)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "id": str(self.id),
            "owner_id": str(self.owner_id),
            "occurred_at": self.occurred_at,
            "triggers": self.triggers,
            "symptoms": self.symptoms,
            "strategies": self.strategies,
            "notes": self.notes,
            "condition": int(self.condition),
            "created_at": self.created_at.isoformat(),
        }


class TaggableField(StrEnum):
    """Episode fields holding delimited tags."""

    TRIGGERS = "triggers"
    SYMPTOMS = "symptoms"
    STRATEGIES = "strategies"


TAG_EXTRACTORS: dict[TaggableField, Callable[[EpisodeRecord], str]] = {
    TaggableField.TRIGGERS: lambda record: record.triggers,
    TaggableField.SYMPTOMS: lambda record: record.symptoms,
    TaggableField.STRATEGIES: lambda record: record.strategies,
}
