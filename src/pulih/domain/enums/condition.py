"""
Condition and Time-of-Day Enumerations

Self-reported outcome levels recorded with each journal entry and
the day-part buckets used by journal analytics.
"""

from enum import IntEnum, StrEnum


class Condition(IntEnum):
    """
    How the user felt once the episode was over.

    Stored as the raw integer value; the ordering matters because
    analytics average it.
    """

    STILL_ANXIOUS = 0
    """Still anxious after the episode."""

    IMPROVED = 1
    """Feeling better than during the episode."""

    CALM = 2
    """Fully calm again."""

    @property
    def label(self) -> str:
        """Human-readable label."""
        return _CONDITION_LABELS[self]

    @classmethod
    def from_average(cls, mean: float) -> "Condition":
        """
        Map an average condition value to the closest level.

        Thresholds: below 0.5 is still anxious, below 1.5 is improved,
        anything higher is calm.
        """
        if mean < 0.5:
            return cls.STILL_ANXIOUS
        if mean < 1.5:
            return cls.IMPROVED
        return cls.CALM


_CONDITION_LABELS: dict[Condition, str] = {
    Condition.STILL_ANXIOUS: "still anxious",
    Condition.IMPROVED: "improved",
    Condition.CALM: "calm",
}


class TimeOfDay(StrEnum):
    """
    Day-part buckets for episode timing.

    Declaration order is significant: when two buckets tie for the
    highest count, the earlier one wins.
    """

    MORNING = "morning"
    """05:00 - 11:59"""

    AFTERNOON = "afternoon"
    """12:00 - 16:59"""

    EVENING = "evening"
    """17:00 - 21:59"""

    NIGHT = "night"
    """22:00 - 04:59"""

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        """
        Bucket a local wall-clock hour (0-23).

        Args:
            hour: Hour of day

        Returns:
            The day part containing that hour
        """
        if 5 <= hour < 12:
            return cls.MORNING
        if 12 <= hour < 17:
            return cls.AFTERNOON
        if 17 <= hour < 22:
            return cls.EVENING
        return cls.NIGHT
