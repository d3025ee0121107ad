"""Domain enums package."""

from pulih.domain.enums.condition import Condition, TimeOfDay
from pulih.domain.enums.user_role import UserRole

__all__ = ["Condition", "TimeOfDay", "UserRole"]
