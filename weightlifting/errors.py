"""
Domain errors for the competition core

- RuleViolation: a competition rule was broken by the caller
- ConfigurationError: an unknown competition type or group purpose
"""

from enum import Enum
from typing import Optional


class ViolationKind(str, Enum):
    """Rule violation kinds"""
    ALL_LIFTS_COMPLETE = "all_lifts_complete"
    NOT_GREATER = "not_greater"
    TOO_MANY_CHANGES = "too_many_changes"
    NON_POSITIVE_WEIGHT = "non_positive_weight"
    NOT_IN_GROUP = "not_in_group"
    PARTICIPANT_NOT_FOUND = "participant_not_found"
    WEIGH_IN_CLOSED = "weigh_in_closed"
    ALREADY_REGISTERED = "already_registered"
    COMPETITION_FULL = "competition_full"
    INVALID_OUTCOME = "invalid_outcome"
    LIFT_NOT_RECORDED = "lift_not_recorded"


class RuleViolation(Exception):
    """A domain rule was broken; recovered by the boundary service."""

    def __init__(self, kind: ViolationKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or kind.value.replace("_", " ")
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"RuleViolation({self.kind.value!r}, {self.message!r})"


class ConfigurationError(Exception):
    """Unrecoverable misconfiguration detected at construction time."""
