"""
Competition data models

Lifter and Club are plain records owned by the outer layers; Lift is the
immutable record of one attempt.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .errors import RuleViolation, ViolationKind


class Gender(str, Enum):
    """Lifter gender"""
    MALE = "M"
    FEMALE = "F"

    @classmethod
    def from_string(cls, value: str) -> "Gender":
        """Parse "M"/"F"/"male"/"female" (any case)"""
        value_upper = value.strip().upper()
        if value_upper in ("M", "MALE"):
            return cls.MALE
        if value_upper in ("F", "FEMALE"):
            return cls.FEMALE
        raise ValueError(f"unknown gender: {value!r}")


class LiftType(str, Enum):
    """Lift disciplines"""
    SNATCH = "snatch"
    CLEAN_AND_JERK = "clean_and_jerk"


class LiftOutcome(str, Enum):
    """Outcome of one attempt"""
    PASS = "PASS"
    FAIL = "FAIL"
    ABSTAIN = "ABSTAIN"

    @classmethod
    def from_code(cls, code: str) -> "LiftOutcome":
        """Parse a transport outcome code (PASS|FAIL|ABSTAIN)"""
        try:
            return cls(code.strip().upper())
        except ValueError:
            raise RuleViolation(
                ViolationKind.INVALID_OUTCOME,
                f"unknown lift outcome {code!r} (expected PASS, FAIL or ABSTAIN)",
            ) from None


@dataclass(frozen=True)
class Lift:
    """A single recorded attempt"""
    lift_type: LiftType
    weight: int
    outcome: LiftOutcome
    timestamp: datetime = field(default_factory=datetime.now)
    lift_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def score(self) -> int:
        return self.weight if self.is_passed else 0

    @property
    def is_passed(self) -> bool:
        return self.outcome == LiftOutcome.PASS

    @property
    def is_failed(self) -> bool:
        return self.outcome == LiftOutcome.FAIL

    @property
    def is_abstained(self) -> bool:
        return self.outcome == LiftOutcome.ABSTAIN

    @property
    def is_snatch(self) -> bool:
        return self.lift_type == LiftType.SNATCH

    @property
    def is_clean_and_jerk(self) -> bool:
        return self.lift_type == LiftType.CLEAN_AND_JERK

    def with_weight(self, weight: int) -> "Lift":
        """Copy of this lift with a corrected weight; id and timestamp are kept."""
        if weight < 1:
            raise RuleViolation(
                ViolationKind.NON_POSITIVE_WEIGHT,
                "unable to set lift weight to less than 1 kg",
            )
        return replace(self, weight=weight)


@dataclass(eq=False)
class Club:
    """Weightlifting club"""
    name: str
    club_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Lifter:
    """A registered lifter; body weight is updated at every weigh-in."""
    forename: str
    surname: str
    gender: Gender
    body_weight: float = 0.0
    date_of_birth: Optional[date] = None
    club: Optional[Club] = None
    lifter_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def full_name(self) -> str:
        return f"{self.forename} {self.surname}"

    @property
    def club_name(self) -> str:
        return self.club.name if self.club else ""

    @property
    def gender_initial(self) -> str:
        return self.gender.value
