"""
Scoring calculators

- Sinclair: body-weight normalized total for cross-class comparison
- Weight class: banded body-weight category for total-weight competitions
- Total: best snatch + best clean & jerk
"""
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Tuple

from .config import ScoringSettings, get_settings
from .models import Gender

if TYPE_CHECKING:
    from .participant import Participant


def total_score(best_snatch: int, best_clean_and_jerk: int) -> int:
    """Total of the best lifts, 0 unless both disciplines have a passed lift"""
    if best_snatch == 0 or best_clean_and_jerk == 0:
        return 0
    return best_snatch + best_clean_and_jerk


@dataclass(frozen=True)
class SinclairConstants:
    coefficient: float
    wrh_bodyweight: float


class SinclairCalculator:
    """Sinclair coefficient and score per gender"""

    def __init__(self, constants: Dict[Gender, SinclairConstants]):
        self._constants = dict(constants)

    @classmethod
    def from_settings(cls, settings: Optional[ScoringSettings] = None) -> "SinclairCalculator":
        settings = settings or get_settings()
        return cls({
            Gender.MALE: SinclairConstants(
                settings.sinclair_male_coefficient,
                settings.sinclair_male_wrh_bodyweight,
            ),
            Gender.FEMALE: SinclairConstants(
                settings.sinclair_female_coefficient,
                settings.sinclair_female_wrh_bodyweight,
            ),
        })

    def coefficient(self, body_weight: float, gender: Gender) -> float:
        """
        10 ^ (A * log10(x / b)^2)

        Args:
            body_weight: lifter body weight x in kg
            gender: selects A and b
        """
        if gender not in self._constants:
            raise ValueError(f"no Sinclair constants for gender {gender!r}")
        if body_weight <= 0:
            raise ValueError(f"body weight must be positive, got {body_weight}")
        c = self._constants[gender]
        return 10 ** (c.coefficient * math.log10(body_weight / c.wrh_bodyweight) ** 2)

    def score(self, participant: "Participant") -> float:
        total = participant.total_score
        if total == 0:
            return 0.0
        return total * self.coefficient(participant.body_weight, participant.gender)


class WeightClassTable:
    """Ascending weight-class thresholds per gender"""

    def __init__(self, thresholds: Dict[Gender, Iterable[int]]):
        self._thresholds: Dict[Gender, Tuple[int, ...]] = {
            gender: tuple(sorted(limits)) for gender, limits in thresholds.items()
        }

    @classmethod
    def from_settings(cls, settings: Optional[ScoringSettings] = None) -> "WeightClassTable":
        settings = settings or get_settings()
        return cls({
            Gender.MALE: settings.male_weight_classes,
            Gender.FEMALE: settings.female_weight_classes,
        })

    def thresholds(self, gender: Gender) -> Tuple[int, ...]:
        return self._thresholds[gender]

    def find(self, body_weight: float, gender: Gender) -> int:
        """1-based class; the top class is open-ended"""
        return sum(1 for limit in self.thresholds(gender) if body_weight > limit) + 1

    def for_participant(self, participant: "Participant") -> int:
        return self.find(participant.body_weight, participant.gender)


@dataclass(frozen=True)
class Scoring:
    """Calculators shared by one competition"""
    sinclair: SinclairCalculator
    weight_classes: WeightClassTable

    @classmethod
    def from_settings(cls, settings: Optional[ScoringSettings] = None) -> "Scoring":
        settings = settings or get_settings()
        return cls(
            sinclair=SinclairCalculator.from_settings(settings),
            weight_classes=WeightClassTable.from_settings(settings),
        )
