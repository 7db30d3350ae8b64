"""
Participant ordering strategies

Comparators return a negative number when the first participant sorts first,
0 for a tie and a positive number otherwise.

- CompetingOrder: who lifts next
- SinclairRankingOrder / TotalWeightRankingOrder: placement
"""
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Mapping

from .errors import ConfigurationError
from .scoring import SinclairCalculator

if TYPE_CHECKING:
    from .participant import Participant

Comparator = Callable[["Participant", "Participant"], int]


class GroupPurpose(str, Enum):
    """What a group is ordered for"""
    COMPETING = "competing"
    SINCLAIR_RANKING = "sinclair_ranking"
    TOTAL_WEIGHT_RANKING = "total_weight_ranking"

    @property
    def is_ranking(self) -> bool:
        return self != GroupPurpose.COMPETING


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class CompetingOrder:
    """
    Lifting order, criteria applied until one differs:

    1. lifters still snatching go before those past the snatches
    2. lifters with all six lifts go last
    3. lower current weight
    4. fewer attempts taken
    5. earlier first attempt of the phase both are in the middle of
    6. lower start number
    """

    def __call__(self, p1: "Participant", p2: "Participant") -> int:
        for criterion in (
            self.compare_completions,
            self.compare_weights,
            self.compare_attempts,
            self.compare_timestamps,
            self.compare_start_numbers,
        ):
            result = criterion(p1, p2)
            if result != 0:
                return result
        return 0

    @staticmethod
    def compare_completions(p1: "Participant", p2: "Participant") -> int:
        c1, c2 = p1.lifts_count, p2.lifts_count
        if (c1 < 3) != (c2 < 3):
            return -1 if c1 < 3 else 1
        if (c1 == 6) != (c2 == 6):
            return 1 if c1 == 6 else -1
        return 0

    @staticmethod
    def compare_weights(p1: "Participant", p2: "Participant") -> int:
        return _sign(p1.current_weight - p2.current_weight)

    @staticmethod
    def compare_attempts(p1: "Participant", p2: "Participant") -> int:
        return _sign(p1.lifts_count - p2.lifts_count)

    @staticmethod
    def compare_timestamps(p1: "Participant", p2: "Participant") -> int:
        c1, c2 = p1.lifts_count, p2.lifts_count
        if 0 < c1 < 3 and 0 < c2 < 3:
            first = 0
        elif 3 < c1 < 6 and 3 < c2 < 6:
            first = 3
        else:
            return 0
        t1 = p1.lifts[first].timestamp
        t2 = p2.lifts[first].timestamp
        return (t1 > t2) - (t1 < t2)

    @staticmethod
    def compare_start_numbers(p1: "Participant", p2: "Participant") -> int:
        return _sign(p1.start_number - p2.start_number)


class SinclairRankingOrder:
    """Higher Sinclair score first"""

    def __init__(self, calculator: SinclairCalculator):
        self.calculator = calculator

    def __call__(self, p1: "Participant", p2: "Participant") -> int:
        return _sign(self.calculator.score(p2) - self.calculator.score(p1))


class TotalWeightRankingOrder:
    """Higher total first"""

    def __call__(self, p1: "Participant", p2: "Participant") -> int:
        return _sign(p2.total_score - p1.total_score)


class OrderingRegistry:
    """Comparator per group purpose, built once per competition"""

    def __init__(self, comparators: Mapping[GroupPurpose, Comparator]):
        self._comparators: Dict[GroupPurpose, Comparator] = dict(comparators)

    @classmethod
    def default(cls, sinclair: SinclairCalculator) -> "OrderingRegistry":
        return cls({
            GroupPurpose.COMPETING: CompetingOrder(),
            GroupPurpose.SINCLAIR_RANKING: SinclairRankingOrder(sinclair),
            GroupPurpose.TOTAL_WEIGHT_RANKING: TotalWeightRankingOrder(),
        })

    def resolve(self, purpose: GroupPurpose) -> Comparator:
        try:
            return self._comparators[purpose]
        except KeyError:
            raise ConfigurationError(f"unknown group purpose: {purpose!r}") from None

    def __contains__(self, purpose: object) -> bool:
        return purpose in self._comparators
