"""
Group-building strategies

Participants are first partitioned into ranking groups (Sinclair: by gender,
total weight: by gender and weight class), then each ranking group is split
into balanced competing groups of bounded size.
"""
import math
from abc import ABC, abstractmethod
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Type, TypeVar

from loguru import logger

from .errors import ConfigurationError
from .group import Group
from .models import Gender
from .ordering import GroupPurpose, OrderingRegistry
from .participant import Participant
from .scoring import WeightClassTable

T = TypeVar("T")
GroupComparator = Callable[[Group, Group], int]


class CompetitionType(str, Enum):
    """Scoring system of a competition"""
    SINCLAIR = "Sinclair"
    TOTAL_WEIGHT = "Total weight"


def chunk_participants(participants: Sequence[T], max_size: int) -> List[List[T]]:
    """
    Split into ceil(n / max_size) chunks whose sizes differ by at most 1,
    larger chunks first; order is preserved.
    """
    if max_size < 1:
        raise ValueError(f"max_size must be at least 1, got {max_size}")
    if not participants:
        return []

    num_groups = math.ceil(len(participants) / max_size)
    base, extra = divmod(len(participants), num_groups)
    chunks = []
    start = 0
    for i in range(num_groups):
        size = base + 1 if i < extra else base
        chunks.append(list(participants[start:start + size]))
        start += size
    return chunks


def compare_first_by_gender(secondary: GroupComparator) -> GroupComparator:
    """Female groups before male groups, then the secondary comparator"""
    def compare(g1: Group, g2: Group) -> int:
        g1_female = g1.gender == Gender.FEMALE
        g2_female = g2.gender == Gender.FEMALE
        if g1_female != g2_female:
            return -1 if g1_female else 1
        return secondary(g1, g2)
    return compare


def _first_snatch_weight(group: Group) -> int:
    return group.participants[0].starting_snatch_weight


def compare_by_starting_snatch(g1: Group, g2: Group) -> int:
    s1, s2 = _first_snatch_weight(g1), _first_snatch_weight(g2)
    return (s1 > s2) - (s1 < s2)


class GroupBuilder(ABC):
    """Template for building ranking and competing groups"""

    def __init__(self, orderings: OrderingRegistry, weight_classes: WeightClassTable,
                 competing_group_max_size: int = 10):
        self.orderings = orderings
        self.weight_classes = weight_classes
        self.competing_group_max_size = competing_group_max_size

    @abstractmethod
    def ranking_key(self, participant: Participant) -> Hashable:
        """Participants sharing a key are ranked against each other"""

    @property
    @abstractmethod
    def ranking_purpose(self) -> GroupPurpose:
        ...

    @abstractmethod
    def compare_ranking_groups(self, g1: Group, g2: Group) -> int:
        ...

    @abstractmethod
    def compare_competing_groups(self, g1: Group, g2: Group) -> int:
        ...

    def build_ranking_groups(self, participants: Sequence[Participant]) -> List[Group]:
        by_snatch = sorted(participants, key=lambda p: p.starting_snatch_weight)

        partitions: Dict[Hashable, List[Participant]] = {}
        for participant in by_snatch:
            partitions.setdefault(self.ranking_key(participant), []).append(participant)

        groups = [
            Group(members, self.ranking_purpose, self.orderings)
            for members in partitions.values()
        ]
        groups.sort(key=cmp_to_key(self.compare_ranking_groups))
        logger.debug(f"{len(groups)} ranking groups from {len(participants)} participants")
        return groups

    def build_competing_groups(self, ranking_groups: Sequence[Group]) -> List[Group]:
        groups = [
            Group(chunk, GroupPurpose.COMPETING, self.orderings)
            for ranking_group in ranking_groups
            for chunk in chunk_participants(ranking_group.participants, self.competing_group_max_size)
        ]
        groups.sort(key=cmp_to_key(self.compare_competing_groups))
        logger.debug(f"{len(groups)} competing groups (max size {self.competing_group_max_size})")
        return groups


class SinclairGroupBuilder(GroupBuilder):
    """One ranking group per gender"""

    def ranking_key(self, participant: Participant) -> Hashable:
        return participant.gender

    @property
    def ranking_purpose(self) -> GroupPurpose:
        return GroupPurpose.SINCLAIR_RANKING

    def compare_ranking_groups(self, g1: Group, g2: Group) -> int:
        return compare_first_by_gender(lambda a, b: 0)(g1, g2)

    def compare_competing_groups(self, g1: Group, g2: Group) -> int:
        return compare_first_by_gender(compare_by_starting_snatch)(g1, g2)


class TotalWeightGroupBuilder(GroupBuilder):
    """One ranking group per gender and weight class"""

    def ranking_key(self, participant: Participant) -> Hashable:
        return (participant.gender, self.weight_classes.for_participant(participant))

    @property
    def ranking_purpose(self) -> GroupPurpose:
        return GroupPurpose.TOTAL_WEIGHT_RANKING

    def _compare_weight_class(self, g1: Group, g2: Group) -> int:
        wc1 = self.weight_classes.for_participant(g1.participants[0])
        wc2 = self.weight_classes.for_participant(g2.participants[0])
        if wc1 != wc2:
            return -1 if wc1 < wc2 else 1
        return compare_by_starting_snatch(g1, g2)

    def compare_ranking_groups(self, g1: Group, g2: Group) -> int:
        return compare_first_by_gender(self._compare_weight_class)(g1, g2)

    def compare_competing_groups(self, g1: Group, g2: Group) -> int:
        return compare_first_by_gender(self._compare_weight_class)(g1, g2)


GROUP_BUILDERS: Dict[CompetitionType, Type[GroupBuilder]] = {
    CompetitionType.SINCLAIR: SinclairGroupBuilder,
    CompetitionType.TOTAL_WEIGHT: TotalWeightGroupBuilder,
}


def create_group_builder(
    competition_type: CompetitionType,
    orderings: OrderingRegistry,
    weight_classes: WeightClassTable,
    competing_group_max_size: int = 10,
    registry: Optional[Dict[CompetitionType, Type[GroupBuilder]]] = None,
) -> GroupBuilder:
    """Select the builder for a competition type"""
    registry = GROUP_BUILDERS if registry is None else registry
    try:
        builder_cls = registry[competition_type]
    except (KeyError, TypeError):
        raise ConfigurationError(f"unrecognised competition type: {competition_type!r}") from None
    return builder_cls(orderings, weight_classes, competing_group_max_size)
