"""
Participant groups

A competing group decides the lifting order, a ranking group decides
placement. Members are re-sorted in place with the comparator bound to the
group's purpose.
"""
from functools import cmp_to_key
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List

from .errors import RuleViolation, ViolationKind
from .models import Gender
from .ordering import Comparator, GroupPurpose, OrderingRegistry

if TYPE_CHECKING:
    from .participant import Participant


class Group:
    """An ordered cluster of participants with a purpose"""

    def __init__(self, participants: Iterable["Participant"], purpose: GroupPurpose,
                 orderings: OrderingRegistry):
        self.purpose = purpose
        self.comparator: Comparator = orderings.resolve(purpose)
        self._participants: List["Participant"] = list(participants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._participants == other._participants and self.purpose == other.purpose

    __hash__ = None  # mutable member list

    def __repr__(self) -> str:
        return f"Group({self.purpose.value}, {len(self)} participants)"

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> Iterator["Participant"]:
        return iter(list(self._participants))

    def __contains__(self, participant: object) -> bool:
        return self.contains(participant)

    @property
    def participants(self) -> List["Participant"]:
        """Members in their current order"""
        return list(self._participants)

    @property
    def is_competing(self) -> bool:
        return self.purpose == GroupPurpose.COMPETING

    @property
    def is_ranking(self) -> bool:
        return self.purpose.is_ranking

    @property
    def gender(self) -> Gender:
        return self._participants[0].gender

    def contains(self, participant: object) -> bool:
        return any(p is participant for p in self._participants)

    def sort(self) -> None:
        """Stable in-place sort with the purpose's comparator"""
        self._participants.sort(key=cmp_to_key(self.comparator))

    def first_participant(self) -> "Participant":
        """Next to lift (competing) or current leader (ranking)"""
        self.sort()
        return self._participants[0]

    def rankings(self) -> Dict["Participant", int]:
        """
        Standard competition ranking over the sorted members

        A member tying with its predecessor takes the predecessor's rank,
        otherwise its 1-based position: 1, 1, 3, 4 ...
        """
        self.sort()
        ranks: Dict["Participant", int] = {}
        previous = None
        for position, participant in enumerate(self._participants, start=1):
            if previous is not None and self.comparator(previous, participant) == 0:
                ranks[participant] = ranks[previous]
            else:
                ranks[participant] = position
            previous = participant
        return ranks

    def rank(self, participant: "Participant") -> int:
        if not self.contains(participant):
            raise RuleViolation(
                ViolationKind.NOT_IN_GROUP,
                f"participant {participant!r} is not in this group",
            )
        return self.rankings()[participant]
