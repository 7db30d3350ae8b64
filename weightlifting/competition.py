"""
Competition coordinator

Lifecycle (derived from the clock and the group/lift contents):
SIGN_UP_OPEN -> SIGN_UP_CLOSED -> WEIGH_IN_OPEN -> COMPETING -> COMPLETE
"""
import random
import uuid
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from .config import ScoringSettings, get_settings
from .errors import RuleViolation, ViolationKind
from .events import CompetitionEvent, EventPublisher, EventType
from .group import Group
from .group_builders import CompetitionType, GroupBuilder, create_group_builder
from .models import Club, Lifter
from .ordering import OrderingRegistry
from .participant import Participant
from .scoring import Scoring


class CompetitionState(str, Enum):
    """Competition lifecycle state"""
    SIGN_UP_OPEN = "sign_up_open"
    SIGN_UP_CLOSED = "sign_up_closed"
    WEIGH_IN_OPEN = "weigh_in_open"
    COMPETING = "competing"
    COMPLETE = "complete"


class Competition:
    """Top-level state machine for one competition"""

    def __init__(
        self,
        name: str,
        competition_type: CompetitionType,
        competition_date: datetime,
        last_registration_date: datetime,
        max_participants: Optional[int] = None,
        host: Optional[Club] = None,
        location: str = "",
        settings: Optional[ScoringSettings] = None,
        publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
    ):
        settings = settings or get_settings()

        self.competition_id = str(uuid.uuid4())
        self.name = name
        self.competition_type = competition_type
        self.competition_date = competition_date
        self.last_registration_date = last_registration_date
        self.max_participants = max_participants or settings.default_max_participants
        self.host = host
        self.location = location

        self.clock = clock
        self.rng = rng or random.Random()
        self.scoring = Scoring.from_settings(settings)
        self.orderings = OrderingRegistry.default(self.scoring.sinclair)
        self.group_builder: GroupBuilder = create_group_builder(
            competition_type,
            self.orderings,
            self.scoring.weight_classes,
            settings.competing_group_max_size,
        )

        self.publisher = publisher or EventPublisher()
        self.publisher.subscribe(EventType.LIFT_RECORDED, self._on_participant_changed)
        self.publisher.subscribe(EventType.LIFT_CORRECTED, self._on_participant_changed)
        self.publisher.subscribe(EventType.WEIGHT_CHANGED, self._on_participant_changed)

        self._participants: List[Participant] = []
        self._competing_groups: Optional[List[Group]] = None
        self._ranking_groups: Optional[List[Group]] = None

    def __repr__(self) -> str:
        return f"Competition({self.name!r}, {self.competition_type.value}, {self.state.value})"

    @property
    def host_name(self) -> str:
        return self.host.name if self.host else ""

    @property
    def participants(self) -> List[Participant]:
        return list(self._participants)

    @property
    def lifters(self) -> List[Lifter]:
        return [p.lifter for p in self._participants]

    @property
    def competing_groups(self) -> List[Group]:
        return list(self._competing_groups or [])

    @property
    def ranking_groups(self) -> List[Group]:
        return list(self._ranking_groups or [])

    # ==================== State ====================

    @property
    def is_sign_up_open(self) -> bool:
        return self.clock() <= self.last_registration_date

    @property
    def is_sign_up_closed(self) -> bool:
        return not self.is_sign_up_open

    @property
    def is_competition_day_reached(self) -> bool:
        return self.clock() >= self.competition_date

    @property
    def is_weigh_in_complete(self) -> bool:
        return self._competing_groups is not None

    @property
    def is_weigh_in_open(self) -> bool:
        return self.is_competition_day_reached and not self.is_weigh_in_complete

    @property
    def is_complete(self) -> bool:
        return self.is_weigh_in_complete and all(p.all_lifts_complete for p in self._participants)

    @property
    def is_competing(self) -> bool:
        return self.is_weigh_in_complete and not self.is_complete

    @property
    def state(self) -> CompetitionState:
        if self.is_weigh_in_complete:
            return CompetitionState.COMPLETE if self.is_complete else CompetitionState.COMPETING
        if self.is_competition_day_reached:
            return CompetitionState.WEIGH_IN_OPEN
        if self.is_sign_up_open:
            return CompetitionState.SIGN_UP_OPEN
        return CompetitionState.SIGN_UP_CLOSED

    # ==================== Sign-up ====================

    def available_start_numbers(self) -> List[int]:
        taken = {p.start_number for p in self._participants}
        return [n for n in range(1, self.max_participants + 1) if n not in taken]

    def _ensure_weigh_in_not_closed(self) -> None:
        if self.is_weigh_in_complete:
            raise RuleViolation(
                ViolationKind.WEIGH_IN_CLOSED,
                f"weigh-in for {self.name} has already been completed",
            )

    def add_participant(self, lifter: Lifter) -> Participant:
        """
        Register a lifter with a random free start number

        Raises:
            RuleViolation(WEIGH_IN_CLOSED): groups are already built
            RuleViolation(ALREADY_REGISTERED): lifter is already taking part
            RuleViolation(COMPETITION_FULL): no start numbers left
        """
        self._ensure_weigh_in_not_closed()
        if self.find_participant(lifter) is not None:
            raise RuleViolation(
                ViolationKind.ALREADY_REGISTERED,
                f"{lifter.full_name} is already registered for {self.name}",
            )
        numbers = self.available_start_numbers()
        if not numbers:
            raise RuleViolation(
                ViolationKind.COMPETITION_FULL,
                f"{self.name} is full ({self.max_participants} participants)",
            )

        participant = Participant(
            lifter,
            competition=self,
            start_number=self.rng.choice(numbers),
            scoring=self.scoring,
            publisher=self.publisher,
            clock=self.clock,
        )
        self._participants.append(participant)
        logger.info(f"Participant added: #{participant.start_number} {lifter.full_name}")
        self.publisher.publish_participant_event(EventType.PARTICIPANT_ADDED, participant)
        return participant

    def remove_participant(self, lifter: Lifter) -> Participant:
        self._ensure_weigh_in_not_closed()
        participant = self.participant_for(lifter)
        self._participants.remove(participant)
        logger.info(f"Participant removed: #{participant.start_number} {lifter.full_name}")
        self.publisher.publish_participant_event(EventType.PARTICIPANT_REMOVED, participant)
        return participant

    def find_participant(self, lifter: Lifter) -> Optional[Participant]:
        for participant in self._participants:
            if participant.lifter is lifter or participant.lifter.lifter_id == lifter.lifter_id:
                return participant
        return None

    def participant_for(self, lifter: Lifter) -> Participant:
        participant = self.find_participant(lifter)
        if participant is None:
            raise RuleViolation(
                ViolationKind.PARTICIPANT_NOT_FOUND,
                f"{lifter.full_name} is not registered for {self.name}",
            )
        return participant

    def participant_by_start_number(self, start_number: int) -> Participant:
        for participant in self._participants:
            if participant.start_number == start_number:
                return participant
        raise RuleViolation(
            ViolationKind.PARTICIPANT_NOT_FOUND,
            f"no participant with start number {start_number}",
        )

    # ==================== Weigh-in ====================

    def finish_weigh_in(self) -> None:
        """
        Close the weigh-in: drop lifters who did not weigh in and build the
        ranking and competing groups. One-way; a second call is rejected.
        """
        self._ensure_weigh_in_not_closed()

        absent = [p for p in self._participants if not p.weighed_in]
        for participant in absent:
            self._participants.remove(participant)
            self.publisher.publish_participant_event(EventType.PARTICIPANT_REMOVED, participant)
        if absent:
            logger.info(f"Removed {len(absent)} participants who did not weigh in")

        self._ranking_groups = self.group_builder.build_ranking_groups(self._participants)
        self._competing_groups = self.group_builder.build_competing_groups(self._ranking_groups)
        for group in self._ranking_groups + self._competing_groups:
            group.sort()

        logger.info(
            f"🏋️ Weigh-in finished for {self.name}: {len(self._participants)} participants, "
            f"{len(self._ranking_groups)} ranking groups, {len(self._competing_groups)} competing groups"
        )
        self.publisher.publish_competition_event(
            EventType.WEIGH_IN_FINISHED,
            self,
            participants=len(self._participants),
            ranking_groups=len(self._ranking_groups),
            competing_groups=len(self._competing_groups),
        )

    # ==================== Competing ====================

    def _on_participant_changed(self, event: CompetitionEvent) -> None:
        participant = event.subject
        if participant is None or participant.competition is not self:
            return
        for group in self.competing_groups + self.ranking_groups:
            if group.contains(participant):
                group.sort()

        if event.event_type == EventType.LIFT_RECORDED and self.is_complete:
            logger.info(f"🏁 Competition complete: {self.name}")
            self.publisher.publish_competition_event(EventType.COMPETITION_COMPLETED, self)

    @staticmethod
    def _first_unfinished(groups: List[Group]) -> Optional[Group]:
        for group in groups:
            if any(not p.all_lifts_complete for p in group):
                return group
        return None

    def current_competing_group(self) -> Optional[Group]:
        return self._first_unfinished(self.competing_groups)

    def current_ranking_group(self) -> Optional[Group]:
        return self._first_unfinished(self.ranking_groups)

    def current_participant(self) -> Optional[Participant]:
        group = self.current_competing_group()
        return group.first_participant() if group else None

    def ranking_group_of(self, participant: Participant) -> Group:
        for group in self.ranking_groups:
            if group.contains(participant):
                return group
        raise RuleViolation(
            ViolationKind.PARTICIPANT_NOT_FOUND,
            "unable to find participant within any ranking group",
        )

    def competing_group_of(self, participant: Participant) -> Group:
        for group in self.competing_groups:
            if group.contains(participant):
                return group
        raise RuleViolation(
            ViolationKind.PARTICIPANT_NOT_FOUND,
            "unable to find participant within any competing group",
        )

    def rank(self, participant: Participant) -> int:
        return self.ranking_group_of(participant).rank(participant)
