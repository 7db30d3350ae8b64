"""
Participant engine

One lifter's engagement in one competition: weigh-in, the lift ledger and
the weight-selection rules.

- At most 6 lifts: 3 snatches followed by 3 clean & jerks
- A passed lift raises the next weight by 1 kg
- At most 2 weight increases between attempts
"""
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Callable, List, Optional

from loguru import logger

from .errors import RuleViolation, ViolationKind
from .events import EventPublisher, EventType
from .models import Gender, Lift, Lifter, LiftOutcome, LiftType
from .scoring import Scoring, total_score

if TYPE_CHECKING:
    from .competition import Competition


LIFTS_PER_TYPE = 3
TOTAL_LIFTS = 2 * LIFTS_PER_TYPE
MAX_WEIGHT_CHANGES = 2


class Participant:
    """A lifter taking part in a competition"""

    def __init__(
        self,
        lifter: Lifter,
        competition: Optional["Competition"] = None,
        start_number: int = 0,
        scoring: Optional[Scoring] = None,
        publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.participant_id = str(uuid.uuid4())
        self.lifter = lifter
        self.competition = competition
        self.start_number = start_number
        self.scoring = scoring or Scoring.from_settings()
        self.publisher = publisher
        self.clock = clock

        self.starting_snatch_weight = 0
        self.starting_clean_and_jerk_weight = 0
        self.current_weight = 0
        self.previous_weight = 0
        self.weight_change_count = 0
        self.weighed_in = False
        self._lifts: List[Lift] = []

    def __repr__(self) -> str:
        return (
            f"Participant(#{self.start_number} {self.lifter.full_name}, "
            f"lifts={self.lifts_count}, current_weight={self.current_weight})"
        )

    # ==================== Lifter attributes ====================

    @property
    def full_name(self) -> str:
        return self.lifter.full_name

    @property
    def gender(self) -> Gender:
        return self.lifter.gender

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE

    @property
    def is_female(self) -> bool:
        return self.gender == Gender.FEMALE

    @property
    def body_weight(self) -> float:
        return self.lifter.body_weight

    @property
    def club_name(self) -> str:
        return self.lifter.club_name

    # ==================== Weigh-in ====================

    def _ensure_weigh_in_open(self) -> None:
        if self.competition is not None and self.competition.is_weigh_in_complete:
            raise RuleViolation(
                ViolationKind.WEIGH_IN_CLOSED,
                f"weigh-in for {self.competition.name} has already been completed",
            )

    def weigh_in(self, body_weight: float, starting_snatch_weight: int,
                 starting_clean_and_jerk_weight: int) -> None:
        """
        Record body weight and declared starting weights

        Raises:
            RuleViolation(WEIGH_IN_CLOSED): the competition's groups are built
            RuleViolation(NON_POSITIVE_WEIGHT): a starting weight below 1 kg
                or a non-positive body weight; nothing is changed
        """
        self._ensure_weigh_in_open()
        for weight in (starting_snatch_weight, starting_clean_and_jerk_weight):
            if weight < 1:
                raise RuleViolation(
                    ViolationKind.NON_POSITIVE_WEIGHT,
                    f"starting weight must be at least 1 kg, got {weight}",
                )
        if body_weight <= 0:
            raise RuleViolation(
                ViolationKind.NON_POSITIVE_WEIGHT,
                f"body weight must be greater than 0 kg, got {body_weight}",
            )

        self.lifter.body_weight = body_weight
        self.starting_snatch_weight = starting_snatch_weight
        self.starting_clean_and_jerk_weight = starting_clean_and_jerk_weight
        self.current_weight = starting_snatch_weight
        self.previous_weight = starting_snatch_weight
        self.weighed_in = True

        logger.debug(
            f"Weighed in #{self.start_number} {self.full_name}: {body_weight} kg, "
            f"snatch {starting_snatch_weight}, C&J {starting_clean_and_jerk_weight}"
        )
        self._publish(EventType.PARTICIPANT_WEIGHED_IN, body_weight=body_weight)

    def check_out(self) -> None:
        """Reverse an erroneous weigh-in"""
        self._ensure_weigh_in_open()
        self.weighed_in = False
        self._publish(EventType.PARTICIPANT_CHECKED_OUT)

    # ==================== Lift ledger ====================

    @property
    def lifts(self) -> List[Lift]:
        return list(self._lifts)

    @property
    def lifts_count(self) -> int:
        return len(self._lifts)

    @property
    def lifts_remaining(self) -> int:
        return TOTAL_LIFTS - self.lifts_count

    @property
    def all_lifts_complete(self) -> bool:
        return self.lifts_count >= TOTAL_LIFTS

    @property
    def snatch_lifts(self) -> List[Lift]:
        return [lift for lift in self._lifts if lift.is_snatch]

    @property
    def clean_and_jerk_lifts(self) -> List[Lift]:
        return [lift for lift in self._lifts if lift.is_clean_and_jerk]

    @property
    def snatch_count(self) -> int:
        return len(self.snatch_lifts)

    @property
    def clean_and_jerk_count(self) -> int:
        return len(self.clean_and_jerk_lifts)

    @property
    def current_lift_type(self) -> Optional[LiftType]:
        """Type of the next attempt, None once all six are done"""
        if self.snatch_count < LIFTS_PER_TYPE:
            return LiftType.SNATCH
        if self.clean_and_jerk_count < LIFTS_PER_TYPE:
            return LiftType.CLEAN_AND_JERK
        return None

    def record_pass(self) -> Lift:
        return self.record_lift(LiftOutcome.PASS)

    def record_fail(self) -> Lift:
        return self.record_lift(LiftOutcome.FAIL)

    def record_abstain(self) -> Lift:
        return self.record_lift(LiftOutcome.ABSTAIN)

    def record_lift(self, outcome: LiftOutcome) -> Lift:
        """
        Record the next attempt at the current weight

        Raises:
            RuleViolation(ALL_LIFTS_COMPLETE): six lifts already recorded
        """
        lift_type = self.current_lift_type
        if lift_type is None:
            raise RuleViolation(
                ViolationKind.ALL_LIFTS_COMPLETE,
                f"{self.full_name} has already completed six lifts",
            )

        lift = Lift(
            lift_type=lift_type,
            weight=self.current_weight,
            outcome=outcome,
            timestamp=self.clock(),
        )
        self._lifts.append(lift)

        if lift.is_passed:
            self._set_current_weight(self.current_weight + 1)
        self.weight_change_count = 0

        # first clean & jerk is at least the declared starting weight
        if self.lifts_count == LIFTS_PER_TYPE and self.current_weight < self.starting_clean_and_jerk_weight:
            self._set_current_weight(self.starting_clean_and_jerk_weight)

        logger.debug(
            f"#{self.start_number} {self.full_name}: {lift_type.value} {lift.weight} kg "
            f"{outcome.value} ({self.lifts_count}/{TOTAL_LIFTS})"
        )
        self._publish(EventType.LIFT_RECORDED, lift_id=lift.lift_id, outcome=outcome.value)
        return lift

    def correct_lift(self, index: int, weight: int) -> Lift:
        """Correct the recorded weight of a completed lift (0-based index)"""
        if not 0 <= index < self.lifts_count:
            raise RuleViolation(
                ViolationKind.LIFT_NOT_RECORDED,
                f"lift {index + 1} has not been recorded yet",
            )
        corrected = self._lifts[index].with_weight(weight)
        self._lifts[index] = corrected
        self._publish(EventType.LIFT_CORRECTED, lift_id=corrected.lift_id, weight=weight)
        return corrected

    # ==================== Weight selection ====================

    def _set_current_weight(self, weight: int) -> None:
        self.previous_weight = self.current_weight
        self.current_weight = weight

    def can_increase_weight(self, weight: int) -> bool:
        return weight > self.current_weight

    def can_change_weight(self) -> bool:
        return self.weight_change_count < MAX_WEIGHT_CHANGES

    def increase_weight(self, weight: int) -> None:
        """
        Declare a heavier next attempt

        Raises:
            RuleViolation(NOT_GREATER): weight is not above the current weight
            RuleViolation(TOO_MANY_CHANGES): two changes already made since
                the last attempt
        """
        if not self.can_increase_weight(weight):
            raise RuleViolation(
                ViolationKind.NOT_GREATER,
                f"new weight must be greater than existing weight; current weight of "
                f"{self.current_weight} is greater than or equal to new weight of {weight}",
            )
        if not self.can_change_weight():
            raise RuleViolation(
                ViolationKind.TOO_MANY_CHANGES,
                "unable to increase weight: two changes have already been made",
            )
        self._set_current_weight(weight)
        self.weight_change_count += 1
        self._publish(EventType.WEIGHT_CHANGED, weight=weight)

    def correct_weight(self, weight: int) -> None:
        """Overwrite the current weight after an erroneous increase"""
        self._set_current_weight(weight)
        self._publish(EventType.WEIGHT_CHANGED, weight=weight)

    def revert_weight(self) -> None:
        """Undo the last weight change"""
        self._set_current_weight(self.previous_weight)
        self.weight_change_count = max(0, self.weight_change_count - 1)
        self._publish(EventType.WEIGHT_CHANGED, weight=self.current_weight)

    # ==================== Scores ====================

    @staticmethod
    def _best(lifts: List[Lift]) -> int:
        return max((lift.score for lift in lifts), default=0)

    @property
    def best_snatch(self) -> int:
        return self._best(self.snatch_lifts)

    @property
    def best_clean_and_jerk(self) -> int:
        return self._best(self.clean_and_jerk_lifts)

    @property
    def total_score(self) -> int:
        return total_score(self.best_snatch, self.best_clean_and_jerk)

    @property
    def sinclair_score(self) -> float:
        return self.scoring.sinclair.score(self)

    @property
    def weight_class(self) -> int:
        return self.scoring.weight_classes.for_participant(self)

    @property
    def rank(self) -> int:
        if self.competition is None:
            raise RuleViolation(
                ViolationKind.PARTICIPANT_NOT_FOUND,
                f"{self.full_name} is not part of a competition",
            )
        return self.competition.rank(self)

    def _publish(self, event_type: EventType, **data) -> None:
        if self.publisher is not None:
            self.publisher.publish_participant_event(event_type, self, **data)
