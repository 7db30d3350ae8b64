"""
Competition boundary service

Accepts primitive inputs (strings and numbers) from the transport layer,
drives the competition core and turns rule violations into
ActionResponse objects with a user-facing message.
"""
from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from .competition import Competition
from .errors import RuleViolation, ViolationKind
from .models import Lifter, LiftOutcome
from .participant import Participant
from .results import build_results
from .schemas import (
    ActionResponse,
    LiftCorrectionRequest,
    LiftRequest,
    ParticipantRequest,
    ResultRow,
    WeighInRequest,
    WeightRequest,
)


class CompetitionService:
    """Entry points for one competition"""

    def __init__(self, competition: Competition):
        self.competition = competition

    def _run(self, action: Callable[[], Optional[str]], success_msg: str) -> ActionResponse:
        try:
            msg = action()
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in e.errors())
            logger.warning(f"Rejected input for {fields}: {e.error_count()} errors")
            return ActionResponse(code=400, msg=f"unable to process input for {fields} (a number is required)")
        except RuleViolation as e:
            code = 404 if e.kind == ViolationKind.PARTICIPANT_NOT_FOUND else 400
            logger.warning(f"Rule violation [{e.kind.value}]: {e.message}")
            return ActionResponse(code=code, msg=e.message, kind=e.kind.value)
        return ActionResponse(code=200, msg=msg or success_msg)

    def _participant(self, start_number: int) -> Participant:
        return self.competition.participant_by_start_number(start_number)

    # ==================== sign-up ====================

    def sign_up(self, lifter: Lifter) -> ActionResponse:
        def action():
            participant = self.competition.add_participant(lifter)
            return f"{lifter.full_name} signed up with start number {participant.start_number}"
        return self._run(action, "signed up")

    def withdraw(self, lifter: Lifter) -> ActionResponse:
        def action():
            self.competition.remove_participant(lifter)
        return self._run(action, f"{lifter.full_name} withdrawn")

    # ==================== weigh-in ====================

    def check_in(self, start_number: Any, body_weight: Any,
                 starting_snatch: Any, starting_clean_and_jerk: Any) -> ActionResponse:
        def action():
            req = WeighInRequest(
                start_number=start_number,
                body_weight=body_weight,
                starting_snatch=starting_snatch,
                starting_clean_and_jerk=starting_clean_and_jerk,
            )
            self._participant(req.start_number).weigh_in(
                req.body_weight, req.starting_snatch, req.starting_clean_and_jerk
            )
        return self._run(action, "All good, participant checked in!")

    def check_out(self, start_number: Any) -> ActionResponse:
        def action():
            req = ParticipantRequest(start_number=start_number)
            self._participant(req.start_number).check_out()
        return self._run(action, "All good, participant checked out!")

    def finish_weigh_in(self) -> ActionResponse:
        def action():
            self.competition.finish_weigh_in()
            return f"weigh-in finished: {len(self.competition.competing_groups)} competing groups"
        return self._run(action, "weigh-in finished")

    # ==================== competing ====================

    def register_lift(self, start_number: Any, action_code: str) -> ActionResponse:
        def action():
            req = LiftRequest(start_number=start_number, action=action_code)
            outcome = LiftOutcome.from_code(req.action)
            lift = self._participant(req.start_number).record_lift(outcome)
            return f"{lift.lift_type.value} {lift.weight} kg {outcome.value}"
        return self._run(action, "lift registered")

    def increase_weight(self, start_number: Any, weight: Any) -> ActionResponse:
        def action():
            req = WeightRequest(start_number=start_number, weight=weight)
            self._participant(req.start_number).increase_weight(req.weight)
            return f"weight increased to {req.weight} kg"
        return self._run(action, "weight increased")

    def correct_weight(self, start_number: Any, weight: Any) -> ActionResponse:
        def action():
            req = WeightRequest(start_number=start_number, weight=weight)
            self._participant(req.start_number).correct_weight(req.weight)
            return f"weight corrected to {req.weight} kg"
        return self._run(action, "weight corrected")

    def revert_weight(self, start_number: Any) -> ActionResponse:
        def action():
            req = ParticipantRequest(start_number=start_number)
            participant = self._participant(req.start_number)
            participant.revert_weight()
            return f"weight reverted to {participant.current_weight} kg"
        return self._run(action, "weight reverted")

    def correct_lift(self, start_number: Any, index: Any, weight: Any) -> ActionResponse:
        def action():
            req = LiftCorrectionRequest(start_number=start_number, index=index, weight=weight)
            self._participant(req.start_number).correct_lift(req.index, req.weight)
        return self._run(action, "All good!")

    # ==================== queries ====================

    def current_participant(self) -> Optional[Dict[str, Any]]:
        """Who is on the platform next, None once the competition is complete"""
        participant = self.competition.current_participant()
        if participant is None:
            return None
        return {
            "start_number": participant.start_number,
            "name": participant.full_name,
            "lift_type": participant.current_lift_type.value,
            "weight": participant.current_weight,
            "attempt": participant.lifts_count % 3 + 1,
        }

    def results(self) -> List[ResultRow]:
        return build_results(self.competition)
