"""
Weightlifting meet replay

Loads a meet file (lifters, weigh-in figures and the attempt log), runs it
through the competition core and prints the results table.

    python main.py replay meet.json --seed 7
"""
import argparse
import itertools
import json
import random
import sys
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from weightlifting import (
    Club,
    Competition,
    CompetitionService,
    CompetitionType,
    Gender,
    InMemoryCompetitionRepository,
    Lifter,
)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )
    if log_file:
        logger.add(log_file, rotation="1 day", retention="30 days", level="DEBUG")


class MeetLifter(BaseModel):
    forename: str
    surname: str
    gender: str = Field(..., description="M or F")
    club: str = ""
    body_weight: float
    starting_snatch: int
    starting_clean_and_jerk: int


class MeetAttempt(BaseModel):
    """One line of the attempt log; exactly one of action/increase/correct"""
    name: str = Field(..., description="Lifter full name")
    action: Optional[str] = Field(None, description="PASS, FAIL or ABSTAIN")
    increase: Optional[int] = Field(None, description="Weight increase (kg)")
    correct: Optional[int] = Field(None, description="Weight correction (kg)")


class MeetFile(BaseModel):
    name: str
    type: CompetitionType
    date: datetime
    registration_deadline: datetime
    max_participants: int = 50
    lifters: List[MeetLifter] = Field(default_factory=list)
    attempts: List[MeetAttempt] = Field(default_factory=list)


def replay_clock(start: datetime, step: timedelta = timedelta(seconds=1)) -> Callable[[], datetime]:
    """Clock starting on competition day, one step later on every read"""
    ticks = itertools.count()
    return lambda: start + next(ticks) * step


def replay(meet: MeetFile, seed: Optional[int] = None) -> Competition:
    competition = Competition(
        meet.name,
        meet.type,
        competition_date=meet.date,
        last_registration_date=meet.registration_deadline,
        max_participants=meet.max_participants,
        clock=replay_clock(meet.date),
        rng=random.Random(seed),
    )
    service = CompetitionService(competition)
    clubs = {}
    start_numbers = {}

    for entry in meet.lifters:
        club = clubs.setdefault(entry.club, Club(entry.club)) if entry.club else None
        lifter = Lifter(entry.forename, entry.surname, Gender.from_string(entry.gender), club=club)
        participant = competition.add_participant(lifter)
        start_numbers[lifter.full_name] = participant.start_number
        response = service.check_in(
            participant.start_number,
            entry.body_weight,
            entry.starting_snatch,
            entry.starting_clean_and_jerk,
        )
        if not response.ok:
            logger.warning(f"{lifter.full_name} not checked in: {response.msg}")

    service.finish_weigh_in()

    for attempt in meet.attempts:
        start_number = start_numbers.get(attempt.name)
        if start_number is None:
            logger.warning(f"Unknown lifter in attempt log: {attempt.name}")
            continue
        if attempt.increase is not None:
            response = service.increase_weight(start_number, attempt.increase)
        elif attempt.correct is not None:
            response = service.correct_weight(start_number, attempt.correct)
        else:
            response = service.register_lift(start_number, attempt.action or "")
        if not response.ok:
            logger.warning(f"{attempt.name}: {response.msg}")

    logger.info(f"Replay finished: {competition.state.value}")
    return competition


def print_results(competition: Competition) -> None:
    service = CompetitionService(competition)
    current_group = None
    for row in service.results():
        if row.ranking_group != current_group:
            current_group = row.ranking_group
            print(f"\n== Group {current_group} ({row.gender}) ==")
            print(f"{'Rank':>4}  {'#':>3}  {'Name':<24} {'Club':<16} {'WC':>2} {'Sn':>4} {'CJ':>4} {'Tot':>4} {'Sinclair':>9}")
        print(
            f"{row.rank:>4}  {row.start_number:>3}  {row.name:<24} {row.club:<16} "
            f"{row.weight_class:>2} {row.best_snatch:>4} {row.best_clean_and_jerk:>4} "
            f"{row.total:>4} {row.sinclair_score:>9.2f}"
        )


def main():
    parser = argparse.ArgumentParser(description="Weightlifting competition replay")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser("replay", help="Replay a meet file and print results")
    replay_parser.add_argument("meet_file", help="Meet JSON file")
    replay_parser.add_argument("--seed", type=int, default=None, help="Start number draw seed")

    parser.add_argument("--log-level", default="INFO", help="Console log level")
    parser.add_argument("--log-file", default=None, help="Optional log file (rotated daily)")

    args = parser.parse_args()
    setup_logging(args.log_level, args.log_file)

    if args.command == "replay":
        with open(args.meet_file, "r", encoding="utf-8") as f:
            meet = MeetFile(**json.load(f))
        competition = replay(meet, seed=args.seed)
        InMemoryCompetitionRepository().save(competition)
        print_results(competition)


if __name__ == "__main__":
    main()
