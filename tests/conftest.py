"""
Pytest configuration and fixtures for the weightlifting competition core
"""

import pytest
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from weightlifting import (  # noqa: E402
    Competition,
    CompetitionType,
    Gender,
    Lifter,
    Participant,
    Scoring,
    ScoringSettings,
)


COMPETITION_DAY = datetime(2026, 5, 2, 9, 0)


class FakeClock:
    """Returns a fixed start time, advancing one step per call"""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture(scope="function")
def clock():
    """Clock standing on competition day"""
    return FakeClock(COMPETITION_DAY)


@pytest.fixture(scope="function")
def settings():
    """Default scoring settings, ignoring any local .env"""
    return ScoringSettings(_env_file=None)


@pytest.fixture(scope="function")
def scoring(settings):
    return Scoring.from_settings(settings)


@pytest.fixture(scope="function")
def make_lifter():
    """Factory for lifters with unique names"""
    counter = {"n": 0}

    def _make(gender=Gender.MALE, forename="Test", surname=None, club=None):
        counter["n"] += 1
        return Lifter(forename, surname or f"Lifter{counter['n']}", gender, club=club)

    return _make


@pytest.fixture(scope="function")
def make_participant(make_lifter, scoring, clock):
    """Factory for weighed-in participants outside any competition"""

    def _make(body_weight=80.0, snatch=50, clean_and_jerk=80, gender=Gender.MALE,
              start_number=1, weigh_in=True):
        participant = Participant(
            make_lifter(gender),
            start_number=start_number,
            scoring=scoring,
            clock=clock,
        )
        if weigh_in:
            participant.weigh_in(body_weight, snatch, clean_and_jerk)
        return participant

    return _make


@pytest.fixture(scope="function")
def make_competition(settings, clock):
    """Factory for competitions whose sign-up has closed and day has come"""

    def _make(competition_type=CompetitionType.SINCLAIR, max_participants=None, **kwargs):
        kwargs.setdefault("competition_date", COMPETITION_DAY)
        kwargs.setdefault("last_registration_date", COMPETITION_DAY - timedelta(days=1))
        kwargs.setdefault("clock", clock)
        return Competition(
            "Spring Open",
            competition_type,
            max_participants=max_participants,
            settings=settings,
            rng=random.Random(42),
            **kwargs,
        )

    return _make


@pytest.fixture(scope="function")
def enter(make_lifter):
    """Sign a new lifter up and weigh them in"""

    def _enter(competition, gender=Gender.MALE, body_weight=80.0, snatch=50, clean_and_jerk=80):
        participant = competition.add_participant(make_lifter(gender))
        participant.weigh_in(body_weight, snatch, clean_and_jerk)
        return participant

    return _enter


def complete_lifts(participant, snatch_passes=1, clean_and_jerk_passes=1):
    """
    Record all six lifts: the first N of each discipline pass, the rest fail.
    Best snatch is starting snatch + passes - 1 (same for clean & jerk when
    the starting weight is above the snatch).
    """
    for passes in (snatch_passes, clean_and_jerk_passes):
        for i in range(3):
            if i < passes:
                participant.record_pass()
            else:
                participant.record_fail()
    return participant
