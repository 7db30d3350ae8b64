"""
Replay CLI tests
"""
import json
import sys
from datetime import datetime, timedelta

import pytest
from loguru import logger

from main import MeetFile, main, replay, replay_clock
from weightlifting import CompetitionState


@pytest.fixture
def restore_logging():
    """main() replaces the loguru sinks"""
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message))


@pytest.fixture
def meet_data():
    return {
        "name": "Club Championship",
        "type": "Total weight",
        "date": "2026-05-02T09:00:00",
        "registration_deadline": "2026-05-01T00:00:00",
        "lifters": [
            {"forename": "Kari", "surname": "Nordmann", "gender": "F", "club": "Oslo AK",
             "body_weight": 62.5, "starting_snatch": 60, "starting_clean_and_jerk": 75},
            {"forename": "Ola", "surname": "Nordmann", "gender": "M", "club": "Oslo AK",
             "body_weight": 80.3, "starting_snatch": 50, "starting_clean_and_jerk": 100},
        ],
        "attempts": [
            {"name": "Ola Nordmann", "action": "PASS"},
            {"name": "Ola Nordmann", "action": "ABSTAIN"},
            {"name": "Ola Nordmann", "action": "ABSTAIN"},
            {"name": "Ola Nordmann", "increase": 101},
            {"name": "Ola Nordmann", "action": "PASS"},
            {"name": "Nobody", "action": "PASS"},
        ],
    }


class TestReplay:
    """Meet file replay"""

    def test_attempt_log_applied(self, meet_data):
        competition = replay(MeetFile(**meet_data), seed=1)
        assert competition.state == CompetitionState.COMPETING
        assert len(competition.ranking_groups) == 2
        ola = next(p for p in competition.participants if p.full_name == "Ola Nordmann")
        assert ola.total_score == 151
        assert ola.club_name == "Oslo AK"

    def test_lifts_get_distinct_timestamps(self, meet_data):
        """Lifting order can compare when each phase started"""
        competition = replay(MeetFile(**meet_data))
        ola = next(p for p in competition.participants if p.full_name == "Ola Nordmann")
        stamps = [lift.timestamp for lift in ola.lifts]
        assert len(stamps) == 4
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)
        assert stamps[0] >= datetime(2026, 5, 2, 9, 0)

    def test_replay_clock_steps(self):
        start = datetime(2026, 5, 2, 9, 0)
        clock = replay_clock(start, step=timedelta(seconds=2))
        assert [clock(), clock(), clock()] == [
            start,
            start + timedelta(seconds=2),
            start + timedelta(seconds=4),
        ]

    def test_shared_clubs(self, meet_data):
        competition = replay(MeetFile(**meet_data))
        clubs = {id(lifter.club) for lifter in competition.lifters}
        assert len(clubs) == 1

    def test_cli_prints_results(self, meet_data, tmp_path, monkeypatch, capsys, restore_logging):
        meet_file = tmp_path / "meet.json"
        meet_file.write_text(json.dumps(meet_data), encoding="utf-8")
        monkeypatch.setattr("sys.argv", ["main.py", "--log-level", "ERROR", "replay", str(meet_file), "--seed", "3"])
        main()
        out = capsys.readouterr().out
        assert "Ola Nordmann" in out
        assert "Kari Nordmann" in out
        assert "151" in out
