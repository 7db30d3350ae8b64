"""
Data model tests
"""
import pytest

from weightlifting import Club, Gender, Lift, Lifter, LiftOutcome, LiftType, RuleViolation, ViolationKind


class TestGender:
    """Gender parsing"""

    @pytest.mark.parametrize("value,expected", [
        ("M", Gender.MALE),
        ("male", Gender.MALE),
        (" f ", Gender.FEMALE),
        ("Female", Gender.FEMALE),
    ])
    def test_from_string(self, value, expected):
        assert Gender.from_string(value) == expected

    def test_unknown(self):
        with pytest.raises(ValueError):
            Gender.from_string("x")


class TestLiftOutcome:
    """Transport outcome codes"""

    def test_codes(self):
        assert LiftOutcome.from_code("PASS") == LiftOutcome.PASS
        assert LiftOutcome.from_code("fail") == LiftOutcome.FAIL
        assert LiftOutcome.from_code(" abstain ") == LiftOutcome.ABSTAIN

    def test_unknown_code(self):
        with pytest.raises(RuleViolation) as exc:
            LiftOutcome.from_code("MAYBE")
        assert exc.value.kind == ViolationKind.INVALID_OUTCOME


class TestLift:
    """Immutable attempt record"""

    def test_score_only_when_passed(self):
        assert Lift(LiftType.SNATCH, 50, LiftOutcome.PASS).score == 50
        assert Lift(LiftType.SNATCH, 50, LiftOutcome.FAIL).score == 0
        assert Lift(LiftType.SNATCH, 50, LiftOutcome.ABSTAIN).score == 0

    def test_frozen(self):
        lift = Lift(LiftType.CLEAN_AND_JERK, 80, LiftOutcome.PASS)
        with pytest.raises(AttributeError):
            lift.weight = 90

    def test_unique_ids(self):
        a = Lift(LiftType.SNATCH, 50, LiftOutcome.PASS)
        b = Lift(LiftType.SNATCH, 50, LiftOutcome.PASS)
        assert a.lift_id != b.lift_id


class TestLifter:
    """Lifter record"""

    def test_names(self):
        lifter = Lifter("Ada", "Lovelace", Gender.FEMALE, club=Club("Oslo AK"))
        assert lifter.full_name == "Ada Lovelace"
        assert lifter.club_name == "Oslo AK"
        assert lifter.gender_initial == "F"

    def test_without_club(self):
        assert Lifter("Bo", "Berg", Gender.MALE).club_name == ""

    def test_identity_equality(self):
        """Two lifters with the same name are different people"""
        assert Lifter("Bo", "Berg", Gender.MALE) != Lifter("Bo", "Berg", Gender.MALE)
