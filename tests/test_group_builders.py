"""
Group-building strategy tests
"""
import math

import pytest

from weightlifting import (
    CompetitionType,
    ConfigurationError,
    Gender,
    GroupPurpose,
    OrderingRegistry,
    SinclairGroupBuilder,
    TotalWeightGroupBuilder,
    chunk_participants,
    create_group_builder,
)


@pytest.fixture
def orderings(scoring):
    return OrderingRegistry.default(scoring.sinclair)


class TestChunking:
    """Balanced competing group sizes"""

    @pytest.mark.parametrize("n,max_size,sizes", [
        (15, 10, [8, 7]),
        (20, 10, [10, 10]),
        (21, 10, [7, 7, 7]),
        (11, 10, [6, 5]),
        (10, 10, [10]),
        (3, 10, [3]),
    ])
    def test_sizes(self, n, max_size, sizes):
        chunks = chunk_participants(list(range(n)), max_size)
        assert [len(c) for c in chunks] == sizes

    @pytest.mark.parametrize("n,max_size", [(1, 1), (7, 3), (23, 5), (99, 10)])
    def test_balanced_and_complete(self, n, max_size):
        """ceil(n/m) chunks, sizes within 1, order kept"""
        items = list(range(n))
        chunks = chunk_participants(items, max_size)
        sizes = [len(c) for c in chunks]
        assert len(chunks) == math.ceil(n / max_size)
        assert max(sizes) - min(sizes) <= 1
        assert max(sizes) <= max_size
        assert [x for c in chunks for x in c] == items

    def test_empty(self):
        assert chunk_participants([], 10) == []

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            chunk_participants([1, 2], 0)


class TestSinclairGroupBuilder:
    """One ranking group per gender"""

    def test_female_group_first(self, make_participant, orderings, scoring):
        """Female ranking and competing groups sort first"""
        men = [make_participant(snatch=s, gender=Gender.MALE) for s in (70, 60)]
        women = [make_participant(snatch=s, gender=Gender.FEMALE) for s in (45, 40)]
        builder = SinclairGroupBuilder(orderings, scoring.weight_classes)

        ranking = builder.build_ranking_groups(men + women)
        assert [g.gender for g in ranking] == [Gender.FEMALE, Gender.MALE]
        assert all(g.purpose == GroupPurpose.SINCLAIR_RANKING for g in ranking)
        assert ranking[1].participants == [men[1], men[0]]

        competing = builder.build_competing_groups(ranking)
        assert [g.gender for g in competing] == [Gender.FEMALE, Gender.MALE]
        assert all(g.is_competing for g in competing)

    def test_competing_groups_by_starting_snatch(self, make_participant, orderings, scoring):
        """Chunks of one gender run lightest first"""
        men = [make_participant(snatch=50 + i) for i in range(5)]
        builder = SinclairGroupBuilder(orderings, scoring.weight_classes, competing_group_max_size=2)
        competing = builder.build_competing_groups(builder.build_ranking_groups(list(reversed(men))))
        assert [len(g) for g in competing] == [2, 2, 1]
        assert [g.participants[0].starting_snatch_weight for g in competing] == [50, 52, 54]


class TestTotalWeightGroupBuilder:
    """One ranking group per gender and weight class"""

    def test_forty_participants(self, make_participant, orderings, scoring):
        """10 women in one class, 30 men in two classes of 15"""
        women = [make_participant(body_weight=60.0, snatch=40 + i, gender=Gender.FEMALE) for i in range(10)]
        men_85 = [make_participant(body_weight=80.0, snatch=60 + i) for i in range(15)]
        men_105 = [make_participant(body_weight=100.0, snatch=80 + i) for i in range(15)]
        builder = TotalWeightGroupBuilder(orderings, scoring.weight_classes, competing_group_max_size=10)

        ranking = builder.build_ranking_groups(men_105 + women + men_85)
        assert len(ranking) == 3
        assert [len(g) for g in ranking] == [10, 15, 15]
        assert ranking[0].gender == Gender.FEMALE
        assert set(ranking[1].participants) == set(men_85)
        assert set(ranking[2].participants) == set(men_105)
        assert all(g.purpose == GroupPurpose.TOTAL_WEIGHT_RANKING for g in ranking)

        competing = builder.build_competing_groups(ranking)
        assert [len(g) for g in competing] == [10, 8, 7, 8, 7]
        assert competing[0].gender == Gender.FEMALE
        assert set(competing[1].participants) | set(competing[2].participants) == set(men_85)

    def test_weight_class_before_snatch(self, make_participant, orderings, scoring):
        """Lighter class first even when its lifters open heavier"""
        light_class = make_participant(body_weight=60.0, snatch=100)
        heavy_class = make_participant(body_weight=100.0, snatch=50)
        builder = TotalWeightGroupBuilder(orderings, scoring.weight_classes)
        ranking = builder.build_ranking_groups([heavy_class, light_class])
        assert [g.participants[0] for g in ranking] == [light_class, heavy_class]


class TestCreateGroupBuilder:
    """Builder selection by competition type"""

    def test_known_types(self, orderings, scoring):
        assert isinstance(
            create_group_builder(CompetitionType.SINCLAIR, orderings, scoring.weight_classes),
            SinclairGroupBuilder,
        )
        assert isinstance(
            create_group_builder(CompetitionType.TOTAL_WEIGHT, orderings, scoring.weight_classes),
            TotalWeightGroupBuilder,
        )

    def test_unknown_type(self, orderings, scoring):
        """Unregistered types fail at construction"""
        with pytest.raises(ConfigurationError):
            create_group_builder("Decathlon", orderings, scoring.weight_classes)

    def test_custom_registry(self, orderings, scoring):
        """Registry can be narrowed"""
        registry = {CompetitionType.SINCLAIR: SinclairGroupBuilder}
        with pytest.raises(ConfigurationError):
            create_group_builder(CompetitionType.TOTAL_WEIGHT, orderings, scoring.weight_classes, registry=registry)
