"""
Weightlifting competition core

Participant rules, group building, lifting order, ranking and scoring for a
single weightlifting competition.
"""
from .competition import Competition, CompetitionState
from .config import ScoringSettings, get_settings
from .errors import ConfigurationError, RuleViolation, ViolationKind
from .events import CompetitionEvent, EventPublisher, EventType
from .group import Group
from .group_builders import (
    CompetitionType,
    GroupBuilder,
    SinclairGroupBuilder,
    TotalWeightGroupBuilder,
    chunk_participants,
    create_group_builder,
)
from .models import Club, Gender, Lift, Lifter, LiftOutcome, LiftType
from .ordering import (
    CompetingOrder,
    GroupPurpose,
    OrderingRegistry,
    SinclairRankingOrder,
    TotalWeightRankingOrder,
)
from .participant import Participant
from .repository import CompetitionRepository, InMemoryCompetitionRepository
from .results import build_results
from .scoring import Scoring, SinclairCalculator, WeightClassTable, total_score
from .service import CompetitionService

__all__ = [
    # Coordinator
    "Competition",
    "CompetitionState",
    "CompetitionType",
    # Config
    "ScoringSettings",
    "get_settings",
    # Errors
    "ConfigurationError",
    "RuleViolation",
    "ViolationKind",
    # Events
    "CompetitionEvent",
    "EventPublisher",
    "EventType",
    # Groups
    "Group",
    "GroupBuilder",
    "SinclairGroupBuilder",
    "TotalWeightGroupBuilder",
    "chunk_participants",
    "create_group_builder",
    # Models
    "Club",
    "Gender",
    "Lift",
    "Lifter",
    "LiftOutcome",
    "LiftType",
    "Participant",
    # Ordering
    "CompetingOrder",
    "GroupPurpose",
    "OrderingRegistry",
    "SinclairRankingOrder",
    "TotalWeightRankingOrder",
    # Scoring
    "Scoring",
    "SinclairCalculator",
    "WeightClassTable",
    "total_score",
    # Boundaries
    "CompetitionRepository",
    "InMemoryCompetitionRepository",
    "CompetitionService",
    "build_results",
]
