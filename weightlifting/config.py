"""
Competition core settings

Sinclair constants and weight-class thresholds are loaded once and injected
into the scoring calculators.
"""
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

load_dotenv()


class ScoringSettings(BaseSettings):
    """Scoring and grouping constants"""

    # Sinclair coefficients for the current Olympic cycle
    sinclair_male_coefficient: float = Field(default=0.704358141, description="Male Sinclair A")
    sinclair_female_coefficient: float = Field(default=0.897260740, description="Female Sinclair A")

    # body weight of the world record holder in the heaviest class
    sinclair_male_wrh_bodyweight: float = Field(default=174.393, description="Male b (kg)")
    sinclair_female_wrh_bodyweight: float = Field(default=148.026, description="Female b (kg)")

    male_weight_classes: List[int] = Field(
        default=[56, 62, 69, 77, 85, 94, 105],
        description="Male weight class upper limits (kg)",
    )
    female_weight_classes: List[int] = Field(
        default=[48, 53, 58, 63, 69, 75],
        description="Female weight class upper limits (kg)",
    )

    competing_group_max_size: int = Field(default=10, description="Max lifters per competing group")
    default_max_participants: int = Field(default=50, description="Default competition capacity")

    class Config:
        env_prefix = "WEIGHTLIFTING_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> ScoringSettings:
    return ScoringSettings()
