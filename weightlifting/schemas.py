"""
Boundary schemas

Pydantic models for the primitive inputs accepted by the boundary service and
the responses it returns. Numeric strings are coerced by pydantic; a value
that does not parse is reported as a 400 response.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ParticipantRequest(BaseModel):
    """Any request addressing one participant"""
    start_number: int = Field(..., description="Participant start number")


class WeighInRequest(ParticipantRequest):
    """Weigh-in (check-in) form"""
    body_weight: float = Field(..., description="Body weight (kg)")
    starting_snatch: int = Field(..., description="Declared starting snatch (kg)")
    starting_clean_and_jerk: int = Field(..., description="Declared starting clean & jerk (kg)")


class LiftRequest(ParticipantRequest):
    """Attempt outcome from the jury"""
    action: str = Field(..., description="PASS, FAIL or ABSTAIN")


class WeightRequest(ParticipantRequest):
    """Weight increase or correction"""
    weight: int = Field(..., description="Requested weight (kg)")


class LiftCorrectionRequest(ParticipantRequest):
    """Correction of an already recorded lift"""
    index: int = Field(..., ge=0, le=5, description="0-based lift position")
    weight: int = Field(..., description="Corrected weight (kg)")


class ActionResponse(BaseModel):
    """Result of a boundary action"""
    code: int = Field(default=200, description="HTTP-like status code")
    msg: str = Field(default="", description="User-facing message")
    kind: Optional[str] = Field(None, description="Rule violation kind, if any")

    @property
    def ok(self) -> bool:
        return self.code == 200


class ResultRow(BaseModel):
    """One line of the results table"""
    ranking_group: int = Field(..., description="1-based ranking group position")
    rank: int = Field(..., description="Rank within the ranking group")
    start_number: int
    name: str
    club: str = ""
    gender: str
    weight_class: int
    body_weight: float
    best_snatch: int = 0
    best_clean_and_jerk: int = 0
    total: int = 0
    sinclair_score: float = 0.0
