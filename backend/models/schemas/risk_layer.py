"""Where the candidate is likely to fall: the document screen or the interview."""

from typing import Literal

from pydantic import BaseModel

RiskLevel = Literal["HIGH", "MEDIUM", "LOW"]


class StageRisk(BaseModel):
    score: int = 55  # 0-100
    level: RiskLevel = "MEDIUM"
    drivers: list[str] = []


class RiskLayer(BaseModel):
    document_risk: StageRisk = StageRisk()
    interview_risk: StageRisk = StageRisk()


class PressureLayer(BaseModel):
    """Five 0-1 views of how a hiring committee weighs the candidate."""
    replaceability_risk: float = 0.0
    differentiation_level: float = 0.0
    internal_competition_risk: float = 0.0
    narrative_coherence: float = 0.0
    promotion_feasibility: float = 0.0
