"""Hireability: would this candidate be trusted at the target level."""

from typing import Literal

from pydantic import BaseModel

FitLabel = Literal["HIGH", "MEDIUM", "LOW", "UNKNOWN"]


class HireabilityScores(BaseModel):
    """0-100 each. 55 is the neutral value for facts nobody extracted."""
    responsibility_level_fit_score: int = 55
    ownership_level_score: int = 55
    decision_exposure_score: int = 55
    industry_fit_score: int = 55
    business_model_fit_score: int = 55
    execution_coordination_fit_score: int = 55
    company_size_fit_score: int = 55
    signal_strength_score: int = 55
    impact_scale_fit_score: int = 55
    career_consistency_score: int = 55
    reporting_line_fit_score: int = 55
    org_complexity_fit_score: int = 55
    vendor_experience_score: int = 55


class HireabilityLabels(BaseModel):
    responsibility_level_fit: FitLabel = "UNKNOWN"
    execution_coordination_risk: Literal["HIGH", "MEDIUM", "LOW"] = "MEDIUM"


class Hireability(BaseModel):
    score: int = 55  # weighted 0-100
    scores: HireabilityScores = HireabilityScores()
    weights: dict[str, float] = {}
    labels: HireabilityLabels = HireabilityLabels()
