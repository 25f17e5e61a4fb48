"""Career-fact derived risk and experience fit."""

from typing import Literal

from pydantic import BaseModel

ExperiencePolicy = Literal["newgrad", "any", "experienced", "unknown"]


class RequiredYears(BaseModel):
    min: float
    max: float | None = None


class CareerSignals(BaseModel):
    experience_policy: ExperiencePolicy = "unknown"
    required_years: RequiredYears | None = None
    experience_gap: float | None = None  # total_years - required min, None if not applicable
    career_risk_score: float = 0.0  # 0.0-1.0
    experience_level_score: float = 0.6  # 0.0-1.0
