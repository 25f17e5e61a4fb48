"""Composed objective score and its parts."""

from pydantic import BaseModel


class ObjectiveParts(BaseModel):
    keyword_match: float = 0.0
    keyword_weight: float = 0.0
    jd_reliability: float = 0.5
    rest_scale: float = 1.0
    career_risk: float = 0.0
    proof_score: float = 0.0
    experience_level: float = 0.0
    knockout: bool = False
    major_bonus: float = 0.0
    major_similarity: float = 0.0
    major_importance: float = 0.0


class ObjectiveScore(BaseModel):
    score: float = 0.0  # 0.0-1.0
    parts: ObjectiveParts = ObjectiveParts()
