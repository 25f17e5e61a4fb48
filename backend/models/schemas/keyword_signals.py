"""Keyword/skill match between a job description and a resume."""

from pydantic import BaseModel


class KeywordSignals(BaseModel):
    match_score: float = 0.0  # 0.0-1.0, after knockout penalty
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    jd_keywords: list[str] = []
    reliability: float = 0.0  # 0.0-1.0 trust in the JD as a signal source
    jd_critical: list[str] = []
    missing_critical: list[str] = []
    has_knockout_missing: bool = False
    note: str | None = None
