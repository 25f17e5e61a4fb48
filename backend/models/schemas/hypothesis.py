"""Ranked, falsifiable explanation of a likely rejection."""

from pydantic import BaseModel


class Hypothesis(BaseModel):
    id: str
    title: str
    why: str = ""
    signals: list[str] = []
    actions: list[str] = []
    counter: str = ""
    impact: float = 0.7  # static per hypothesis type
    confidence: float = 0.5
    evidence_boost: float = 0.0  # 0.0-0.25
    priority: float = 0.0  # derived, used for ranking
