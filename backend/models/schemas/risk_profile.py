"""Risk profile engine output."""

from pydantic import BaseModel


class RiskExplain(BaseModel):
    title: str
    why: list[str] = []
    fix: list[str] = []
    evidence_keys: list[str] = []
    notes: list[str] = []


class RiskProfileResult(BaseModel):
    id: str
    group: str
    layer: str
    priority: int  # static, author-assigned
    score: float  # 0.0-1.0, dynamic
    explain: RiskExplain


class RiskProfileInfo(BaseModel):
    id: str
    group: str
    layer: str
    priority: int
