"""Caller-owned input facts for one analysis run.

Every field is coerced rather than rejected: malformed text becomes an
empty string, malformed numbers become zero, unknown stages map to 기타.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

STAGES: tuple[str, ...] = (
    "서류",
    "1차 면접",
    "1차+2차 면접",
    "최종 면접",
    "오퍼 직전/협상",
    "기타",
)
DEFAULT_STAGE = "서류"

_STAGE_ALIASES: dict[str, str] = {
    "resume": "서류",
    "document": "서류",
    "screening": "서류",
    "interview": "1차 면접",
    "first interview": "1차 면접",
    "final interview": "최종 면접",
    "offer": "오퍼 직전/협상",
}

EDUCATION_LEVELS: tuple[str, ...] = ("highschool", "associate", "bachelor", "master", "phd")


def _text(v: Any) -> str:
    return v if isinstance(v, str) else ""


def _non_negative(v: Any) -> float:
    if isinstance(v, bool) or v is None:
        return 0.0
    try:
        n = float(v)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(n) or math.isinf(n) or n < 0:
        return 0.0
    return n


class _Facts(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CareerFacts(_Facts):
    total_years: float = 0.0
    gap_months: int = 0
    job_changes: int = 0
    last_tenure_months: int = 0

    @field_validator("total_years", mode="before")
    @classmethod
    def _coerce_years(cls, v):
        return _non_negative(v)

    @field_validator("gap_months", "job_changes", "last_tenure_months", mode="before")
    @classmethod
    def _coerce_count(cls, v):
        return int(_non_negative(v))


class SelfCheck(_Facts):
    """Five 1-5 self ratings. Missing or malformed ratings default to 3."""
    core_fit: int = 3
    proof_strength: int = 3
    role_clarity: int = 3
    story_consistency: int = 3
    risk_signals: int = 3

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_rating(cls, v):
        if isinstance(v, bool) or v is None:
            return 3
        try:
            n = float(v)
        except (TypeError, ValueError):
            return 3
        if math.isnan(n):
            return 3
        return int(min(5, max(1, round(n))))


class CareerHistoryEntry(_Facts):
    start_date: str = ""
    end_date: str = ""
    months: float | None = None
    industry: str = ""
    employment_type: str = ""

    @field_validator("start_date", "end_date", "industry", "employment_type", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _text(v).strip()

    @field_validator("months", mode="before")
    @classmethod
    def _coerce_months(cls, v):
        if v is None or isinstance(v, bool):
            return None
        try:
            n = float(v)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(n) or math.isinf(n) else max(0.0, n)


class EducationFacts(_Facts):
    level: str = ""  # one of EDUCATION_LEVELS or empty when unknown
    major: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, v):
        level = _text(v).strip().lower()
        return level if level in EDUCATION_LEVELS else ""

    @field_validator("major", mode="before")
    @classmethod
    def _coerce_major(cls, v):
        return _text(v).strip()


class InputFacts(_Facts):
    """Everything the analysis reads. Read-only to the core."""
    jd: str = ""
    resume: str = ""
    portfolio: str = ""
    interview_notes: str = ""
    company: str = ""
    role: str = ""
    applied_at: str = ""
    industry: str = ""
    company_size_candidate: str = ""  # current or last employer
    company_size_target: str = ""
    stage: str = DEFAULT_STAGE
    career: CareerFacts = CareerFacts()
    self_check: SelfCheck = SelfCheck()
    career_history: list[CareerHistoryEntry] | None = None
    education: EducationFacts | None = None

    @field_validator(
        "jd", "resume", "portfolio", "interview_notes", "company", "role", "applied_at",
        "industry", "company_size_candidate", "company_size_target",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, v):
        return _text(v)

    @field_validator("stage", mode="before")
    @classmethod
    def _coerce_stage(cls, v):
        stage = _text(v).strip()
        if not stage:
            return DEFAULT_STAGE
        if stage in STAGES:
            return stage
        return _STAGE_ALIASES.get(stage.lower(), "기타")

    @field_validator("career", "self_check", mode="before")
    @classmethod
    def _coerce_nested(cls, v):
        return v if isinstance(v, (dict, BaseModel)) else {}

    @field_validator("career_history", mode="before")
    @classmethod
    def _coerce_history(cls, v):
        if not isinstance(v, (list, tuple)):
            return None
        return [e for e in v if isinstance(e, (dict, CareerHistoryEntry))]

    @field_validator("education", mode="before")
    @classmethod
    def _coerce_education(cls, v):
        return v if isinstance(v, (dict, EducationFacts)) else None


def ensure_facts(state: Any) -> InputFacts:
    """Return validated InputFacts from a model, a dict, or anything else."""
    if isinstance(state, InputFacts):
        return state
    if isinstance(state, dict):
        return InputFacts.model_validate(state)
    return InputFacts()


def ensure_career(career: Any) -> CareerFacts:
    if isinstance(career, CareerFacts):
        return career
    if isinstance(career, dict):
        return CareerFacts.model_validate(career)
    return CareerFacts()
