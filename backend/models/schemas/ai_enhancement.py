"""Advisory output of the optional AI enhancement call."""

import math

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

MAX_CONFIDENCE_DELTA = 0.15

ROLE_TYPES = ("execution", "coordination")
BUSINESS_MODELS = ("platform", "manufacturing", "marketplace", "inventory", "saas", "subscription", "ads")
REPORTING_LINES = ("teamlead", "director", "cxo", "ceo")
ORG_COMPLEXITIES = ("low", "mid", "high")


def _finite(v) -> float | None:
    if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
        return None
    return float(v)


def _enum(v, allowed: tuple[str, ...]) -> str:
    s = v.strip().lower() if isinstance(v, str) else ""
    return s if s in allowed else "unknown"


class ImpactScale(BaseModel):
    """Scale of the largest work handled. Any field may be unknown."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    revenue: float | None = None
    users: float | None = None
    project_size: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _number(cls, v):
        return _finite(v)


class FitExtract(BaseModel):
    """Level and context facts the model extracted, never judged.

    Unknown values stay None or "unknown" so the hireability layer can
    treat them as neutral.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    candidate_responsibility_level: int | None = None  # 0-4
    target_responsibility_level: int | None = None
    candidate_decision_exposure_level: int | None = None
    candidate_role_type: str = "unknown"
    target_role_type: str = "unknown"
    candidate_business_model: str = "unknown"
    target_business_model: str = "unknown"
    candidate_reporting_line: str = "unknown"
    target_reporting_line: str = "unknown"
    candidate_org_complexity: str = "unknown"
    target_org_complexity: str = "unknown"
    candidate_impact: ImpactScale = ImpactScale()
    target_impact: ImpactScale = ImpactScale()
    career_shift_risk: str = "unknown"  # low / high
    no_clear_bridge_experience: bool | None = None

    @field_validator(
        "candidate_responsibility_level", "target_responsibility_level", "candidate_decision_exposure_level",
        mode="before",
    )
    @classmethod
    def _level(cls, v):
        n = _finite(v)
        return None if n is None else int(min(4, max(0, round(n))))

    @field_validator("candidate_role_type", "target_role_type", mode="before")
    @classmethod
    def _role_type(cls, v):
        return _enum(v, ROLE_TYPES)

    @field_validator("candidate_business_model", "target_business_model", mode="before")
    @classmethod
    def _business_model(cls, v):
        return _enum(v, BUSINESS_MODELS)

    @field_validator("candidate_reporting_line", "target_reporting_line", mode="before")
    @classmethod
    def _reporting_line(cls, v):
        return _enum(v, REPORTING_LINES)

    @field_validator("candidate_org_complexity", "target_org_complexity", mode="before")
    @classmethod
    def _org_complexity(cls, v):
        return _enum(v, ORG_COMPLEXITIES)

    @field_validator("candidate_impact", "target_impact", mode="before")
    @classmethod
    def _impact(cls, v):
        return v if isinstance(v, (dict, ImpactScale)) else {}

    @field_validator("career_shift_risk", mode="before")
    @classmethod
    def _shift_risk(cls, v):
        return _enum(v, ("low", "high"))

    @field_validator("no_clear_bridge_experience", mode="before")
    @classmethod
    def _bridge(cls, v):
        if isinstance(v, bool):
            return v
        if isinstance(v, str) and v.strip().lower() in ("true", "false"):
            return v.strip().lower() == "true"
        return None


class SuggestedBullet(BaseModel):
    before: str = ""
    after: str = ""
    why: str = ""


class ConflictNote(BaseModel):
    type: str = ""
    evidence: str = ""
    explanation: str = ""
    fix: str = ""


class AIEnhancement(BaseModel):
    """Model output is camelCase JSON; snake_case is accepted too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    jd_must_have: list[str] = []
    jd_nice_to_have: list[str] = []
    resume_skill_tags: list[str] = []
    confidence_delta_by_hypothesis: dict[str, float] = {}
    keyword_synonyms: dict[str, list[str]] = {}
    required_major_hints: list[str] = []
    candidate_major: str = ""
    detected_company: str = ""
    detected_role: str = ""
    detected_industry: str = ""
    detected_company_size_candidate: str = ""
    detected_company_size_target: str = ""
    fit_extract: FitExtract = FitExtract()
    suggested_bullets: list[SuggestedBullet] = []
    conflicts: list[ConflictNote] = []

    @field_validator("jd_must_have", "jd_nice_to_have", "resume_skill_tags", "required_major_hints", mode="before")
    @classmethod
    def _lower_list(cls, v):
        if not isinstance(v, list):
            return []
        return [s.strip().lower() for s in v if isinstance(s, str) and s.strip()]

    @field_validator("confidence_delta_by_hypothesis", mode="before")
    @classmethod
    def _clamp_deltas(cls, v):
        if not isinstance(v, dict):
            return {}
        out = {}
        for key, delta in v.items():
            n = _finite(delta)
            if n is None:
                continue
            out[str(key)] = max(-MAX_CONFIDENCE_DELTA, min(MAX_CONFIDENCE_DELTA, n))
        return out

    @field_validator("keyword_synonyms", mode="before")
    @classmethod
    def _lower_synonyms(cls, v):
        if not isinstance(v, dict):
            return {}
        out = {}
        for key, syns in v.items():
            if not isinstance(syns, list):
                continue
            out[str(key).strip().lower()] = [
                s.strip().lower() for s in syns if isinstance(s, str) and s.strip()
            ]
        return out

    @field_validator(
        "candidate_major", "detected_company", "detected_role", "detected_industry",
        "detected_company_size_candidate", "detected_company_size_target",
        mode="before",
    )
    @classmethod
    def _text(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator("suggested_bullets", "conflicts", mode="before")
    @classmethod
    def _dict_items(cls, v):
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]

    @field_validator("fit_extract", mode="before")
    @classmethod
    def _fit(cls, v):
        return v if isinstance(v, (dict, FitExtract)) else {}
