"""Structural pattern bank contracts: metrics, flags and summary."""

from typing import Literal

from pydantic import BaseModel

Severity = Literal["low", "mid", "high", "critical"]


class Flag(BaseModel):
    """A single detector hit."""
    id: str
    title: str
    category: str
    severity: Severity
    score: float  # 0.0-1.0
    evidence: list[str] = []  # at most 6 snippets
    detail: dict = {}


class PatternDefinition(BaseModel):
    id: str
    title: str
    category: str
    severity: Severity  # default severity, detectors may escalate


class ExtremeJobHopping(BaseModel):
    short_count: int = 0
    considered: int = 0


class StructuralMetrics(BaseModel):
    """Canonical flat metrics schema shared by detectors and risk profiles.

    Ratios are in [0, 1] or None when they cannot be computed.
    Counts are non-negative ints.
    """
    # lengths
    jd_length: int = 0
    resume_length: int = 0
    portfolio_length: int = 0
    combined_length: int = 0
    token_count: int = 0

    semantic_similarity: float = 0.0

    # evidence and ownership
    numbers_count: int = 0
    ownership_weak_count: int = 0
    ownership_strong_count: int = 0
    ownership_ratio: float | None = None
    impact_verb_count: int = 0
    impact_verb_hits: list[str] = []
    decision_authority_count: int = 0
    decision_authority_hits: list[str] = []
    project_initiation_count: int = 0
    project_initiation_hits: list[str] = []
    team_count: int = 0
    solo_count: int = 0
    vendor_signal_count: int = 0

    # language register
    hedge_count: int = 0
    low_confidence_count: int = 0
    responsibility_avoidance_count: int = 0
    buzzword_count: int = 0
    vague_count: int = 0
    generic_self_intro_hits: list[str] = []
    sentence_count: int = 0
    passive_voice_count: int = 0
    passive_voice_ratio: float | None = None
    weak_assertion_count: int = 0
    weak_assertion_ratio: float | None = None

    # JD requirements
    required_lines: list[str] = []
    required_skills: list[str] = []
    required_covered: list[str] = []
    required_missing: list[str] = []
    required_coverage: float | None = None

    # specificity
    company_name_candidates: list[str] = []
    company_mentioned: bool | None = None
    role_candidates: list[str] = []
    role_mentioned: bool | None = None

    # timeline (only when career history is provided)
    has_career_history: bool = False
    avg_tenure_months: float | None = None
    extreme_job_hopping: ExtremeJobHopping | None = None
    industry_switches: int = 0
    intern_months: float = 0.0
    fulltime_months: float = 0.0
    total_history_months: float = 0.0

    # education gate
    candidate_education_level: str = ""
    required_education_level: str = ""
    education_gate_fail: bool | None = None


class StructuralSummary(BaseModel):
    total_flags: int = 0
    by_severity: dict[str, int] = {}
    metrics: dict = {}


class StructuralResult(BaseModel):
    flags: list[Flag] = []
    metrics: StructuralMetrics = StructuralMetrics()
    summary: StructuralSummary = StructuralSummary()
