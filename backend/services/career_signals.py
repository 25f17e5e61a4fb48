"""Career-fact risk and experience-level fit against the JD."""

import re

from models.schemas.career_signals import CareerSignals, ExperiencePolicy, RequiredYears
from models.schemas.input_facts import CareerFacts, ensure_career
from services.text_utils import clamp01

# First match wins, in this order
_POLICY_RULES: tuple[tuple[ExperiencePolicy, re.Pattern], ...] = (
    ("newgrad", re.compile(r"(신입|인턴|new grad|newgrad)", re.IGNORECASE)),
    ("any", re.compile(r"(경력\s*무관|무관|경력무관|experience\s*not\s*required)", re.IGNORECASE)),
    ("experienced", re.compile(r"(경력|experienced|years? of experience)", re.IGNORECASE)),
)

_RANGE_YEARS_RE = re.compile(r"(\d+)\s*[-~]\s*(\d+)\s*년")
_MIN_YEARS_KO_RE = re.compile(r"(\d+)\s*년\s*(이상|\+|\s*plus)?", re.IGNORECASE)
_MIN_YEARS_EN_RE = re.compile(r"(\d+)\s*\+\s*years?", re.IGNORECASE)
_ZERO_YEARS_RE = re.compile(r"(^|[^0-9])0\s*년")

# (threshold, contribution), checked top-down; one contribution per factor
GAP_RISK_STEPS: tuple[tuple[int, float], ...] = ((12, 0.4), (6, 0.32), (3, 0.2))
TENURE_RISK_STEPS: tuple[tuple[int, float], ...] = ((6, 0.3), (12, 0.18))
CHANGE_RISK_STEPS: tuple[tuple[int, float], ...] = ((5, 0.25), (3, 0.15))

UNKNOWN_LEVEL_SCORE = 0.6
RELAXED_LEVEL_SCORE = 0.7
EXCESS_YEARS_CAP = 12


def parse_experience_policy(jd: str) -> ExperiencePolicy:
    text = (jd or "").lower()
    for policy, pattern in _POLICY_RULES:
        if pattern.search(text):
            return policy
    return "unknown"


def parse_required_years(jd: str) -> RequiredYears | None:
    """Extract {min, max} years from "3~5년", "3년 이상", "5+ years" or "0년"."""
    text = jd or ""

    m = _RANGE_YEARS_RE.search(text)
    if m:
        a, b = int(m.group(1)), int(m.group(2))
        return RequiredYears(min=min(a, b), max=max(a, b))

    m = _MIN_YEARS_KO_RE.search(text)
    if m:
        return RequiredYears(min=int(m.group(1)))

    m = _MIN_YEARS_EN_RE.search(text)
    if m:
        return RequiredYears(min=int(m.group(1)))

    if _ZERO_YEARS_RE.search(text):
        return RequiredYears(min=0, max=0)
    return None


def career_risk_score(career: CareerFacts) -> float:
    """Additive risk from gap, short last tenure and job changes, clamped to 1."""
    risk = 0.0
    for threshold, contribution in GAP_RISK_STEPS:
        if career.gap_months >= threshold:
            risk += contribution
            break
    if career.last_tenure_months > 0:
        for threshold, contribution in TENURE_RISK_STEPS:
            if career.last_tenure_months <= threshold:
                risk += contribution
                break
    for threshold, contribution in CHANGE_RISK_STEPS:
        if career.job_changes >= threshold:
            risk += contribution
            break
    return clamp01(risk)


def build_career_signals(career: CareerFacts | dict, jd: str) -> CareerSignals:
    career = ensure_career(career)
    jd = jd if isinstance(jd, str) else ""
    policy = parse_experience_policy(jd)
    required = parse_required_years(jd)

    level = UNKNOWN_LEVEL_SCORE
    gap: float | None = None
    if policy in ("newgrad", "any"):
        # Years are deliberately under-weighted for entry-level postings
        level = RELAXED_LEVEL_SCORE
    elif required is not None:
        gap = career.total_years - required.min
        if gap < 0:
            level = clamp01(0.55 + gap * 0.1)
        else:
            level = clamp01(0.62 - min(gap, EXCESS_YEARS_CAP) * 0.02)

    return CareerSignals(
        experience_policy=policy,
        required_years=required,
        experience_gap=gap,
        career_risk_score=career_risk_score(career),
        experience_level_score=level,
    )
