"""Single 0-1 objective fitness estimate from the extracted signals."""

from models.schemas.career_signals import CareerSignals
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.major_signals import MajorSignals
from models.schemas.objective import ObjectiveParts, ObjectiveScore
from models.schemas.resume_signals import ResumeSignals
from services.text_utils import clamp01

BASE_KEYWORD_WEIGHT = 0.35
REST_TOTAL = 0.65
CAREER_WEIGHT = 0.2
PROOF_WEIGHT = 0.25
LEVEL_WEIGHT = 0.2
DEFAULT_RELIABILITY = 0.5

# Applied on top of the match-score knockout penalty in keyword_signals
KNOCKOUT_OBJECTIVE_PENALTY = 0.72


def compose_objective_score(
    keyword: KeywordSignals,
    career: CareerSignals,
    resume: ResumeSignals,
    major: MajorSignals | None = None,
) -> ObjectiveScore:
    reliability = keyword.reliability if keyword.reliability is not None else DEFAULT_RELIABILITY
    kw_weight = BASE_KEYWORD_WEIGHT * (0.75 + 0.25 * reliability)
    rest_scale = (1 - kw_weight) / REST_TOTAL

    score = clamp01(
        kw_weight * keyword.match_score
        + CAREER_WEIGHT * rest_scale * (1 - career.career_risk_score)
        + PROOF_WEIGHT * rest_scale * resume.resume_signal_score
        + LEVEL_WEIGHT * rest_scale * career.experience_level_score
    )
    if keyword.has_knockout_missing:
        score = clamp01(score * KNOCKOUT_OBJECTIVE_PENALTY)

    bonus = major.bonus if major is not None else 0.0
    score = clamp01(score + bonus)

    return ObjectiveScore(
        score=score,
        parts=ObjectiveParts(
            keyword_match=keyword.match_score,
            keyword_weight=kw_weight,
            jd_reliability=reliability,
            rest_scale=rest_scale,
            career_risk=career.career_risk_score,
            proof_score=resume.resume_signal_score,
            experience_level=career.experience_level_score,
            knockout=keyword.has_knockout_missing,
            major_bonus=bonus,
            major_similarity=major.similarity if major is not None else 0.0,
            major_importance=major.importance if major is not None else 0.0,
        ),
    )
