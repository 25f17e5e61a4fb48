import pytest

from models.schemas.ai_enhancement import AIEnhancement, FitExtract, ImpactScale
from models.schemas.hireability import HireabilityScores
from models.schemas.resume_signals import ResumeSignals
from models.schemas.structure_analysis import StructureAnalysis
from services.hireability import (
    NEUTRAL,
    WEIGHTS,
    build_hireability,
    business_model_fit,
    career_consistency_score,
    execution_coordination_risk,
    impact_scale_fit,
    org_complexity_fit,
    reporting_line_fit,
    responsibility_level_fit,
    weighted_score,
)

FIT_PAYLOAD = {
    "fitExtract": {
        "candidateResponsibilityLevel": 3,
        "targetResponsibilityLevel": 3,
        "candidateDecisionExposureLevel": 2,
        "candidateRoleType": "execution",
        "targetRoleType": "coordination",
        "candidateBusinessModel": "SaaS",
        "targetBusinessModel": "subscription",
        "candidateImpact": {"revenue": 50, "users": 1000},
        "targetImpact": {"revenue": 100, "users": 1000},
        "careerShiftRisk": "high",
    }
}


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


def test_without_ai_everything_extracted_is_neutral():
    h = build_hireability(None, StructureAnalysis(), ResumeSignals())
    s = h.scores
    assert s.responsibility_level_fit_score == NEUTRAL
    assert s.decision_exposure_score == NEUTRAL
    assert s.impact_scale_fit_score == NEUTRAL
    assert s.career_consistency_score == NEUTRAL
    assert s.signal_strength_score == 35
    assert h.labels.responsibility_level_fit == "UNKNOWN"
    assert h.labels.execution_coordination_risk == "MEDIUM"
    # 55 * .74 + 50 * .20 + 35 * .06
    assert h.score == 53
    assert h.weights == WEIGHTS


def test_fit_extract_drives_scores():
    ai = AIEnhancement.model_validate(FIT_PAYLOAD)
    h = build_hireability(ai, StructureAnalysis(ownership_level_score=85), ResumeSignals(resume_signal_score=0.8))
    s = h.scores
    assert s.responsibility_level_fit_score == 90
    assert s.decision_exposure_score == 50
    assert s.execution_coordination_fit_score == 30
    assert s.business_model_fit_score == 65
    assert s.impact_scale_fit_score == 70
    assert s.career_consistency_score == 35
    assert s.ownership_level_score == 85
    assert s.signal_strength_score == 80
    assert h.labels.responsibility_level_fit == "HIGH"
    assert h.labels.execution_coordination_risk == "HIGH"
    assert h.score == weighted_score(s)


@pytest.mark.parametrize(
    "candidate, target, expected",
    [(3, 3, "HIGH"), (4, 2, "HIGH"), (2, 3, "MEDIUM"), (1, 3, "LOW"), (None, 3, "UNKNOWN"), (2, None, "UNKNOWN")],
)
def test_responsibility_level_fit(candidate, target, expected):
    assert responsibility_level_fit(candidate, target) == expected


@pytest.mark.parametrize(
    "candidate, target, expected",
    [(100, 100, 90), (60, 100, 70), (20, 100, 45), (19, 100, 25), (5, 0, NEUTRAL), (None, 100, NEUTRAL)],
)
def test_impact_scale_steps(candidate, target, expected):
    assert impact_scale_fit(ImpactScale(revenue=candidate), ImpactScale(revenue=target)) == expected


def test_impact_scale_uses_most_conservative_ratio():
    candidate = ImpactScale(revenue=200, users=10)
    target = ImpactScale(revenue=100, users=100)
    assert impact_scale_fit(candidate, target) == 25


def test_business_model_fit():
    assert business_model_fit("saas", "saas") == 85
    assert business_model_fit("marketplace", "platform") == 65
    assert business_model_fit("ads", "manufacturing") == 35
    assert business_model_fit("unknown", "saas") == NEUTRAL


def test_rank_fits():
    assert [reporting_line_fit("teamlead", t) for t in ("teamlead", "director", "cxo")] == [85, 65, 40]
    assert [org_complexity_fit("low", t) for t in ("low", "mid", "high")] == [80, 60, 40]
    assert reporting_line_fit("unknown", "ceo") == NEUTRAL


def test_execution_coordination_risk():
    assert execution_coordination_risk("execution", "execution") == "LOW"
    assert execution_coordination_risk("coordination", "execution") == "MEDIUM"
    assert execution_coordination_risk("unknown", "coordination") == "MEDIUM"


def test_career_consistency():
    assert career_consistency_score(FitExtract(career_shift_risk="low")) == 70
    assert career_consistency_score(FitExtract(no_clear_bridge_experience=True)) == 35
    assert career_consistency_score(FitExtract(no_clear_bridge_experience=False)) == 70
    assert career_consistency_score(FitExtract()) == NEUTRAL


def test_weighted_score_is_bounded():
    assert weighted_score(HireabilityScores(**{k: 100 for k in HireabilityScores.model_fields})) == 100
    assert weighted_score(HireabilityScores(**{k: 0 for k in HireabilityScores.model_fields})) == 0
