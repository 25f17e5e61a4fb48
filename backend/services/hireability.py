"""Hireability layer: level and context fit between candidate and target.

The AI extract supplies facts only (levels, role types, business
models); this module does the judging. Anything nobody extracted scores
a neutral 55 so missing data never reads as a weakness.
"""

from models.schemas.ai_enhancement import AIEnhancement, FitExtract, ImpactScale
from models.schemas.hireability import Hireability, HireabilityLabels, HireabilityScores
from models.schemas.resume_signals import ResumeSignals
from models.schemas.structure_analysis import StructureAnalysis

NEUTRAL = 55

WEIGHTS: dict[str, float] = {
    "responsibility_level_fit_score": 0.22,
    "ownership_level_score": 0.18,
    "decision_exposure_score": 0.16,
    "industry_fit_score": 0.14,
    "business_model_fit_score": 0.10,
    "execution_coordination_fit_score": 0.08,
    "company_size_fit_score": 0.06,
    "signal_strength_score": 0.06,
}

SIMILAR_BUSINESS_MODELS = frozenset({
    ("saas", "subscription"), ("subscription", "saas"),
    ("marketplace", "platform"), ("platform", "marketplace"),
    ("inventory", "manufacturing"), ("manufacturing", "inventory"),
    ("platform", "ads"), ("ads", "platform"),
})

REPORTING_LINE_RANK = {"teamlead": 1, "director": 2, "cxo": 3, "ceo": 4}
ORG_COMPLEXITY_RANK = {"low": 1, "mid": 2, "high": 3}


def responsibility_level_fit(candidate: int | None, target: int | None) -> str:
    if candidate is None or target is None:
        return "UNKNOWN"
    if candidate >= target:
        return "HIGH"
    if candidate == target - 1:
        return "MEDIUM"
    return "LOW"


def responsibility_fit_score(label: str) -> int:
    return {"HIGH": 90, "MEDIUM": 70, "LOW": 35}.get(label, NEUTRAL)


def execution_coordination_fit(candidate: str, target: str) -> int:
    table = {
        ("execution", "coordination"): 30,
        ("coordination", "coordination"): 80,
        ("execution", "execution"): 75,
        ("coordination", "execution"): 65,
    }
    return table.get((candidate, target), NEUTRAL)


def execution_coordination_risk(candidate: str, target: str) -> str:
    if candidate == "execution" and target == "coordination":
        return "HIGH"
    if candidate == "unknown" or target == "unknown":
        return "MEDIUM"
    return "LOW" if candidate == target else "MEDIUM"


def decision_exposure_score(level: int | None) -> int:
    return NEUTRAL if level is None else round(level / 4 * 100)


def business_model_fit(candidate: str, target: str) -> int:
    if candidate == "unknown" or target == "unknown":
        return NEUTRAL
    if candidate == target:
        return 85
    return 65 if (candidate, target) in SIMILAR_BUSINESS_MODELS else 35


def impact_scale_fit(candidate: ImpactScale, target: ImpactScale) -> int:
    """Judge on the most conservative comparable ratio."""
    ratios = [
        c / t
        for c, t in (
            (candidate.revenue, target.revenue),
            (candidate.users, target.users),
            (candidate.project_size, target.project_size),
        )
        if c is not None and t is not None and t > 0
    ]
    if not ratios:
        return NEUTRAL
    ratio = min(ratios)
    if ratio >= 1.0:
        return 90
    if ratio >= 0.5:
        return 70
    if ratio >= 0.2:
        return 45
    return 25


def _rank_fit(candidate: str, target: str, ranks: dict[str, int], scores: tuple[int, int, int]) -> int:
    if candidate not in ranks or target not in ranks:
        return NEUTRAL
    same, near, far = scores
    diff = abs(ranks[candidate] - ranks[target])
    if diff == 0:
        return same
    return near if diff == 1 else far


def reporting_line_fit(candidate: str, target: str) -> int:
    return _rank_fit(candidate, target, REPORTING_LINE_RANK, (85, 65, 40))


def org_complexity_fit(candidate: str, target: str) -> int:
    return _rank_fit(candidate, target, ORG_COMPLEXITY_RANK, (80, 60, 40))


def career_consistency_score(fit: FitExtract) -> int:
    if fit.career_shift_risk == "high":
        return 35
    if fit.career_shift_risk == "low":
        return 70
    if fit.no_clear_bridge_experience is None:
        return NEUTRAL
    return 35 if fit.no_clear_bridge_experience else 70


def weighted_score(scores: HireabilityScores, weights: dict[str, float] = WEIGHTS) -> int:
    total_weight = sum(weights.values()) or 1.0
    total = sum(w * getattr(scores, key) for key, w in weights.items())
    return int(min(100, max(0, round(total / total_weight))))


def build_hireability(
    ai: AIEnhancement | None, structure: StructureAnalysis, resume: ResumeSignals
) -> Hireability:
    fit = ai.fit_extract if ai is not None else FitExtract()

    resp_label = responsibility_level_fit(fit.candidate_responsibility_level, fit.target_responsibility_level)
    scores = HireabilityScores(
        responsibility_level_fit_score=responsibility_fit_score(resp_label),
        ownership_level_score=structure.ownership_level_score,
        decision_exposure_score=decision_exposure_score(fit.candidate_decision_exposure_level),
        industry_fit_score=structure.industry_structure_fit_score,
        business_model_fit_score=business_model_fit(fit.candidate_business_model, fit.target_business_model),
        execution_coordination_fit_score=execution_coordination_fit(fit.candidate_role_type, fit.target_role_type),
        company_size_fit_score=structure.company_size_fit_score,
        signal_strength_score=int(min(100, max(0, round(resume.resume_signal_score * 100)))),
        impact_scale_fit_score=impact_scale_fit(fit.candidate_impact, fit.target_impact),
        career_consistency_score=career_consistency_score(fit),
        reporting_line_fit_score=reporting_line_fit(fit.candidate_reporting_line, fit.target_reporting_line),
        org_complexity_fit_score=org_complexity_fit(fit.candidate_org_complexity, fit.target_org_complexity),
        vendor_experience_score=structure.vendor_experience_score,
    )
    return Hireability(
        score=weighted_score(scores),
        scores=scores,
        weights=dict(WEIGHTS),
        labels=HireabilityLabels(
            responsibility_level_fit=resp_label,
            execution_coordination_risk=execution_coordination_risk(fit.candidate_role_type, fit.target_role_type),
        ),
    )
