"""Stage risk (document screen vs interview) and the hiring pressure view."""

from models.schemas.hireability import Hireability
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.risk_layer import PressureLayer, RiskLayer, StageRisk
from models.schemas.structure_analysis import StructureAnalysis
from services.hireability import NEUTRAL
from services.signals import SignalBundle
from services.text_utils import clamp01, uniq

LOW_MATCH_RATE = 0.55
MISSING_MUST_HAVE_STEP = 10
MISSING_MUST_HAVE_CAP = 30
WEAK_FIT_SCORE = 50
INTERVIEW_BUMP = 10
INTERVIEW_BUMP_CAP = 25

DOCUMENT_DATA_POOR = "근거 데이터 부족(요건 리스트/이력서 bullet 권장)"
INTERVIEW_DATA_POOR = "근거 데이터 부족(책임/오너십/의사결정 입력 권장)"


def risk_level(score: int) -> str:
    if score >= 70:
        return "HIGH"
    if score >= 40:
        return "MEDIUM"
    return "LOW"


def _stage_risk(raw: float, drivers: list[str]) -> StageRisk:
    score = int(min(100, max(0, round(raw))))
    return StageRisk(score=score, level=risk_level(score), drivers=uniq(drivers))


def build_document_risk(keyword: KeywordSignals) -> StageRisk:
    """Inverse match rate plus a bump per missing must-have.

    A JD without dictionary keywords gives no match rate; the base then
    stays neutral instead of reading as a total mismatch.
    """
    drivers: list[str] = []
    match_rate = clamp01(keyword.match_score) if keyword.jd_keywords else None
    base = float(NEUTRAL) if match_rate is None else (1 - match_rate) * 100
    if match_rate is not None and match_rate < LOW_MATCH_RATE:
        drivers.append("JD 핵심요건 매칭률이 낮음")

    adjust = 0
    if keyword.missing_critical:
        adjust = min(MISSING_MUST_HAVE_CAP, len(keyword.missing_critical) * MISSING_MUST_HAVE_STEP)
        drivers.append("필수요건 누락 가능성")

    if match_rate is None and not drivers:
        drivers.append(DOCUMENT_DATA_POOR)
    return _stage_risk(base + adjust, drivers)


def build_interview_risk(hireability: Hireability) -> StageRisk:
    """Inverse hireability, bumped when the top three level signals are weak."""
    s = hireability.scores
    adjust = 0
    for value in (s.responsibility_level_fit_score, s.ownership_level_score, s.decision_exposure_score):
        if value < WEAK_FIT_SCORE:
            adjust = min(INTERVIEW_BUMP_CAP, adjust + INTERVIEW_BUMP)

    drivers: list[str] = []
    if s.responsibility_level_fit_score < WEAK_FIT_SCORE:
        drivers.append("책임 레벨이 목표 포지션보다 낮을 가능성")
    if s.ownership_level_score < WEAK_FIT_SCORE:
        drivers.append("프로젝트 오너십/성과 책임 신호가 약함")
    if s.decision_exposure_score < WEAK_FIT_SCORE:
        drivers.append("의사결정에 가까운 경험 근거가 약함")
    if s.impact_scale_fit_score < WEAK_FIT_SCORE:
        drivers.append("다뤄본 임팩트 규모가 목표 대비 작을 가능성")
    if s.execution_coordination_fit_score < WEAK_FIT_SCORE:
        drivers.append("실행형→조정형 전환 리스크")
    if not drivers:
        drivers.append(INTERVIEW_DATA_POOR)

    return _stage_risk(100 - hireability.score + adjust, drivers)


def build_risk_layer(keyword: KeywordSignals, hireability: Hireability) -> RiskLayer:
    return RiskLayer(
        document_risk=build_document_risk(keyword),
        interview_risk=build_interview_risk(hireability),
    )


def _rating01(rating: int) -> float:
    return clamp01((rating - 1) / 4)


def build_pressure_layer(signals: SignalBundle, structure: StructureAnalysis) -> PressureLayer:
    ownership = clamp01(structure.ownership_level_score / 100)
    kw = clamp01(signals.keyword.match_score)
    proof = clamp01(signals.resume.resume_signal_score)
    exp = clamp01(signals.career.experience_level_score)
    career_risk = clamp01(signals.career.career_risk_score)
    objective = clamp01(signals.objective.score)
    sc = signals.facts.self_check

    gap = signals.career.experience_gap or 0.0
    exp_short = clamp01(abs(gap) / 5) if gap < 0 else 0.0

    differentiation = clamp01(0.45 * ownership + 0.3 * proof + 0.25 * kw)
    promotion = clamp01(0.5 * exp + 0.35 * ownership + 0.15 * kw)
    if gap < 0:
        promotion = clamp01(promotion - 0.15 * exp_short)

    return PressureLayer(
        replaceability_risk=clamp01((1 - differentiation) * 0.65 + career_risk * 0.2 + (1 - objective) * 0.15),
        differentiation_level=differentiation,
        internal_competition_risk=clamp01(
            (1 - kw) * 0.35 + (1 - proof) * 0.25 + (1 - ownership) * 0.25 + exp_short * 0.15
        ),
        narrative_coherence=clamp01(
            0.55 * _rating01(sc.story_consistency) + 0.35 * _rating01(sc.role_clarity) + (1 - career_risk) * 0.1
        ),
        promotion_feasibility=promotion,
    )
