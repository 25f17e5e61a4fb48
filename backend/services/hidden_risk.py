"""Hidden risk: what a screener suspects without saying it.

Four proxy risks, each built only from observable signals. A proxy
whose input is missing contributes nothing; it never defaults to risk.
"""

import logging

from models.schemas.hidden_risk import HiddenRisk, HiddenRiskItem, HiddenRiskItems
from models.schemas.hireability import Hireability
from models.schemas.input_facts import CareerFacts
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.resume_signals import ResumeSignals
from models.schemas.structure_analysis import StructureAnalysis
from services.hireability import NEUTRAL
from services.isolation import run_isolated
from services.text_utils import clamp01, score_to_level, uniq

logger = logging.getLogger(__name__)

WEIGHTS = {"retention": 0.35, "domain": 0.25, "scope": 0.2, "culture": 0.2}
FLAG_BUMP = 0.08
STRUCTURE_BASE = 50

DOMAIN_PATH_FLAGS = ("SIZE_DOWNSHIFT_RISK", "SIZE_UPSHIFT_RISK", "INDUSTRY_MISMATCH", "VENDOR_LIMITED_VALUE")

NOTE_HIGH = "리스크 신호가 여러 개 겹쳐 있습니다. drivers를 기준으로 '증거 보강/경로 정렬'부터 정리하는 편이 안전합니다."
NOTE_MID = "일부 리스크 신호가 보입니다. drivers에 해당하는 항목만 보강해도 체감 개선이 나오는 구간입니다."


def _item(score: float, drivers: list[str]) -> HiddenRiskItem:
    s = clamp01(score)
    return HiddenRiskItem(score=s, level=score_to_level(s), drivers=uniq(drivers))


def _fit_term(label: str, fit: float, weight: float, low: float, mid: float, drivers: list[str]) -> float:
    """Risk share of one 0-1 fit value, with a driver when it is weak."""
    if fit < low:
        drivers.append(f"{label} 낮음: {round(fit * 100)}점")
    elif fit < mid:
        drivers.append(f"{label} 보통: {round(fit * 100)}점")
    return (1 - fit) * weight


def retention_risk(career: CareerFacts) -> HiddenRiskItem:
    drivers: list[str] = []
    score = 0.0

    tenure = career.last_tenure_months
    for limit, bump, text in ((6, 0.45, "짧음"), (12, 0.3, "비교적 짧음"), (18, 0.15, "다소 짧은 편")):
        if 0 < tenure <= limit:
            score += bump
            drivers.append(f"최근 근속기간이 {text}: {tenure}개월")
            break

    changes = career.job_changes
    if changes >= 4:
        score += 0.35
        drivers.append(f"이직 횟수 많음: {changes}회")
    elif changes == 3:
        score += 0.25
        drivers.append(f"이직 횟수 다소 많음: {changes}회")
    elif changes == 2:
        score += 0.15
        drivers.append(f"이직 경험 있음: {changes}회")

    gap = career.gap_months
    for minimum, bump, text in ((12, 0.25, "공백 기간 큼"), (6, 0.15, "공백 기간 있음"), (3, 0.08, "공백 기간 단서")):
        if gap >= minimum:
            score += bump
            drivers.append(f"{text}: {gap}개월")
            break

    return _item(score, drivers)


def domain_path_risk(structure: StructureAnalysis) -> HiddenRiskItem:
    """Fit scores still at the neutral base carry no signal and are skipped."""
    drivers: list[str] = []
    score = 0.0
    if structure.resume_industry and structure.jd_industry:
        score += _fit_term(
            "산업/도메인 구조 적합도", structure.industry_structure_fit_score / 100, 0.45, 0.5, 0.7, drivers,
        )
    if structure.company_size_fit_score != STRUCTURE_BASE:
        score += _fit_term(
            "회사 규모/스테이지 적합도", structure.company_size_fit_score / 100, 0.35, 0.5, 0.7, drivers,
        )
    if structure.vendor_experience_score != STRUCTURE_BASE:
        score += _fit_term(
            "벤더/인하우스 경험 적합도", structure.vendor_experience_score / 100, 0.2, 0.5, 0.7, drivers,
        )
    for flag in DOMAIN_PATH_FLAGS:
        if flag in structure.flags:
            score += FLAG_BUMP
            drivers.append(f"구조 플래그 감지: {flag}")
    return _item(score, drivers)


def scope_inflation_risk(resume: ResumeSignals, keyword: KeywordSignals) -> HiddenRiskItem:
    """Claims outrunning evidence: weak proof, numbers without context, unmet must-haves."""
    drivers: list[str] = []
    score = 0.0
    if resume.proof_count_raw > 0:
        score += _fit_term(
            "증거 강도(정성/정량 근거)", clamp01(resume.resume_signal_score), 0.55, 0.45, 0.65, drivers,
        )
        score += _fit_term(
            "성과 문맥이 붙은 수치 비율", clamp01(resume.proof_count / resume.proof_count_raw), 0.35, 0.45, 0.65,
            drivers,
        )
    if keyword.jd_keywords:
        fit = clamp01(keyword.match_score)
        if fit < 0.45:
            drivers.append(f"JD 필수요건 부합 낮음(표현/경험 연결 부족): {round(fit * 100)}점")
        score += (1 - fit) * 0.1
    return _item(score, drivers)


def culture_fit_proxy_risk(hireability: Hireability, structure: StructureAnalysis) -> HiddenRiskItem:
    """Collaboration and ownership proxies only, never personality."""
    drivers: list[str] = []
    score = 0.0
    s = hireability.scores
    if s.execution_coordination_fit_score != NEUTRAL:
        score += _fit_term(
            "협업/조율 신호(프록시)", s.execution_coordination_fit_score / 100, 0.55, 0.45, 0.65, drivers,
        )
    if structure.ownership_hits or structure.ownership_level_score != NEUTRAL:
        score += _fit_term("오너십/주도성 신호(프록시)", structure.ownership_level_score / 100, 0.45, 0.45, 0.65, drivers)
    if s.org_complexity_fit_score < 50:
        score += FLAG_BUMP
        drivers.append("조직 복잡도 차이가 큼(프록시)")
    return _item(score, drivers)


def compute_hidden_risk(
    career: CareerFacts,
    structure: StructureAnalysis,
    hireability: Hireability,
    resume: ResumeSignals,
    keyword: KeywordSignals,
) -> HiddenRisk:
    """Each proxy is isolated; one that fails is logged and reads as zero."""
    builders = (
        ("retention_risk", lambda: retention_risk(career)),
        ("domain_path_risk", lambda: domain_path_risk(structure)),
        ("scope_inflation_risk", lambda: scope_inflation_risk(resume, keyword)),
        ("culture_fit_proxy_risk", lambda: culture_fit_proxy_risk(hireability, structure)),
    )
    items = HiddenRiskItems(**dict(run_isolated(builders, lambda b: (b[0], b[1]()))))

    overall = clamp01(
        items.retention_risk.score * WEIGHTS["retention"]
        + items.domain_path_risk.score * WEIGHTS["domain"]
        + items.scope_inflation_risk.score * WEIGHTS["scope"]
        + items.culture_fit_proxy_risk.score * WEIGHTS["culture"]
    )
    notes = []
    if overall >= 0.67:
        notes.append(NOTE_HIGH)
    elif overall >= 0.34:
        notes.append(NOTE_MID)
    logger.debug("Hidden risk overall=%.2f", overall)
    return HiddenRisk(overall_score=overall, items=items, notes=notes)
