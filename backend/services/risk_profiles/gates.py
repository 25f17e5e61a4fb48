"""Gate profiles: hard requirements that can filter a resume before review."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, RiskProfile, flag_profile
from services.structural.thresholds import THRESHOLDS
from services.text_utils import clamp

GATE_SCORE = 0.95

_LEVEL_LABELS = {
    "highschool": "고졸",
    "associate": "전문학사",
    "bachelor": "학사",
    "master": "석사",
    "phd": "박사",
}


def _has_knockout(ctx: RiskContext) -> bool:
    return ctx.keyword_signals.has_knockout_missing


def _explain_must_have(ctx: RiskContext) -> RiskExplain:
    missing = ctx.keyword_signals.missing_critical
    why = ["JD에 명시된 필수 요건(Must-have) 중 일부가 이력서/경험에서 확인되지 않습니다."]
    if missing:
        why.append(f"확인되지 않은 필수 요건: {', '.join(missing[:8])}")
    return RiskExplain(
        title="필수 요건 미충족",
        why=why,
        fix=[
            "필수 요건에 해당하는 구체적 사례/성과를 이력서 상단에 명확히 기재",
            "실제 경험이 없다면 필수 요건이 맞는 포지션으로 지원 전략을 조정",
        ],
        evidence_keys=["missing_critical", "jd_critical"],
        notes=[f"필수 요건 {len(ctx.keyword_signals.jd_critical)}개 중 누락 {len(missing)}개"],
    )


def _explain_education(ctx: RiskContext, flag: Flag) -> RiskExplain:
    m = ctx.metrics
    candidate = _LEVEL_LABELS.get(m.candidate_education_level, "미확인")
    required = _LEVEL_LABELS.get(m.required_education_level, "미확인")
    return RiskExplain(
        title="학력 Gate 조건 미충족",
        why=[
            "해당 포지션은 최소 학력 조건이 적용되는 직무로 보입니다.",
            "이 경우 서류 검토 이전 단계에서 필터링될 수 있습니다.",
        ],
        fix=[
            "학력 조건이 없는 기업 또는 직무로 전략 수정",
            "경력 기반 직무로 지원 방향 전환",
            "포트폴리오 중심 채용 회사로 타겟 변경",
        ],
        evidence_keys=["candidate_education_level", "required_education_level"],
        notes=[f"지원자 학력(추정): {candidate}", f"요구 학력(추정): {required}"],
    )


def _experience_gap(ctx: RiskContext) -> float | None:
    return ctx.career_signals.experience_gap


def _gap_when(ctx: RiskContext) -> bool:
    gap = _experience_gap(ctx)
    return gap is not None and gap <= -THRESHOLDS["EXPERIENCE_GAP_GATE_YEARS"]


def _gap_score(ctx: RiskContext) -> float:
    gap = _experience_gap(ctx) or 0.0
    shortfall = -gap - THRESHOLDS["EXPERIENCE_GAP_GATE_YEARS"]
    return clamp(0.6 + shortfall * 0.1, 0.6, GATE_SCORE)


def _explain_gap(ctx: RiskContext) -> RiskExplain:
    gap = _experience_gap(ctx) or 0.0
    required = ctx.career_signals.required_years
    notes = [f"경력 차이(총경력-요구최소): {gap:g}년"]
    if required is not None:
        notes.append(f"JD 요구 최소 경력: {required.min:g}년")
    return RiskExplain(
        title="요구 경력 대비 연차 부족",
        why=[
            "JD가 요구하는 최소 경력보다 총 경력이 2년 이상 짧습니다.",
            "연차 조건은 서류 단계에서 기계적으로 걸러지는 경우가 많습니다.",
        ],
        fix=[
            "요구 연차가 낮은 동일 직무 또는 한 단계 낮은 레벨로 지원",
            "인턴/프로젝트/프리랜스 경험을 기간과 함께 경력으로 환산해 명시",
        ],
        evidence_keys=["experience_gap", "required_years"],
        notes=notes,
    )


HARD_MUST_HAVE_MISSING = RiskProfile(
    id="GATE__HARD_MUST_HAVE_MISSING",
    group="gates",
    layer="gate",
    priority=99,
    when=_has_knockout,
    score=lambda ctx: GATE_SCORE,
    explain=_explain_must_have,
)

EDUCATION_GATE = flag_profile(
    "GATE__EDUCATION_GATE_FAIL", "gates", 98, "EDUCATION_GATE_FAIL", _explain_education, layer="gate",
)

EXPERIENCE_GAP_GATE = RiskProfile(
    id="GATE__EXPERIENCE_GAP",
    group="gates",
    layer="gate",
    priority=97,
    when=_gap_when,
    score=_gap_score,
    explain=_explain_gap,
)

PROFILES = (HARD_MUST_HAVE_MISSING, EDUCATION_GATE, EXPERIENCE_GAP_GATE)
