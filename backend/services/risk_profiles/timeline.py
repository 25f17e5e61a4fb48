"""Timeline instability profile over the career-trajectory flags."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, RiskProfile, evidence_notes
from services.structural.bank import flag_sort_key
from services.structural.thresholds import THRESHOLDS
from services.text_utils import clamp01

TIMELINE_PATTERNS = (
    "HIGH_SWITCH_PATTERN",
    "EXTREME_JOB_HOPPING_PATTERN",
    "FREQUENT_INDUSTRY_SWITCH_PATTERN",
)
EXTREME_HOP_WEIGHT = 1.1

_WHY = {
    "HIGH_SWITCH_PATTERN": "평균 재직기간이 짧게 나타납니다(조기 이탈/적응 실패로 해석될 수 있음).",
    "EXTREME_JOB_HOPPING_PATTERN": "최근 경력에서 1년 미만 재직이 반복됩니다(버티지 못함으로 읽힐 가능성).",
    "FREQUENT_INDUSTRY_SWITCH_PATTERN": "산업 변경이 잦습니다(도메인 축적/재현성에 대한 의심이 생길 수 있음).",
}


def _timeline_flags(ctx: RiskContext) -> dict[str, Flag]:
    if not ctx.metrics.has_career_history:
        return {}
    found = {pid: ctx.signal(pid) for pid in TIMELINE_PATTERNS}
    return {pid: f for pid, f in found.items() if f is not None}


def _when(ctx: RiskContext) -> bool:
    return bool(_timeline_flags(ctx))


def _score(ctx: RiskContext) -> float:
    flags = _timeline_flags(ctx)
    if not flags:
        return 0.0

    def s(pid: str) -> float:
        return flags[pid].score if pid in flags else 0.0

    base = max(
        s("HIGH_SWITCH_PATTERN"),
        s("EXTREME_JOB_HOPPING_PATTERN") * EXTREME_HOP_WEIGHT,
        s("FREQUENT_INDUSTRY_SWITCH_PATTERN"),
    )
    avg = ctx.metrics.avg_tenure_months
    bump = 0.0
    if avg is not None:
        if avg < THRESHOLDS["AVG_TENURE_MONTHS_CRITICAL"]:
            bump = 0.12
        elif avg < THRESHOLDS["AVG_TENURE_MONTHS"]:
            bump = 0.06
    return clamp01(base + bump)


def _explain(ctx: RiskContext) -> RiskExplain:
    flags = _timeline_flags(ctx)
    m = ctx.metrics
    top = sorted(flags.values(), key=flag_sort_key)[0] if flags else None

    notes = []
    if m.avg_tenure_months is not None:
        notes.append(f"평균 재직기간(월): {round(m.avg_tenure_months, 1)}")
    if m.extreme_job_hopping is not None:
        hop = m.extreme_job_hopping
        notes.append(f"최근 {hop.considered}개 중 1년 미만: {hop.short_count}개")
    notes.append(f"산업 변경 횟수(추정): {m.industry_switches}")
    notes.extend(evidence_notes(top))

    return RiskExplain(
        title=f"커리어 타임라인 리스크: {top.title}" if top else "커리어 타임라인 리스크",
        why=[_WHY[pid] for pid in TIMELINE_PATTERNS if pid in flags]
        or ["커리어 타임라인에서 안정성 신호가 약하게 감지됩니다."],
        fix=[
            "이직 사유를 '환경'이 아니라 '역할/성과' 관점의 2문장(문제, 내가 한 일, 성과)으로 정리하세요.",
            "최근 1~2개 경력은 떠난 이유보다 남긴 결과물/지표를 먼저 제시하세요.",
            "산업 전환이 있다면 이전 도메인 역량이 그대로 재현되는 근거(툴/프로세스/지표) 3개를 고정하세요.",
        ],
        evidence_keys=["avg_tenure_months", "extreme_job_hopping", "industry_switches", "has_career_history"],
        notes=notes,
    )


TIMELINE_INSTABILITY = RiskProfile(
    id="TIMELINE_INSTABILITY_RISK",
    group="timeline",
    layer="hireability",
    priority=85,
    when=_when,
    score=_score,
    explain=_explain,
)

PROFILES = (TIMELINE_INSTABILITY,)
