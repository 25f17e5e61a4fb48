"""Language register profiles: confidence, assertion strength, voice, hedging."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, RiskProfile, evidence_notes, flag_profile, pct
from services.structural.bank import flag_sort_key

GROUP = "languageSignals"

LOW_CONFIDENCE_PATTERNS = ("LOW_CONFIDENCE_LANGUAGE_PATTERN", "RESPONSIBILITY_AVOIDANCE_PATTERN")


def _confidence_flags(ctx: RiskContext) -> list[Flag]:
    found = (ctx.signal(pid) for pid in LOW_CONFIDENCE_PATTERNS)
    return sorted((f for f in found if f is not None), key=flag_sort_key)


def _explain_low_confidence(ctx: RiskContext) -> RiskExplain:
    flags = _confidence_flags(ctx)
    top = flags[0] if flags else None
    m = ctx.metrics
    return RiskExplain(
        title=f"책임/자신감 신호 리스크: {top.title}" if top else "책임/자신감 신호 리스크",
        why=[
            "근거 없는 다짐이나 '상황상', '어쩔 수 없이' 같은 거리두기 표현은 오너십 신뢰를 떨어뜨립니다.",
            "채용팀은 문제 상황에서도 내가 통제한 범위와 결정을 보고 싶어합니다.",
        ],
        fix=[
            "문장을 환경 탓이 아니라 내 통제 범위/결정/대응으로 바꾸세요.",
            "템플릿: '제 통제 범위는 [X]였고, 그 안에서 [결정/행동]을 했으며, 결과가 [Y]였습니다.'",
            "'열심히 하겠습니다' 대신 이미 해낸 일 하나를 근거로 제시하세요.",
        ],
        evidence_keys=["low_confidence_count", "responsibility_avoidance_count"],
        notes=[
            f"다짐/저자신감 표현 수: {m.low_confidence_count}",
            f"책임 회피 표현 수: {m.responsibility_avoidance_count}",
            *(e for f in flags for e in evidence_notes(f, 2)),
        ],
    )


LOW_CONFIDENCE_LANGUAGE = RiskProfile(
    id="LOW_CONFIDENCE_LANGUAGE_RISK",
    group=GROUP,
    layer="hireability",
    priority=84,
    when=lambda ctx: bool(_confidence_flags(ctx)),
    score=lambda ctx: max((f.score for f in _confidence_flags(ctx)), default=0.0),
    explain=_explain_low_confidence,
)


def _explain_weak_assertion(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title=f"약한 주장 리스크: {flag.title}",
        why=[
            f"'기여/도움/노력' 같은 약한 주장 문장 비중이 높습니다. ({pct(ctx.metrics.weak_assertion_ratio)})",
            "본인이 정확히 무엇을 했는지가 팀 성과 뒤에 가려집니다.",
        ],
        fix=[
            "'기여했다'를 '내가 맡은 부분 + 그 결과'로 쪼개서 쓰세요.",
            "팀 성과라면 팀 규모와 본인 담당 범위를 함께 명시하세요.",
        ],
        evidence_keys=["weak_assertion_count", "weak_assertion_ratio", "sentence_count"],
        notes=evidence_notes(flag),
    )


def _explain_passive(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title=f"피동 표현 과다 리스크: {flag.title}",
        why=[
            f"수동/피동 문장 비중이 높습니다. ({pct(ctx.metrics.passive_voice_ratio)})",
            "누가 결정하고 실행했는지 주체가 흐려져 평가가 보수적으로 바뀝니다.",
        ],
        fix=[
            "각 문장을 '주체 + 행동동사 + 대상 + 결과' 구조로 바꾸세요.",
            "예: '~이 진행되었습니다' 대신 '제가 ~을 진행했고 ~을 달성했습니다'",
        ],
        evidence_keys=["passive_voice_count", "passive_voice_ratio", "sentence_count"],
        notes=evidence_notes(flag),
    )


def _explain_hedge(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="완곡 표현 반복 리스크",
        why=["'~것 같습니다', '아마', '어느 정도' 같은 표현이 반복돼 확신이 없어 보입니다."],
        fix=["사실은 단정형으로 쓰고, 불확실한 부분은 근거와 함께 범위를 명시하세요."],
        evidence_keys=["hedge_count", "token_count"],
        notes=[f"완곡 표현 수: {ctx.metrics.hedge_count}", *evidence_notes(flag)],
    )


PROFILES = (
    LOW_CONFIDENCE_LANGUAGE,
    flag_profile("WEAK_ASSERTION_RISK", GROUP, 66, "WEAK_ASSERTION_PATTERN", _explain_weak_assertion),
    flag_profile("PASSIVE_VOICE_OVERUSE_RISK", GROUP, 58, "PASSIVE_VOICE_OVERUSE_PATTERN", _explain_passive),
    flag_profile("HEDGE_LANGUAGE_RISK", GROUP, 52, "HEDGE_LANGUAGE_DOMINANCE", _explain_hedge),
)
