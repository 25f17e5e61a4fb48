"""Impact evidence profiles: numbers, result verbs and process-only writing."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, evidence_notes, flag_profile

GROUP = "impactEvidence"


def _explain_quantified(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="정량 성과 부재 리스크",
        why=[
            "%, 금액, 규모, 기간 같은 숫자 근거가 거의 없습니다.",
            "숫자가 없으면 성과의 크기를 비교할 수 없어 평가가 보수적으로 바뀝니다.",
        ],
        fix=[
            "핵심 bullet 3개에 Before/After 수치를 붙이세요.",
            "정확한 수치가 없다면 범위나 규모(건수, 인원, 기간)라도 명시하세요.",
        ],
        evidence_keys=["numbers_count"],
        notes=[f"수치 표현 수: {ctx.metrics.numbers_count}"],
    )


def _explain_impact_verbs(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="성과 동사 부족 리스크",
        why=["개선/증가/절감/최적화 같은 변화 동사가 약해 무엇이 좋아졌는지 보이지 않습니다."],
        fix=[
            "각 bullet을 '무엇을 했다'가 아니라 '무엇이 어떻게 바뀌었다'로 끝내세요.",
            "동사 하나당 바뀐 대상(지표/프로세스/고객)을 반드시 붙이세요.",
        ],
        evidence_keys=["impact_verb_count", "impact_verb_hits"],
        notes=[f"성과 동사 수: {ctx.metrics.impact_verb_count}"],
    )


def _explain_process_only(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title=f"결과 신호 부족 리스크: {flag.title}",
        why=[
            "진행/수행/관리 같은 프로세스 표현은 있는데 결과(변화)가 무엇인지 보이지 않습니다.",
            "결과 신호가 없으면 성과가 없는 업무로 오해될 수 있습니다.",
        ],
        fix=[
            "각 bullet 끝에 결과 한 줄을 붙이세요. 수치가 없으면 Before/After라도 쓰세요.",
            "프로세스를 쓰려면 왜 했는지(문제)와 결과(변화)를 같이 적으세요.",
            "정량화가 어렵다면 품질/리스크/속도 같은 대체 지표를 정의하세요.",
        ],
        evidence_keys=["numbers_count", "impact_verb_count"],
        notes=evidence_notes(flag),
    )


PROFILES = (
    flag_profile("IMPACT__NO_QUANTIFIED_IMPACT", GROUP, 90, "NO_QUANTIFIED_IMPACT", _explain_quantified),
    flag_profile("IMPACT__LOW_IMPACT_VERBS", GROUP, 88, "LOW_IMPACT_VERB_PATTERN", _explain_impact_verbs),
    flag_profile("IMPACT__PROCESS_ONLY", GROUP, 80, "PROCESS_ONLY_PATTERN", _explain_process_only),
)
