"""Ownership and leadership profiles."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, evidence_notes, flag_profile, pct
from services.structural.thresholds import THRESHOLDS

GROUP = "ownershipLeadership"


def _explain_initiation(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title=f"프로젝트 Initiation 리스크: {flag.title}",
        why=[
            "이력서에서 '내가 시작한 프로젝트'나 '내가 만든 변화' 신호가 거의 보이지 않습니다.",
            "채용자는 주어진 일을 수행한 사람보다 문제를 정의하고 시작한 사람을 선호합니다.",
        ],
        fix=[
            "각 프로젝트마다 '누가 시작했는가'를 명확히 쓰세요.",
            "예: '요청을 받아 진행' 대신 '문제 발견 후 개선 프로젝트 시작'",
            "내가 먼저 제안한 일을 최소 1개 이상 명시하세요.",
        ],
        evidence_keys=["project_initiation_count", "project_initiation_hits"],
        notes=[f"제안/런칭 신호 수: {ctx.metrics.project_initiation_count}"],
    )


def _explain_ratio(ctx: RiskContext, flag: Flag) -> RiskExplain:
    m = ctx.metrics
    why = ["이력서 문장이 '내가 결정/주도했다'보다 '참여/지원/보조했다'로 읽힐 가능성이 큽니다."]
    if m.ownership_ratio is not None:
        why.append(
            f"오너십 강동사 비율이 낮습니다. (strong {m.ownership_strong_count}, "
            f"weak {m.ownership_weak_count}, ratio {pct(m.ownership_ratio)})"
        )
        why.append(
            f"기준: strong ≥ {THRESHOLDS['OWNERSHIP_STRONG_MIN']}, "
            f"ratio ≥ {pct(THRESHOLDS['OWNERSHIP_RATIO_LOW'])}"
        )
    return RiskExplain(
        title=f"오너십 리스크: {flag.title}",
        why=why,
        fix=[
            "각 bullet을 '내가 결정한 것 / 내가 책임진 범위 / 내가 만든 결과' 구조로 다시 쓰세요.",
            "'지원/협업'은 지우지 말고 문장 앞을 '주도/설계/정의'로 바꾼 뒤 협업을 덧붙이세요.",
            "내가 무엇의 오너였는지(지표/모듈/프로세스/예산)를 명사로 고정해 반복 노출하세요.",
        ],
        evidence_keys=["ownership_strong_count", "ownership_weak_count", "ownership_ratio"],
        notes=evidence_notes(flag),
    )


def _explain_decision(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title=f"의사결정 권한 리스크: {flag.title}",
        why=[
            "무엇을 판단했고 어떤 선택을 했는지가 이력서에서 드러나지 않습니다.",
            "시니어로 갈수록 실행보다 판단의 근거를 먼저 봅니다.",
        ],
        fix=[
            "대안 A/B 중 무엇을 왜 선택했는지 한 문장으로 추가하세요.",
            "승인/예산/우선순위 등 본인이 가진 결정 범위를 명시하세요.",
        ],
        evidence_keys=["decision_authority_count", "decision_authority_hits"],
        notes=[f"의사결정 신호 수: {ctx.metrics.decision_authority_count}"],
    )


PROFILES = (
    flag_profile("OWNERSHIP__NO_PROJECT_INITIATION_SIGNAL", GROUP, 92, "NO_PROJECT_INITIATION_PATTERN",
                 _explain_initiation),
    flag_profile("OWNERSHIP__LOW_OWNERSHIP_VERB_RATIO", GROUP, 86, "LOW_OWNERSHIP_VERB_RATIO", _explain_ratio),
    flag_profile("OWNERSHIP__NO_DECISION_AUTHORITY_SIGNAL", GROUP, 84, "NO_DECISION_AUTHORITY_PATTERN",
                 _explain_decision),
)
