"""Hypothesis builder.

Assembles the stage-appropriate hypothesis catalog, then ranks it:

1. confidence = base * self-check multiplier + evidence boost (+ AI delta)
2. base priority = impact * confidence * objective score
3. correlation boost from driver hypotheses, normalized against the batch max
4. global conflict penalty when self-assessment contradicts objective signals

Everything here is a pure function of the input facts and the optional
AI enhancement, so the same input always yields the same ordered list.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from config import settings
from models.schemas.ai_enhancement import MAX_CONFIDENCE_DELTA, AIEnhancement
from models.schemas.hypothesis import Hypothesis
from models.schemas.input_facts import SelfCheck
from services.signals import SignalBundle, collect_signals
from services.text_utils import clamp, clamp01, score_to_label

logger = logging.getLogger(__name__)

RESUME_STAGE_MARKERS = ("서류", "resume", "document")
INTERVIEW_STAGE_MARKERS = ("면접", "interview")

CORRELATION_ACTIVE = 0.55
CORRELATION_MIN = 0.75
CORRELATION_MAX = 1.25
CONFLICT_MIN = 0.75
MIN_PRIORITY = 1e-5

MAJOR_IMPORTANCE_GATE = 0.55
MAJOR_MISMATCH_SIMILARITY = 0.3
MAJOR_BRIDGE_SIMILARITY = 0.8


@dataclass(frozen=True)
class CorrelationRule:
    driver: str
    target: str
    factor: float  # < 1 dampens the target, > 1 bumps it


CORRELATION_RULES: tuple[CorrelationRule, ...] = (
    CorrelationRule("fit-mismatch", "unclear-positioning", 0.85),
    CorrelationRule("gap-risk", "risk-signals", 1.15),
)


def _s100(x: float) -> int:
    return round(x * 100)


def make_hypothesis(
    id: str,
    title: str,
    why: str,
    signals: list[str | None] | None = None,
    actions: list[str] | None = None,
    counter: str = "",
    impact: float = 0.7,
    confidence: float = 0.5,
    evidence_boost: float = 0.0,
) -> Hypothesis:
    """Build a hypothesis with clamped factors; None signals are dropped."""
    return Hypothesis(
        id=id,
        title=title,
        why=why,
        signals=[s for s in (signals or []) if s],
        actions=list(actions or []),
        counter=counter,
        impact=clamp01(impact),
        confidence=clamp01(confidence),
        evidence_boost=clamp(evidence_boost, 0.0, 0.25),
    )


def is_resume_stage(stage: str) -> bool:
    s = (stage or "").lower()
    return any(m in s for m in RESUME_STAGE_MARKERS)


def is_interview_stage(stage: str) -> bool:
    s = (stage or "").lower()
    return any(m in s for m in INTERVIEW_STAGE_MARKERS)


# --- catalog ---

def _knockout_missing(b: SignalBundle) -> Hypothesis | None:
    kw = b.keyword
    if not kw.has_knockout_missing:
        return None
    return make_hypothesis(
        id="knockout-missing",
        title="필수요건(Must-have) 누락으로 초기 컷 가능성",
        why=(
            "서류 심사는 평균 점수보다 필수요건 충족 여부를 먼저 거릅니다. "
            "JD에서 필수로 읽히는 기술이나 요건이 이력서에 보이지 않으면 다른 강점이 있어도 초반에 걸러질 수 있습니다."
        ),
        signals=[
            f"누락된 필수 키워드: {', '.join(kw.missing_critical)}",
            f"키워드 매칭(페널티 반영): {_s100(kw.match_score)}/100",
        ],
        actions=[
            "누락된 필수 키워드를 실제 경험/프로젝트 문장 안에 사실대로 녹여 쓰기(키워드 나열 금지)",
            "경험이 없다면 작은 실습 결과물을 만들어 링크나 캡처로 증거를 남기기",
            "필수요건을 이미 충족하는 포지션이나 요건이 낮은 JD로 지원 범위를 함께 넓히기",
        ],
        counter="필수요건을 완화하거나 입사 후 학습을 전제로 뽑는 회사도 있지만 공개채용에서는 드문 편입니다.",
        impact=0.98,
        confidence=0.82,
        evidence_boost=0.1,
    )


def _fit_mismatch(b: SignalBundle) -> Hypothesis:
    kw = b.keyword
    low = kw.match_score <= 0.45
    return make_hypothesis(
        id="fit-mismatch",
        title="JD 핵심 요건 대비 핏 부족",
        why=(
            "서류 단계에서는 JD의 필수요건(툴/경력/도메인/역할)부터 대조합니다. "
            "이력서에 JD의 언어가 충분히 드러나지 않으면 내용을 읽기도 전에 탈락할 확률이 높아집니다."
        ),
        signals=[
            f"키워드 매칭: {_s100(kw.match_score)}/100",
            f"누락 키워드 예: {', '.join(kw.missing_keywords[:5])}" if kw.missing_keywords else None,
            f"JD 신뢰도(키워드/길이): {_s100(kw.reliability)}/100",
        ],
        actions=[
            "JD의 필수/우대 문장을 체크리스트로 옮기고 이력서 문장과 1:1로 대응시키기",
            "누락 키워드 상위 5개를 요약/핵심 프로젝트에 나눠 배치하기(동의어보다 JD 표현 우선)",
            "직무 전환이라면 전이 가능한 역량을 JD 업무 문장 단위로 번역해 적기",
        ],
        counter="JD가 지나치게 포괄적이거나 채용팀이 포텐셜 위주로 본다면 키워드 매칭만으로 판단하기 어렵습니다.",
        impact=0.9,
        confidence=0.72 if low else 0.52,
        evidence_boost=0.08 if low else 0.0,
    )


def _major_hypothesis(b: SignalBundle) -> Hypothesis | None:
    major = b.major
    if major.importance < MAJOR_IMPORTANCE_GATE:
        return None

    has_major = bool(major.major)
    has_hints = bool(major.jd_clusters)
    mismatch_like = (not has_major and major.explicit) or (
        has_major and has_hints and major.similarity <= MAJOR_MISMATCH_SIMILARITY
    )
    bridge_like = (
        has_major
        and has_hints
        and MAJOR_MISMATCH_SIMILARITY < major.similarity < MAJOR_BRIDGE_SIMILARITY
        and major.bridge_hint
    )

    family_line = f"전공 중요도(추정): {_s100(major.importance)}/100 · 직무군: {major.job_family}"
    major_line = f"지원자 전공: {major.major or '(미탐지)'}"
    clusters_line = f"JD 요구 전공군(추정): {', '.join(major.jd_clusters) if has_hints else '(탐지 실패)'}"

    if mismatch_like:
        comparable = has_major and has_hints
        if major.explicit:
            confidence = 0.72 if comparable else 0.55
        else:
            confidence = 0.58 if comparable else 0.45
        return make_hypothesis(
            id="major-mismatch",
            title="전공/학력 요건이 게이트로 작동할 가능성",
            why=(
                "연구·개발·공정·설계 같은 직무는 전공이나 학위가 첫 관문이 되기도 합니다. "
                "JD의 전공 신호가 강한데 정합성이 낮거나 정보가 부족하면 서류 초반에 리스크로 읽힐 수 있습니다."
            ),
            signals=[
                family_line,
                major_line,
                clusters_line,
                f"전공 유사도(전공군 기준): {_s100(major.similarity)}/100"
                if comparable else "전공 비교 정보가 부족함(추측하지 않음)",
                f"메모: {major.note}" if major.note else None,
            ],
            actions=[
                "전공이 다르다면 관련 프로젝트/과제/실험 산출물 1~2개를 요약과 링크로 붙여 대체 증거로 쓰기",
                "JD가 전공을 필수로 명시했다면 요약 첫 줄에 관련 과목이나 도메인 경험을 적어 먼저 방어하기",
                "이력서에서 전공이 드러나지 않는다면 학력/전공 줄을 분명하게 표기하기",
            ],
            counter="전공보다 실무 성과를 우선하는 팀도 있지만 JD에 전공 요구가 강하게 드러나면 초기 스크리닝 리스크가 커집니다.",
            impact=clamp(0.75 + 0.2 * major.importance, 0.0, 0.95),
            confidence=confidence,
            evidence_boost=0.08 if major.explicit else 0.04,
        )

    if bridge_like:
        return make_hypothesis(
            id="major-bridge",
            title="유사 전공과 전이 역량으로 전공 리스크를 상쇄할 여지",
            why=(
                "전공이 완전히 같지 않아도 유사 전공이거나 실무 증거가 강하면 전공 리스크는 줄어듭니다. "
                "핵심은 전공 차이가 아니라 이 JD 업무를 해낼 증거가 있느냐로 설득하는 것입니다."
            ),
            signals=[
                family_line,
                major_line,
                clusters_line,
                f"전공 유사도(전공군 기준): {_s100(major.similarity)}/100",
                f"키워드 매칭: {_s100(b.keyword.match_score)}/100 · 증거 강도: {_s100(b.resume.resume_signal_score)}/100",
            ],
            actions=[
                "'전공은 X지만 Y 역량/프로젝트로 Z 업무를 해냈다'를 요약 한 줄로 고정하기",
                "JD 핵심 업무 2개를 골라 전공과 무관하게 재현 가능한 결과물로 보여주기",
                "면접용으로 '전공 차이, 문제가 아닌 이유, 증거' 순서의 30초 답변 준비하기",
            ],
            counter="연구/공정/설계처럼 전공을 강하게 명시한 JD는 예외가 적으니 전공 요구가 낮은 JD도 함께 지원하는 편이 현실적입니다.",
            impact=clamp(0.55 + 0.25 * major.importance, 0.0, 0.85),
            confidence=0.62,
            evidence_boost=0.06,
        )
    return None


def _weak_proof(b: SignalBundle) -> Hypothesis:
    rs = b.resume
    low = rs.resume_signal_score <= 0.5
    return make_hypothesis(
        id="weak-proof",
        title="성과 증거(수치/전후 비교/기여도) 부족",
        why=(
            "무엇을 했는지보다 어떤 문제를 어떻게 풀었고 결과가 어땠는지가 서류의 신뢰를 만듭니다. "
            "숫자가 있어도 성과 문맥이 붙지 않으면 설득력이 약합니다."
        ),
        signals=[
            f"정량 근거(문맥 인정): {rs.proof_count}개 (raw {rs.proof_count_raw}개)",
            f"증거 강도(프록시): {_s100(rs.resume_signal_score)}/100",
            f"제외 메모: {' / '.join(rs.proof_notes)}" if rs.proof_notes else None,
        ],
        actions=[
            "경험마다 '문제, 제약, 내 행동, 결과, 검증' 순서로 다시 쓰기",
            "숫자는 절감/개선/성장/달성 같은 성과 단어와 붙여 쓰기(예: 리드타임 3일 단축)",
            "수치를 밝히기 어렵다면 범위나 전후 비교, 대리 지표로 대신하기",
        ],
        counter="신입이나 초경력 포지션, 혹은 포텐셜과 문화 적합을 크게 보는 회사라면 영향이 줄어듭니다.",
        impact=0.85,
        confidence=0.68 if low else 0.52,
        evidence_boost=0.08 if low else 0.0,
    )


def _unclear_positioning(b: SignalBundle) -> Hypothesis:
    sc = b.facts.self_check
    weak_link = b.keyword.match_score <= 0.5
    return make_hypothesis(
        id="unclear-positioning",
        title="포지셔닝과 이직 스토리의 일관성 부족",
        why=(
            "왜 이 직무와 회사인지가 흐리면 채용팀은 조기 퇴사나 적응 실패 리스크로 읽습니다. "
            "JD의 언어와 지원자의 강점이 이어지지 않으면 설득력이 크게 떨어집니다."
        ),
        signals=[
            "JD 언어와 이력서 언어의 연결이 약함" if weak_link else None,
            f"자가진단(역할 명확성): {sc.role_clarity}/5 · {score_to_label(sc.role_clarity)}",
            f"자가진단(스토리 일관성): {sc.story_consistency}/5 · {score_to_label(sc.story_consistency)}",
        ],
        actions=[
            "헤더 두 줄을 고정하기: 직무 정체성, 강점 1~2개, 증거 1개",
            "이직 사유는 불만이 아니라 확장/정렬로 설명하고 JD 핵심 업무와 바로 연결하기",
            "면접 전에 나를 떨어뜨릴 논리 10개를 먼저 적고 반례와 근거를 준비하기",
        ],
        counter="배경 전환자를 적극적으로 뽑는 회사라면 이 가설의 비중은 낮아질 수 있습니다.",
        impact=0.75,
        confidence=0.62 if weak_link else 0.52,
        evidence_boost=0.06 if weak_link else 0.0,
    )


def _risk_signals(b: SignalBundle) -> Hypothesis:
    risk = b.career.career_risk_score
    high = risk >= 0.65
    rating = b.facts.self_check.risk_signals
    return make_hypothesis(
        id="risk-signals",
        title="커뮤니케이션/정합성/신뢰 측면의 리스크 신호",
        why=(
            "면접은 역량과 함께 같이 일할 수 있는 사람인지를 확인합니다. "
            "답변의 일관성이나 과장 여부, 사실 검증 가능성에서 신뢰가 흔들리면 탈락으로 이어질 수 있습니다."
        ),
        signals=[
            f"커리어 리스크(프록시): {_s100(risk)}/100",
            f"자가진단(리스크 신호): {rating}/5 · {score_to_label(rating)}",
        ],
        actions=[
            "답변 구조를 '전제, 판단 기준, 행동, 결과, 배운 점'으로 고정하기",
            "모르는 것은 모른다고 말하고 확인 방법과 다음 행동을 함께 제시하기",
            "검증 질문에 대비해 숫자나 문서, 결과물을 공개 가능한 범위에서 준비하기",
        ],
        counter="같은 답변도 면접관과 팀 문화에 따라 평가가 달라 단일 신호로 확정하기는 어렵습니다.",
        impact=0.9,
        confidence=0.72 if high else 0.58,
        evidence_boost=0.08 if high else 0.0,
    )


def _weak_interview_proof(b: SignalBundle) -> Hypothesis:
    rs = b.resume
    low = rs.resume_signal_score <= 0.5
    return make_hypothesis(
        id="weak-interview-proof",
        title="면접에서 증거 제시가 약함(구체성 부족)",
        why=(
            "면접은 서류에 적은 성과와 역할을 검증하는 자리입니다. "
            "역할 범위와 숫자, 검증 방법을 분명히 말하지 못하면 신뢰가 떨어집니다."
        ),
        signals=[f"정량 근거(문맥 인정): {rs.proof_count}개"],
        actions=[
            "핵심 사례 3개를 30초 요약과 2분 상세 버전으로 각각 준비하기",
            "내가 한 일과 팀이 한 일을 분명히 나눠 말하기",
            "보안상 공개가 어렵다면 범위, 비교, 대리 지표로 설명하기",
        ],
        counter="수치를 밝히기 어려워도 전후 비교와 검증 방법을 제시하면 충분히 설득할 수 있습니다.",
        impact=0.8,
        confidence=0.64 if low else 0.52,
        evidence_boost=0.06 if low else 0.0,
    )


def _gap_risk(b: SignalBundle) -> Hypothesis | None:
    gap = b.facts.career.gap_months
    if gap < 3:
        return None
    if gap >= 12:
        confidence = 0.78
    elif gap >= 6:
        confidence = 0.7
    else:
        confidence = 0.6
    return make_hypothesis(
        id="gap-risk",
        title="공백기 설명 부족 리스크",
        why=(
            "공백이 길수록 채용팀은 업무 감각이 유지됐는지, 공백 사유가 납득되는지를 확인하려 합니다. "
            "공백 자체보다 설명 구조가 빈약할 때 리스크로 해석됩니다."
        ),
        signals=[f"최근 공백: {gap}개월"],
        actions=[
            "공백을 '사실, 의도, 행동, 결과(증거)' 네 문장으로 정리하기",
            "공백 기간의 학습이나 프로젝트를 결과물과 연결하기",
            "왜 생겼는지, 무엇을 했는지, 지금은 해결됐는지에 대한 답을 준비하기",
        ],
        counter="설명과 증거가 분명하다면 공백 자체는 치명적이지 않습니다.",
        impact=0.75,
        confidence=confidence,
        evidence_boost=0.08 if gap >= 6 else 0.04,
    )


def _short_tenure_risk(b: SignalBundle) -> Hypothesis | None:
    career = b.facts.career
    tenure = career.last_tenure_months
    changes = career.job_changes
    if not ((0 < tenure <= 12) or changes >= 3):
        return None
    very_short = 0 < tenure <= 6
    return make_hypothesis(
        id="short-tenure-risk",
        title="짧은 근속과 잦은 이직으로 인한 신뢰 하락",
        why=(
            "채용 비용이 큰 만큼 회사는 이번에도 빨리 떠나지 않을지를 민감하게 봅니다. "
            "이동의 논리와 성과의 축적이 보이지 않으면 리스크로 해석됩니다."
        ),
        signals=[
            f"직전 근속: {tenure}개월" if tenure else None,
            f"이직 횟수: {changes}회",
        ],
        actions=[
            "이직 사유를 한 가지 일관된 기준(정렬/확장)으로 다시 정리하기",
            "짧게 머문 곳에서도 완료한 성과와 결과물 위주로 쓰기",
            "면접에서 오래 일할 의사와 그 조건을 구체적으로 말하기",
        ],
        counter="이동이 잦은 업계라도 성과 축적이 분명하면 상쇄됩니다.",
        impact=0.8,
        confidence=0.76 if very_short else 0.62,
        evidence_boost=0.08 if very_short else 0.05,
    )


def _general_review(b: SignalBundle) -> Hypothesis:
    """Low-confidence catch-all for when no specific hypothesis applies."""
    return make_hypothesis(
        id="general-review",
        title="뚜렷한 단일 원인 신호 없음(종합 점검 권장)",
        why=(
            "입력된 단계와 경력 정보에서는 특정 탈락 원인이 두드러지지 않습니다. "
            "이런 경우 경쟁자와의 상대 비교나 내부 사정처럼 지원서 밖의 요인이 작용했을 수 있습니다."
        ),
        signals=[
            f"합성 객관 점수: {_s100(b.objective.score)}/100",
            f"키워드 매칭: {_s100(b.keyword.match_score)}/100",
        ],
        actions=[
            "지원 단계를 구체적으로 입력해 단계별 가설을 다시 받아보기",
            "같은 JD로 합격한 사례나 현직자 프로필과 이력서 구성을 비교하기",
            "JD 요건과 이력서 문장을 1:1로 대조한 체크리스트를 한 번 더 점검하기",
        ],
        counter="채용 결과는 지원자 밖의 요인으로도 갈리므로 이 가설은 참고용입니다.",
        impact=0.5,
        confidence=0.3,
    )


# (stage predicate, builder) in assembly order; ties keep this order
CATALOG: tuple[tuple[Callable[[str], bool] | None, Callable[[SignalBundle], Hypothesis | None]], ...] = (
    (None, _knockout_missing),
    (is_resume_stage, _fit_mismatch),
    (is_resume_stage, _major_hypothesis),
    (is_resume_stage, _weak_proof),
    (is_resume_stage, _unclear_positioning),
    (is_interview_stage, _risk_signals),
    (is_interview_stage, _weak_interview_proof),
    (None, _gap_risk),
    (None, _short_tenure_risk),
)


def assemble(b: SignalBundle) -> list[Hypothesis]:
    """Collect the unscored hypotheses that apply to this stage and career.

    Falls back to a single low-confidence general review so the list is
    never empty.
    """
    out = []
    for gate, build in CATALOG:
        if gate is not None and not gate(b.facts.stage):
            continue
        h = build(b)
        if h is not None:
            out.append(h)
    if not out:
        out.append(_general_review(b))
    return out


# --- scoring ---

def _mild(x: float) -> float:
    return clamp(0.85 + (x - 1) * 0.075, 0.85, 1.15)


def confidence_from_self_check(hypothesis_id: str, sc: SelfCheck) -> float:
    """Self ratings only nudge confidence within [0.85, 1.15]."""
    if hypothesis_id == "fit-mismatch":
        return _mild(6 - sc.core_fit)
    if hypothesis_id in ("weak-proof", "weak-interview-proof"):
        return _mild(6 - sc.proof_strength)
    if hypothesis_id == "unclear-positioning":
        return (_mild(6 - sc.role_clarity) + _mild(6 - sc.story_consistency)) / 2
    if hypothesis_id == "risk-signals":
        return _mild(sc.risk_signals)
    return 1.0


def correlation_boosts(normalized: dict[str, float]) -> dict[str, float]:
    """Multiplier per target id from active driver hypotheses."""
    boosts = {h_id: 1.0 for h_id in normalized}
    for rule in CORRELATION_RULES:
        driver_score = normalized.get(rule.driver, 0.0)
        if driver_score < CORRELATION_ACTIVE or rule.target not in boosts:
            continue
        t = (driver_score - CORRELATION_ACTIVE) / (1 - CORRELATION_ACTIVE)
        boosts[rule.target] *= 1 + t * (rule.factor - 1)
    return {h_id: clamp(v, CORRELATION_MIN, CORRELATION_MAX) for h_id, v in boosts.items()}


def conflict_penalty(b: SignalBundle) -> float:
    """Global dampening when self-assessment contradicts objective signals."""
    sc = b.facts.self_check
    penalty = 1.0
    if sc.core_fit >= 4 and b.keyword.match_score <= 0.35:
        penalty *= 0.85
    if sc.risk_signals <= 2 and b.career.career_risk_score >= 0.65:
        penalty *= 0.88
    return clamp(penalty, CONFLICT_MIN, 1.0)


def score_hypotheses(
    hyps: list[Hypothesis], b: SignalBundle, ai: AIEnhancement | None = None
) -> list[Hypothesis]:
    objective = b.objective.score
    deltas = ai.confidence_delta_by_hypothesis if ai is not None else {}

    scored = []
    for h in hyps:
        confidence = clamp01(h.confidence * confidence_from_self_check(h.id, b.facts.self_check) + h.evidence_boost)
        delta = clamp(deltas.get(h.id, 0.0), -MAX_CONFIDENCE_DELTA, MAX_CONFIDENCE_DELTA)
        confidence = clamp01(confidence + delta)
        scored.append(h.model_copy(update={
            "confidence": confidence,
            "priority": h.impact * confidence * objective,
        }))

    max_priority = max([MIN_PRIORITY, *(h.priority for h in scored)])
    normalized = {h.id: clamp01(h.priority / max_priority) for h in scored}
    boosts = correlation_boosts(normalized)
    penalty = conflict_penalty(b)

    final = [
        h.model_copy(update={"priority": clamp01(h.priority * boosts[h.id] * penalty)})
        for h in scored
    ]
    # sorted() is stable, so equal priorities keep catalog order
    return sorted(final, key=lambda h: -h.priority)


def build_hypotheses(
    state,
    ai: AIEnhancement | None = None,
    signals: SignalBundle | None = None,
) -> list[Hypothesis]:
    """Ranked hypotheses for one analysis, at most settings.hypothesis_limit."""
    b = signals if signals is not None else collect_signals(state, ai)
    ranked = score_hypotheses(assemble(b), b, ai)[: settings.hypothesis_limit]
    logger.debug("Hypotheses ranked: %s", [(h.id, round(h.priority, 4)) for h in ranked])
    return ranked
