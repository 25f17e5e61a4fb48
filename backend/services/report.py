"""Plain-text Korean report for one analysis."""

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.career_signals import CareerSignals
from models.schemas.hypothesis import Hypothesis
from services.hypotheses import build_hypotheses
from services.signals import SignalBundle, collect_signals
from services.structural.metrics import employment_months

MAX_AI_ITEMS = 8

DISCLAIMER = (
    "※ 이 리포트는 입력을 바탕으로 한 '가설'이며 탈락 사유를 단정하지 않습니다.\n"
    "※ 실제 결과는 내부 기준, 경쟁자, 예산, 타이밍 같은 외부 변수에 따라 달라질 수 있습니다.\n"
)

CHECKLIST = (
    "JD 필수/우대 문장을 이력서 문장에 1:1로 대응시켰나?",
    "필수요건(critical) 키워드가 빠지지 않았나?",
    "숫자 옆에 절감/개선/성장/달성 같은 성과 문맥이 붙어 있나?",
    "공백이나 짧은 근속을 '사실, 의도, 행동, 증거' 네 문장으로 정리했나?",
    "면접 답변을 '전제, 판단 기준, 행동, 결과, 배운 점' 구조로 고정했나?",
)


def _s100(x: float | None) -> int:
    return round((x or 0.0) * 100)


def _join(items: list[str], empty: str = "-") -> str:
    return ", ".join(items) if items else empty


def required_years_text(career: CareerSignals) -> str:
    req = career.required_years
    if req is None:
        return "탐지 실패"
    low = f"{req.min:g}년"
    return f"{low}~{req.max:g}년" if req.max else f"{low}+"


def _header(b: SignalBundle) -> str:
    f = b.facts
    return (
        "탈락 원인 분석 리포트 (추정)\n"
        f"- 회사: {f.company or '(미입력)'}\n"
        f"- 포지션: {f.role or '(미입력)'}\n"
        f"- 단계: {f.stage}\n"
        f"- 지원일: {f.applied_at or '-'}\n"
    )


def _history_line(b: SignalBundle) -> str:
    history = b.facts.career_history
    if not history:
        return ""
    intern, full, total = employment_months(history)
    return f"- 경력 구성(이력 기준): 정규직 {full:g}개월 / 인턴 {intern:g}개월 / 전체 {total:g}개월\n"


def _objective_block(b: SignalBundle) -> str:
    kw, career, rs = b.keyword, b.career, b.resume
    knockout = f"있음 ({', '.join(kw.missing_critical)})" if kw.has_knockout_missing else "없음"
    gap = "-" if career.experience_gap is None else f"{career.experience_gap:+g}년"
    return (
        "[객관 지표]\n"
        f"- 합성 객관 점수: {_s100(b.objective.score)}/100\n"
        f"- 키워드 매칭: {_s100(kw.match_score)}/100\n"
        f"- JD 신뢰도(키워드/길이): {_s100(kw.reliability)}/100\n"
        f"- 필수요건 누락 여부: {knockout}\n"
        f"- JD 경험 정책(추정): {career.experience_policy}\n"
        f"- JD 요구 연차(추정): {required_years_text(career)}\n"
        f"- 경력 차이(보유-요구): {gap}\n"
        f"- 커리어 리스크(프록시): {_s100(career.career_risk_score)}/100\n"
        f"- 증거 강도(문맥 기반): {_s100(rs.resume_signal_score)}/100 "
        f"(인정 {rs.proof_count}개 / raw {rs.proof_count_raw}개)\n"
        f"- 경험 레벨 적합도: {_s100(career.experience_level_score)}/100\n"
        + _history_line(b)
    )


def _major_block(b: SignalBundle) -> str:
    m = b.major
    lines = [
        "[전공/학력(추정)]",
        f"- 전공 중요도(추정): {_s100(m.importance)}/100 · 직무군: {m.job_family}",
        f"- 지원자 전공: {m.major or '(미탐지)'}"
        + (f" (전공군: {m.major_cluster})" if m.major_cluster else ""),
        f"- JD 요구 전공군(추정): {_join(m.jd_clusters, '(탐지 실패)')}",
        f"- 전공 유사도(전공군 기준): {_s100(m.similarity)}/100",
        f"- 전공 보너스(소폭, 합성 반영): {_s100(m.bonus)}/100",
    ]
    if m.note:
        lines.append(f"- 메모: {m.note}")
    return "\n".join(lines) + "\n"


def _keyword_block(b: SignalBundle, ai: AIEnhancement | None = None) -> str:
    kw = b.keyword
    lines = ["[키워드 상세]"]
    if kw.note:
        lines.append(f"- 메모: {kw.note}")
    lines += [
        f"- JD 키워드: {_join(kw.jd_keywords, '(탐지 실패)')}",
        f"- 매칭: {_join(kw.matched_keywords)}",
        f"- 누락: {_join(kw.missing_keywords)}",
        f"- 필수요건(critical) 탐지: {_join(kw.jd_critical)}",
        f"- 필수요건 누락: {_join(kw.missing_critical)}",
    ]
    if ai is not None and ai.jd_nice_to_have:
        lines.append(f"- 우대 요건(AI 추출): {_join(ai.jd_nice_to_have)}")
    if ai is not None and ai.resume_skill_tags:
        lines.append(f"- 이력서 스킬 태그(AI 추출): {_join(ai.resume_skill_tags)}")
    return "\n".join(lines) + "\n"


def format_hypothesis(idx: int, h: Hypothesis) -> str:
    actions = "\n".join(f"  - {a}" for a in h.actions)
    return (
        f"{idx}. {h.title} (우선순위 {_s100(h.priority)}/100)\n"
        f"- 왜 그럴 수 있나: {h.why}\n"
        f"- 근거/신호: {' / '.join(h.signals) if h.signals else '입력 신호 부족'}\n"
        f"- 다음 액션:\n{actions}\n"
        f"- 반례/예외: {h.counter}\n"
    )


def _ai_blocks(ai: AIEnhancement | None) -> str:
    if ai is None:
        return ""
    out = ""
    if ai.suggested_bullets:
        items = [
            f"{i})\n- Before: {sb.before.strip() or '(없음)'}\n"
            f"- After: {sb.after.strip() or '(없음)'}\n- Why: {sb.why.strip() or '-'}\n"
            for i, sb in enumerate(ai.suggested_bullets[:MAX_AI_ITEMS], start=1)
        ]
        out += "\n[AI 제안 불릿]\n" + "\n".join(items)
    if ai.conflicts:
        items = [
            f"{i}) {c.type.strip() or '(유형 미상)'}\n- 근거: {c.evidence.strip() or '-'}\n"
            f"- 설명: {c.explanation.strip() or '-'}\n- 수정/대응: {c.fix.strip() or '-'}\n"
            for i, c in enumerate(ai.conflicts[:MAX_AI_ITEMS], start=1)
        ]
        out += "\n[AI 정합성 점검]\n" + "\n".join(items)
    return out


def build_report(
    state,
    ai: AIEnhancement | None = None,
    signals: SignalBundle | None = None,
    hypotheses: list[Hypothesis] | None = None,
) -> str:
    """Render the report. Signals and hypotheses are recomputed when not given."""
    b = signals if signals is not None else collect_signals(state, ai)
    hyps = hypotheses if hypotheses is not None else build_hypotheses(b.facts, ai, signals=b)

    body = "\n".join(format_hypothesis(i, h) for i, h in enumerate(hyps, start=1))
    checklist = "\n[추천 체크리스트]\n" + "".join(f"- {line}\n" for line in CHECKLIST)

    return (
        _header(b)
        + "\n" + _objective_block(b)
        + "\n" + _major_block(b)
        + "\n" + _keyword_block(b, ai)
        + "\n" + DISCLAIMER
        + "\n[핵심 가설]\n\n" + body
        + checklist
        + _ai_blocks(ai)
    )
