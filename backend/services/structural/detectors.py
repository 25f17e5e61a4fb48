"""Structural pattern detectors.

Each detector reads the canonical metrics (and the normalized texts,
only to cut evidence snippets) and returns a Flag or None. A detector
returns None whenever its input signal is absent, so missing data never
turns into a penalty.
"""

from dataclasses import dataclass
from typing import Callable

from models.schemas.structural import Flag, Severity, StructuralMetrics
from services.structural import phrases
from services.structural.metrics import Texts, evidence_snippets
from services.structural.thresholds import THRESHOLDS
from services.text_utils import clamp, clamp01

MAX_EVIDENCE = 6

Detect = Callable[[StructuralMetrics, Texts], Flag | None]


@dataclass(frozen=True)
class StructuralPattern:
    """Catalog entry: metadata plus the detect callable."""
    id: str
    title: str
    category: str
    severity: Severity
    detect: Detect


def make_flag(
    pattern_id: str,
    title: str,
    category: str,
    severity: Severity,
    score: float,
    evidence: list[str] | None = None,
    detail: dict | None = None,
) -> Flag:
    return Flag(
        id=pattern_id,
        title=title,
        category=category,
        severity=severity,
        score=clamp01(score),
        evidence=[e for e in (evidence or []) if e][:MAX_EVIDENCE],
        detail=detail or {},
    )


# --- A. career trajectory ---

def detect_high_switch(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.has_career_history or m.avg_tenure_months is None:
        return None
    limit = THRESHOLDS["AVG_TENURE_MONTHS"]
    avg = m.avg_tenure_months
    if avg >= limit:
        return None
    return make_flag(
        "HIGH_SWITCH_PATTERN", "평균 재직기간이 짧음", "A.CareerTrajectory",
        "critical" if avg < THRESHOLDS["AVG_TENURE_MONTHS_CRITICAL"] else "high",
        clamp((limit - avg) / limit, 0.2, 1.0),
        detail={"avg_tenure_months": avg, "threshold_months": limit},
    )


def detect_extreme_job_hopping(m: StructuralMetrics, texts: Texts) -> Flag | None:
    hop = m.extreme_job_hopping
    if not m.has_career_history or hop is None:
        return None
    if hop.considered < 2 or hop.short_count < THRESHOLDS["EXTREME_HOP_COUNT"]:
        return None
    return make_flag(
        "EXTREME_JOB_HOPPING_PATTERN", "최근 경력에서 1년 미만 재직이 반복됨", "A.CareerTrajectory",
        "critical" if hop.short_count >= 3 else "high",
        clamp(hop.short_count / 3, 0.6, 1.0),
        detail={
            "short_count": hop.short_count,
            "considered": hop.considered,
            "months_cut": THRESHOLDS["EXTREME_HOP_MONTHS"],
        },
    )


def detect_industry_switch(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.has_career_history:
        return None
    switches = m.industry_switches
    if switches < THRESHOLDS["INDUSTRY_SWITCH_MIN"]:
        return None
    return make_flag(
        "FREQUENT_INDUSTRY_SWITCH_PATTERN", "산업 변경이 잦음", "A.CareerTrajectory",
        "high" if switches >= 3 else "mid",
        clamp(switches / 4, 0.4, 1.0),
        detail={"industry_switches": switches},
    )


# --- B. role and skill fit ---

def detect_education_gate(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.education_gate_fail is not True:
        return None
    return make_flag(
        "EDUCATION_GATE_FAIL", "JD 최소 학력 요건 미충족(추정)", "B.RoleSkill", "critical", 0.95,
        evidence=evidence_snippets(texts.jd, ("학력", "학위", "degree", "석사", "학사", "박사"), 2, 50),
        detail={
            "candidate_level": m.candidate_education_level,
            "required_level": m.required_education_level,
        },
    )


def detect_must_have_missing(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.required_skills or m.required_coverage is None:
        return None
    limit = THRESHOLDS["REQUIRED_COVERAGE_LOW"]
    cov = m.required_coverage
    if cov >= limit:
        return None
    return make_flag(
        "MUST_HAVE_SKILL_MISSING", "JD 필수 스킬 커버리지 낮음", "B.RoleSkill",
        "critical" if cov < THRESHOLDS["REQUIRED_COVERAGE_CRITICAL"] else "high",
        (limit - cov) / limit + 0.4,
        evidence=evidence_snippets(texts.jd, m.required_lines, 3, 60),
        detail={
            "required_skills": m.required_skills[:30],
            "covered": m.required_covered[:30],
            "missing": m.required_missing[:30],
            "coverage": cov,
            "threshold": limit,
        },
    )


def detect_low_semantic_similarity(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.jd_length == 0 or m.combined_length == 0:
        return None
    limit = THRESHOLDS["LOW_SEMANTIC_SIMILARITY"]
    sim = m.semantic_similarity
    if sim >= limit:
        return None
    return make_flag(
        "LOW_SEMANTIC_SIMILARITY_PATTERN", "JD-이력서 의미 유사도 낮음", "B.RoleSkill",
        "critical" if sim < THRESHOLDS["LOW_SEMANTIC_SIMILARITY_CRITICAL"] else "high",
        (limit - sim) / limit + 0.3,
        detail={"semantic_similarity": sim, "threshold": limit},
    )


def detect_jd_keyword_absence(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.required_skills or m.required_coverage is None or m.required_covered:
        return None
    return make_flag(
        "JD_KEYWORD_ABSENCE_PATTERN", "JD 필수/자격요건 키워드가 이력서에 거의 없음",
        "I.SemanticConsistency", "critical", 1.0,
        evidence=m.required_lines[:3],
        detail={"required_skills": m.required_skills[:30], "coverage": m.required_coverage},
    )


# --- C. ownership ---

def detect_low_ownership_ratio(m: StructuralMetrics, texts: Texts) -> Flag | None:
    strong, weak = m.ownership_strong_count, m.ownership_weak_count
    if strong + weak == 0 or m.ownership_ratio is None:
        return None
    ratio = m.ownership_ratio
    limit = THRESHOLDS["OWNERSHIP_RATIO_LOW"]
    if strong >= THRESHOLDS["OWNERSHIP_STRONG_MIN"] and ratio >= limit:
        return None
    return make_flag(
        "LOW_OWNERSHIP_VERB_RATIO", "오너십 표현이 약하고 '참여/지원/보조' 중심", "C.Ownership",
        "critical" if ratio < THRESHOLDS["OWNERSHIP_RATIO_CRITICAL"] else "high",
        (limit - ratio) / limit + 0.4,
        evidence=evidence_snippets(texts.combined, phrases.OWNERSHIP_WEAK, 3, 48),
        detail={
            "strong": strong,
            "weak": weak,
            "ratio": ratio,
            "min_strong": THRESHOLDS["OWNERSHIP_STRONG_MIN"],
            "min_ratio": limit,
        },
    )


def detect_no_decision_authority(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.combined_length == 0 or m.decision_authority_count > 0:
        return None
    return make_flag(
        "NO_DECISION_AUTHORITY_PATTERN", "의사결정/판단 관련 표현이 거의 없음", "C.Ownership", "mid", 0.6,
        evidence=evidence_snippets(texts.combined, phrases.DECISION_EVIDENCE_NEEDLES, 2, 60),
        detail={"decision_authority_count": 0},
    )


def detect_no_project_initiation(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.combined_length == 0 or m.project_initiation_count > 0:
        return None
    return make_flag(
        "NO_PROJECT_INITIATION_PATTERN", "제안/발의/런칭 등 '시작' 신호가 부족", "C.Ownership", "mid", 0.55,
        evidence=evidence_snippets(texts.combined, phrases.INITIATION_EVIDENCE_NEEDLES, 2, 60),
        detail={"project_initiation_count": 0},
    )


def detect_solo_only(m: StructuralMetrics, texts: Texts) -> Flag | None:
    solo, team = m.solo_count, m.team_count
    if solo <= 0:
        return None
    if team > 0 and solo <= team * THRESHOLDS["SOLO_DOMINANCE"]:
        return None
    return make_flag(
        "SOLO_ONLY_PATTERN", "협업/유관부서/팀워크 신호 대비 단독 수행 신호가 강함", "F.ExperienceQuality",
        "high" if team == 0 else "mid",
        0.6 + (solo - team) * 0.05,
        detail={"solo_count": solo, "team_count": team},
    )


# --- D. impact ---

def detect_no_quantified_impact(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.combined_length == 0 or m.numbers_count >= THRESHOLDS["MIN_NUMBERS"]:
        return None
    return make_flag(
        "NO_QUANTIFIED_IMPACT", "정량 성과(%, 금액, 규모 등) 표현이 거의 없음", "D.Impact", "high", 0.8,
        detail={"numbers_count": m.numbers_count, "min_numbers": THRESHOLDS["MIN_NUMBERS"]},
    )


def detect_low_impact_verbs(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.combined_length == 0 or m.impact_verb_count >= THRESHOLDS["MIN_IMPACT_VERBS"]:
        return None
    return make_flag(
        "LOW_IMPACT_VERB_PATTERN", "개선/증가/최적화 등 성과 동사 신호가 약함", "D.Impact", "mid", 0.6,
        detail={"impact_verb_count": m.impact_verb_count, "min_impact_verbs": THRESHOLDS["MIN_IMPACT_VERBS"]},
    )


def detect_process_only(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.combined_length == 0 or m.numbers_count > 0 or m.impact_verb_count > 0:
        return None
    return make_flag(
        "PROCESS_ONLY_PATTERN", "업무 과정 설명 위주로 보이며 결과/임팩트 신호가 약함", "D.Impact", "mid", 0.65,
        evidence=evidence_snippets(texts.combined, phrases.PROCESS_ONLY_NEEDLES, 2, 60),
        detail={"numbers_count": 0, "impact_verb_count": 0},
    )


# --- E. company and industry ---

def detect_vendor_lock(m: StructuralMetrics, texts: Texts) -> Flag | None:
    c = m.vendor_signal_count
    if c < THRESHOLDS["VENDOR_MIN"]:
        return None
    return make_flag(
        "VENDOR_LOCK_PATTERN", "SI/협력사/외주/파견 등 벤더 신호가 나타남", "E.CompanyIndustry",
        "high" if c >= 3 else "mid",
        0.45 + c * 0.15,
        evidence=evidence_snippets(texts.combined, phrases.VENDOR_SIGNALS, 3, 50),
        detail={"vendor_signal_count": c},
    )


def detect_low_company_specificity(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.company_name_candidates or m.company_mentioned is not False:
        return None
    return make_flag(
        "LOW_COMPANY_SPECIFICITY_PATTERN", "회사명/제품/서비스 등 지원 대상 특이성이 텍스트에 거의 없음",
        "E.CompanyIndustry", "mid", 0.6,
        detail={"company_name_candidates": m.company_name_candidates},
    )


def detect_low_role_specificity(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.role_candidates or m.role_mentioned is not False:
        return None
    return make_flag(
        "LOW_ROLE_SPECIFICITY_PATTERN", "지원 직무를 특정하는 표현(직무명/핵심 역할)이 약함",
        "E.CompanyIndustry", "mid", 0.55,
        detail={"role_candidates": m.role_candidates},
    )


# --- G. resume structure ---

def detect_low_content_density(m: StructuralMetrics, texts: Texts) -> Flag | None:
    length = m.combined_length
    limit = THRESHOLDS["MIN_COMBINED_LENGTH"]
    if length == 0 or length >= limit:
        return None
    return make_flag(
        "LOW_CONTENT_DENSITY_PATTERN", "내용 분량이 부족해 역량/성과 판단 근거가 약함", "G.ResumeStructure",
        "critical" if length < limit * 0.6 else "high",
        (limit - length) / limit + 0.4,
        detail={"combined_length": length, "min_combined_length": limit},
    )


def detect_high_buzzword_ratio(m: StructuralMetrics, texts: Texts) -> Flag | None:
    tokens = m.token_count
    if tokens < THRESHOLDS["RATIO_MIN_TOKENS"]:
        return None
    limit = THRESHOLDS["BUZZWORD_RATIO"]
    ratio = m.buzzword_count / tokens
    if ratio < limit:
        return None
    return make_flag(
        "HIGH_BUZZWORD_RATIO", "버즈워드/추상어 비중이 높아 구체성이 떨어짐", "G.ResumeStructure",
        "high" if ratio > limit * 2 else "mid",
        clamp(ratio / (limit * 2), 0.4, 1.0),
        evidence=evidence_snippets(texts.combined, phrases.BUZZWORDS, 3, 45),
        detail={"buzzword_count": m.buzzword_count, "token_count": tokens, "ratio": ratio, "threshold": limit},
    )


def detect_vague_responsibility(m: StructuralMetrics, texts: Texts) -> Flag | None:
    tokens = m.token_count
    if tokens < THRESHOLDS["RATIO_MIN_TOKENS"]:
        return None
    vague = m.vague_count
    ratio = vague / tokens
    if ratio < THRESHOLDS["VAGUE_RATIO"] or vague < 2:
        return None
    return make_flag(
        "VAGUE_RESPONSIBILITY_PATTERN", "업무/책임 범위가 추상적으로만 표현됨", "G.ResumeStructure",
        "high" if vague >= 5 else "mid",
        0.5 + vague * 0.08,
        evidence=evidence_snippets(texts.combined, phrases.VAGUE_RESPONSIBILITY_PHRASES, 3, 50),
        detail={"vague_count": vague, "token_count": tokens, "ratio": ratio, "threshold": THRESHOLDS["VAGUE_RATIO"]},
    )


def detect_generic_self_description(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if not m.generic_self_intro_hits:
        return None
    return make_flag(
        "GENERIC_SELF_DESCRIPTION_PATTERN", "진부/클리셰 자기소개 표현이 포함됨", "G.ResumeStructure", "low", 0.35,
        evidence=evidence_snippets(texts.combined, phrases.GENERIC_SELF_INTRO_PHRASES, 2, 60),
        detail={"hits": m.generic_self_intro_hits},
    )


# --- J. language signals ---

def detect_hedge_language(m: StructuralMetrics, texts: Texts) -> Flag | None:
    tokens = m.token_count
    if tokens < THRESHOLDS["LANGUAGE_MIN_TOKENS"]:
        return None
    hedge = m.hedge_count
    ratio = hedge / tokens
    if ratio < THRESHOLDS["HEDGE_RATIO"] or hedge < 2:
        return None
    return make_flag(
        "HEDGE_LANGUAGE_DOMINANCE", "확정/단정 표현이 약하고 완곡 표현이 반복됨", "J.LanguageSignals",
        "high" if hedge >= 6 else "mid",
        0.45 + hedge * 0.07,
        evidence=evidence_snippets(texts.combined, phrases.HEDGE_PHRASES, 3, 50),
        detail={"hedge_count": hedge, "token_count": tokens, "ratio": ratio, "threshold": THRESHOLDS["HEDGE_RATIO"]},
    )


def detect_low_confidence_language(m: StructuralMetrics, texts: Texts) -> Flag | None:
    tokens = m.token_count
    if tokens < THRESHOLDS["LANGUAGE_MIN_TOKENS"]:
        return None
    low = m.low_confidence_count
    ratio = low / tokens
    if ratio < THRESHOLDS["LOW_CONFIDENCE_RATIO"] or low < 2:
        return None
    return make_flag(
        "LOW_CONFIDENCE_LANGUAGE_PATTERN", "근거 없는 다짐/수동적 표현이 반복됨", "J.LanguageSignals",
        "high" if low >= 6 else "mid",
        0.4 + low * 0.08,
        evidence=evidence_snippets(texts.combined, phrases.LOW_CONFIDENCE_PHRASES, 3, 55),
        detail={
            "low_confidence_count": low,
            "token_count": tokens,
            "ratio": ratio,
            "threshold": THRESHOLDS["LOW_CONFIDENCE_RATIO"],
        },
    )


def detect_responsibility_avoidance(m: StructuralMetrics, texts: Texts) -> Flag | None:
    if m.token_count < THRESHOLDS["LANGUAGE_MIN_TOKENS"]:
        return None
    count = m.responsibility_avoidance_count
    if count < 2:
        return None
    return make_flag(
        "RESPONSIBILITY_AVOIDANCE_PATTERN", "책임을 외부 상황/지시로 돌리는 표현이 반복됨", "J.LanguageSignals",
        "high" if count >= 5 else "mid",
        0.45 + count * 0.08,
        evidence=evidence_snippets(texts.combined, phrases.RESPONSIBILITY_AVOIDANCE_PHRASES, 3, 55),
        detail={"responsibility_avoidance_count": count, "token_count": m.token_count},
    )


def _stepped_ratio_score(ratio: float, high: float, steps: tuple[float, float, float]) -> float:
    if ratio >= high * 1.5:
        return steps[0]
    if ratio >= high:
        return steps[1]
    return steps[2]


def detect_passive_voice(m: StructuralMetrics, texts: Texts) -> Flag | None:
    ratio = m.passive_voice_ratio
    if ratio is None or ratio < THRESHOLDS["PASSIVE_VOICE_RATIO"]:
        return None
    high = THRESHOLDS["PASSIVE_VOICE_RATIO_HIGH"]
    return make_flag(
        "PASSIVE_VOICE_OVERUSE_PATTERN", "수동태/피동 표현 비중이 높아 주체가 흐려짐", "J.LanguageSignals",
        "high" if ratio >= high else "mid",
        _stepped_ratio_score(ratio, high, (0.75, 0.55, 0.30)),
        evidence=evidence_snippets(texts.combined, phrases.PASSIVE_MARKERS, 3, 45),
        detail={
            "passive_voice_count": m.passive_voice_count,
            "sentence_count": m.sentence_count,
            "ratio": ratio,
            "threshold": THRESHOLDS["PASSIVE_VOICE_RATIO"],
        },
    )


def detect_weak_assertion(m: StructuralMetrics, texts: Texts) -> Flag | None:
    ratio = m.weak_assertion_ratio
    if ratio is None or ratio < THRESHOLDS["WEAK_ASSERTION_RATIO"]:
        return None
    high = THRESHOLDS["WEAK_ASSERTION_RATIO_HIGH"]
    return make_flag(
        "WEAK_ASSERTION_PATTERN", "'기여/도움' 등 약한 주장 표현이 많아 본인 역할이 불분명", "J.LanguageSignals",
        "high" if ratio >= high else "mid",
        _stepped_ratio_score(ratio, high, (0.80, 0.55, 0.30)),
        evidence=evidence_snippets(texts.combined, phrases.WEAK_ASSERTION_MARKERS, 3, 45),
        detail={
            "weak_assertion_count": m.weak_assertion_count,
            "sentence_count": m.sentence_count,
            "ratio": ratio,
            "threshold": THRESHOLDS["WEAK_ASSERTION_RATIO"],
        },
    )


PATTERNS: tuple[StructuralPattern, ...] = (
    StructuralPattern("HIGH_SWITCH_PATTERN", "평균 재직기간이 짧음", "A.CareerTrajectory", "high",
                      detect_high_switch),
    StructuralPattern("EXTREME_JOB_HOPPING_PATTERN", "최근 3개 중 2개 이상이 1년 미만", "A.CareerTrajectory",
                      "high", detect_extreme_job_hopping),
    StructuralPattern("FREQUENT_INDUSTRY_SWITCH_PATTERN", "산업 변경이 잦음", "A.CareerTrajectory", "mid",
                      detect_industry_switch),
    StructuralPattern("EDUCATION_GATE_FAIL", "최소 학력 요건 미충족", "B.RoleSkill", "critical",
                      detect_education_gate),
    StructuralPattern("MUST_HAVE_SKILL_MISSING", "JD 필수 스킬 누락", "B.RoleSkill", "critical",
                      detect_must_have_missing),
    StructuralPattern("LOW_SEMANTIC_SIMILARITY_PATTERN", "JD-이력서 의미 유사도 낮음", "B.RoleSkill", "high",
                      detect_low_semantic_similarity),
    StructuralPattern("JD_KEYWORD_ABSENCE_PATTERN", "JD 핵심 키워드 반영 부족", "I.SemanticConsistency", "high",
                      detect_jd_keyword_absence),
    StructuralPattern("LOW_OWNERSHIP_VERB_RATIO", "오너십 동사 비율 낮음", "C.Ownership", "high",
                      detect_low_ownership_ratio),
    StructuralPattern("NO_DECISION_AUTHORITY_PATTERN", "의사결정/판단 신호 부족", "C.Ownership", "mid",
                      detect_no_decision_authority),
    StructuralPattern("NO_PROJECT_INITIATION_PATTERN", "문제 발굴/제안/런칭 신호 부족", "C.Ownership", "mid",
                      detect_no_project_initiation),
    StructuralPattern("SOLO_ONLY_PATTERN", "협업 신호 부족(혼자/단독 중심)", "F.ExperienceQuality", "mid",
                      detect_solo_only),
    StructuralPattern("NO_QUANTIFIED_IMPACT", "정량 성과(숫자) 부족", "D.Impact", "high",
                      detect_no_quantified_impact),
    StructuralPattern("LOW_IMPACT_VERB_PATTERN", "성과/개선 동사 신호 부족", "D.Impact", "mid",
                      detect_low_impact_verbs),
    StructuralPattern("PROCESS_ONLY_PATTERN", "프로세스 설명만 있고 결과/지표가 약함", "D.Impact", "mid",
                      detect_process_only),
    StructuralPattern("VENDOR_LOCK_PATTERN", "SI/협력사/외주 등 벤더 신호 존재", "E.CompanyIndustry", "mid",
                      detect_vendor_lock),
    StructuralPattern("LOW_COMPANY_SPECIFICITY_PATTERN", "회사 특이성(회사명/제품명) 약함", "E.CompanyIndustry",
                      "mid", detect_low_company_specificity),
    StructuralPattern("LOW_ROLE_SPECIFICITY_PATTERN", "직무 특이성(직무명/핵심 역할 키워드) 약함",
                      "E.CompanyIndustry", "mid", detect_low_role_specificity),
    StructuralPattern("LOW_CONTENT_DENSITY_PATTERN", "이력서 텍스트 밀도/분량 부족", "G.ResumeStructure", "high",
                      detect_low_content_density),
    StructuralPattern("HIGH_BUZZWORD_RATIO", "추상적 버즈워드 비중이 높음", "G.ResumeStructure", "mid",
                      detect_high_buzzword_ratio),
    StructuralPattern("VAGUE_RESPONSIBILITY_PATTERN", "책임 범위가 모호한 표현 다수", "G.ResumeStructure", "mid",
                      detect_vague_responsibility),
    StructuralPattern("GENERIC_SELF_DESCRIPTION_PATTERN", "진부한 자기소개/비유 표현", "G.ResumeStructure", "low",
                      detect_generic_self_description),
    StructuralPattern("HEDGE_LANGUAGE_DOMINANCE", "말끝 흐리기/완곡표현 비중이 높음", "J.LanguageSignals", "mid",
                      detect_hedge_language),
    StructuralPattern("LOW_CONFIDENCE_LANGUAGE_PATTERN", "자신감/주도성 약한 표현 반복", "J.LanguageSignals", "mid",
                      detect_low_confidence_language),
    StructuralPattern("RESPONSIBILITY_AVOIDANCE_PATTERN", "책임 회피성 표현 반복", "J.LanguageSignals", "mid",
                      detect_responsibility_avoidance),
    StructuralPattern("PASSIVE_VOICE_OVERUSE_PATTERN", "수동태 표현 과다", "J.LanguageSignals", "mid",
                      detect_passive_voice),
    StructuralPattern("WEAK_ASSERTION_PATTERN", "약한 주장 표현 과다", "J.LanguageSignals", "mid",
                      detect_weak_assertion),
)

PATTERNS_BY_ID: dict[str, StructuralPattern] = {p.id: p for p in PATTERNS}
