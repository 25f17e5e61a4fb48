"""Dictionary keyword matching between a job description and a resume.

A small curated skill dictionary drives detection: an entry counts as a
JD keyword when the keyword or any alias appears in the JD, and as
matched when it also appears in the resume. Entries flagged critical
act as knockouts when the resume lacks them.

The optional AI enhancement can widen alias lists with synonyms and add
free-form must-have requirements, which are checked with interpretive
rules (years, strategy role, P&L, manufacturing domain) instead of
verbatim containment.
"""

import logging
import re
from dataclasses import dataclass

from rapidfuzz import fuzz

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.keyword_signals import KeywordSignals
from services.text_utils import clamp, clamp01, has_word, normalize, tokenize, uniq

logger = logging.getLogger(__name__)

KNOCKOUT_MATCH_PENALTY = 0.55
NO_KEYWORD_MATCH_SCORE = 0.35
NO_KEYWORD_NOTE = (
    "JD에서 사전 키워드를 거의 찾지 못했습니다. "
    "JD의 필수/우대/주요업무 문장을 더 붙여 넣으면 분석 정확도가 올라갑니다."
)

RELIABILITY_KEYWORD_CAP = 8
RELIABILITY_TOKEN_CAP = 250
GENERIC_MUST_HAVE_TOKENS = 8
FUZZY_MUST_HAVE_THRESHOLD = 90


@dataclass(frozen=True)
class SkillEntry:
    keyword: str
    aliases: tuple[str, ...] = ()
    critical: bool = False


SKILL_DICTIONARY: tuple[SkillEntry, ...] = (
    # Software
    SkillEntry("javascript", ("js",)),
    SkillEntry("typescript", ("ts",)),
    SkillEntry("react", critical=True),
    SkillEntry("node", ("node.js",)),
    SkillEntry("next.js", ("nextjs", "next")),
    SkillEntry("python", critical=True),
    SkillEntry("java"),
    SkillEntry("sql", critical=True),
    # Cloud / infra
    SkillEntry("aws", ("amazon web services",)),
    SkillEntry("gcp", ("google cloud",)),
    SkillEntry("azure", ("microsoft azure",)),
    SkillEntry("docker"),
    SkillEntry("kubernetes", ("k8s",)),
    # Operations / purchasing
    SkillEntry("excel"),
    SkillEntry("sap"),
    SkillEntry("erp"),
    SkillEntry("procurement", ("purchasing",)),
    SkillEntry("purchasing", ("buyer",)),
    SkillEntry("sourcing"),
    SkillEntry("negotiation", ("negotiate",)),
    SkillEntry("supply chain", ("supply-chain", "scm")),
    SkillEntry("scm", ("supply chain",)),
    # Product / design evidence
    SkillEntry("portfolio"),
    SkillEntry("case study", ("casestudy",)),
    SkillEntry("metrics", ("metric",)),
    SkillEntry("conversion", ("cvr",)),
)

_DICTIONARY_BY_KEYWORD: dict[str, SkillEntry] = {e.keyword: e for e in SKILL_DICTIONARY}

# Interpretive must-have rules: (requirement pattern, strong terms, weak terms)
_STRATEGY_ROLE_RE = re.compile(r"(사업기획|전략기획|사업\s*전략|strategy\s*planning)", re.IGNORECASE)
_STRATEGY_STRONG = ("사업기획", "전략기획", "사업전략")
_STRATEGY_WEAK = (
    "사업기획", "전략기획", "사업전략", "전략", "기획", "사업 운영", "사업운영", "운영",
    "마케팅 전략", "go-to-market", "gtm", "kpi", "사업계획", "연간 사업계획",
    "계획 수립", "전략 수립",
)

_PL_RE = re.compile(r"(손익|p/l|pl\s*분석|영업손익|profit\s*loss)", re.IGNORECASE)
_PL_STRONG = ("손익", "p/l", "p&l", "영업손익", "사업부 손익")
_PL_WEAK = (
    "손익", "p/l", "pl", "손익 분석", "p/l 분석", "영업손익", "사업부 손익",
    "매출", "이익", "마진", "profit", "loss", "p&l",
)

_MANUFACTURING_RE = re.compile(r"(제조업|산업재|manufactur|factory|production|공장)", re.IGNORECASE)
_MANUFACTURING_HINTS = (
    "제조", "제조업", "생산", "공장", "품질", "납기", "리드타임", "공정", "설비",
    "원가", "재고", "공급망", "scm", "supply chain", "산업재", "b2b",
)

_YEARS_WORD_RE = re.compile(r"(경력|years?|experience)", re.IGNORECASE)
_MIN_YEARS_PATTERNS = (
    re.compile(r"(\d+)\s*년\s*(이상|\+|\s*plus)?", re.IGNORECASE),
    re.compile(r"(\d+)\s*\+\s*years?", re.IGNORECASE),
)
_YEARS_MONTHS_RE = re.compile(r"(\d+)\s*년\s*(\d+)\s*개월")
_YEARS_ONLY_RE = re.compile(r"(\d+)\s*년(?!\s*\d+\s*개월)")
_MAX_RESUME_YEARS = 40


def _synonym_map(ai: AIEnhancement | None) -> dict[str, list[str]]:
    return ai.keyword_synonyms if ai is not None else {}


def expand_candidates(seed: list[str] | tuple[str, ...], synonyms: dict[str, list[str]]) -> list[str]:
    """Lower-case the seed terms and append AI synonyms after each one."""
    out: list[str] = []
    for term in seed:
        key = term.lower().strip()
        out.append(key)
        out.extend(synonyms.get(key, []))
    return uniq(out)


def _any_match(tokens: list[str], text: str, candidates: list[str]) -> bool:
    return any(has_word(tokens, c) or has_word(text, c) for c in candidates)


def parse_min_years(text: str) -> int | None:
    for pattern in _MIN_YEARS_PATTERNS:
        m = pattern.search(text or "")
        if m:
            return int(m.group(1))
    return None


def estimate_resume_years(resume_text: str) -> float:
    """Roughly sum "N년 M개월" and "N년" mentions into years, capped at 40."""
    if not (resume_text or "").strip():
        return 0.0
    months = 0
    for m in _YEARS_MONTHS_RE.finditer(resume_text):
        months += int(m.group(1)) * 12 + int(m.group(2))
    for m in _YEARS_ONLY_RE.finditer(resume_text):
        months += int(m.group(1)) * 12
    return clamp(months, 0, _MAX_RESUME_YEARS * 12) / 12


def is_must_have_satisfied(
    must_have: str,
    resume_tokens: list[str],
    resume_text: str,
    synonyms: dict[str, list[str]] | None = None,
) -> bool:
    """Judge a free-form must-have the way a screener would read it."""
    raw = (must_have or "").strip()
    if not raw:
        return True
    synonyms = synonyms or {}
    mh = raw.lower()

    min_years = parse_min_years(raw)
    if min_years is not None and _YEARS_WORD_RE.search(mh):
        return estimate_resume_years(resume_text) >= min_years

    if _STRATEGY_ROLE_RE.search(mh):
        if _any_match(resume_tokens, resume_text, expand_candidates(_STRATEGY_STRONG, synonyms)):
            return True
        weak = [c for c in expand_candidates(_STRATEGY_WEAK, synonyms)
                if _any_match(resume_tokens, resume_text, [c])]
        return len(weak) >= 2

    if _PL_RE.search(mh):
        if _any_match(resume_tokens, resume_text, expand_candidates(_PL_STRONG, synonyms)):
            return True
        weak = [c for c in expand_candidates(_PL_WEAK, synonyms)
                if _any_match(resume_tokens, resume_text, [c])]
        return len(weak) >= 2

    if _MANUFACTURING_RE.search(mh):
        return _any_match(resume_tokens, resume_text, expand_candidates(_MANUFACTURING_HINTS, synonyms))

    compact = re.sub(r"\([^)]*\)", " ", mh)
    compact = re.sub(r"[\[\]{}]", " ", compact)
    compact = re.sub(r"\s+", " ", compact).strip()
    head_tokens = [t for t in tokenize(compact)[:GENERIC_MUST_HAVE_TOKENS] if len(t) >= 2]
    if _any_match(resume_tokens, resume_text, expand_candidates([raw, *head_tokens], synonyms)):
        return True
    # Spacing variants such as "데이터 분석" vs "데이터분석"
    return len(compact) >= 4 and fuzz.partial_ratio(compact, resume_text) >= FUZZY_MUST_HAVE_THRESHOLD


def build_keyword_signals(jd: str, resume: str, ai: AIEnhancement | None = None) -> KeywordSignals:
    """Match dictionary keywords found in the JD against the resume."""
    jd_text = normalize(jd).lower()
    resume_text = normalize(resume).lower()
    jd_tokens = tokenize(jd_text)
    resume_tokens = tokenize(resume_text)
    synonyms = _synonym_map(ai)

    jd_keywords: list[str] = []
    for entry in SKILL_DICTIONARY:
        candidates = expand_candidates((entry.keyword, *entry.aliases), synonyms)
        if _any_match(jd_tokens, jd_text, candidates):
            jd_keywords.append(entry.keyword)
    jd_keywords = uniq(jd_keywords)

    reliability = clamp01(
        min(len(jd_keywords), RELIABILITY_KEYWORD_CAP) / RELIABILITY_KEYWORD_CAP * 0.7
        + min(len(jd_tokens), RELIABILITY_TOKEN_CAP) / RELIABILITY_TOKEN_CAP * 0.3
    )

    matched: list[str] = []
    missing: list[str] = []
    for kw in jd_keywords:
        entry = _DICTIONARY_BY_KEYWORD[kw]
        candidates = expand_candidates((kw, *entry.aliases), synonyms)
        if _any_match(resume_tokens, resume_text, candidates):
            matched.append(kw)
        else:
            missing.append(kw)

    jd_critical = [kw for kw in jd_keywords if _DICTIONARY_BY_KEYWORD[kw].critical]
    ai_must_have = uniq(ai.jd_must_have) if ai is not None else []
    missing_ai_must_have = [
        mh for mh in ai_must_have
        if not is_must_have_satisfied(mh, resume_tokens, resume_text, synonyms)
    ]

    missing_critical = uniq([kw for kw in jd_critical if kw not in matched] + missing_ai_must_have)
    has_knockout = bool(missing_critical)
    jd_critical_final = uniq(jd_critical + ai_must_have)

    if not jd_keywords:
        logger.debug("No dictionary keywords in JD (%d tokens)", len(jd_tokens))
        return KeywordSignals(
            match_score=NO_KEYWORD_MATCH_SCORE,
            reliability=reliability,
            jd_critical=jd_critical_final,
            missing_critical=missing_critical,
            has_knockout_missing=has_knockout,
            note=NO_KEYWORD_NOTE,
        )

    raw = len(matched) / len(jd_keywords)
    match_score = clamp01(raw * (0.85 + 0.15 * reliability))
    if has_knockout:
        match_score = clamp01(match_score * KNOCKOUT_MATCH_PENALTY)

    return KeywordSignals(
        match_score=match_score,
        matched_keywords=matched,
        missing_keywords=missing,
        jd_keywords=jd_keywords,
        reliability=reliability,
        jd_critical=jd_critical_final,
        missing_critical=missing_critical,
        has_knockout_missing=has_knockout,
        note=None,
    )
