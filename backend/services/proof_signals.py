"""Context-aware counting of quantified achievements.

A number only counts as proof when achievement language sits next to
it ("매출 18% 증가", "reduced cost by 1,200"). Dates, phone numbers,
clock times and ID-shaped strings are discarded outright.
"""

import logging
import re

from models.schemas.resume_signals import ResumeSignals

logger = logging.getLogger(__name__)

IMPACT_VERBS: tuple[str, ...] = (
    "개선", "상승", "절감", "달성", "성장", "구축", "단축", "감소", "증가", "최적화", "향상", "확대", "개편",
    "improve", "increase", "decrease", "reduce", "grow", "achieve", "optimize", "boost", "deliver",
)

IMPACT_NOUNS: tuple[str, ...] = (
    "매출", "이익", "원가", "비용", "전환율", "cvr", "클릭률", "ctr", "리드타임", "납기", "불량률",
    "재고", "kpi", "okr", "sla", "roi", "고객", "유지율", "retention",
    "revenue", "profit", "cost", "conversion", "lead time", "defect", "inventory", "margin",
)

# ASCII word boundaries so "2024년" still reads as a lone year
_NON_PROOF_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\b(19|20)\d{2}[.\-/]\d{1,2}[.\-/]\d{1,2}\b", re.ASCII),
    re.compile(r"\b(19|20)\d{2}\b", re.ASCII),
    re.compile(r"\b0\d{1,2}-\d{3,4}-\d{4}\b", re.ASCII),
    re.compile(r"\b010-\d{4}-\d{4}\b", re.ASCII),
    re.compile(r"\b\d{2}:\d{2}\b", re.ASCII),
    re.compile(r"\b\d{6}-\d{7}\b", re.ASCII),
)

_NUMBER_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\d{1,3}(,\d{3})+"),
    re.compile(r"\d+(\.\d+)?\s*%"),
    re.compile(r"\d+(\.\d+)?\s*(배|x)(?![a-z])", re.IGNORECASE),
    re.compile(r"\d+\s*(억|만|천)"),
    re.compile(r"\d+\s*(개월|주|일)"),
)

CONTEXT_WINDOW = 40
MAX_PROOF_NOTES = 5

# (minimum qualified count, score), checked top-down
_PROOF_STEPS: tuple[tuple[int, float], ...] = ((6, 0.85), (3, 0.7), (1, 0.5))
_PROOF_FLOOR = 0.35


def _non_proof_spans(text: str) -> list[tuple[int, int]]:
    spans = []
    for pattern in _NON_PROOF_PATTERNS:
        spans.extend((m.start(), m.end()) for m in pattern.finditer(text))
    return spans


def count_numeric_proof(text: str) -> tuple[int, int, list[str]]:
    """Return (raw, qualified, notes) for one text source."""
    if not isinstance(text, str) or not text.strip():
        return 0, 0, []

    spans = _non_proof_spans(text)
    lower = text.lower()
    raw = 0
    qualified = 0
    notes: list[str] = []

    for pattern in _NUMBER_PATTERNS:
        for m in pattern.finditer(text):
            raw += 1
            idx = m.start()
            if any(a <= idx <= b for a, b in spans):
                continue
            start = max(0, idx - CONTEXT_WINDOW)
            end = min(len(lower), m.end() + CONTEXT_WINDOW)
            context = lower[start:end]
            if any(w in context for w in IMPACT_VERBS) or any(w in context for w in IMPACT_NOUNS):
                qualified += 1
            else:
                notes.append(f"숫자 '{m.group(0)}'는 성과 문맥이 약해 제외됨")

    return raw, qualified, notes


def proof_score(qualified: int) -> float:
    for minimum, score in _PROOF_STEPS:
        if qualified >= minimum:
            return score
    return _PROOF_FLOOR


def build_resume_signals(resume: str, portfolio: str = "") -> ResumeSignals:
    """Combine numeric proof across resume and portfolio."""
    raw_a, qualified_a, notes_a = count_numeric_proof(resume)
    raw_b, qualified_b, notes_b = count_numeric_proof(portfolio)
    qualified = qualified_a + qualified_b

    return ResumeSignals(
        proof_count=qualified,
        proof_count_raw=raw_a + raw_b,
        resume_signal_score=proof_score(qualified),
        proof_notes=(notes_a + notes_b)[:MAX_PROOF_NOTES],
    )
