"""Metrics aggregator for the structural pattern bank.

Computes every intermediate signal once from the input facts and
validates it into the canonical StructuralMetrics schema. Detectors and
risk profiles only ever read that schema.
"""

import logging
import re
from dataclasses import dataclass

import numpy as np
from rapidfuzz import fuzz

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.input_facts import CareerHistoryEntry, InputFacts
from models.schemas.structural import ExtremeJobHopping, StructuralMetrics
from services.structural import phrases
from services.structural.thresholds import THRESHOLDS
from services.text_utils import normalize, similarity, uniq

logger = logging.getLogger(__name__)

FUZZY_MENTION_THRESHOLD = 90
RECENT_JOBS_CONSIDERED = 3

_TOKEN_STRIP_RE = re.compile(r"[^0-9a-zA-Z가-힣_%.\-+/]")
_PERCENT_RE = re.compile(r"^\d+%$")
_DIGITS_RE = re.compile(r"^\d+$")
_NUMBERS_RE = re.compile(
    r"(\d+(?:\.\d+)?\s?%|\d+(?:\.\d+)?\s?(?:억|만|천|백)|\d+(?:\.\d+)?\s?배|"
    r"\d+(?:\.\d+)?\s?(?:명|건|회|주|일|개월|년))"
)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})[-./](\d{1,2})")


@dataclass(frozen=True)
class Texts:
    """Normalized source texts. Combined is resume and portfolio."""
    jd: str = ""
    resume: str = ""
    portfolio: str = ""
    combined: str = ""


def structural_tokens(text: str) -> list[str]:
    """Coarse tokens: drops one-character tokens except bare numbers."""
    cleaned = _TOKEN_STRIP_RE.sub(" ", normalize(text).lower())
    return [
        t for t in cleaned.split()
        if len(t) >= 2 or _PERCENT_RE.match(t) or _DIGITS_RE.match(t)
    ]


def count_matches(text: str, table: tuple[phrases.Phrase, ...]) -> int:
    s = normalize(text).lower()
    if not s:
        return 0
    count = 0
    for phrase in table:
        if isinstance(phrase, re.Pattern):
            count += sum(1 for _ in phrase.finditer(s))
        elif phrase:
            count += s.count(phrase.lower())
    return count


def phrase_hits(text: str, table: tuple[phrases.Phrase, ...]) -> list[str]:
    """Which entries of a table occur at least once, in table order."""
    s = normalize(text).lower()
    if not s:
        return []
    hits = []
    for phrase in table:
        if isinstance(phrase, re.Pattern):
            m = phrase.search(s)
            if m:
                hits.append(m.group(0))
        elif phrase and phrase.lower() in s:
            hits.append(phrase)
    return uniq(hits)


def includes_any(text: str, needles) -> bool:
    s = normalize(text).lower()
    return bool(s) and any(n and str(n).lower() in s for n in needles)


def evidence_snippets(text: str, needles, max_snippets: int = 3, window: int = 42) -> list[str]:
    """Cut a window of text around the first hit of each needle."""
    s = normalize(text)
    low = s.lower()
    out: list[str] = []
    if not s:
        return out
    for needle in needles:
        if isinstance(needle, re.Pattern):
            m = needle.search(low)
            if not m:
                continue
            idx, length = m.start(), len(m.group(0))
        else:
            n = str(needle or "").lower()
            idx = low.find(n) if n else -1
            if idx < 0:
                continue
            length = len(n)
        out.append(s[max(0, idx - window):min(len(s), idx + length + window)])
        if len(out) >= max_snippets:
            break
    return out


def count_numbers(text: str) -> int:
    return len(_NUMBERS_RE.findall(normalize(text)))


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(normalize(text)) if len(s.strip()) >= 2]


def extract_required_skills(jd: str) -> tuple[list[str], list[str]]:
    """Return (required skill tokens, raw required lines) from a JD."""
    lines = [ln.strip() for ln in normalize(jd).split("\n") if ln.strip()]
    required_lines = [
        ln for ln in lines
        if any(marker in ln.lower() for marker in phrases.REQUIRED_LINE_MARKERS)
    ]
    skills = [
        t for line in required_lines for t in structural_tokens(line)
        if t not in phrases.REQUIRED_STOP_TOKENS
    ]
    return [s for s in uniq(skills) if s not in phrases.REQUIRED_GENERIC_TOKENS], required_lines


# --- timeline ---

def month_span(entry: CareerHistoryEntry) -> float | None:
    """Tenure of one history entry in months, inclusive of both ends."""
    if entry.months is not None:
        return max(0.0, entry.months)
    ms = _YEAR_MONTH_RE.match(entry.start_date)
    me = _YEAR_MONTH_RE.match(entry.end_date)
    if not ms or not me:
        return None
    months = (int(me.group(1)) - int(ms.group(1))) * 12 + (int(me.group(2)) - int(ms.group(2))) + 1
    return float(months) if months > 0 else None


def avg_tenure_months(history: list[CareerHistoryEntry]) -> float | None:
    spans = [m for m in (month_span(e) for e in history) if m is not None and m > 0]
    if not spans:
        return None
    return float(np.mean(spans))


def extreme_job_hopping(history: list[CareerHistoryEntry]) -> ExtremeJobHopping:
    recent = sorted(history, key=lambda e: e.end_date, reverse=True)[:RECENT_JOBS_CONSIDERED]
    short = 0
    for entry in recent:
        m = month_span(entry)
        if m is not None and 0 < m < THRESHOLDS["EXTREME_HOP_MONTHS"]:
            short += 1
    return ExtremeJobHopping(short_count=short, considered=len(recent))


def industry_switches(history: list[CareerHistoryEntry]) -> int:
    industries = [e.industry.lower().strip() for e in history if e.industry.strip()]
    return sum(1 for prev, cur in zip(industries, industries[1:]) if prev != cur)


def employment_months(history: list[CareerHistoryEntry]) -> tuple[float, float, float]:
    """Return (intern, full-time, total) months across history."""
    intern = full = total = 0.0
    for entry in history:
        m = month_span(entry)
        if m is None or m <= 0:
            continue
        total += m
        kind = entry.employment_type.lower()
        if "인턴" in kind or "intern" in kind:
            intern += m
        if "정규" in kind or "full" in kind:
            full += m
    return intern, full, total


# --- education ---

def detect_candidate_education(facts: InputFacts, combined: str) -> str:
    if facts.education is not None and facts.education.level:
        return facts.education.level
    for level in phrases.DEGREE_PRIORITY:
        if phrases.RESUME_DEGREE_COMPILED[level].search(combined):
            return level
    return ""


def detect_required_education(jd: str) -> str:
    if not jd or phrases.JD_EDUCATION_NOT_REQUIRED_RE.search(jd):
        return ""
    for level, pattern in phrases.JD_EDUCATION_REQUIREMENT_PATTERNS:
        if pattern.search(jd):
            return level
    return ""


def education_gate_fail(candidate: str, required: str) -> bool | None:
    if not candidate or not required:
        return None
    return phrases.EDUCATION_RANK[candidate] < phrases.EDUCATION_RANK[required]


# --- specificity ---

def is_mentioned(candidates: list[str], combined: str) -> bool | None:
    """None when there is nothing to look for or no text to look in."""
    if not candidates or not combined.strip():
        return None
    low = combined.lower()
    for c in candidates:
        c = c.lower()
        if c in low:
            return True
        if len(c) >= 3 and low and fuzz.partial_ratio(c, low) >= FUZZY_MENTION_THRESHOLD:
            return True
    return False


def _ratio(count: int, total: int) -> float | None:
    return min(1.0, count / total) if total > 0 else None


def compute_structural_metrics(
    facts: InputFacts, ai: AIEnhancement | None = None
) -> tuple[StructuralMetrics, Texts]:
    jd = normalize(facts.jd)
    resume = normalize(facts.resume)
    portfolio = normalize(facts.portfolio)
    combined = "\n\n".join(t for t in (resume, portfolio) if t)
    texts = Texts(jd=jd, resume=resume, portfolio=portfolio, combined=combined)

    combined_tokens = structural_tokens(combined)
    combined_token_set = uniq(combined_tokens)

    weak = count_matches(combined, phrases.OWNERSHIP_WEAK)
    strong = count_matches(combined, phrases.OWNERSHIP_STRONG)

    required_skills, required_lines = extract_required_skills(jd)
    token_set = set(combined_token_set)
    covered = [s for s in required_skills if s in token_set]
    missing = [s for s in required_skills if s not in token_set]

    sentences = split_sentences(combined)
    enough_sentences = len(sentences) >= THRESHOLDS["MIN_SENTENCES"]
    passive = sum(1 for s in sentences if count_matches(s, phrases.PASSIVE_MARKERS) > 0)
    weak_assert = sum(1 for s in sentences if count_matches(s, phrases.WEAK_ASSERTION_MARKERS) > 0)

    company_candidates = uniq([facts.company, ai.detected_company if ai else ""])
    role_candidates = uniq([facts.role, ai.detected_role if ai else ""])

    history = facts.career_history or []
    timeline: dict = {}
    if history:
        intern, full, total = employment_months(history)
        timeline = {
            "has_career_history": True,
            "avg_tenure_months": avg_tenure_months(history),
            "extreme_job_hopping": extreme_job_hopping(history),
            "industry_switches": industry_switches(history),
            "intern_months": intern,
            "fulltime_months": full,
            "total_history_months": total,
        }

    candidate_level = detect_candidate_education(facts, combined)
    required_level = detect_required_education(jd)

    metrics = StructuralMetrics(
        jd_length=len(jd),
        resume_length=len(resume),
        portfolio_length=len(portfolio),
        combined_length=len(combined),
        token_count=len(combined_tokens),
        semantic_similarity=similarity(uniq(structural_tokens(jd)), combined_token_set),
        numbers_count=count_numbers(combined),
        ownership_weak_count=weak,
        ownership_strong_count=strong,
        ownership_ratio=_ratio(strong, strong + weak),
        impact_verb_count=count_matches(combined, phrases.IMPACT_VERBS),
        impact_verb_hits=phrase_hits(combined, phrases.IMPACT_VERBS),
        decision_authority_count=count_matches(combined, phrases.DECISION_VERBS),
        decision_authority_hits=phrase_hits(combined, phrases.DECISION_VERBS),
        project_initiation_count=count_matches(combined, phrases.INITIATION_VERBS),
        project_initiation_hits=phrase_hits(combined, phrases.INITIATION_VERBS),
        team_count=count_matches(combined, phrases.TEAM_SIGNALS),
        solo_count=count_matches(combined, phrases.SOLO_SIGNALS),
        vendor_signal_count=count_matches(combined, phrases.VENDOR_SIGNALS),
        hedge_count=count_matches(combined, phrases.HEDGE_PHRASES),
        low_confidence_count=count_matches(combined, phrases.LOW_CONFIDENCE_PHRASES),
        responsibility_avoidance_count=count_matches(combined, phrases.RESPONSIBILITY_AVOIDANCE_PHRASES),
        buzzword_count=count_matches(combined, phrases.BUZZWORDS),
        vague_count=count_matches(combined, phrases.VAGUE_RESPONSIBILITY_PHRASES),
        generic_self_intro_hits=phrase_hits(combined, phrases.GENERIC_SELF_INTRO_PHRASES),
        sentence_count=len(sentences),
        passive_voice_count=passive,
        passive_voice_ratio=_ratio(passive, len(sentences)) if enough_sentences else None,
        weak_assertion_count=weak_assert,
        weak_assertion_ratio=_ratio(weak_assert, len(sentences)) if enough_sentences else None,
        required_lines=required_lines,
        required_skills=required_skills,
        required_covered=covered,
        required_missing=missing,
        required_coverage=len(covered) / len(required_skills) if required_skills else None,
        company_name_candidates=company_candidates,
        company_mentioned=is_mentioned(company_candidates, combined),
        role_candidates=role_candidates,
        role_mentioned=is_mentioned(role_candidates, combined),
        candidate_education_level=candidate_level,
        required_education_level=required_level,
        education_gate_fail=education_gate_fail(candidate_level, required_level),
        **timeline,
    )
    logger.debug(
        "Structural metrics: %d tokens, similarity %.3f, coverage %s",
        metrics.token_count, metrics.semantic_similarity, metrics.required_coverage,
    )
    return metrics, texts
