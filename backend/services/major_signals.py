"""Field-of-study fit between the candidate and the posting.

Majors and JD major hints are mapped to coarse clusters (EE, CS, ...).
Similarity is 1.0 for the same cluster and 0.6 for a neighbour in the
job family's adjacency table. The result only nudges the objective
score slightly, and only when the JD signals that major matters.
"""

import logging
import re

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.input_facts import InputFacts
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.major_signals import MajorSignals
from models.schemas.resume_signals import ResumeSignals
from services.text_utils import clamp, clamp01, uniq

logger = logging.getLogger(__name__)

BASE_IMPORTANCE = 0.15
STRONG_IMPORTANCE = 0.75
HIGH_BONUS_CAP = 0.07
LOW_BONUS_CAP = 0.05
KNOCKOUT_BONUS_FACTOR = 0.3
ADJACENT_SIMILARITY = 0.6
MAX_JD_HINTS = 6
MAX_MERGED_HINTS = 8

_MAJOR_WORD_RE = re.compile(r"(전공|관련\s*학과|관련학과|학과|major)", re.IGNORECASE)
_DEGREE_WORD_RE = re.compile(r"(학사|석사|박사|학위|degree|master|ph\.?d|bachelor)", re.IGNORECASE)
_EXPLICIT_REQUIRED_RE = re.compile(
    r"(전공\s*(필수|required)|관련\s*학과\s*(필수|required)|학위\s*(필수|required)|"
    r"석사\s*이상|박사\s*우대|박사\s*이상|required\s*degree)",
    re.IGNORECASE,
)
_EXPLICIT_PREFERRED_RE = re.compile(
    r"(전공\s*(우대|선호|preferred)|관련\s*학과\s*(우대|선호)|학위\s*(우대|선호)|석사\s*우대|학사\s*이상)",
    re.IGNORECASE,
)
_RND_STRONG_RE = re.compile(
    r"(연구|r&d|rnd|개발|설계|회로|공정|소자|실험|시험|검증|모델링|알고리즘|논문|특허|"
    r"전산유체|finite element|fea|cfd)",
    re.IGNORECASE,
)
_DATA_RESEARCH_RE = re.compile(
    r"(데이터|data|분석|analytics|리서치|research|통계|statistics|모델|model|머신러닝|"
    r"machine learning|ml|딥러닝|deep learning)",
    re.IGNORECASE,
)
_LOW_MAJOR_FAMILY_RE = re.compile(
    r"(영업|sales|bd|bizdev|마케팅|marketing|브랜딩|brand|cs|cx|고객|커뮤니티|community)",
    re.IGNORECASE,
)

# Checked in order; first hit wins
JOB_FAMILY_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("RND_ENGINEERING", re.compile(
        r"(연구|r&d|rnd|개발|설계|회로|공정|소자|실험|시험|검증|모델링|알고리즘|embedded|firmware|"
        r"기구설계|hw|hardware|sw|software)", re.IGNORECASE)),
    ("DATA_RESEARCH", re.compile(
        r"(데이터|data|분석|analytics|리서치|research|통계|statistics|모델|model|머신러닝|"
        r"machine learning|ml|딥러닝|deep learning|ai\b)", re.IGNORECASE)),
    ("OPS_MANUFACTURING", re.compile(
        r"(생산|품질|공정관리|scm|supply chain|구매|자재|납기|리드타임|물류|ops|operation|"
        r"manufactur|factory|설비)", re.IGNORECASE)),
    ("SALES_MARKETING", re.compile(
        r"(영업|sales|bd|bizdev|마케팅|marketing|crm|퍼포먼스|growth|브랜딩|brand)", re.IGNORECASE)),
    ("BIZ_STRATEGY", re.compile(
        r"(전략|사업기획|기획|pm\b|product manager|서비스기획|사업개발|go-to-market|gtm|kpi|okr|"
        r"market|시장분석)", re.IGNORECASE)),
)

MAJOR_CLUSTER_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("EE", re.compile(r"(전기|전자|정보통신|통신공학|반도체|제어|로봇(공학)?|전장|electrical|electronics|ee)", re.IGNORECASE)),
    ("CS", re.compile(r"(컴퓨터|소프트웨어|전산|정보(공학)?|ai|인공지능|데이터|data science|cs\b|computer science|software)", re.IGNORECASE)),
    ("ME", re.compile(r"(기계|조선|해양|항공|자동차|산업공학|생산공학|systems?|mechanical|me\b)", re.IGNORECASE)),
    ("CHE", re.compile(r"(화학|화공|재료|신소재|고분자|ceramic|materials?|chemical)", re.IGNORECASE)),
    ("CE", re.compile(r"(토목|건축|도시|환경(공학)?|civil|architecture)", re.IGNORECASE)),
    ("BIZ", re.compile(r"(경영|회계|재무|경영정보|mba|business|accounting|finance)", re.IGNORECASE)),
    ("QUANT", re.compile(r"(경제|통계|수학|금융공학|퀀트|economics|statistics|math|quant)", re.IGNORECASE)),
    ("DESIGN", re.compile(r"(디자인|산업디자인|시각디자인|ux|ui|hci|design)", re.IGNORECASE)),
    ("BIO", re.compile(r"(생명|바이오|약학|의학|간호|biolog|bio|pharm|medical|nursing)", re.IGNORECASE)),
)

# Neighbouring clusters per job family
ADJACENCY: dict[str, dict[str, tuple[str, ...]]] = {
    "RND_ENGINEERING": {
        "EE": ("CHE", "CS"), "CHE": ("EE",), "CS": ("EE",), "ME": ("CE", "EE"), "CE": ("ME",),
        "BIZ": (), "QUANT": ("CS",), "DESIGN": (), "BIO": ("CHE",),
    },
    "DATA_RESEARCH": {
        "CS": ("QUANT", "BIZ", "EE"), "QUANT": ("CS", "BIZ"), "BIZ": ("QUANT", "CS"), "EE": ("CS",),
        "ME": ("CS",), "CHE": ("CS",), "CE": ("CS",), "DESIGN": ("CS",), "BIO": ("CS", "CHE"),
    },
    "OPS_MANUFACTURING": {
        "ME": ("BIZ", "CE", "CHE"), "BIZ": ("ME", "QUANT"), "CE": ("ME",), "CHE": ("ME",), "EE": ("ME",),
        "CS": ("ME",), "QUANT": ("BIZ",), "DESIGN": (), "BIO": ("CHE",),
    },
    "BIZ_STRATEGY": {
        "BIZ": ("QUANT", "CS"), "QUANT": ("BIZ", "CS"), "CS": ("BIZ", "QUANT"), "EE": ("CS",),
        "ME": ("BIZ",), "CHE": ("BIZ",), "CE": ("BIZ",), "DESIGN": ("BIZ",), "BIO": ("BIZ",),
    },
    "SALES_MARKETING": {
        "BIZ": ("DESIGN", "QUANT", "CS"), "DESIGN": ("BIZ",), "QUANT": ("BIZ",), "CS": ("BIZ",),
        "EE": (), "ME": (), "CHE": (), "CE": (), "BIO": (),
    },
}

_HINT_COLON_RE = re.compile(r"전공\s*[:：]\s*([^\n\r,;/]{2,40})")
_HINT_DEPT_RE = re.compile(r"관련\s*학과\s*[:：]?\s*([^\n\r,;/]{2,40})")
_HINT_NEAR_RE = re.compile(r"([가-힣A-Za-z&· ]{2,30})\s*(전공|학과)")


def is_major_explicitly_required(jd: str) -> bool:
    return _EXPLICIT_REQUIRED_RE.search((jd or "").lower()) is not None


def parse_major_importance(jd: str) -> float:
    """Estimate 0..1 how much the posting cares about the candidate's major."""
    text = (jd or "").lower()
    importance = BASE_IMPORTANCE

    explicit_required = _EXPLICIT_REQUIRED_RE.search(text) is not None
    explicit_preferred = _EXPLICIT_PREFERRED_RE.search(text) is not None
    if explicit_required:
        importance += 0.55
    elif explicit_preferred:
        importance += 0.35
    elif _MAJOR_WORD_RE.search(text) or _DEGREE_WORD_RE.search(text):
        importance += 0.22

    if _RND_STRONG_RE.search(text):
        importance += 0.35
    elif _DATA_RESEARCH_RE.search(text):
        importance += 0.25

    if not explicit_required and not explicit_preferred and _LOW_MAJOR_FAMILY_RE.search(text):
        importance -= 0.2

    return clamp01(importance)


def infer_job_family(jd: str) -> str:
    text = (jd or "").lower()
    for family, pattern in JOB_FAMILY_PATTERNS:
        if pattern.search(text):
            return family
    return "UNKNOWN"


def map_major_to_cluster(major: str) -> str | None:
    text = (major or "").lower().strip()
    if not text:
        return None
    for cluster, pattern in MAJOR_CLUSTER_PATTERNS:
        if pattern.search(text):
            return cluster
    return None


def extract_major_hints(jd: str) -> list[str]:
    """Pull short major phrases like "전공: 전자공학" out of the JD."""
    text = jd or ""
    if not text.strip():
        return []
    hints: list[str] = []
    for pattern in (_HINT_COLON_RE, _HINT_DEPT_RE):
        m = pattern.search(text)
        if m:
            hints.append(m.group(1))
    hints.extend(m.group(1) for m in _HINT_NEAR_RE.finditer(text))
    return uniq(h.strip() for h in hints)[:MAX_JD_HINTS]


def major_similarity(candidate: str | None, required: list[str], job_family: str) -> float:
    if not candidate or not required:
        return 0.0
    if candidate in required:
        return 1.0
    neighbours = ADJACENCY.get(job_family, {}).get(candidate, ())
    if any(r in neighbours for r in required):
        return ADJACENT_SIMILARITY
    return 0.0


def build_major_signals(
    facts: InputFacts,
    keyword_signals: KeywordSignals,
    resume_signals: ResumeSignals,
    ai: AIEnhancement | None = None,
) -> MajorSignals:
    major = (facts.education.major if facts.education else "") or (ai.candidate_major if ai else "")
    major = major.strip()
    cluster = map_major_to_cluster(major)

    importance = parse_major_importance(facts.jd)
    family = infer_job_family(facts.jd)
    explicit = is_major_explicitly_required(facts.jd)

    ai_hints = ai.required_major_hints if ai else []
    hints = uniq([*ai_hints, *(h.lower() for h in extract_major_hints(facts.jd))])[:MAX_MERGED_HINTS]
    clusters = uniq(c for c in (map_major_to_cluster(h) for h in hints) if c)

    sim = major_similarity(cluster, clusters, family)
    cap = HIGH_BONUS_CAP if importance >= STRONG_IMPORTANCE else LOW_BONUS_CAP
    bonus = sim * importance * cap
    if keyword_signals.has_knockout_missing:
        # Keep a knockout from being offset by a major bonus
        bonus *= KNOCKOUT_BONUS_FACTOR

    notes = []
    if major and not cluster:
        notes.append("전공 텍스트는 있으나 전공군으로 분류하기 어려움")
    if not major:
        notes.append("입력/이력서에서 전공 정보를 찾지 못함")
    if not clusters and importance >= 0.55:
        notes.append("JD에서 요구 전공 힌트를 안정적으로 추출하지 못함")

    bridge = keyword_signals.match_score >= 0.6 or resume_signals.resume_signal_score >= 0.7

    return MajorSignals(
        major=major,
        major_cluster=cluster,
        job_family=family,
        importance=importance,
        explicit=explicit,
        jd_major_hints=hints,
        jd_clusters=clusters,
        similarity=sim,
        bonus=clamp(bonus, 0.0, HIGH_BONUS_CAP),
        bridge_hint=bridge,
        note=" / ".join(notes) if notes else None,
    )
