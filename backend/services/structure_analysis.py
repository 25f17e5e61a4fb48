"""Structure rule engine: company size, vendor value, ownership, industry fit.

Every score starts at a neutral base (50, ownership 55) and moves only
on rules whose inputs were actually found. Sizes and industries come
from the caller or the AI extract first and from text heuristics second.
"""

import logging
import re

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.input_facts import InputFacts, ensure_facts
from models.schemas.structure_analysis import StructureAnalysis
from services.role_dictionary import infer_role
from services.text_utils import normalize, uniq

logger = logging.getLogger(__name__)

# (industry, pattern), first match wins
INDUSTRY_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("semiconductor", re.compile(
        r"(반도체|semiconductor|(?<![a-z])fab(?![a-z])|foundry|hbm|dram|nand|패키징|wafer|웨이퍼|공정|소자)", re.IGNORECASE)),
    ("automotive", re.compile(
        r"(자동차|automotive|(?<![a-z])oem(?![a-z])|tier\s*1|전장|adas|powertrain|(?<![a-z])car(?![a-z]))", re.IGNORECASE)),
    ("commerce", re.compile(r"(이커머스|e-?commerce|커머스|리테일|retail|마켓플레이스|marketplace)", re.IGNORECASE)),
    ("finance", re.compile(r"(금융|(?<![a-z])bank|보험|insurance|핀테크|fintech|증권|securities)", re.IGNORECASE)),
    ("game", re.compile(r"(게임|(?<![a-z])game|unity|unreal|mmorpg)", re.IGNORECASE)),
    ("saas", re.compile(r"(saas|클라우드|cloud|platform|플랫폼|(?<![a-z])api(?![a-z])|devops)", re.IGNORECASE)),
    ("manufacturing", re.compile(r"(제조|manufactur|factory|생산|공장|산업재|industrial)", re.IGNORECASE)),
)

_SIZE_WORDS: tuple[tuple[str, re.Pattern], ...] = (
    ("large", re.compile(r"(대기업|그룹사|enterprise|large|대형\s*기업|상장\s*대기업)", re.IGNORECASE)),
    ("mid", re.compile(r"(중견|mid-?size|middle\s*size|(?<![a-z])mid(?![a-z]))", re.IGNORECASE)),
    ("smb", re.compile(r"(중소|(?<![a-z])sme(?![a-z])|(?<![a-z])smb(?![a-z])|small\s*business|벤처)", re.IGNORECASE)),
    ("startup", re.compile(
        r"(스타트업|startup|(?<![a-z])seed(?![a-z])|series\s*[ab]|early-?stage|초기|스케일업|scale-?up)", re.IGNORECASE)),
)
_HEADCOUNT_RES = (
    re.compile(r"(?:직원|임직원|headcount|employees)\s*[:：]?\s*(\d{2,6})", re.IGNORECASE),
    re.compile(r"(\d{2,6})\s*명\s*(?:규모|scale)", re.IGNORECASE),
    re.compile(r"(\d{2,6})\s*(?:명|people|employees)", re.IGNORECASE),
)
SIZE_RANK = {"startup": 1, "smb": 2, "mid": 3, "large": 4}

OWNERSHIP_KEYWORDS: tuple[str, ...] = (
    "리드", "주도", "설계", "구축", "런칭", "0에서", "end-to-end", "총괄", "책임",
)
OWNERSHIP_STRONG_MIN = 5
OWNERSHIP_LOW_MAX = 1

_PROCESS_EVIDENCE_RE = re.compile(
    r"(협업|cross[-\s]?functional|stakeholder|프로세스|process|규정|compliance|문서화|거버넌스|"
    r"governance|보고|reporting|조직|matrix)",
    re.IGNORECASE,
)
_VENDOR_CONTEXT_RE = re.compile(
    r"(협력사|vendor|supplier|고객사|(?<![a-z])oem(?![a-z])|tier\s*1|납품|양산|ppap|apqp|품질\s*이슈|customer\s*issue|"
    r"(?<![a-z])field(?![a-z])|라인셋업|라인)",
    re.IGNORECASE,
)

ADJACENT_INDUSTRIES = frozenset({
    ("saas", "commerce"), ("commerce", "saas"), ("saas", "finance"), ("finance", "saas"),
})
NEAR_INDUSTRIES = frozenset({("manufacturing", "semiconductor"), ("semiconductor", "manufacturing")})


def infer_industry(text: str, fallback: str = "") -> str:
    t = normalize(text).lower()
    for industry, pattern in INDUSTRY_PATTERNS:
        if pattern.search(t):
            return industry
    return (fallback or "").strip().lower()


def _size_from_headcount(n: int) -> str:
    if n < 80:
        return "startup"
    if n < 300:
        return "smb"
    if n < 2000:
        return "mid"
    return "large"


def infer_company_size(text: str, explicit: bool = False) -> str:
    """One of startup / smb / mid / large, or '' when nothing hints at size.

    A bare "N명" only counts for explicit size values; in free text it is
    usually a team or user count.
    """
    t = normalize(text).lower()
    if not t:
        return ""
    for size, pattern in _SIZE_WORDS:
        if pattern.search(t):
            return size
    for pattern in (_HEADCOUNT_RES if explicit else _HEADCOUNT_RES[:2]):
        m = pattern.search(t)
        if m:
            return _size_from_headcount(int(m.group(1)))
    return ""


def company_size_label(size: str) -> str:
    return size.upper() if size in SIZE_RANK else "UNKNOWN"


def count_ownership_evidence(text: str) -> list[str]:
    t = normalize(text).lower()
    return uniq(k for k in OWNERSHIP_KEYWORDS if k in t)


def label_from_100(n: int) -> str:
    if n >= 75:
        return "HIGH"
    if n >= 45:
        return "MEDIUM"
    return "LOW"


def _score100(n: float) -> int:
    return int(min(100, max(0, round(n))))


def _size_fit(candidate: str, target: str, ownership_strong: bool, ownership_low: bool,
              process_evidence: bool, flags: list[str]) -> int:
    score = 50
    if candidate == "large" and target == "startup" and not ownership_strong:
        score -= 35
        flags.append("SIZE_DOWNSHIFT_RISK")
    if candidate == "startup" and target == "large":
        score -= 20
        flags.append("SIZE_UPSHIFT_RISK")
    if candidate and candidate == target:
        score += 15
    if ownership_strong:
        score += 15

    if not ownership_strong:
        downshift = {("large", "smb"): 12, ("large", "mid"): 12, ("mid", "startup"): 18, ("smb", "startup"): 10}
        penalty = downshift.get((candidate, target))
        if penalty:
            score -= penalty
            flags.append("SIZE_DOWNSHIFT_RISK")

    if not process_evidence:
        if candidate == "startup" and target in ("mid", "smb"):
            score -= 8
            flags.append("SIZE_UPSHIFT_RISK")
        if candidate in ("smb", "mid") and target == "large":
            score -= 10
            flags.append("SIZE_UPSHIFT_RISK")

    if target == "startup" and ownership_low:
        score -= 10
        flags.append("LOW_OWNERSHIP")
    if target == "large" and ownership_strong:
        score += 6

    if candidate in SIZE_RANK and target in SIZE_RANK:
        gap = abs(SIZE_RANK[candidate] - SIZE_RANK[target])
        if gap >= 3 and not ownership_strong:
            score -= 8
        elif gap == 2 and not ownership_strong:
            score -= 4
        elif gap == 1:
            score -= 1
    return _score100(score)


def _vendor_value(industry: str, role: str, vendor_context: bool, flags: list[str]) -> int:
    score = 50
    if industry == "semiconductor":
        score += 30
        flags.append("VENDOR_CORE_VALUE")
        if vendor_context:
            score += 8
    if industry == "automotive":
        score += 25
        if vendor_context:
            score += 6

    if "engineering" in role:
        score += 20
    if "ops" in role:
        score += 8
    if "sales" in role and vendor_context:
        score += 2
    if ("product" in role or role == "pm") and vendor_context:
        score += 3
    if "strategy" in role:
        score -= 20
        flags.append("VENDOR_LIMITED_VALUE")
    if "marketing" in role:
        score -= 15
    if ("strategy" in role or "marketing" in role) and not vendor_context:
        score -= 6
        flags.append("VENDOR_LIMITED_VALUE")
    return _score100(score)


def _industry_fit(resume_ind: str, jd_ind: str, flags: list[str]) -> int:
    score = 50
    if not resume_ind or not jd_ind:
        return score
    if resume_ind == jd_ind:
        flags.append("INDUSTRY_STRONG_MATCH")
        return _score100(score + 30)
    score -= 30
    flags.append("INDUSTRY_MISMATCH")
    if (resume_ind, jd_ind) in ADJACENT_INDUSTRIES:
        score += 10
    if (resume_ind, jd_ind) in NEAR_INDUSTRIES:
        score += 8
    return _score100(score)


def _summary(a: StructureAnalysis) -> str:
    cand, targ = company_size_label(a.candidate_company_size), company_size_label(a.target_company_size)
    if cand != "UNKNOWN" or targ != "UNKNOWN":
        size = f"Candidate from {cand} company applying to {targ}."
    else:
        size = "Company size signals uncertain."
    hits = f" ({', '.join(a.ownership_hits[:6])})" if a.ownership_hits else ""
    industry = f"Industry match {label_from_100(a.industry_structure_fit_score)}"
    if a.resume_industry and a.jd_industry:
        industry += f" (resume: {a.resume_industry}, jd: {a.jd_industry})"
    return (
        f"{size} Ownership evidence {label_from_100(a.ownership_level_score)}{hits}. "
        f"Vendor experience relevance {label_from_100(a.vendor_experience_score)}. {industry}."
    )


def build_structure_analysis(state: InputFacts | dict, ai: AIEnhancement | None = None) -> StructureAnalysis:
    facts = ensure_facts(state)
    resume, jd = facts.resume, facts.jd

    detected_industry = (ai.detected_industry if ai else "") or facts.industry
    resume_ind = infer_industry(resume, detected_industry)
    jd_ind = infer_industry(jd, detected_industry)

    candidate = infer_company_size(
        (ai.detected_company_size_candidate if ai else "") or facts.company_size_candidate, explicit=True,
    )
    candidate = candidate or infer_company_size(resume)
    target = infer_company_size(
        (ai.detected_company_size_target if ai else "") or facts.company_size_target, explicit=True,
    )
    target = target or infer_company_size(jd)

    hits = count_ownership_evidence(resume)
    ownership_strong = len(hits) >= OWNERSHIP_STRONG_MIN
    # no resume text means no ownership judgement either way
    ownership_low = bool(normalize(resume)) and len(hits) <= OWNERSHIP_LOW_MAX

    flags: list[str] = []
    if ownership_strong:
        ownership_score = 85
        flags.append("HIGH_OWNERSHIP")
    elif ownership_low:
        ownership_score = 25
        flags.append("LOW_OWNERSHIP")
    else:
        ownership_score = 55

    detected_role = (ai.detected_role if ai else "") or facts.role
    role_inference = infer_role(f"{detected_role} {jd} {resume}", fallback=detected_role)
    vendor_context = bool(_VENDOR_CONTEXT_RE.search(resume) or _VENDOR_CONTEXT_RE.search(jd))

    analysis = StructureAnalysis(
        company_size_fit_score=_size_fit(
            candidate, target, ownership_strong, ownership_low,
            bool(_PROCESS_EVIDENCE_RE.search(resume)), flags,
        ),
        vendor_experience_score=_vendor_value(
            resume_ind or jd_ind, role_inference.role.lower(), vendor_context, flags,
        ),
        ownership_level_score=ownership_score,
        industry_structure_fit_score=_industry_fit(resume_ind, jd_ind, flags),
        flags=uniq(flags),
        resume_industry=resume_ind,
        jd_industry=jd_ind,
        candidate_company_size=candidate,
        target_company_size=target,
        ownership_hits=hits,
        role_inference=role_inference,
    )
    analysis.summary = _summary(analysis)
    logger.debug("Structure analysis: flags=%s role=%s", analysis.flags, role_inference.role)
    return analysis
