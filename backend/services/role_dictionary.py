"""Role family inference from free text.

Each rule scores strong terms +3, weak terms +1 and negative terms -2.
The best rule wins only when it reaches 3 points, so a single weak hit
never labels a role. Keep the term lists short and high-signal.
"""

from dataclasses import dataclass

from models.schemas.structure_analysis import RoleInference
from services.text_utils import has_word

STRONG_POINTS = 3
WEAK_POINTS = 1
NEGATIVE_POINTS = -2
MIN_CONFIDENT_SCORE = 3


@dataclass(frozen=True)
class RoleRule:
    role: str
    strong: tuple[str, ...]
    weak: tuple[str, ...] = ()
    negative: tuple[str, ...] = ()


ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule(
        "hr",
        strong=("hrbp", "c&b", "compensation", "er", "labor", "노무", "평가보상", "채용"),
        weak=("인사", "조직문화", "온보딩", "교육", "hr"),
        negative=("sql", "tableau", "python", "react", "backend"),
    ),
    RoleRule(
        "pm",
        strong=("prd", "roadmap", "user story", "product manager", "po", "pmo"),
        weak=("서비스기획", "기획", "요구사항", "프로덕트", "pm"),
        negative=("회계", "fp&a", "노무", "c&b"),
    ),
    RoleRule(
        "data",
        strong=("sql", "tableau", "looker", "power bi", "ab test", "a/b", "pandas"),
        weak=("데이터", "지표", "분석", "analytics", "bi"),
        negative=("노무", "c&b", "prd", "roadmap"),
    ),
    RoleRule(
        "engineering",
        strong=("react", "node", "spring", "django", "api", "backend", "frontend"),
        weak=("개발", "engineer", "typescript", "java", "python"),
        negative=("노무", "c&b", "fp&a"),
    ),
    RoleRule(
        "sales",
        strong=("account executive", "ae", "pipeline", "quota", "b2b sales", "deal"),
        weak=("영업", "sales", "고객관리", "제안", "계약"),
        negative=("sql", "react", "fp&a"),
    ),
    RoleRule(
        "marketing",
        strong=("google ads", "meta ads", "ua", "performance marketing", "conversion"),
        weak=("마케팅", "growth", "캠페인", "퍼포먼스"),
        negative=("노무", "c&b", "backend"),
    ),
    RoleRule(
        "strategy",
        strong=("m&a", "investment", "due diligence", "시장분석", "경쟁분석", "사업타당성"),
        weak=("전략", "경영기획", "사업기획", "신사업", "bizdev"),
        negative=("react", "tableau", "노무"),
    ),
)


def score_role(rule: RoleRule, text: str) -> int:
    score = 0
    score += STRONG_POINTS * sum(1 for k in rule.strong if has_word(text, k))
    score += WEAK_POINTS * sum(1 for k in rule.weak if has_word(text, k))
    score += NEGATIVE_POINTS * sum(1 for k in rule.negative if has_word(text, k))
    return score


def infer_role(text: str | None, fallback: str = "") -> RoleInference:
    """Pick the highest-scoring rule; ties keep dictionary order."""
    t = (text or "").lower() if isinstance(text, str) else ""
    best: RoleRule | None = None
    best_score = 0
    for rule in ROLE_RULES:
        score = score_role(rule, t)
        if score > best_score:
            best, best_score = rule, score

    if best is None or best_score < MIN_CONFIDENT_SCORE:
        return RoleInference(role=(fallback or "").strip(), score=best_score)
    return RoleInference(role=best.role, score=best_score)
