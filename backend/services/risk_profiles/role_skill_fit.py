"""Role and skill fit profiles: JD requirement coverage and overlap."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, evidence_notes, flag_profile, pct

GROUP = "roleSkillFit"


def _explain_must_have(ctx: RiskContext, flag: Flag) -> RiskExplain:
    m = ctx.metrics
    why = [
        "JD 필수(Required/Must)로 추정된 키워드 대비 이력서/포트폴리오 반영률이 낮습니다. "
        f"(커버리지 {pct(m.required_coverage)})"
    ]
    if m.required_missing:
        why.append(f"누락 후보(일부): {', '.join(m.required_missing[:12])}")
    elif m.required_covered:
        why.append(f"반영된 키워드(일부): {', '.join(m.required_covered[:12])}")
    return RiskExplain(
        title="JD 필수 스킬/요건 누락 리스크",
        why=why,
        fix=[
            "JD의 필수/자격요건 라인마다 '내가 했던 일/결과/도구'를 1줄씩 붙여 증거를 만드세요.",
            "키워드를 나열하지 말고 경험 bullet 안에 '행동+대상+성과' 문장으로 넣으세요.",
            "경험이 없다면 유사 경험 대체, 단기 과제로 증빙, 지원 보류 중 하나로 판단하세요.",
        ],
        evidence_keys=["required_skills", "required_covered", "required_coverage", "required_lines"],
        notes=[
            f"필수 키워드 후보 수: {len(m.required_skills)}",
            f"반영된 키워드 수: {len(m.required_covered)}",
            *evidence_notes(flag),
        ],
    )


def _explain_similarity(ctx: RiskContext, flag: Flag) -> RiskExplain:
    sim = ctx.metrics.semantic_similarity
    return RiskExplain(
        title="JD와 이력서의 어휘/맥락 겹침이 낮음",
        why=[
            f"JD와 이력서가 공유하는 표현이 적습니다. (유사도 {sim:.2f})",
            "검토자가 '다른 직무의 이력서'로 읽을 가능성이 있습니다.",
        ],
        fix=[
            "JD의 주요업무 문장에 쓰인 용어로 본인 경험을 다시 서술하세요.",
            "직무와 무관한 경험은 줄이고 관련 경험을 상단에 배치하세요.",
        ],
        evidence_keys=["semantic_similarity"],
        notes=[f"유사도: {sim:.3f}"],
    )


def _explain_absence(ctx: RiskContext, flag: Flag) -> RiskExplain:
    m = ctx.metrics
    return RiskExplain(
        title="JD 필수 키워드가 이력서에 거의 없음",
        why=[
            "JD의 필수/자격요건 라인에서 뽑은 키워드가 이력서에 하나도 보이지 않습니다.",
            "ATS나 1차 검토에서 바로 제외될 수 있는 수준입니다.",
        ],
        fix=[
            "필수 라인의 핵심 명사를 이력서 요약과 경험 bullet에 명시적으로 반영하세요.",
            "해당 역량이 실제로 없다면 지원 직무를 재검토하세요.",
        ],
        evidence_keys=["required_skills", "required_lines"],
        notes=m.required_lines[:3],
    )


PROFILES = (
    flag_profile("ROLE_SKILL__MUST_HAVE_MISSING", GROUP, 95, "MUST_HAVE_SKILL_MISSING", _explain_must_have),
    flag_profile("ROLE_SKILL__LOW_SEMANTIC_SIMILARITY", GROUP, 82, "LOW_SEMANTIC_SIMILARITY_PATTERN",
                 _explain_similarity),
    flag_profile("ROLE_SKILL__JD_KEYWORD_ABSENCE", GROUP, 78, "JD_KEYWORD_ABSENCE_PATTERN", _explain_absence),
)
