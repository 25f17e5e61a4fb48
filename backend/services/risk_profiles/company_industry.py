"""Company and industry context profiles."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, evidence_notes, flag_profile

GROUP = "companyIndustryContext"


def _explain_vendor(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="벤더/외주 경력 해석 리스크",
        why=[
            "SI/협력사/외주/파견 등 벤더 신호가 보입니다.",
            "인하우스 채용에서는 '고객 요구 수행' 경험으로만 읽혀 오너십이 낮게 평가될 수 있습니다.",
        ],
        fix=[
            "고객사 이름보다 본인이 책임진 범위와 결정한 내용을 앞에 쓰세요.",
            "여러 고객사를 거쳤다면 반복해서 재현한 역량(도메인/툴/프로세스)을 묶어 보여주세요.",
        ],
        evidence_keys=["vendor_signal_count"],
        notes=evidence_notes(flag),
    )


def _explain_company(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="지원 회사 특이성 부족",
        why=["지원 회사의 이름/제품/서비스와 연결된 표현이 이력서에 보이지 않습니다."],
        fix=["지원 회사의 제품이나 시장과 본인 경험이 맞닿는 지점을 1~2문장으로 추가하세요."],
        evidence_keys=["company_name_candidates", "company_mentioned"],
        notes=[f"회사 후보: {', '.join(ctx.metrics.company_name_candidates)}"],
    )


def _explain_role(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="지원 직무 특이성 부족",
        why=["지원 직무명이나 핵심 역할을 특정하는 표현이 약해 포지셔닝이 흐립니다."],
        fix=["이력서 상단 요약에 지원 직무명과 그 직무의 핵심 역할 2가지를 명시하세요."],
        evidence_keys=["role_candidates", "role_mentioned"],
        notes=[f"직무 후보: {', '.join(ctx.metrics.role_candidates)}"],
    )


PROFILES = (
    flag_profile("COMPANY__VENDOR_SIGNAL", GROUP, 74, "VENDOR_LOCK_PATTERN", _explain_vendor),
    flag_profile("COMPANY__LOW_COMPANY_SPECIFICITY", GROUP, 64, "LOW_COMPANY_SPECIFICITY_PATTERN", _explain_company),
    flag_profile("COMPANY__LOW_ROLE_SPECIFICITY", GROUP, 62, "LOW_ROLE_SPECIFICITY_PATTERN", _explain_role),
)
