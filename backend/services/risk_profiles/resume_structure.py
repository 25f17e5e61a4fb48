"""Resume structure and clarity profiles."""

from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag
from services.risk_profiles.base import RiskContext, evidence_notes, flag_profile
from services.structural.thresholds import THRESHOLDS

GROUP = "resumeStructureClarity"


def _explain_vague(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="책임 범위 모호 리스크",
        why=[
            "'관련 업무', '업무 전반', '등' 같은 표현이 반복돼 실제로 맡은 범위가 보이지 않습니다.",
        ],
        fix=[
            "모호한 표현마다 구체적인 대상(시스템/고객/예산/인원)으로 바꾸세요.",
            "'등'으로 끝나는 나열은 가장 중요한 2개만 남기고 구체화하세요.",
        ],
        evidence_keys=["vague_count", "token_count"],
        notes=[f"모호 표현 수: {ctx.metrics.vague_count}", *evidence_notes(flag)],
    )


def _explain_density(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="내용 분량 부족 리스크",
        why=["이력서/포트폴리오 분량이 적어 역량과 성과를 판단할 근거가 부족합니다."],
        fix=[
            "핵심 경험 2~3개를 '상황-행동-결과' 구조로 확장하세요.",
            "포트폴리오 요약이나 대표 프로젝트 설명을 함께 붙이세요.",
        ],
        evidence_keys=["combined_length"],
        notes=[
            f"본문 길이: {ctx.metrics.combined_length}자 (기준 {THRESHOLDS['MIN_COMBINED_LENGTH']}자)",
        ],
    )


def _explain_buzzword(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="버즈워드 과다 리스크",
        why=["혁신/열정/성장 같은 추상어 비중이 높아 구체적인 근거가 묻힙니다."],
        fix=["추상어 하나를 지울 때마다 그 자리를 사례나 수치 하나로 채우세요."],
        evidence_keys=["buzzword_count", "token_count"],
        notes=evidence_notes(flag),
    )


def _explain_generic(ctx: RiskContext, flag: Flag) -> RiskExplain:
    return RiskExplain(
        title="진부한 자기소개 리스크",
        why=["'비빔밥 같은', '맥가이버' 같은 클리셰는 차별점 없이 분량만 차지합니다."],
        fix=["비유 대신 그 성향이 드러난 실제 사례 한 줄로 바꾸세요."],
        evidence_keys=["generic_self_intro_hits"],
        notes=ctx.metrics.generic_self_intro_hits[:3],
    )


PROFILES = (
    flag_profile("VAGUE_RESPONSIBILITY_RISK", GROUP, 88, "VAGUE_RESPONSIBILITY_PATTERN", _explain_vague),
    flag_profile("LOW_CONTENT_DENSITY_RISK", GROUP, 78, "LOW_CONTENT_DENSITY_PATTERN", _explain_density),
    flag_profile("BUZZWORD_RATIO_RISK", GROUP, 62, "HIGH_BUZZWORD_RATIO", _explain_buzzword),
    flag_profile("GENERIC_SELF_INTRO_RISK", GROUP, 54, "GENERIC_SELF_DESCRIPTION_PATTERN", _explain_generic),
)
