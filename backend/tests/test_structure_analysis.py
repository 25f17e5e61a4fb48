import pytest

from models.schemas.ai_enhancement import AIEnhancement
from services.structure_analysis import (
    build_structure_analysis,
    count_ownership_evidence,
    infer_company_size,
    infer_industry,
    label_from_100,
)

STRONG_OWNERSHIP_RESUME = "신규 결제 프로젝트를 리드하고 주도해 설계, 구축, 총괄했습니다"


@pytest.mark.parametrize(
    "text, fallback, expected",
    [
        ("반도체 공정 엔지니어", "", "semiconductor"),
        ("API를 설계하고 운영", "", "saas"),
        ("rapid growth team", "", ""),
        ("고객 상담", " Finance ", "finance"),
        ("", "", ""),
    ],
)
def test_infer_industry(text, fallback, expected):
    assert infer_industry(text, fallback) == expected


@pytest.mark.parametrize(
    "text, explicit, expected",
    [
        ("임직원 5000명 대기업", False, "large"),
        ("시리즈 A 스타트업", False, "startup"),
        ("직원: 120", False, "smb"),
        ("300명", True, "mid"),
        ("사용자 300명 대상 서비스", False, ""),
        ("", True, ""),
    ],
)
def test_infer_company_size(text, explicit, expected):
    assert infer_company_size(text, explicit=explicit) == expected


def test_label_from_100():
    assert [label_from_100(n) for n in (80, 75, 74, 45, 44)] == ["HIGH", "HIGH", "MEDIUM", "MEDIUM", "LOW"]


class TestOwnership:
    def test_strong(self):
        a = build_structure_analysis({"resume": STRONG_OWNERSHIP_RESUME})
        assert a.ownership_hits == ["리드", "주도", "설계", "구축", "총괄"]
        assert a.ownership_level_score == 85
        assert "HIGH_OWNERSHIP" in a.flags
        assert "(리드, 주도, 설계, 구축, 총괄)" in a.summary

    def test_low(self):
        a = build_structure_analysis({"resume": "팀 업무 지원"})
        assert a.ownership_level_score == 25
        assert "LOW_OWNERSHIP" in a.flags

    def test_empty_resume_is_neutral(self):
        a = build_structure_analysis({"resume": "  "})
        assert count_ownership_evidence("") == []
        assert a.ownership_level_score == 55
        assert "LOW_OWNERSHIP" not in a.flags


class TestCompanySize:
    def test_downshift_without_ownership(self):
        a = build_structure_analysis({
            "resume": "팀 업무 지원",
            "companySizeCandidate": "대기업",
            "companySizeTarget": "스타트업",
        })
        assert (a.candidate_company_size, a.target_company_size) == ("large", "startup")
        assert a.company_size_fit_score == 0
        assert {"SIZE_DOWNSHIFT_RISK", "LOW_OWNERSHIP"} <= set(a.flags)

    def test_downshift_with_strong_ownership(self):
        a = build_structure_analysis({
            "resume": STRONG_OWNERSHIP_RESUME,
            "companySizeCandidate": "대기업",
            "companySizeTarget": "스타트업",
        })
        assert a.company_size_fit_score == 65
        assert "SIZE_DOWNSHIFT_RISK" not in a.flags

    def test_ai_values_come_first(self):
        ai = AIEnhancement(
            detected_industry="finance",
            detected_company_size_candidate="mid",
            detected_company_size_target="임직원 3000명",
        )
        a = build_structure_analysis(
            {"resume": "고객 상담 업무", "companySizeCandidate": "스타트업"}, ai,
        )
        assert (a.candidate_company_size, a.target_company_size) == ("mid", "large")
        assert a.company_size_fit_score == 39
        assert "SIZE_UPSHIFT_RISK" in a.flags
        assert a.resume_industry == a.jd_industry == "finance"

    def test_unknown_sizes_stay_neutral(self):
        a = build_structure_analysis({"resume": "팀 업무 지원", "jd": "백엔드 개발자 채용"})
        assert a.company_size_fit_score == 50
        assert a.candidate_company_size == a.target_company_size == ""


class TestIndustry:
    def test_same_industry(self):
        a = build_structure_analysis({"resume": "반도체 공정 개선", "jd": "반도체 장비 엔지니어"})
        assert a.industry_structure_fit_score == 80
        assert "INDUSTRY_STRONG_MATCH" in a.flags
        assert a.vendor_experience_score == 80
        assert "VENDOR_CORE_VALUE" in a.flags

    def test_adjacent_mismatch_is_softened(self):
        a = build_structure_analysis({"resume": "커머스 플랫폼 운영", "jd": "SaaS 제품 개발"})
        assert (a.resume_industry, a.jd_industry) == ("commerce", "saas")
        assert a.industry_structure_fit_score == 30
        assert "INDUSTRY_MISMATCH" in a.flags

    def test_missing_industry_is_neutral(self):
        a = build_structure_analysis({"resume": "반도체 공정 개선", "jd": "담당 업무 안내"})
        assert a.jd_industry == ""
        assert a.industry_structure_fit_score == 50
        assert "INDUSTRY_MISMATCH" not in a.flags


def test_strategy_role_limits_vendor_value():
    a = build_structure_analysis({"role": "전략", "jd": "Investment due diligence 전략 업무"})
    assert a.role_inference.role == "strategy"
    assert a.role_inference.score == 7
    assert a.vendor_experience_score == 24
    assert "VENDOR_LIMITED_VALUE" in a.flags


def test_empty_state_summary():
    a = build_structure_analysis({})
    assert a.flags == []
    assert a.summary == (
        "Company size signals uncertain. Ownership evidence MEDIUM. "
        "Vendor experience relevance MEDIUM. Industry match MEDIUM."
    )
