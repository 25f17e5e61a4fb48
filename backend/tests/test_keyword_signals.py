import pytest

from models.schemas.ai_enhancement import AIEnhancement
from services.keyword_signals import (
    KNOCKOUT_MATCH_PENALTY,
    NO_KEYWORD_MATCH_SCORE,
    build_keyword_signals,
    estimate_resume_years,
    expand_candidates,
    is_must_have_satisfied,
    parse_min_years,
)


def test_empty_inputs_use_fallback_score():
    ks = build_keyword_signals("", "")
    assert ks.match_score == NO_KEYWORD_MATCH_SCORE == 0.35
    assert ks.jd_keywords == []
    assert ks.note is not None
    assert not ks.has_knockout_missing


def test_non_string_inputs_are_treated_as_empty():
    ks = build_keyword_signals(None, 123)
    assert ks.match_score == 0.35
    assert ks.jd_keywords == []


def test_scenario_sql_matched_react_knockout():
    ks = build_keyword_signals("3년 이상 경력, SQL 필수, React 우대", "SQL을 활용한 분석 경험 2건")
    assert "sql" in ks.matched_keywords
    assert "react" in ks.missing_critical
    assert ks.has_knockout_missing


def test_knockout_dominance():
    """A missing critical keyword cuts the match score to at most 0.56x."""
    ks = build_keyword_signals("Python and React required", "Python developer with Django")
    assert ks.has_knockout_missing
    assert ks.missing_critical == ["react"]
    raw = len(ks.matched_keywords) / len(ks.jd_keywords)
    before_penalty = raw * (0.85 + 0.15 * ks.reliability)
    assert ks.match_score <= before_penalty * 0.56 + 1e-9
    assert ks.match_score == pytest.approx(before_penalty * KNOCKOUT_MATCH_PENALTY)


def test_all_matched_no_knockout():
    ks = build_keyword_signals("Docker and Kubernetes", "Operated docker images on k8s")
    assert ks.matched_keywords == ["docker", "kubernetes"]
    assert ks.missing_keywords == []
    assert not ks.has_knockout_missing
    assert 0.85 <= ks.match_score <= 1.0


def test_java_does_not_match_javascript():
    ks = build_keyword_signals("Java 개발자", "JavaScript 개발 3년")
    assert "java" in ks.missing_keywords
    assert "java" not in ks.matched_keywords


def test_alias_counts_as_match():
    ks = build_keyword_signals("JavaScript 능숙자", "JS 프론트엔드 개발")
    assert "javascript" in ks.matched_keywords


def test_line_endings_do_not_change_signals():
    jd = "자격요건\r\nSQL 필수\rReact 우대"
    resume = "  SQL 리포트 자동화\t\t\r대시보드 운영  "
    assert build_keyword_signals(jd, resume) == build_keyword_signals(
        "자격요건\nSQL 필수\nReact 우대", "SQL 리포트 자동화\n대시보드 운영"
    )


def test_reliability_bounded():
    jd = " ".join(["python sql react docker aws excel sap erp"] * 50)
    ks = build_keyword_signals(jd, "python")
    assert 0.0 <= ks.reliability <= 1.0


class TestAIEnhancement:
    def test_synonyms_widen_matching(self):
        ai = AIEnhancement(keyword_synonyms={"react": ["리액트"]})
        ks = build_keyword_signals("React 필수", "리액트로 화면 개발", ai)
        assert "react" in ks.matched_keywords
        assert not ks.has_knockout_missing

    def test_ai_must_have_missing_is_knockout(self):
        ai = AIEnhancement(jd_must_have=["3년 이상 경력"])
        ks = build_keyword_signals("데이터 분석 담당자 모집", "분석 업무 2년 근무", ai)
        assert ks.has_knockout_missing
        assert "3년 이상 경력" in ks.missing_critical
        assert "3년 이상 경력" in ks.jd_critical

    def test_ai_must_have_satisfied(self):
        ai = AIEnhancement(jd_must_have=["3년 이상 경력"])
        ks = build_keyword_signals("데이터 분석 담당자 모집", "분석 업무 5년 근무", ai)
        assert not ks.has_knockout_missing


def test_expand_candidates_appends_synonyms():
    out = expand_candidates(["React", "react"], {"react": ["리액트", "reactjs"]})
    assert out == ["react", "리액트", "reactjs"]


def test_parse_min_years():
    assert parse_min_years("경력 5년 이상") == 5
    assert parse_min_years("3+ years of experience") == 3
    assert parse_min_years("경력 무관") is None


def test_estimate_resume_years():
    assert estimate_resume_years("A사 2년 6개월, B사 1년") == pytest.approx(3.5)
    assert estimate_resume_years("") == 0.0


class TestMustHaveRules:
    def test_strategy_role_needs_strong_or_two_weak(self):
        assert is_must_have_satisfied("사업기획 경험", ["사업기획"], "사업기획 3년")
        assert is_must_have_satisfied("전략기획 경험", [], "연간 사업계획 및 kpi 관리")
        assert not is_must_have_satisfied("전략기획 경험", [], "고객 응대")

    def test_pl_analysis(self):
        assert is_must_have_satisfied("손익 분석", [], "영업손익 관리")
        assert not is_must_have_satisfied("손익 분석", [], "문서 작성")

    def test_manufacturing_domain(self):
        assert is_must_have_satisfied("제조업 경험", [], "공장 생산 관리")
        assert not is_must_have_satisfied("제조업 경험", [], "웹 서비스 운영")

    def test_blank_is_satisfied(self):
        assert is_must_have_satisfied("", [], "")
