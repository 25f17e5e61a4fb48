from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.career_signals import CareerSignals, RequiredYears
from services.hypotheses import build_hypotheses, make_hypothesis
from services.report import (
    CHECKLIST,
    DISCLAIMER,
    MAX_AI_ITEMS,
    build_report,
    format_hypothesis,
    required_years_text,
)
from services.signals import collect_signals

SECTIONS = ("[객관 지표]", "[전공/학력(추정)]", "[키워드 상세]", "[핵심 가설]", "[추천 체크리스트]")


def test_sections_in_order(scenario_state):
    report = build_report(scenario_state)
    positions = [report.index(s) for s in SECTIONS]
    assert positions == sorted(positions)
    assert report.startswith("탈락 원인 분석 리포트 (추정)\n")
    assert DISCLAIMER in report


def test_missing_header_fields(scenario_state):
    report = build_report(scenario_state)
    assert "- 회사: (미입력)" in report
    assert "- 포지션: (미입력)" in report
    assert "- 단계: 서류" in report
    assert "- 지원일: -" in report


def test_header_uses_given_fields(rich_state):
    report = build_report(rich_state)
    assert "- 회사: 한빛테크" in report
    assert "- 포지션: 백엔드 개발자" in report
    assert "- 지원일: 2026-09-01" in report


def test_objective_block(scenario_state):
    report = build_report(scenario_state)
    assert "- JD 요구 연차(추정): 3년+" in report
    assert "- 경력 차이(보유-요구): -2년" in report
    assert "- JD 경험 정책(추정): experienced" in report
    assert "경력 구성(이력 기준)" not in report


def test_history_split_line(rich_state):
    report = build_report(rich_state)
    assert "- 경력 구성(이력 기준): 정규직 27개월 / 인턴 0개월 / 전체 27개월\n" in report


def test_history_split_counts_interns(rich_state):
    history = [*rich_state["careerHistory"], {"startDate": "2018-01", "endDate": "2018-06", "employmentType": "인턴"}]
    report = build_report({**rich_state, "careerHistory": history})
    assert "- 경력 구성(이력 기준): 정규직 27개월 / 인턴 6개월 / 전체 33개월\n" in report


def test_checklist_lines(scenario_state):
    report = build_report(scenario_state)
    for line in CHECKLIST:
        assert f"- {line}\n" in report


def test_hypotheses_are_numbered(scenario_state):
    report = build_report(scenario_state)
    ranked = build_hypotheses(scenario_state)
    for i, h in enumerate(ranked, start=1):
        assert f"{i}. {h.title} (우선순위" in report


def test_precomputed_inputs_render_the_same(scenario_state):
    bundle = collect_signals(scenario_state)
    hyps = build_hypotheses(scenario_state, signals=bundle)
    assert build_report(scenario_state, signals=bundle, hypotheses=hyps) == build_report(scenario_state)


def test_required_years_text():
    assert required_years_text(CareerSignals()) == "탐지 실패"
    assert required_years_text(CareerSignals(required_years=RequiredYears(min=3))) == "3년+"
    assert required_years_text(CareerSignals(required_years=RequiredYears(min=3, max=5))) == "3년~5년"


def test_format_hypothesis_without_signals():
    h = make_hypothesis("x", "제목", "이유", actions=["하나", "둘"], counter="예외")
    text = format_hypothesis(2, h)
    assert text.startswith("2. 제목 (우선순위 0/100)\n")
    assert "- 근거/신호: 입력 신호 부족\n" in text
    assert "  - 하나\n  - 둘\n" in text
    assert text.endswith("- 반례/예외: 예외\n")


class TestAISections:
    def test_absent_without_ai(self, scenario_state):
        report = build_report(scenario_state)
        assert "[AI 제안 불릿]" not in report
        assert "[AI 정합성 점검]" not in report

    def test_empty_ai_adds_nothing(self, scenario_state):
        assert build_report(scenario_state, AIEnhancement()) == build_report(scenario_state)

    def test_bullets_and_conflicts(self, scenario_state):
        ai = AIEnhancement(
            suggested_bullets=[{"before": "분석 업무 수행", "after": "SQL로 주간 리포트 자동화", "why": ""}],
            conflicts=[{"type": "연차 불일치", "evidence": "3년 이상", "explanation": "", "fix": "경력 환산"}],
        )
        report = build_report(scenario_state, ai)
        assert report.index("[AI 제안 불릿]") < report.index("[AI 정합성 점검]")
        assert "1)\n- Before: 분석 업무 수행\n- After: SQL로 주간 리포트 자동화\n- Why: -\n" in report
        assert "1) 연차 불일치\n- 근거: 3년 이상\n- 설명: -\n- 수정/대응: 경력 환산\n" in report

    def test_items_are_capped(self, scenario_state):
        ai = AIEnhancement(suggested_bullets=[{"before": f"b{i}"} for i in range(12)])
        report = build_report(scenario_state, ai)
        assert f"{MAX_AI_ITEMS})\n" in report
        assert f"{MAX_AI_ITEMS + 1})\n" not in report

    def test_nice_to_have_and_skill_tags(self, scenario_state):
        ai = AIEnhancement(jd_nice_to_have=["AWS", " Kubernetes "], resume_skill_tags=["SQL"])
        report = build_report(scenario_state, ai)
        keyword_block = report[report.index("[키워드 상세]"):report.index("[핵심 가설]")]
        assert "- 우대 요건(AI 추출): aws, kubernetes\n" in keyword_block
        assert "- 이력서 스킬 태그(AI 추출): sql\n" in keyword_block
