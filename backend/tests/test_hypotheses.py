import numpy as np
import pytest

from config import settings
from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.career_signals import CareerSignals
from models.schemas.input_facts import STAGES, InputFacts, SelfCheck
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.major_signals import MajorSignals
from models.schemas.objective import ObjectiveScore
from models.schemas.resume_signals import ResumeSignals
from services.analyzer import analyze
from services.hypotheses import (
    CONFLICT_MIN,
    assemble,
    build_hypotheses,
    confidence_from_self_check,
    conflict_penalty,
    correlation_boosts,
    is_interview_stage,
    is_resume_stage,
    make_hypothesis,
    score_hypotheses,
)
from services.signals import SignalBundle, collect_signals

RESUME_ONLY = {"fit-mismatch", "major-mismatch", "major-bridge", "weak-proof", "unclear-positioning"}
INTERVIEW_ONLY = {"risk-signals", "weak-interview-proof"}


def _bundle(
    facts: InputFacts | None = None,
    keyword: KeywordSignals | None = None,
    career: CareerSignals | None = None,
    objective: float = 0.5,
) -> SignalBundle:
    return SignalBundle(
        facts=facts or InputFacts(),
        keyword=keyword or KeywordSignals(),
        career=career or CareerSignals(),
        resume=ResumeSignals(),
        major=MajorSignals(),
        objective=ObjectiveScore(score=objective),
    )


def _assembled(state: dict) -> dict:
    return {h.id: h for h in assemble(collect_signals(state))}


class TestScenario:
    def test_top_hypothesis_is_a_fit_problem(self, scenario_state):
        ranked = build_hypotheses(scenario_state)
        assert ranked
        assert ranked[0].id in {"knockout-missing", "fit-mismatch"}

    def test_ranking_invariants(self, scenario_state):
        ranked = build_hypotheses(scenario_state)
        priorities = [h.priority for h in ranked]
        assert priorities == sorted(priorities, reverse=True)
        assert len(ranked) <= settings.hypothesis_limit
        assert len({h.id for h in ranked}) == len(ranked)
        for h in ranked:
            assert 0.0 <= h.priority <= 1.0
            assert 0.0 <= h.confidence <= 1.0

    def test_is_deterministic(self, scenario_state):
        assert build_hypotheses(scenario_state) == build_hypotheses(scenario_state)

    def test_precomputed_signals_match(self, scenario_state):
        bundle = collect_signals(scenario_state)
        assert build_hypotheses(scenario_state, signals=bundle) == build_hypotheses(scenario_state)

    def test_limit_from_settings(self, scenario_state, monkeypatch):
        monkeypatch.setattr(settings, "hypothesis_limit", 2)
        assert len(build_hypotheses(scenario_state)) == 2


class TestStageGating:
    @pytest.mark.parametrize(
        "stage, resume, interview",
        [
            ("서류", True, False),
            ("Resume screening", True, False),
            ("1차 면접", False, True),
            ("Final Interview", False, True),
            ("오퍼 직전/협상", False, False),
            ("", False, False),
        ],
    )
    def test_stage_predicates(self, stage, resume, interview):
        assert is_resume_stage(stage) is resume
        assert is_interview_stage(stage) is interview

    def test_resume_stage(self, scenario_state):
        ids = set(_assembled(scenario_state))
        assert "fit-mismatch" in ids
        assert "weak-proof" in ids
        assert not ids & INTERVIEW_ONLY

    def test_interview_stage(self, scenario_state):
        ids = set(_assembled({**scenario_state, "stage": "1차 면접"}))
        assert INTERVIEW_ONLY <= ids
        assert not ids & RESUME_ONLY

    def test_other_stage_keeps_only_ungated(self, scenario_state):
        ids = set(_assembled({**scenario_state, "stage": "기타"}))
        assert ids <= {"knockout-missing", "gap-risk", "short-tenure-risk", "general-review"}

    def test_other_stage_with_clean_career_falls_back(self):
        state = {"stage": "기타", "career": {"lastTenureMonths": 36, "jobChanges": 1}}
        assert list(_assembled(state)) == ["general-review"]
        ranked = build_hypotheses(state)
        assert [h.id for h in ranked] == ["general-review"]
        assert ranked[0].confidence == pytest.approx(0.3)
        assert 0.0 <= ranked[0].priority <= 1.0

    def test_fallback_only_when_nothing_applies(self, scenario_state):
        assert "general-review" not in _assembled(scenario_state)


class TestCareerHypotheses:
    @pytest.mark.parametrize("gap, confidence", [(4, 0.6), (7, 0.7), (14, 0.78)])
    def test_gap_risk_confidence(self, scenario_state, gap, confidence):
        state = {**scenario_state, "career": {"totalYears": 1, "gapMonths": gap}}
        assert _assembled(state)["gap-risk"].confidence == confidence

    def test_short_gap_is_ignored(self, scenario_state):
        state = {**scenario_state, "career": {"totalYears": 1, "gapMonths": 2}}
        assert "gap-risk" not in _assembled(state)

    def test_very_short_tenure(self, scenario_state):
        state = {**scenario_state, "career": {"lastTenureMonths": 5}}
        h = _assembled(state)["short-tenure-risk"]
        assert h.confidence == 0.76
        assert "직전 근속: 5개월" in h.signals

    def test_frequent_changes_without_tenure(self, scenario_state):
        state = {**scenario_state, "career": {"jobChanges": 3}}
        h = _assembled(state)["short-tenure-risk"]
        assert h.confidence == 0.62
        assert h.signals == ["이직 횟수: 3회"]

    def test_stable_career_has_no_career_hypotheses(self, scenario_state):
        state = {**scenario_state, "career": {"lastTenureMonths": 36, "jobChanges": 1}}
        ids = set(_assembled(state))
        assert "gap-risk" not in ids
        assert "short-tenure-risk" not in ids


def test_make_hypothesis_clamps_and_drops_empty_signals():
    h = make_hypothesis("x", "t", "w", signals=["a", None, ""], impact=1.5, confidence=-1, evidence_boost=0.9)
    assert h.signals == ["a"]
    assert h.impact == 1.0
    assert h.confidence == 0.0
    assert h.evidence_boost == 0.25


class TestConfidenceFromSelfCheck:
    def test_neutral_ratings(self):
        sc = SelfCheck()
        assert confidence_from_self_check("fit-mismatch", sc) == pytest.approx(1.0)
        assert confidence_from_self_check("risk-signals", sc) == pytest.approx(1.0)
        assert confidence_from_self_check("gap-risk", sc) == 1.0

    def test_extremes_stay_mild(self):
        assert confidence_from_self_check("fit-mismatch", SelfCheck(core_fit=1)) == pytest.approx(1.15)
        assert confidence_from_self_check("fit-mismatch", SelfCheck(core_fit=5)) == pytest.approx(0.85)
        assert confidence_from_self_check("weak-proof", SelfCheck(proof_strength=1)) == pytest.approx(1.15)

    def test_positioning_averages_two_ratings(self):
        sc = SelfCheck(role_clarity=1, story_consistency=5)
        assert confidence_from_self_check("unclear-positioning", sc) == pytest.approx(1.0)


class TestCorrelationBoosts:
    def test_full_driver_dampens_target(self):
        boosts = correlation_boosts({"fit-mismatch": 1.0, "unclear-positioning": 0.5})
        assert boosts["unclear-positioning"] == pytest.approx(0.85)
        assert boosts["fit-mismatch"] == 1.0

    def test_driver_at_activation_is_neutral(self):
        boosts = correlation_boosts({"fit-mismatch": 0.55, "unclear-positioning": 0.5})
        assert boosts["unclear-positioning"] == pytest.approx(1.0)

    def test_inactive_driver(self):
        boosts = correlation_boosts({"gap-risk": 0.4, "risk-signals": 0.9})
        assert boosts["risk-signals"] == 1.0

    def test_gap_bumps_risk_signals(self):
        boosts = correlation_boosts({"gap-risk": 1.0, "risk-signals": 0.9})
        assert boosts["risk-signals"] == pytest.approx(1.15)

    def test_missing_target_is_not_added(self):
        assert correlation_boosts({"fit-mismatch": 1.0}) == {"fit-mismatch": 1.0}


class TestConflictPenalty:
    def test_no_conflict(self):
        assert conflict_penalty(_bundle()) == 1.0

    def test_overconfident_fit(self):
        b = _bundle(
            facts=InputFacts(self_check={"coreFit": 5}),
            keyword=KeywordSignals(match_score=0.2),
        )
        assert conflict_penalty(b) == pytest.approx(0.85)

    def test_both_conflicts_floor(self):
        b = _bundle(
            facts=InputFacts(self_check={"coreFit": 5, "riskSignals": 1}),
            keyword=KeywordSignals(match_score=0.2),
            career=CareerSignals(career_risk_score=0.8),
        )
        assert conflict_penalty(b) == CONFLICT_MIN


class TestScoreHypotheses:
    def test_ties_keep_input_order(self):
        b = _bundle()
        a = make_hypothesis("alpha", "a", "")
        z = make_hypothesis("zeta", "z", "")
        assert [h.id for h in score_hypotheses([a, z], b)] == ["alpha", "zeta"]
        assert [h.id for h in score_hypotheses([z, a], b)] == ["zeta", "alpha"]

    def test_priority_is_impact_confidence_objective(self):
        b = _bundle(objective=0.5)
        h = make_hypothesis("alpha", "a", "", impact=0.8, confidence=0.5, evidence_boost=0.1)
        [scored] = score_hypotheses([h], b)
        assert scored.confidence == pytest.approx(0.6)
        assert scored.priority == pytest.approx(0.8 * 0.6 * 0.5)

    def test_zero_objective_does_not_divide_by_zero(self):
        [scored] = score_hypotheses([make_hypothesis("alpha", "a", "")], _bundle(objective=0.0))
        assert scored.priority == 0.0

    def test_ai_delta_is_clamped(self, scenario_state):
        b = collect_signals(scenario_state)
        hyps = assemble(b)
        ai = AIEnhancement(confidence_delta_by_hypothesis={"fit-mismatch": 0.9, "weak-proof": -0.9})
        assert ai.confidence_delta_by_hypothesis == {"fit-mismatch": 0.15, "weak-proof": -0.15}

        plain = {h.id: h for h in score_hypotheses(hyps, b)}
        nudged = {h.id: h for h in score_hypotheses(hyps, b, ai)}
        assert nudged["fit-mismatch"].confidence == pytest.approx(
            min(1.0, plain["fit-mismatch"].confidence + 0.15)
        )
        assert nudged["weak-proof"].confidence == pytest.approx(
            max(0.0, plain["weak-proof"].confidence - 0.15)
        )
        assert nudged["unclear-positioning"].confidence == pytest.approx(
            plain["unclear-positioning"].confidence
        )


JD_PARTS = (
    "3년 이상 경력",
    "신입 채용",
    "경력 무관",
    "SQL 필수",
    "React 우대",
    "Python 필수",
    "Docker, AWS 경험",
    "전자공학 전공 필수",
    "석사 이상",
    "데이터 분석 업무",
    "",
)
RESUME_PARTS = (
    "SQL을 활용한 분석 경험 2건",
    "매출 20% 증가",
    "리드타임 3일 단축",
    "React 화면 개발에 참여했습니다.",
    "Python으로 배치 파이프라인을 설계했습니다.",
    "팀 업무를 지원했습니다.",
    "열심히 하겠습니다.",
    "",
)


HISTORY_INDUSTRIES = ("커머스", "금융", "게임", "반도체", "", "SaaS")
EMPLOYMENT_TYPES = ("정규직", "인턴", "계약직", "intern", "")
DATE_FORMS = ("{y}-{m:02d}", "{y}.{m}", "{y}/{m:02d}", "", "현재", "2020-13", "abc")


def _random_date(rng: np.random.Generator) -> str:
    form = DATE_FORMS[int(rng.integers(0, len(DATE_FORMS)))]
    return form.format(y=int(rng.integers(2010, 2027)), m=int(rng.integers(1, 13)))


def _random_history(rng: np.random.Generator) -> list[dict] | None:
    n = int(rng.integers(-1, 5))
    if n < 0:
        return None
    return [
        {
            "startDate": _random_date(rng),
            "endDate": _random_date(rng),
            "months": None if rng.random() < 0.6 else float(rng.uniform(-5, 60)),
            "industry": HISTORY_INDUSTRIES[int(rng.integers(0, len(HISTORY_INDUSTRIES)))],
            "employmentType": EMPLOYMENT_TYPES[int(rng.integers(0, len(EMPLOYMENT_TYPES)))],
        }
        for _ in range(n)
    ]


def _random_state(rng: np.random.Generator) -> dict:
    def pick(parts, k):
        idx = rng.choice(len(parts), size=k, replace=False)
        return " ".join(parts[i] for i in idx)

    return {
        "jd": pick(JD_PARTS, int(rng.integers(0, 5))),
        "resume": pick(RESUME_PARTS, int(rng.integers(0, 5))),
        "portfolio": pick(RESUME_PARTS, int(rng.integers(0, 3))),
        "stage": STAGES[int(rng.integers(0, len(STAGES)))],
        "career": {
            "totalYears": float(rng.uniform(0, 15)),
            "gapMonths": int(rng.integers(0, 24)),
            "jobChanges": int(rng.integers(0, 8)),
            "lastTenureMonths": int(rng.integers(0, 60)),
        },
        "careerHistory": _random_history(rng),
        "selfCheck": {
            key: int(rng.integers(1, 6))
            for key in ("coreFit", "proofStrength", "roleClarity", "storyConsistency", "riskSignals")
        },
        "education": {"major": ["", "전자공학", "경영학", "화학공학"][int(rng.integers(0, 4))]},
    }


def _unit(value: float | None) -> bool:
    return value is None or 0.0 <= value <= 1.0


@pytest.mark.fuzz
def test_priorities_stay_bounded_over_random_inputs():
    rng = np.random.default_rng(20240611)
    for _ in range(1000):
        state = _random_state(rng)
        result = analyze(state)

        ranked = result.hypotheses
        assert 1 <= len(ranked) <= settings.hypothesis_limit
        assert len({h.id for h in ranked}) == len(ranked)
        priorities = [h.priority for h in ranked]
        assert priorities == sorted(priorities, reverse=True), state
        for h in ranked:
            assert 0.0 <= h.priority <= 1.0, state
            assert 0.0 <= h.confidence <= 1.0, state
            assert 0.0 <= h.evidence_boost <= 0.25, state

        assert _unit(result.objective.score), state
        assert _unit(result.keyword_signals.match_score), state
        assert _unit(result.keyword_signals.reliability), state
        for flag in result.structural.flags:
            assert 0.0 <= flag.score <= 1.0, (flag.id, state)
        for risk in result.risk_results:
            assert 0.0 <= risk.score <= 1.0, (risk.id, state)

        m = result.structural.metrics
        for ratio in (
            m.semantic_similarity,
            m.required_coverage,
            m.ownership_ratio,
            m.passive_voice_ratio,
            m.weak_assertion_ratio,
        ):
            assert _unit(ratio), state
        assert m.intern_months + m.fulltime_months <= m.total_history_months + 1e-9, state

        s = result.structure_analysis
        for score in (
            s.company_size_fit_score,
            s.vendor_experience_score,
            s.ownership_level_score,
            s.industry_structure_fit_score,
            result.hireability.score,
            result.risk_layer.document_risk.score,
            result.risk_layer.interview_risk.score,
        ):
            assert 0 <= score <= 100, state
        assert all(_unit(v) for v in result.pressure_layer.model_dump().values()), state
        hidden = result.hidden_risk
        assert _unit(hidden.overall_score), state
        for item in (
            hidden.items.retention_risk,
            hidden.items.domain_path_risk,
            hidden.items.scope_inflation_risk,
            hidden.items.culture_fit_proxy_risk,
        ):
            assert _unit(item.score), state
