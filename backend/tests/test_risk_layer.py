import pytest

from models.schemas.hireability import Hireability, HireabilityScores
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.structure_analysis import StructureAnalysis
from services.risk_layer import (
    DOCUMENT_DATA_POOR,
    INTERVIEW_DATA_POOR,
    build_document_risk,
    build_interview_risk,
    build_pressure_layer,
    build_risk_layer,
    risk_level,
)
from services.signals import collect_signals
from services.structure_analysis import build_structure_analysis


@pytest.mark.parametrize("score, level", [(100, "HIGH"), (70, "HIGH"), (69, "MEDIUM"), (40, "MEDIUM"), (39, "LOW")])
def test_risk_level(score, level):
    assert risk_level(score) == level


class TestDocumentRisk:
    def test_no_dictionary_keywords_is_neutral(self):
        risk = build_document_risk(KeywordSignals())
        assert risk.score == 55
        assert risk.level == "MEDIUM"
        assert risk.drivers == [DOCUMENT_DATA_POOR]

    def test_low_match_and_missing_must_haves(self):
        kw = KeywordSignals(
            match_score=0.4,
            jd_keywords=["sql", "react"],
            missing_critical=["react", "aws", "kubernetes", "docker"],
        )
        risk = build_document_risk(kw)
        # (1 - .4) * 100 plus the capped must-have bump
        assert risk.score == 90
        assert risk.level == "HIGH"
        assert risk.drivers == ["JD 핵심요건 매칭률이 낮음", "필수요건 누락 가능성"]

    def test_good_match(self):
        risk = build_document_risk(KeywordSignals(match_score=0.8, jd_keywords=["sql"]))
        assert risk.score == 20
        assert risk.level == "LOW"
        assert risk.drivers == []

    def test_missing_must_have_without_keywords(self):
        risk = build_document_risk(KeywordSignals(missing_critical=["sql"]))
        assert risk.score == 65
        assert risk.drivers == ["필수요건 누락 가능성"]


class TestInterviewRisk:
    def test_neutral_hireability(self):
        risk = build_interview_risk(Hireability())
        assert risk.score == 45
        assert risk.drivers == [INTERVIEW_DATA_POOR]

    def test_weak_level_signals_are_capped(self):
        h = Hireability(
            score=40,
            scores=HireabilityScores(
                responsibility_level_fit_score=35, ownership_level_score=25, decision_exposure_score=25,
            ),
        )
        risk = build_interview_risk(h)
        assert risk.score == 60 + 25
        assert risk.level == "HIGH"
        assert len(risk.drivers) == 3

    def test_all_drivers(self):
        h = Hireability(score=90, scores=HireabilityScores(impact_scale_fit_score=25, execution_coordination_fit_score=30))
        risk = build_interview_risk(h)
        assert risk.score == 10
        assert risk.drivers == ["다뤄본 임팩트 규모가 목표 대비 작을 가능성", "실행형→조정형 전환 리스크"]


def test_build_risk_layer():
    layer = build_risk_layer(KeywordSignals(), Hireability())
    assert layer.document_risk.score == 55
    assert layer.interview_risk.score == 45


class TestPressureLayer:
    def test_values_are_bounded(self, rich_state):
        layer = build_pressure_layer(collect_signals(rich_state), build_structure_analysis(rich_state))
        for value in layer.model_dump().values():
            assert 0.0 <= value <= 1.0

    def test_ownership_raises_differentiation(self, rich_state):
        signals = collect_signals(rich_state)
        strong = build_pressure_layer(signals, StructureAnalysis(ownership_level_score=85))
        weak = build_pressure_layer(signals, StructureAnalysis(ownership_level_score=25))
        assert strong.differentiation_level > weak.differentiation_level
        assert strong.replaceability_risk < weak.replaceability_risk
        assert strong.promotion_feasibility > weak.promotion_feasibility

    def test_narrative_follows_self_check(self, scenario_state):
        low = dict(scenario_state, selfCheck={"storyConsistency": 1, "roleClarity": 1})
        high = dict(scenario_state, selfCheck={"storyConsistency": 5, "roleClarity": 5})
        structure = StructureAnalysis()
        assert (
            build_pressure_layer(collect_signals(low), structure).narrative_coherence
            < build_pressure_layer(collect_signals(high), structure).narrative_coherence
        )
