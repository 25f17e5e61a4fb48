import pytest

from models.schemas.career_signals import CareerSignals
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.major_signals import MajorSignals
from models.schemas.resume_signals import ResumeSignals
from services.objective_score import KNOCKOUT_OBJECTIVE_PENALTY, compose_objective_score


def _expected(match, reliability, risk, proof, level):
    kw_weight = 0.35 * (0.75 + 0.25 * reliability)
    rest = (1 - kw_weight) / 0.65
    return kw_weight * match + 0.2 * rest * (1 - risk) + 0.25 * rest * proof + 0.2 * rest * level


class TestComposeObjectiveScore:
    def setup_method(self):
        self.keyword = KeywordSignals(match_score=0.5, reliability=0.5)
        self.career = CareerSignals(career_risk_score=0.2, experience_level_score=0.6)
        self.resume = ResumeSignals(resume_signal_score=0.5)

    def test_weighted_sum(self):
        result = compose_objective_score(self.keyword, self.career, self.resume)
        assert result.score == pytest.approx(_expected(0.5, 0.5, 0.2, 0.5, 0.6))
        assert result.parts.keyword_weight == pytest.approx(0.35 * 0.875)
        assert result.parts.knockout is False

    def test_knockout_penalty_compounds(self):
        base = compose_objective_score(self.keyword, self.career, self.resume)
        knocked = compose_objective_score(
            self.keyword.model_copy(update={"has_knockout_missing": True}), self.career, self.resume
        )
        assert knocked.score == pytest.approx(base.score * KNOCKOUT_OBJECTIVE_PENALTY)
        assert knocked.parts.knockout is True

    def test_major_bonus_added_after_penalty(self):
        major = MajorSignals(bonus=0.05, similarity=1.0, importance=0.8)
        base = compose_objective_score(self.keyword, self.career, self.resume)
        boosted = compose_objective_score(self.keyword, self.career, self.resume, major)
        assert boosted.score == pytest.approx(base.score + 0.05)
        assert boosted.parts.major_bonus == 0.05
        assert boosted.parts.major_similarity == 1.0

    def test_score_is_clamped(self):
        result = compose_objective_score(
            KeywordSignals(match_score=1.0, reliability=1.0),
            CareerSignals(career_risk_score=0.0, experience_level_score=1.0),
            ResumeSignals(resume_signal_score=1.0),
            MajorSignals(bonus=0.07),
        )
        assert 0.0 <= result.score <= 1.0

    def test_parts_record_inputs(self):
        parts = compose_objective_score(self.keyword, self.career, self.resume).parts
        assert parts.keyword_match == 0.5
        assert parts.career_risk == 0.2
        assert parts.proof_score == 0.5
        assert parts.experience_level == 0.6
        assert parts.jd_reliability == 0.5
