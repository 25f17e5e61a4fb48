"""Compute every per-run signal once so builders can share them."""

from dataclasses import dataclass

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.career_signals import CareerSignals
from models.schemas.input_facts import InputFacts, ensure_facts
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.major_signals import MajorSignals
from models.schemas.objective import ObjectiveScore
from models.schemas.resume_signals import ResumeSignals
from services.career_signals import build_career_signals
from services.keyword_signals import build_keyword_signals
from services.major_signals import build_major_signals
from services.objective_score import compose_objective_score
from services.proof_signals import build_resume_signals


@dataclass(frozen=True)
class SignalBundle:
    facts: InputFacts
    keyword: KeywordSignals
    career: CareerSignals
    resume: ResumeSignals
    major: MajorSignals
    objective: ObjectiveScore


def collect_signals(state, ai: AIEnhancement | None = None) -> SignalBundle:
    facts = ensure_facts(state)
    keyword = build_keyword_signals(facts.jd, facts.resume, ai)
    career = build_career_signals(facts.career, facts.jd)
    resume = build_resume_signals(facts.resume, facts.portfolio)
    major = build_major_signals(facts, keyword, resume, ai)
    return SignalBundle(
        facts=facts,
        keyword=keyword,
        career=career,
        resume=resume,
        major=major,
        objective=compose_objective_score(keyword, career, resume, major),
    )
