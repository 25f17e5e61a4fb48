"""Orchestrator: rule-based rejection analysis.

Pipeline:
1. Keyword, career, proof and major signals
2. Objective score composition
3. Structural pattern bank (metrics + detectors)
4. Structure analysis, hireability, stage risk and hidden risk
5. Risk profiles and decision pressure
6. Hypothesis ranking
7. Report rendering

The AI enhancement is awaited before step 1 when requested. It only
nudges the rule engine and never gates it.
"""

import logging

from models.responses import AnalysisResponse
from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.input_facts import ensure_facts
from services.ai_enhancer import enhance_with_ai
from services.decision_pack import build_decision_pack
from services.hidden_risk import compute_hidden_risk
from services.hireability import build_hireability
from services.hypotheses import build_hypotheses
from services.report import build_report
from services.risk_layer import build_pressure_layer, build_risk_layer
from services.signals import collect_signals
from services.structural.bank import detect_structural_patterns
from services.structure_analysis import build_structure_analysis

logger = logging.getLogger(__name__)


def analyze(state, ai: AIEnhancement | None = None) -> AnalysisResponse:
    """Run the full pipeline synchronously. Same input, same output."""
    facts = ensure_facts(state)

    # --- Layer 1-2: signals + objective score ---
    signals = collect_signals(facts, ai)

    # --- Layer 3: structural patterns ---
    structural = detect_structural_patterns(facts, ai)

    # --- Layer 4: structure fit, hireability, stage + hidden risk ---
    structure = build_structure_analysis(facts, ai)
    hireability = build_hireability(ai, structure, signals.resume)
    risk_layer = build_risk_layer(signals.keyword, hireability)
    pressure_layer = build_pressure_layer(signals, structure)
    hidden_risk = compute_hidden_risk(facts.career, structure, hireability, signals.resume, signals.keyword)

    # --- Layer 5: risk profiles + decision pressure ---
    pack = build_decision_pack(facts, structural, signals.keyword, signals.career)

    # --- Layer 6-7: hypotheses + report ---
    hypotheses = build_hypotheses(facts, ai, signals=signals)
    report = build_report(facts, ai, signals=signals, hypotheses=hypotheses)

    logger.info(
        "Analysis done: objective=%.2f flags=%d risks=%d hireability=%d hidden=%.2f top=%s ai=%s",
        signals.objective.score,
        len(structural.flags),
        len(pack.risk_results),
        hireability.score,
        hidden_risk.overall_score,
        hypotheses[0].id if hypotheses else None,
        ai is not None,
    )

    return AnalysisResponse(
        objective=signals.objective,
        keyword_signals=signals.keyword,
        career_signals=signals.career,
        resume_signals=signals.resume,
        major_signals=signals.major,
        structural=structural,
        structure_analysis=structure,
        hireability=hireability,
        risk_layer=risk_layer,
        pressure_layer=pressure_layer,
        hidden_risk=hidden_risk,
        risk_results=pack.risk_results,
        decision_pressure=pack.decision_pressure,
        hypotheses=hypotheses,
        report=report,
        ai_used=ai is not None,
    )


async def analyze_with_ai(state, use_ai: bool = True) -> AnalysisResponse:
    facts = ensure_facts(state)
    ai = await enhance_with_ai(facts.jd, facts.resume) if use_ai else None
    return analyze(facts, ai)
