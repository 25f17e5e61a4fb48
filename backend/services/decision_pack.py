"""Decision pack: risk profile results plus the pressure they put on a decision."""

from typing import Iterable, Protocol

from models.schemas.career_signals import CareerSignals
from models.schemas.decision import DecisionPack, DecisionPressure, PressureComponent
from models.schemas.input_facts import InputFacts
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.structural import StructuralResult
from services.risk_profiles.base import RiskContext
from services.risk_profiles.registry import evaluate_risk_profiles

TOP_DRIVERS = 3
MERGED_TOP_N = 12


class _Scored(Protocol):
    id: str
    score: float


def _weighted(c: PressureComponent) -> float:
    return c.weight * c.score


def compute_decision_pressure(items: Iterable[_Scored], weight: float = 1.0) -> DecisionPressure:
    """Sum scored items (flags or risk results) into one pressure block."""
    components = [PressureComponent(id=i.id, weight=weight, score=i.score) for i in items]
    ranked = sorted(components, key=lambda c: (-_weighted(c), c.id))
    return DecisionPressure(
        total=sum(_weighted(c) for c in components),
        components=components,
        top_drivers=ranked[:TOP_DRIVERS],
    )


def merge_decision_pressures(
    pressures: Iterable[DecisionPressure | None], top_n: int = MERGED_TOP_N
) -> DecisionPressure:
    valid = [p for p in pressures if p is not None]
    components = [c for p in valid for c in p.components]
    ranked = sorted(components, key=lambda c: (-_weighted(c), c.id))
    return DecisionPressure(
        total=sum(p.total for p in valid),
        components=components,
        top_drivers=ranked[:top_n],
    )


def build_decision_pack(
    facts: InputFacts,
    structural: StructuralResult,
    keyword_signals: KeywordSignals,
    career_signals: CareerSignals,
) -> DecisionPack:
    ctx = RiskContext(
        facts=facts,
        structural=structural,
        keyword_signals=keyword_signals,
        career_signals=career_signals,
    )
    risk_results = evaluate_risk_profiles(ctx)
    # Profiles weigh in proportion to their static priority
    risk_pressures = [compute_decision_pressure([r], weight=r.priority / 100) for r in risk_results]
    pressure = merge_decision_pressures([compute_decision_pressure(structural.flags), *risk_pressures])
    return DecisionPack(decision_pressure=pressure, risk_results=risk_results)
