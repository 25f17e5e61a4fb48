"""Decision pressure: how much fired signals weigh on the outcome."""

from pydantic import BaseModel

from models.schemas.risk_profile import RiskProfileResult


class PressureComponent(BaseModel):
    id: str
    weight: float = 1.0
    score: float = 0.0


class DecisionPressure(BaseModel):
    total: float = 0.0  # sum of weight * score, unbounded
    components: list[PressureComponent] = []
    top_drivers: list[PressureComponent] = []


class DecisionPack(BaseModel):
    decision_pressure: DecisionPressure = DecisionPressure()
    risk_results: list[RiskProfileResult] = []
