from pydantic import BaseModel

from models.schemas import (
    CareerSignals,
    DecisionPressure,
    HiddenRisk,
    Hireability,
    Hypothesis,
    KeywordSignals,
    MajorSignals,
    ObjectiveScore,
    PressureLayer,
    ResumeSignals,
    RiskLayer,
    RiskProfileResult,
    StructuralResult,
    StructureAnalysis,
)


class AnalysisResponse(BaseModel):
    objective: ObjectiveScore = ObjectiveScore()
    keyword_signals: KeywordSignals = KeywordSignals()
    career_signals: CareerSignals = CareerSignals()
    resume_signals: ResumeSignals = ResumeSignals()
    major_signals: MajorSignals = MajorSignals()
    structural: StructuralResult = StructuralResult()
    structure_analysis: StructureAnalysis = StructureAnalysis()
    hireability: Hireability = Hireability()
    risk_layer: RiskLayer = RiskLayer()
    pressure_layer: PressureLayer = PressureLayer()
    hidden_risk: HiddenRisk = HiddenRisk()
    risk_results: list[RiskProfileResult] = []
    decision_pressure: DecisionPressure = DecisionPressure()
    hypotheses: list[Hypothesis] = []
    report: str = ""
    ai_used: bool = False
