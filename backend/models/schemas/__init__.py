"""Pydantic contracts shared by the signal, scoring and report layers."""

from models.schemas.input_facts import CareerFacts, CareerHistoryEntry, EducationFacts, InputFacts, SelfCheck
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.career_signals import CareerSignals, RequiredYears
from models.schemas.resume_signals import ResumeSignals
from models.schemas.major_signals import MajorSignals
from models.schemas.objective import ObjectiveParts, ObjectiveScore
from models.schemas.structural import Flag, PatternDefinition, StructuralMetrics, StructuralResult, StructuralSummary
from models.schemas.risk_profile import RiskExplain, RiskProfileInfo, RiskProfileResult
from models.schemas.hypothesis import Hypothesis
from models.schemas.decision import DecisionPack, DecisionPressure, PressureComponent
from models.schemas.ai_enhancement import AIEnhancement, FitExtract, ImpactScale
from models.schemas.structure_analysis import RoleInference, StructureAnalysis
from models.schemas.hireability import Hireability, HireabilityLabels, HireabilityScores
from models.schemas.risk_layer import PressureLayer, RiskLayer, StageRisk
from models.schemas.hidden_risk import HiddenRisk, HiddenRiskItem, HiddenRiskItems

__all__ = [
    "InputFacts",
    "CareerFacts",
    "CareerHistoryEntry",
    "EducationFacts",
    "SelfCheck",
    "KeywordSignals",
    "CareerSignals",
    "RequiredYears",
    "ResumeSignals",
    "MajorSignals",
    "ObjectiveParts",
    "ObjectiveScore",
    "Flag",
    "PatternDefinition",
    "StructuralMetrics",
    "StructuralResult",
    "StructuralSummary",
    "RiskExplain",
    "RiskProfileResult",
    "RiskProfileInfo",
    "Hypothesis",
    "DecisionPack",
    "DecisionPressure",
    "PressureComponent",
    "AIEnhancement",
    "FitExtract",
    "ImpactScale",
    "RoleInference",
    "StructureAnalysis",
    "Hireability",
    "HireabilityLabels",
    "HireabilityScores",
    "PressureLayer",
    "RiskLayer",
    "StageRisk",
    "HiddenRisk",
    "HiddenRiskItem",
    "HiddenRiskItems",
]
