"""Risks a screener infers but rarely states, from observable proxies only."""

from typing import Literal

from pydantic import BaseModel


class HiddenRiskItem(BaseModel):
    score: float = 0.0  # 0.0-1.0
    level: Literal["low", "mid", "high"] = "low"
    drivers: list[str] = []


class HiddenRiskItems(BaseModel):
    retention_risk: HiddenRiskItem = HiddenRiskItem()
    domain_path_risk: HiddenRiskItem = HiddenRiskItem()
    scope_inflation_risk: HiddenRiskItem = HiddenRiskItem()
    culture_fit_proxy_risk: HiddenRiskItem = HiddenRiskItem()


class HiddenRisk(BaseModel):
    overall_score: float = 0.0  # weighted 0.0-1.0
    items: HiddenRiskItems = HiddenRiskItems()
    notes: list[str] = []
