"""Risk profile registry and evaluation."""

import logging

from models.schemas.risk_profile import RiskProfileInfo, RiskProfileResult
from services.isolation import run_isolated
from services.risk_profiles import (
    company_industry,
    gates,
    impact_evidence,
    language_signals,
    ownership_leadership,
    resume_structure,
    role_skill_fit,
    timeline,
)
from services.risk_profiles.base import RiskContext, RiskProfile
from services.text_utils import clamp01

logger = logging.getLogger(__name__)

ALL_PROFILES: tuple[RiskProfile, ...] = (
    *gates.PROFILES,
    *role_skill_fit.PROFILES,
    *timeline.PROFILES,
    *ownership_leadership.PROFILES,
    *impact_evidence.PROFILES,
    *company_industry.PROFILES,
    *resume_structure.PROFILES,
    *language_signals.PROFILES,
)


def _evaluate(profile: RiskProfile, ctx: RiskContext) -> RiskProfileResult | None:
    if not profile.when(ctx):
        return None
    return RiskProfileResult(
        id=profile.id,
        group=profile.group,
        layer=profile.layer,
        priority=profile.priority,
        score=clamp01(profile.score(ctx)),
        explain=profile.explain(ctx),
    )


def evaluate_risk_profiles(
    ctx: RiskContext, profiles: tuple[RiskProfile, ...] = ALL_PROFILES
) -> list[RiskProfileResult]:
    """Run every profile in isolation; rank by priority, then score, then id."""
    results = run_isolated(profiles, lambda p: _evaluate(p, ctx))
    results.sort(key=lambda r: (-r.priority, -r.score, r.id))
    logger.debug("Risk profiles triggered: %s", [r.id for r in results])
    return results


def list_profiles() -> list[RiskProfileInfo]:
    return [
        RiskProfileInfo(id=p.id, group=p.group, layer=p.layer, priority=p.priority)
        for p in ALL_PROFILES
    ]
