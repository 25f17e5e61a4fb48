"""Trigger thresholds for structural detectors and risk-profile fallbacks.

This is the only place a trigger threshold is defined. Risk profiles
that re-derive a signal from metrics read the same entry, so a flag and
its fallback can never disagree.
"""

from types import MappingProxyType

THRESHOLDS = MappingProxyType({
    # career trajectory
    "AVG_TENURE_MONTHS": 18,
    "AVG_TENURE_MONTHS_CRITICAL": 12,
    "EXTREME_HOP_MONTHS": 12,
    "EXTREME_HOP_COUNT": 2,
    "INDUSTRY_SWITCH_MIN": 2,
    "EXPERIENCE_GAP_GATE_YEARS": 2,
    # role and skill fit
    "LOW_SEMANTIC_SIMILARITY": 0.35,
    "LOW_SEMANTIC_SIMILARITY_CRITICAL": 0.22,
    "REQUIRED_COVERAGE_LOW": 0.5,
    "REQUIRED_COVERAGE_CRITICAL": 0.34,
    # ownership
    "OWNERSHIP_STRONG_MIN": 2,
    "OWNERSHIP_RATIO_LOW": 0.6,
    "OWNERSHIP_RATIO_CRITICAL": 0.25,
    "SOLO_DOMINANCE": 1.5,
    # impact
    "MIN_NUMBERS": 1,
    "MIN_IMPACT_VERBS": 1,
    # company context
    "VENDOR_MIN": 1,
    # structure and language
    "MIN_COMBINED_LENGTH": 1100,
    "RATIO_MIN_TOKENS": 60,
    "LANGUAGE_MIN_TOKENS": 80,
    "MIN_SENTENCES": 5,
    "BUZZWORD_RATIO": 0.02,
    "VAGUE_RATIO": 0.01,
    "HEDGE_RATIO": 0.015,
    "LOW_CONFIDENCE_RATIO": 0.01,
    "PASSIVE_VOICE_RATIO": 0.22,
    "PASSIVE_VOICE_RATIO_HIGH": 0.40,
    "WEAK_ASSERTION_RATIO": 0.16,
    "WEAK_ASSERTION_RATIO_HIGH": 0.30,
})
