"""Structural pattern bank: run every detector and rank the flags."""

import logging
from collections import Counter

from models.schemas.ai_enhancement import AIEnhancement
from models.schemas.input_facts import InputFacts, ensure_facts
from models.schemas.structural import (
    Flag,
    PatternDefinition,
    StructuralMetrics,
    StructuralResult,
    StructuralSummary,
)
from services.isolation import run_isolated
from services.structural.detectors import PATTERNS, StructuralPattern
from services.structural.metrics import Texts, compute_structural_metrics

logger = logging.getLogger(__name__)

SEVERITY_RANK: dict[str, int] = {"low": 1, "mid": 2, "high": 3, "critical": 4}

SUMMARY_METRIC_KEYS: tuple[str, ...] = (
    "semantic_similarity",
    "numbers_count",
    "required_coverage",
    "avg_tenure_months",
    "vendor_signal_count",
    "ownership_strong_count",
    "ownership_weak_count",
    "combined_length",
)


def flag_sort_key(flag: Flag) -> tuple:
    return (-SEVERITY_RANK.get(flag.severity, 0), -flag.score, flag.id)


def run_detectors(
    metrics: StructuralMetrics,
    texts: Texts,
    patterns: tuple[StructuralPattern, ...] = PATTERNS,
) -> list[Flag]:
    flags = run_isolated(patterns, lambda p: p.detect(metrics, texts))
    return sorted(flags, key=flag_sort_key)


def summarize(flags: list[Flag], metrics: StructuralMetrics) -> StructuralSummary:
    dumped = metrics.model_dump(include=set(SUMMARY_METRIC_KEYS))
    return StructuralSummary(
        total_flags=len(flags),
        by_severity=dict(Counter(f.severity for f in flags)),
        metrics={k: dumped[k] for k in SUMMARY_METRIC_KEYS},
    )


def detect_structural_patterns(
    facts: InputFacts | dict, ai: AIEnhancement | None = None
) -> StructuralResult:
    """Compute metrics once, run every detector, return ranked flags."""
    facts = ensure_facts(facts)
    metrics, texts = compute_structural_metrics(facts, ai)
    flags = run_detectors(metrics, texts)
    logger.debug("Structural bank raised %d flags", len(flags))
    return StructuralResult(flags=flags, metrics=metrics, summary=summarize(flags, metrics))


def get_structural_pattern_definitions() -> list[PatternDefinition]:
    return [
        PatternDefinition(id=p.id, title=p.title, category=p.category, severity=p.severity)
        for p in PATTERNS
    ]
