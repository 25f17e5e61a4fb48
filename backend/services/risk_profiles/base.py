"""Risk profile value objects and the shared evaluation context.

A profile is a plain record of three callables over a RiskContext:
when (does it fire), score (0-1) and explain (Korean title, why, fix).
Most profiles read one structural flag; when the flag is missing they
re-run that flag's detector against the metrics, so the fallback uses
exactly the same threshold and scoring formula as the bank.
"""

from dataclasses import dataclass, field
from typing import Callable

from models.schemas.career_signals import CareerSignals
from models.schemas.input_facts import InputFacts
from models.schemas.keyword_signals import KeywordSignals
from models.schemas.risk_profile import RiskExplain
from models.schemas.structural import Flag, StructuralMetrics, StructuralResult
from services.structural.detectors import PATTERNS_BY_ID
from services.structural.metrics import Texts

MAX_NOTE_EVIDENCE = 3


@dataclass(frozen=True)
class RiskContext:
    facts: InputFacts = field(default_factory=InputFacts)
    structural: StructuralResult = field(default_factory=StructuralResult)
    keyword_signals: KeywordSignals = field(default_factory=KeywordSignals)
    career_signals: CareerSignals = field(default_factory=CareerSignals)

    @property
    def metrics(self) -> StructuralMetrics:
        return self.structural.metrics

    def find_flag(self, pattern_id: str) -> Flag | None:
        for flag in self.structural.flags:
            if flag.id == pattern_id:
                return flag
        return None

    def signal(self, pattern_id: str) -> Flag | None:
        """The bank's flag, or the same detector re-run on the metrics."""
        flag = self.find_flag(pattern_id)
        if flag is not None:
            return flag
        return PATTERNS_BY_ID[pattern_id].detect(self.metrics, Texts())


@dataclass(frozen=True)
class RiskProfile:
    id: str
    group: str
    layer: str
    priority: int
    when: Callable[[RiskContext], bool]
    score: Callable[[RiskContext], float]
    explain: Callable[[RiskContext], RiskExplain]


def flag_profile(
    profile_id: str,
    group: str,
    priority: int,
    pattern_id: str,
    explain: Callable[[RiskContext, Flag], RiskExplain],
    layer: str = "hireability",
) -> RiskProfile:
    """Build a profile that fires on one structural signal and scores with it."""

    def _when(ctx: RiskContext) -> bool:
        return ctx.signal(pattern_id) is not None

    def _score(ctx: RiskContext) -> float:
        flag = ctx.signal(pattern_id)
        return flag.score if flag is not None else 0.0

    def _explain(ctx: RiskContext) -> RiskExplain:
        flag = ctx.signal(pattern_id)
        if flag is None:
            raise ValueError(f"{profile_id} explained without {pattern_id}")
        return explain(ctx, flag)

    return RiskProfile(profile_id, group, layer, priority, _when, _score, _explain)


def evidence_notes(flag: Flag | None, limit: int = MAX_NOTE_EVIDENCE) -> list[str]:
    if flag is None:
        return []
    return [e for e in flag.evidence if e][:limit]


def pct(x: float | None) -> str:
    return "-" if x is None else f"{round(x * 100)}%"
