"""Run a batch of independent rules so one failing rule never aborts the rest."""

import logging
from typing import Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")


def run_isolated(rules: Iterable[R], call: Callable[[R], T | None]) -> list[T]:
    """Apply call to each rule, keeping non-None results.

    A rule that raises is logged with its id and left out of the result.
    """
    results: list[T] = []
    for rule in rules:
        try:
            out = call(rule)
        except Exception:
            logger.warning("Rule %s failed and was skipped", getattr(rule, "id", rule), exc_info=True)
            continue
        if out is not None:
            results.append(out)
    return results
