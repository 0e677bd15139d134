"""Weighted combination of strategy scores."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from mcp_tool_search.exceptions import ConfigurationError

from .scoring import SearchStrategy, default_strategies
from .types import CombinedScore, StrategyType

if TYPE_CHECKING:
    from .types import ToolIndexEntry

# Name evidence dominates; fuzzy matching is a fallback for typos.
STRATEGY_WEIGHTS: dict[StrategyType, float] = {
    StrategyType.NAME: 0.40,
    StrategyType.CATEGORY: 0.25,
    StrategyType.DESCRIPTION: 0.20,
    StrategyType.FUZZY: 0.15,
}


def validate_weights(weights: Mapping[StrategyType, float]) -> None:
    """Check that the table covers every strategy exactly and sums to 1.

    Raises:
        ConfigurationError: If a strategy is missing or unknown, a weight is
            negative, or the weights do not sum to 1.
    """
    expected = set(StrategyType)
    actual = set(weights)
    if actual != expected:
        missing = sorted(s.value for s in expected - actual)
        unknown = sorted(str(s) for s in actual - expected)
        raise ConfigurationError(
            f"Strategy weights must cover exactly {sorted(s.value for s in expected)}"
            f" (missing: {missing}, unknown: {unknown})"
        )
    negative = sorted(s.value for s, w in weights.items() if w < 0)
    if negative:
        raise ConfigurationError(f"Strategy weights must be non-negative: {negative}")
    total = sum(weights.values())
    if not math.isclose(total, 1.0, abs_tol=1e-9):
        raise ConfigurationError(f"Strategy weights must sum to 1.0, got {total}")


class WeightedCombiner:
    """Merge the four strategy scores into one relevance score.

    Combined score is ``sum(score_i * weight_i)``. Equal scores are ordered by
    priority (lower first) and then by name, which makes the ranking total.
    """

    def __init__(
        self,
        weights: Mapping[StrategyType, float] | None = None,
        strategies: Sequence[SearchStrategy] | None = None,
    ) -> None:
        self.weights = dict(weights if weights is not None else STRATEGY_WEIGHTS)
        validate_weights(self.weights)

        if strategies is None:
            strategies = default_strategies()
        self.strategies = list(strategies)
        strategy_types = [strategy.strategy_type for strategy in self.strategies]
        if sorted(strategy_types) != sorted(self.weights):
            raise ConfigurationError(
                f"Expected one strategy per weight, got {[s.value for s in strategy_types]}"
            )

    def score(self, entry: ToolIndexEntry, query: str) -> CombinedScore:
        """Score ``entry`` with every strategy and apply the weights."""
        details = {
            strategy.strategy_type: strategy.score(entry, query)
            for strategy in self.strategies
        }
        total = sum(details[kind] * weight for kind, weight in self.weights.items())
        return CombinedScore(total=min(1.0, max(0.0, total)), details=details)

    @staticmethod
    def ranking_key(
        entry: ToolIndexEntry, combined: CombinedScore
    ) -> tuple[float, int, str]:
        """Sort key: relevance descending, then priority, then name."""
        return (-combined.total, int(entry.priority), entry.name)
