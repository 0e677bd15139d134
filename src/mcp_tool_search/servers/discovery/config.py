"""Configuration for the tool search engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .engine import DEFAULT_DETAIL_LEVEL, DEFAULT_LIMIT
from .types import DetailLevel, StrategyType
from .weights import STRATEGY_WEIGHTS, validate_weights

logger = logging.getLogger("mcp-tool-search.config")


@dataclass
class SearchConfig:
    """Search engine settings.

    Attributes:
        index_path: Path of the generated tool index (None for the bundled one)
        default_limit: Result limit when a search does not give one (default 10)
        default_detail_level: Detail level when a search does not give one
        weights: Strategy weight table, must sum to 1.0
        log_level: Logging level name (default "WARNING")
    """

    index_path: str | None = None
    default_limit: int = DEFAULT_LIMIT
    default_detail_level: DetailLevel = DEFAULT_DETAIL_LEVEL
    weights: dict[StrategyType, float] = field(
        default_factory=lambda: dict(STRATEGY_WEIGHTS)
    )
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> SearchConfig:
        """Load configuration from environment variables.

        Invalid numbers or enum values are logged and replaced by defaults.
        Weight overrides are applied per strategy and then checked as a whole.

        Returns:
            SearchConfig with values from environment or defaults.

        Raises:
            ConfigurationError: If the resulting weights do not sum to 1.0.

        Environment Variables:
            TOOL_SEARCH_INDEX_PATH: Generated tool index to load
            TOOL_SEARCH_DEFAULT_LIMIT: Default result limit (default 10)
            TOOL_SEARCH_DEFAULT_DETAIL_LEVEL: Default detail level
            TOOL_SEARCH_WEIGHT_NAME: Weight of the name strategy
            TOOL_SEARCH_WEIGHT_DESCRIPTION: Weight of the description strategy
            TOOL_SEARCH_WEIGHT_CATEGORY: Weight of the category strategy
            TOOL_SEARCH_WEIGHT_FUZZY: Weight of the fuzzy strategy
            TOOL_SEARCH_LOG_LEVEL: Logging level (default WARNING)
        """

        def get_float(key: str, default: float) -> float:
            value = os.getenv(key)
            if not value:
                return default
            try:
                return float(value)
            except ValueError:
                logger.warning(f"Invalid float value for {key}: {value}, using default")
                return default

        def get_int(key: str, default: int) -> int:
            value = os.getenv(key)
            if not value:
                return default
            try:
                parsed = int(value)
            except ValueError:
                logger.warning(f"Invalid int value for {key}: {value}, using default")
                return default
            if parsed < 1:
                logger.warning(f"{key} must be positive, got {parsed}, using default")
                return default
            return parsed

        detail_level = DEFAULT_DETAIL_LEVEL
        detail_value = os.getenv("TOOL_SEARCH_DEFAULT_DETAIL_LEVEL")
        if detail_value:
            try:
                detail_level = DetailLevel(detail_value.strip().lower())
            except ValueError:
                logger.warning(
                    f"Invalid detail level for TOOL_SEARCH_DEFAULT_DETAIL_LEVEL: "
                    f"{detail_value}, using default"
                )

        weights = {
            strategy: get_float(f"TOOL_SEARCH_WEIGHT_{strategy.name}", default)
            for strategy, default in STRATEGY_WEIGHTS.items()
        }
        validate_weights(weights)

        return cls(
            index_path=os.getenv("TOOL_SEARCH_INDEX_PATH") or None,
            default_limit=get_int("TOOL_SEARCH_DEFAULT_LIMIT", DEFAULT_LIMIT),
            default_detail_level=detail_level,
            weights=weights,
            log_level=(os.getenv("TOOL_SEARCH_LOG_LEVEL") or "WARNING").upper(),
        )
