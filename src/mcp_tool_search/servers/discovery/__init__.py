"""Tool discovery module: search the static tool catalog."""

from .catalog import ToolCatalog
from .config import SearchConfig
from .engine import ToolSearchEngine
from .types import (
    DetailLevel,
    SearchParams,
    SearchResponse,
    SearchResult,
    ToolCategory,
    ToolIndexEntry,
    ToolPriority,
)
from .weights import STRATEGY_WEIGHTS, WeightedCombiner

__all__ = [
    "DetailLevel",
    "SearchConfig",
    "SearchParams",
    "SearchResponse",
    "SearchResult",
    "STRATEGY_WEIGHTS",
    "ToolCatalog",
    "ToolCategory",
    "ToolIndexEntry",
    "ToolPriority",
    "ToolSearchEngine",
    "WeightedCombiner",
]
