"""Search engine over the static tool catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from thefuzz import process

from mcp_tool_search.exceptions import SearchValidationError

from .catalog import ToolCatalog
from .types import (
    CombinedScore,
    DetailLevel,
    SearchParams,
    SearchResponse,
    SearchResult,
    ToolCategory,
    ToolIndexEntry,
)
from .weights import WeightedCombiner

logger = logging.getLogger("mcp-tool-search.discovery")

DEFAULT_LIMIT = 10
DEFAULT_DETAIL_LEVEL = DetailLevel.NAME_AND_DESCRIPTION


@dataclass(frozen=True)
class _ValidatedParams:
    query: str
    detail_level: DetailLevel
    category: ToolCategory | None
    is_helper: bool | None
    limit: int


def _suggest_category(value: str) -> str | None:
    """Closest known category name for a misspelled one."""
    match = process.extractOne(
        value, [category.value for category in ToolCategory], score_cutoff=60
    )
    return match[0] if match else None


class ToolSearchEngine:
    """Ranks catalog entries against free-text queries.

    The engine holds no mutable state: the catalog is immutable and every
    call works on local data only, so concurrent searches need no locking.
    """

    def __init__(
        self,
        catalog: ToolCatalog,
        combiner: WeightedCombiner | None = None,
        default_limit: int = DEFAULT_LIMIT,
        default_detail_level: DetailLevel = DEFAULT_DETAIL_LEVEL,
    ) -> None:
        self.catalog = catalog
        self.combiner = combiner or WeightedCombiner()
        self.default_limit = default_limit
        self.default_detail_level = DetailLevel(default_detail_level)

    def _validate(self, params: SearchParams) -> _ValidatedParams:
        """Check the parameters before any scoring takes place.

        Raises:
            SearchValidationError: On an empty query, a non-positive limit,
                or an unknown category or detail level.
        """
        if not isinstance(params.query, str) or not params.query.strip():
            raise SearchValidationError("Search query must not be empty")

        limit = self.default_limit if params.limit is None else params.limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise SearchValidationError(
                f"Search limit must be a positive integer, got {params.limit!r}"
            )

        category = None
        if params.category is not None:
            try:
                category = ToolCategory(params.category)
            except ValueError as e:
                message = f"Unknown category: {params.category!r}"
                suggestion = _suggest_category(str(params.category))
                if suggestion:
                    message += f" (did you mean '{suggestion}'?)"
                raise SearchValidationError(message) from e

        try:
            detail_level = DetailLevel(
                params.detail_level
                if params.detail_level is not None
                else self.default_detail_level
            )
        except ValueError as e:
            raise SearchValidationError(
                f"Unknown detail level: {params.detail_level!r}"
            ) from e

        if params.is_helper is not None and not isinstance(params.is_helper, bool):
            raise SearchValidationError(
                f"is_helper must be a boolean, got {params.is_helper!r}"
            )

        return _ValidatedParams(
            query=params.query.strip(),
            detail_level=detail_level,
            category=category,
            is_helper=params.is_helper,
            limit=limit,
        )

    def _filter(self, params: _ValidatedParams) -> list[ToolIndexEntry]:
        candidates = []
        for entry in self.catalog:
            if params.category is not None and entry.category is not params.category:
                continue
            if params.is_helper is not None and entry.is_helper != params.is_helper:
                continue
            candidates.append(entry)
        return candidates

    def search(self, params: SearchParams) -> SearchResponse:
        """Search the catalog.

        Args:
            params: Query, filters, limit and detail level.

        Returns:
            Matching tools, best first. ``total`` is the number of matches
            before ``limit`` was applied.

        Raises:
            SearchValidationError: If the parameters are invalid.
        """
        validated = self._validate(params)

        scored: list[tuple[ToolIndexEntry, CombinedScore]] = []
        for entry in self._filter(validated):
            combined = self.combiner.score(entry, validated.query)
            # Entries no strategy found any evidence for are noise
            if combined.total > 0.0:
                scored.append((entry, combined))

        scored.sort(key=lambda item: self.combiner.ranking_key(*item))
        total = len(scored)

        results = [
            self._project(entry, combined, validated.detail_level)
            for entry, combined in scored[: validated.limit]
        ]

        logger.debug(
            f"Search '{validated.query}' matched {total} tools, returning {len(results)}"
        )
        return SearchResponse(query=validated.query, total=total, results=results)

    @staticmethod
    def _project(
        entry: ToolIndexEntry, combined: CombinedScore, detail_level: DetailLevel
    ) -> SearchResult:
        """Shape one ranked entry according to the detail level."""
        result = SearchResult(name=entry.name, score=round(combined.total, 2))
        if detail_level is DetailLevel.NAME_AND_DESCRIPTION:
            result.description = entry.short_description
        elif detail_level is DetailLevel.FULL:
            result.description = entry.description
            result.category = entry.category.value
            result.tags = sorted(entry.tags)
            result.match_details = {
                kind.value: round(score, 2) for kind, score in combined.details.items()
            }
        return result

    def get_tool(self, name: str) -> ToolIndexEntry | None:
        """Look up a catalog entry by exact name."""
        return self.catalog.get_tool(name)

    def categories(self) -> list[str]:
        """Categories present in the catalog."""
        return self.catalog.categories()
