"""Relevance scoring strategies for tool discovery.

Each strategy scores one catalog entry against a query and returns a value
in [0.0, 1.0], where 0.0 means no evidence of relevance. Strategies are pure:
no shared state, same answer for the same (entry, query) pair.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rapidfuzz.distance import Levenshtein

from .types import StrategyType

if TYPE_CHECKING:
    from .types import ToolIndexEntry

_TOKEN_SEPARATORS = re.compile(r"[\s_\-]+")


def _normalize_text(text: str) -> str:
    """Normalize text for comparison - lowercase and strip."""
    return text.lower().strip()


def _tokenize(text: str) -> list[str]:
    """Split text into lowercase tokens on whitespace, underscores and hyphens."""
    return [token for token in _TOKEN_SEPARATORS.split(text.lower()) if token]


def _is_ordered_prefix_match(query_tokens: list[str], name_tokens: list[str]) -> bool:
    """Check that every query token prefixes a later name token than the previous one."""
    position = 0
    for token in query_tokens:
        while position < len(name_tokens) and not name_tokens[position].startswith(
            token
        ):
            position += 1
        if position == len(name_tokens):
            return False
        position += 1
    return True


def edit_similarity(first: str, second: str) -> float:
    """Similarity derived from the Levenshtein distance, in [0.0, 1.0].

    ``1 - distance / max(len(first), len(second))``; two empty strings are
    considered identical.
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    distance = Levenshtein.distance(first, second)
    return min(1.0, max(0.0, 1.0 - distance / longest))


class SearchStrategy(ABC):
    """Scores a single catalog entry against a query."""

    strategy_type: StrategyType

    @abstractmethod
    def score(self, entry: ToolIndexEntry, query: str) -> float:
        """Return the relevance of ``entry`` for ``query`` in [0.0, 1.0]."""


class NameSearchStrategy(SearchStrategy):
    """Match the query against the tool name.

    The name is split on ``_`` and ``-``. The highest tier reached wins:

    - exact name (or identical token list): 1.0
    - each query token prefixes a name token, in order: 0.8
    - each query token is a substring of the name: 0.5
    - at least one token in common: 0.25
    """

    strategy_type = StrategyType.NAME

    EXACT_SCORE = 1.0
    PREFIX_SCORE = 0.8
    SUBSTRING_SCORE = 0.5
    OVERLAP_SCORE = 0.25

    def score(self, entry: ToolIndexEntry, query: str) -> float:
        normalized = _normalize_text(query)
        query_tokens = _tokenize(query)
        if not query_tokens:
            return 0.0

        name = entry.name.lower()
        name_tokens = _tokenize(entry.name)

        if normalized == name or query_tokens == name_tokens:
            return self.EXACT_SCORE
        if _is_ordered_prefix_match(query_tokens, name_tokens):
            return self.PREFIX_SCORE
        if all(token in name for token in query_tokens):
            return self.SUBSTRING_SCORE
        if set(query_tokens) & set(name_tokens):
            return self.OVERLAP_SCORE
        return 0.0


class DescriptionSearchStrategy(SearchStrategy):
    """Share of distinct query tokens found in the description."""

    strategy_type = StrategyType.DESCRIPTION

    def score(self, entry: ToolIndexEntry, query: str) -> float:
        description = entry.description.lower()
        if not description.strip():
            return 0.0

        query_tokens = set(_tokenize(query))
        if not query_tokens:
            return 0.0

        found = sum(1 for token in query_tokens if token in description)
        return found / len(query_tokens)


class CategorySearchStrategy(SearchStrategy):
    """Reward queries that name the category or a tag verbatim.

    The whole query, its words and its tokens are candidates, so hyphenated
    categories such as ``url-generation`` match as typed and ``get-worklog``
    still names ``worklog``.
    """

    strategy_type = StrategyType.CATEGORY

    CATEGORY_SCORE = 1.0
    TAG_SCORE = 0.6

    def score(self, entry: ToolIndexEntry, query: str) -> float:
        normalized = _normalize_text(query)
        if not normalized:
            return 0.0

        candidates = {normalized, *normalized.split(), *_tokenize(normalized)}
        if entry.category.value in candidates:
            return self.CATEGORY_SCORE

        tags = {tag.lower() for tag in entry.tags}
        if candidates & tags:
            return self.TAG_SCORE
        return 0.0


class FuzzySearchStrategy(SearchStrategy):
    """Typo-tolerant match against the name, its tokens and the tags.

    Similarities under ``min_similarity`` count as no match, so the strategy
    only contributes for near misses such as transposed letters. Name tokens
    are weaker evidence than the full name and are discounted by
    ``token_weight``.
    """

    strategy_type = StrategyType.FUZZY

    def __init__(self, min_similarity: float = 0.5, token_weight: float = 0.7) -> None:
        self.min_similarity = min_similarity
        self.token_weight = token_weight

    def score(self, entry: ToolIndexEntry, query: str) -> float:
        query_tokens = _tokenize(query)
        if not query_tokens:
            return 0.0
        joined_query = "_".join(query_tokens)

        candidates: list[tuple[str, float]] = [("_".join(_tokenize(entry.name)), 1.0)]
        candidates.extend(("_".join(_tokenize(tag)), 1.0) for tag in entry.tags)
        if len(query_tokens) == 1:
            candidates.extend(
                (token, self.token_weight) for token in _tokenize(entry.name)
            )

        best = 0.0
        for candidate, weight in candidates:
            similarity = edit_similarity(joined_query, candidate)
            if similarity < self.min_similarity:
                continue
            best = max(best, similarity * weight)
        return best


def default_strategies() -> list[SearchStrategy]:
    """One instance of every strategy, in weight table order."""
    return [
        NameSearchStrategy(),
        DescriptionSearchStrategy(),
        CategorySearchStrategy(),
        FuzzySearchStrategy(),
    ]
