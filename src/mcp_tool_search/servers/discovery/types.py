"""Data types for tool discovery."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class ToolCategory(str, Enum):
    """Closed set of tool categories."""

    # API operations
    ISSUES = "issues"
    QUEUES = "queues"
    USERS = "users"
    PROJECTS = "projects"
    BOARDS = "boards"
    SPRINTS = "sprints"
    COMMENTS = "comments"
    CHECKLISTS = "checklists"
    COMPONENTS = "components"
    WORKLOG = "worklog"
    TASKS = "tasks"

    SYSTEM = "system"

    # Helpers
    HELPERS = "helpers"
    SEARCH = "search"
    URL_GENERATION = "url-generation"
    VALIDATION = "validation"
    DEMO = "demo"


class ToolPriority(IntEnum):
    """Tool priority; lower value sorts first on equal relevance."""

    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3

    @classmethod
    def from_label(cls, label: str | int | None) -> ToolPriority:
        """Parse a priority from its level name ("high") or ordinal (1)."""
        if label is None:
            return cls.NORMAL
        if isinstance(label, int) and not isinstance(label, bool):
            return cls(label)
        if isinstance(label, str):
            return cls[label.strip().upper()]
        raise ValueError(f"Invalid priority: {label!r}")

    @property
    def label(self) -> str:
        return self.name.lower()


class DetailLevel(str, Enum):
    """How much of each matching entry a search response carries."""

    NAME_ONLY = "name_only"
    NAME_AND_DESCRIPTION = "name_and_description"
    FULL = "full"


class StrategyType(str, Enum):
    """Identifiers of the scoring strategies, used as weight table keys."""

    NAME = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"
    FUZZY = "fuzzy"


_SENTENCE_END = re.compile(r"[.!?]")


@dataclass(frozen=True)
class ToolIndexEntry:
    """Indexed tool information for discovery."""

    name: str
    description: str
    category: ToolCategory
    tags: frozenset[str] = field(default_factory=frozenset)
    is_helper: bool = False
    priority: ToolPriority = ToolPriority.NORMAL

    @property
    def short_description(self) -> str:
        """First sentence of the description."""
        first_sentence = _SENTENCE_END.split(self.description, maxsplit=1)[0].strip()
        return first_sentence or self.description.strip()


@dataclass
class SearchParams:
    """Parameters of a single search call."""

    query: str
    detail_level: DetailLevel | str | None = None
    category: ToolCategory | str | None = None
    is_helper: bool | None = None
    limit: int | None = None


@dataclass(frozen=True)
class CombinedScore:
    """Weighted relevance of one entry, with the per-strategy breakdown."""

    total: float
    details: dict[StrategyType, float]


@dataclass
class SearchResult:
    """A matching tool, projected according to the requested detail level."""

    name: str
    score: float
    description: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    match_details: dict[str, float] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize, omitting the fields the detail level left out."""
        result: dict[str, Any] = {"name": self.name, "score": self.score}
        if self.description is not None:
            result["description"] = self.description
        if self.category is not None:
            result["category"] = self.category
        if self.tags is not None:
            result["tags"] = self.tags
        if self.match_details is not None:
            result["match_details"] = self.match_details
        return result


@dataclass
class SearchResponse:
    """Ranked search results.

    ``total`` counts every entry that matched, before truncation by ``limit``.
    """

    query: str
    total: int
    results: list[SearchResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "total": self.total,
            "results": [result.to_dict() for result in self.results],
        }
