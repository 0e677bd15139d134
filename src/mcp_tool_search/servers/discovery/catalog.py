"""Static tool catalog loaded from the generated index."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

from mcp_tool_search.exceptions import CatalogIntegrityError

from .types import ToolCategory, ToolIndexEntry, ToolPriority

logger = logging.getLogger("mcp-tool-search.discovery")

BUNDLED_INDEX = "tool_index.json"


def _entry_from_record(position: int, record: Mapping[str, Any]) -> ToolIndexEntry:
    """Build one entry from an index record, rejecting malformed ones."""
    if not isinstance(record, Mapping):
        raise CatalogIntegrityError(f"Index record #{position} is not an object")

    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CatalogIntegrityError(f"Index record #{position} has no name")

    description = record.get("description", "")
    if not isinstance(description, str):
        raise CatalogIntegrityError(f"Tool '{name}' has a non-string description")

    try:
        category = ToolCategory(record.get("category"))
    except ValueError as e:
        raise CatalogIntegrityError(
            f"Tool '{name}' has an unknown category: {record.get('category')!r}"
        ) from e

    try:
        priority = ToolPriority.from_label(record.get("priority"))
    except (KeyError, ValueError) as e:
        raise CatalogIntegrityError(
            f"Tool '{name}' has an unknown priority: {record.get('priority')!r}"
        ) from e

    tags = record.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, (list, tuple)) or not all(
        isinstance(tag, str) for tag in tags
    ):
        raise CatalogIntegrityError(f"Tool '{name}' tags must be a list of strings")

    is_helper = record.get("isHelper", False)
    if not isinstance(is_helper, bool):
        raise CatalogIntegrityError(
            f"Tool '{name}' has a non-boolean isHelper: {is_helper!r}"
        )

    return ToolIndexEntry(
        name=name,
        description=description,
        category=category,
        tags=frozenset(tags),
        is_helper=is_helper,
        priority=priority,
    )


class ToolCatalog:
    """Immutable, validated collection of tool index entries.

    Construction fails with CatalogIntegrityError on an empty catalog or a
    duplicate name; a catalog that exists is always safe to search.
    """

    def __init__(self, entries: Iterable[ToolIndexEntry]) -> None:
        entries = tuple(entries)
        if not entries:
            raise CatalogIntegrityError("Tool catalog is empty")

        by_name: dict[str, ToolIndexEntry] = {}
        for entry in entries:
            if not entry.name or not entry.name.strip():
                raise CatalogIntegrityError("Tool catalog contains an entry without a name")
            if not isinstance(entry.category, ToolCategory):
                raise CatalogIntegrityError(
                    f"Tool '{entry.name}' has an unknown category: {entry.category!r}"
                )
            if entry.name in by_name:
                raise CatalogIntegrityError(f"Duplicate tool name in catalog: '{entry.name}'")
            by_name[entry.name] = entry

        self._entries = entries
        self._by_name = MappingProxyType(by_name)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> ToolCatalog:
        """Build a catalog from index records (the generated JSON format)."""
        return cls(
            _entry_from_record(position, record)
            for position, record in enumerate(records)
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> ToolCatalog:
        """Load the catalog from a JSON index file.

        Args:
            path: Index file to read. Defaults to the index bundled with
                the package.

        Returns:
            The validated catalog.

        Raises:
            CatalogIntegrityError: If the file is not a JSON array or any
                record is invalid.
        """
        if path is None:
            source = resources.files(__package__) / "data" / BUNDLED_INDEX
            text = source.read_text(encoding="utf-8")
            origin = f"bundled {BUNDLED_INDEX}"
        else:
            text = Path(path).read_text(encoding="utf-8")
            origin = str(path)

        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            raise CatalogIntegrityError(f"Tool index {origin} is not valid JSON: {e}") from e
        if not isinstance(records, list):
            raise CatalogIntegrityError(f"Tool index {origin} must contain a JSON array")

        catalog = cls.from_records(records)
        logger.info(f"Loaded tool catalog from {origin} with {len(catalog)} tools")
        return catalog

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ToolIndexEntry]:
        return iter(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def entries(self) -> tuple[ToolIndexEntry, ...]:
        return self._entries

    def get_tool(self, name: str) -> ToolIndexEntry | None:
        """Get a specific tool by name.

        Args:
            name: The tool name to look up

        Returns:
            The tool entry if found, None otherwise
        """
        return self._by_name.get(name)

    def categories(self) -> list[str]:
        """Categories present in the catalog, sorted."""
        return sorted({entry.category.value for entry in self._entries})
