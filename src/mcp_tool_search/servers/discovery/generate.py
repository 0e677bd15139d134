"""Build step that generates the tool index from a FastMCP server.

Runs out-of-band (when tools change), never at query time. The server only
reads the JSON file this module writes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .types import ToolCategory, ToolPriority

if TYPE_CHECKING:
    from fastmcp import FastMCP

logger = logging.getLogger("mcp-tool-search.discovery")

HELPER_TAGS = {"helper", "meta"}
_CATEGORY_VALUES = {category.value for category in ToolCategory}
_PRIORITY_LABELS = {priority.label for priority in ToolPriority}


def _determine_category(tags: set[str]) -> str | None:
    """Pick the category from tool tags; sorted so the choice is stable."""
    for tag in sorted(tags):
        if tag in _CATEGORY_VALUES:
            return tag
    return None


def _determine_priority(tags: set[str]) -> str:
    for priority in ToolPriority:
        if priority.label in tags:
            return priority.label
    return ToolPriority.NORMAL.label


async def generate_index(mcp_server: FastMCP) -> list[dict[str, Any]]:
    """Generate index records from a server's registered tools.

    Category comes from the first tag naming a category, helper status from
    a ``helper`` or ``meta`` tag and priority from a tag naming a priority
    level. Tools without a category tag are skipped.

    Args:
        mcp_server: The FastMCP server instance to index tools from.

    Returns:
        Index records sorted by tool name.
    """
    all_tools = await mcp_server.get_tools()

    records: list[dict[str, Any]] = []
    for registered_name, tool_obj in all_tools.items():
        tags = {tag.lower() for tag in (tool_obj.tags or set())}
        category = _determine_category(tags)
        if category is None:
            logger.warning(f"Tool '{registered_name}' has no category tag, skipping")
            continue

        priority = _determine_priority(tags)
        records.append(
            {
                "name": registered_name,
                "description": (tool_obj.description or "").strip(),
                "category": category,
                "tags": sorted(tags - {category} - _PRIORITY_LABELS),
                "isHelper": bool(tags & HELPER_TAGS),
                "priority": priority,
            }
        )

    records.sort(key=lambda record: record["name"])
    logger.info(f"Generated tool index with {len(records)} tools")
    return records


def write_index(records: list[dict[str, Any]], path: str | Path) -> None:
    """Write index records to ``path`` as a JSON array."""
    Path(path).write_text(
        json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
