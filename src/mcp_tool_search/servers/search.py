"""search_tools meta-tool: lets an agent discover tools without loading them all."""

import json
import logging
from threading import Lock
from typing import Annotated, Any, Literal

from fastmcp import FastMCP
from pydantic import Field

from mcp_tool_search.exceptions import SearchValidationError
from mcp_tool_search.servers.discovery.catalog import ToolCatalog
from mcp_tool_search.servers.discovery.config import SearchConfig
from mcp_tool_search.servers.discovery.engine import ToolSearchEngine
from mcp_tool_search.servers.discovery.types import SearchParams, ToolCategory
from mcp_tool_search.servers.discovery.weights import WeightedCombiner

logger = logging.getLogger("mcp-tool-search.server")

search_mcp = FastMCP(
    name="Tool Search",
    instructions=(
        "Primary way to discover tools on this server. Call search_tools with a "
        "short task description before calling an operation."
    ),
)

_engine: ToolSearchEngine | None = None
_engine_lock = Lock()


def build_search_engine(config: SearchConfig | None = None) -> ToolSearchEngine:
    """Load the catalog and build an engine from configuration.

    Raises:
        CatalogIntegrityError: If the tool index is invalid.
        ConfigurationError: If the weight table is invalid.
    """
    config = config or SearchConfig.from_env()
    catalog = ToolCatalog.load(config.index_path)
    return ToolSearchEngine(
        catalog,
        combiner=WeightedCombiner(config.weights),
        default_limit=config.default_limit,
        default_detail_level=config.default_detail_level,
    )


def get_search_engine() -> ToolSearchEngine:
    """Get the process-wide search engine, building it on first use."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = build_search_engine()
    return _engine


def reset_search_engine(engine: ToolSearchEngine | None = None) -> None:
    """Replace the process-wide engine. Useful for testing."""
    global _engine
    with _engine_lock:
        _engine = engine


@search_mcp.tool(tags={"search", "helper", "read"})
async def search_tools(
    query: Annotated[
        str,
        Field(
            description=(
                "Free-text search query, e.g. 'issue', 'create task', 'worklog'. "
                "Matched against tool names, descriptions, categories and tags."
            )
        ),
    ],
    detail_level: Annotated[
        Literal["name_only", "name_and_description", "full"] | None,
        Field(
            description=(
                "Result detail: 'name_only' (fewest tokens), 'name_and_description' "
                "(default) or 'full' (description, category, tags and match details)"
            ),
            default=None,
        ),
    ] = None,
    category: Annotated[
        str | None,
        Field(
            description=(
                "Only return tools in this category. One of: "
                + ", ".join(c.value for c in ToolCategory)
            ),
            default=None,
        ),
    ] = None,
    is_helper: Annotated[
        bool | None,
        Field(
            description="true: only helper tools; false: only API operations",
            default=None,
        ),
    ] = None,
    limit: Annotated[
        int | None,
        Field(description="Maximum number of results (default 10)", default=None),
    ] = None,
) -> str:
    """Search the available tools by free-text query.

    Args:
        query: Free-text search query.
        detail_level: How much of each match to return.
        category: Optional category filter.
        is_helper: Optional helper/API filter.
        limit: Maximum number of results.

    Returns:
        JSON with the ranked matches, or the validation error.
    """
    engine = get_search_engine()
    params = SearchParams(
        query=query,
        detail_level=detail_level,
        category=category,
        is_helper=is_helper,
        limit=limit,
    )

    try:
        response = engine.search(params)
    except SearchValidationError as e:
        logger.warning(f"Rejected tool search '{query}': {e}")
        error: dict[str, Any] = {
            "success": False,
            "message": "Invalid search parameters",
            "error": str(e),
        }
        return json.dumps(error, indent=2, ensure_ascii=False)

    data = response.to_dict()
    data["returned"] = len(response.results)
    logger.info(
        f"Tool search '{response.query}' found {response.total}, "
        f"returned {len(response.results)}"
    )
    return json.dumps({"success": True, "data": data}, indent=2, ensure_ascii=False)
