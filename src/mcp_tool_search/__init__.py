"""Tool search MCP server: ranked discovery over a static tool catalog."""

import logging

from .servers.discovery.config import SearchConfig
from .servers.search import build_search_engine, reset_search_engine, search_mcp
from .utils.logging import setup_logging

__version__ = "0.1.0"

logger = logging.getLogger("mcp-tool-search")


def main() -> None:
    """Load the tool catalog and serve search_tools over stdio.

    The catalog is loaded before the server starts, so an invalid index
    stops the process instead of failing individual searches.
    """
    config = SearchConfig.from_env()
    setup_logging(config.log_level)

    engine = build_search_engine(config)
    reset_search_engine(engine)
    logger.info(f"Starting tool search server with {len(engine.catalog)} tools")

    search_mcp.run()


__all__ = ["main", "__version__"]
