"""MCP servers exposing the tool search engine."""

from .search import get_search_engine, reset_search_engine, search_mcp

__all__ = ["get_search_engine", "reset_search_engine", "search_mcp"]
