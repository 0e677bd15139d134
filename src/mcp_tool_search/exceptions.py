"""Exceptions raised by the tool search engine."""


class ToolSearchError(Exception):
    """Base class for tool search errors."""


class SearchValidationError(ToolSearchError, ValueError):
    """Raised when search parameters are invalid.

    Always raised before any scoring happens, so callers can tell a bad
    request apart from a search that simply matched nothing.
    """


class CatalogIntegrityError(ToolSearchError):
    """Raised when the tool catalog is malformed (missing fields, duplicates)."""


class ConfigurationError(ToolSearchError, ValueError):
    """Raised when the search configuration is inconsistent."""
