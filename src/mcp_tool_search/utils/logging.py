"""Logging setup for the tool search server."""

import logging
import sys


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Configure the ``mcp-tool-search`` logger hierarchy.

    Logs go to stderr; stdout carries the MCP stdio transport.

    Args:
        level: Logging level, as a number or a level name.

    Returns:
        The configured root logger of the package.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop handlers installed by earlier calls so messages are not duplicated
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(handler)

    package_logger = logging.getLogger("mcp-tool-search")
    package_logger.setLevel(level)
    return package_logger
