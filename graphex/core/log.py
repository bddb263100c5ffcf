"""Logging setup shared by the CLI and the MCP server."""

import logging

_FORMAT = "%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure stderr logging for the graphex package.

    Args:
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        The package logger.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=_FORMAT,
        force=True,
    )
    return logging.getLogger("graphex")
