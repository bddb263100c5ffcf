"""
Runtime configuration.

Values come from the environment (GRAPHEX_GRAPH, GRAPHEX_LOG_LEVEL) or a local
.env file. Command-line options override them.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GRAPH_FILE = "graph.json"


class GraphexSettings(BaseSettings):
    """Settings shared by the CLI and the MCP server."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    graph: Path = Path(DEFAULT_GRAPH_FILE)
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> GraphexSettings:
    """Return the process-wide settings instance."""
    return GraphexSettings()
