"""
Core module: graph engine, exceptions, configuration, and discovery.

Graph (graph/):
    - Graph: Total, immutable adjacency map
    - Queries: direct/transitive deps, why, all-paths, rankings, trees
    - Exchange: JSON node/edge records and CSV edge lists

Exceptions (exceptions.py):
    - GraphexError: Base exception for all graphex errors
    - GraphLoadError: Graph input could not be decoded
    - ParseError: Source file could not be parsed
    - CabalFileError / DiscoveryError: Manifest problems during discovery

Discovery (discovery/):
    - Cabal packages and Python source trees to ModuleGraph
"""

from graphex.core.exceptions import (
    CabalFileError,
    DiscoveryError,
    GraphexError,
    GraphLoadError,
    ParseError,
)
from graphex.core.models import DiscoveryStats, Module

__all__ = [
    # Models
    "Module",
    "DiscoveryStats",
    # Exceptions
    "GraphexError",
    "GraphLoadError",
    "ParseError",
    "CabalFileError",
    "DiscoveryError",
]
