"""
Module discovery: find named units and merge their imports into a graph.

Sources:
    - cabal: components of .cabal packages, parsed with HaskellParser
    - sources: every .py file below a directory, parsed with PythonParser

Each discovered module contributes one ModuleGraph; contributions are merged
in any order. A module whose file is missing or unparsable keeps its node
and loses its edges, so one bad unit never aborts the pass.
"""

from graphex.core.discovery.base import build_module_graph, resolve_imports
from graphex.core.discovery.cabal import (
    CabalDiscoverOpts,
    CabalUnit,
    Discovery,
    DiscoverRule,
    UnitType,
    discover_cabal_module_graph,
    discover_cabal_modules,
    discovers_unit,
    is_discovered,
)
from graphex.core.discovery.cabal_file import CabalPackage, CabalStanza, parse_cabal, read_cabal_file
from graphex.core.discovery.sources import (
    DEFAULT_EXCLUDES,
    discover_python_module_graph,
    discover_python_modules,
)

__all__ = [
    "DEFAULT_EXCLUDES",
    "CabalDiscoverOpts",
    "CabalPackage",
    "CabalStanza",
    "CabalUnit",
    "Discovery",
    "DiscoverRule",
    "UnitType",
    "build_module_graph",
    "discover_cabal_module_graph",
    "discover_cabal_modules",
    "discover_python_module_graph",
    "discover_python_modules",
    "discovers_unit",
    "is_discovered",
    "parse_cabal",
    "read_cabal_file",
    "resolve_imports",
]
