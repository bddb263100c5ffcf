"""Discover Python modules in a source tree."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path

from graphex.core.discovery.base import ProgressCallback, build_module_graph
from graphex.core.graph.module_graph import ModuleGraph
from graphex.core.models import DiscoveryStats, Module
from graphex.languages.python import PythonParser, path_to_module

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES = [
    "__pycache__",
    "*.egg-info",
    "node_modules",
    "build",
    "dist",
    "venv",
    ".venv",
]


def discover_python_modules(
    directory: Path,
    exclude_patterns: list[str] | None = None,
) -> tuple[list[Module], int]:
    """Find all Python modules below a directory.

    Returns:
        The modules found and the number of files skipped by exclusion.
    """
    all_excludes = DEFAULT_EXCLUDES + (exclude_patterns or [])
    modules: list[Module] = []
    skipped = 0

    for file in sorted(directory.rglob("*.py")):
        relative = file.relative_to(directory)
        if _should_exclude(str(relative), all_excludes):
            skipped += 1
            continue

        name = path_to_module(relative)
        if name:
            modules.append(Module(name=name, path=file))

    return modules, skipped


def discover_python_module_graph(
    directory: Path,
    exclude_patterns: list[str] | None = None,
    include_external: bool = False,
    on_progress: ProgressCallback | None = None,
) -> tuple[ModuleGraph, DiscoveryStats]:
    """Build the import graph of the Python modules below a directory.

    Args:
        directory: Root of the source tree; module names are relative to it
        exclude_patterns: Additional glob patterns to exclude (e.g., "tests")
        include_external: Keep imports of modules outside the tree
        on_progress: Optional callback for progress updates (file, current, total)
    """
    modules, skipped = discover_python_modules(directory, exclude_patterns)
    logger.debug("Found %d Python modules in %s", len(modules), directory)

    graph, stats = build_module_graph(
        modules,
        PythonParser(root=directory),
        include_external=include_external,
        on_progress=on_progress,
    )
    stats.skipped = skipped
    return graph, stats


def _should_exclude(path: str, patterns: list[str]) -> bool:
    """Check if a path matches any exclusion pattern.

    Excludes:
    - Any path component starting with '.' (hidden files/directories)
    - Any path component matching the exclusion patterns
    """
    for part in Path(path).parts:
        if part.startswith("."):
            return True
        for pattern in patterns:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False
