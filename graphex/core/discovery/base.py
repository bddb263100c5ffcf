"""Turn discovered modules into a ModuleGraph."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from graphex.core.exceptions import ParseError
from graphex.core.graph.module_graph import ModuleGraph
from graphex.core.models import DiscoveryStats, Module
from graphex.languages import Import, LanguageParser

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, int, int], None]


def resolve_imports(imports: Iterable[Import], known: set[str]) -> set[str]:
    """Map imports to module names, preferring known submodules.

    ``from a import b`` counts as an import of ``a.b`` when that module was
    discovered, and of ``a`` otherwise.
    """
    targets: set[str] = set()
    for imp in imports:
        if not imp.names:
            targets.add(imp.module)
            continue
        for name in imp.names:
            submodule = f"{imp.module}.{name}"
            targets.add(submodule if submodule in known else imp.module)
    return targets


def build_module_graph(
    modules: list[Module],
    parser: LanguageParser,
    include_external: bool = False,
    on_progress: ProgressCallback | None = None,
) -> tuple[ModuleGraph, DiscoveryStats]:
    """Parse each module's file and merge the per-module contributions.

    A module without a file, or whose file fails to parse, still appears in
    the result with no edges. Failures are collected in the stats.
    """
    stats = DiscoveryStats()
    known = {m.name for m in modules}
    contributions: list[ModuleGraph] = []
    total = len(modules)

    for i, module in enumerate(modules):
        stats.modules += 1
        targets: set[str] = set()

        if module.path is None:
            stats.missing += 1
        else:
            try:
                result = parser.parse(module.path)
            except ParseError as e:
                logger.warning("Skipping imports of %s: %s", module.name, e)
                stats.errors.append(str(e))
            else:
                stats.parsed += 1
                targets = resolve_imports(result.imports, known)
                if not include_external:
                    targets &= known

        stats.edges += len(targets)
        contributions.append(ModuleGraph.of(module.name, targets))

        if on_progress and module.path is not None:
            on_progress(module.path, i + 1, total)

    return ModuleGraph.concat(contributions), stats
