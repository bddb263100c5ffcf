"""Discover Haskell modules from the components of .cabal packages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from pathlib import Path

from graphex.core.discovery.base import ProgressCallback, build_module_graph
from graphex.core.discovery.cabal_file import CabalPackage, CabalStanza, read_cabal_file
from graphex.core.exceptions import CabalFileError, DiscoveryError
from graphex.core.graph.module_graph import ModuleGraph
from graphex.core.models import DiscoveryStats, Module
from graphex.languages import HaskellParser

logger = logging.getLogger(__name__)


class UnitType(Enum):
    """Kinds of buildable components."""

    LIBRARY = "lib"
    EXECUTABLE = "exe"
    TESTS = "test"


_UNIT_ALIASES = {
    "lib": UnitType.LIBRARY,
    "library": UnitType.LIBRARY,
    "exe": UnitType.EXECUTABLE,
    "executable": UnitType.EXECUTABLE,
    "test": UnitType.TESTS,
    "tests": UnitType.TESTS,
    "test-suite": UnitType.TESTS,
}


@dataclass(frozen=True)
class CabalUnit:
    """One component of a package. The main library has no name."""

    type: UnitType
    name: str | None = None

    def __str__(self) -> str:
        return self.type.value if self.name is None else f"{self.type.value}:{self.name}"


class Discovery(Enum):
    """Verdict of one rule for one unit."""

    DISCOVERED = "discovered"
    HIDDEN = "hidden"
    PASSED = "passed"

    def combine(self, other: Discovery) -> Discovery:
        """Later verdicts win unless they pass. PASSED is the identity."""
        return self if other is Discovery.PASSED else other


@dataclass(frozen=True)
class DiscoverRule:
    """Show or hide every unit of a type, or one named unit."""

    include: bool
    type: UnitType
    name: str | None = None

    @classmethod
    def parse(cls, text: str) -> DiscoverRule:
        """Parse ``[+|-]type[:name]``, e.g. ``-test`` or ``+exe:server``."""
        include = not text.startswith("-")
        body = text.lstrip("+-")
        kind, _, name = body.partition(":")
        unit_type = _UNIT_ALIASES.get(kind.lower())
        if unit_type is None:
            raise ValueError(f"Unknown unit type {kind!r} in rule {text!r}")
        return cls(include=include, type=unit_type, name=name or None)


def discovers_unit(rule: DiscoverRule, unit: CabalUnit) -> Discovery:
    """Verdict of a single rule."""
    matches = rule.type == unit.type and (rule.name is None or rule.name == unit.name)
    if not matches:
        return Discovery.PASSED
    return Discovery.DISCOVERED if rule.include else Discovery.HIDDEN


def is_discovered(rules: list[DiscoverRule], unit: CabalUnit) -> bool:
    """Combine every rule's verdict; units no rule mentions are discovered."""
    verdict = reduce(
        Discovery.combine,
        (discovers_unit(rule, unit) for rule in rules),
        Discovery.PASSED,
    )
    return verdict is not Discovery.HIDDEN


@dataclass
class CabalDiscoverOpts:
    """Options for a Cabal discovery pass."""

    rules: list[DiscoverRule]
    include_external: bool = False


def find_module_file(root: Path, source_dirs: list[str], relative: Path) -> Path | None:
    """First existing file for a module path across source directories."""
    for source_dir in source_dirs:
        for extension in HaskellParser.suffixes:
            candidate = root / source_dir / relative.with_suffix(extension)
            if candidate.is_file():
                return candidate
    return None


def module_path(module: str) -> Path:
    return Path(*module.split(".")).with_suffix(".hs")


def _component_modules(
    package: CabalPackage,
    stanza: CabalStanza,
    module_fields: tuple[str, ...],
    main_name: str | None,
    default_main: str | None = None,
) -> list[Module]:
    source_dirs = stanza.values("hs-source-dirs") or ["."]
    modules: list[Module] = []

    if main_name is not None:
        main_is = stanza.first("main-is") or default_main
        if main_is is not None:
            modules.append(
                Module(main_name, find_module_file(package.root, source_dirs, Path(main_is)))
            )

    for field_name in module_fields:
        for name in stanza.values(field_name):
            modules.append(Module(name, find_module_file(package.root, source_dirs, module_path(name))))
    return modules


def discover_cabal_modules(package: CabalPackage, opts: CabalDiscoverOpts) -> list[Module]:
    """Modules of every component the rules let through."""
    modules: list[Module] = []

    for stanza in package.components("library"):
        unit = CabalUnit(UnitType.LIBRARY, stanza.name)
        if is_discovered(opts.rules, unit):
            modules.extend(
                _component_modules(package, stanza, ("exposed-modules", "other-modules"), None)
            )

    for stanza in package.components("executable"):
        unit = CabalUnit(UnitType.EXECUTABLE, stanza.name)
        if is_discovered(opts.rules, unit):
            modules.extend(
                _component_modules(
                    package, stanza, ("other-modules",), f"{stanza.name}-Main", "Main.hs"
                )
            )

    for stanza in package.components("test-suite"):
        unit = CabalUnit(UnitType.TESTS, stanza.name)
        if is_discovered(opts.rules, unit):
            modules.extend(
                _component_modules(package, stanza, ("other-modules",), f"{stanza.name}-Main")
            )

    return modules


def discover_cabal_module_graph(
    directory: Path,
    opts: CabalDiscoverOpts,
    on_progress: ProgressCallback | None = None,
) -> tuple[ModuleGraph, DiscoveryStats]:
    """Build the module import graph of every .cabal package in a directory.

    An unreadable .cabal file is reported in the stats and skipped.
    Raises DiscoveryError when the directory holds no .cabal file at all.
    """
    cabal_files = sorted(directory.glob("*.cabal"))
    if not cabal_files:
        raise DiscoveryError(f"No .cabal file found in {directory}")

    modules: list[Module] = []
    errors: list[str] = []
    for cabal_file in cabal_files:
        try:
            package = read_cabal_file(cabal_file)
        except CabalFileError as e:
            logger.warning("Skipping %s: %s", cabal_file, e)
            errors.append(str(e))
            continue
        found = discover_cabal_modules(package, opts)
        logger.debug("Found %d modules in %s", len(found), cabal_file)
        modules.extend(found)

    graph, stats = build_module_graph(
        modules,
        HaskellParser(),
        include_external=opts.include_external,
        on_progress=on_progress,
    )
    stats.errors = errors + stats.errors
    return graph, stats
