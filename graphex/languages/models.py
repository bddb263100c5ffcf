"""Data models for import parser results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Import:
    """A module import scraped from source text."""

    module: str
    package: str | None = None
    # Names pulled from the module, e.g. ``from a import b`` -> ("b",)
    names: tuple[str, ...] = ()


@dataclass
class ParseResult:
    """Result of parsing a file."""

    file: Path
    imports: list[Import] = field(default_factory=list)

    @property
    def modules(self) -> list[str]:
        return [imp.module for imp in self.imports]
