"""Interface shared by the import scrapers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from graphex.languages.models import ParseResult


@runtime_checkable
class LanguageParser(Protocol):
    """Turns one source file into the module names it imports.

    ``parse`` raises ParseError when the file cannot be read or is not
    valid source. Discovery records the failure and keeps the module.
    """

    suffixes: tuple[str, ...]

    def parse(self, file: Path) -> ParseResult: ...

    def supports(self, file: Path) -> bool: ...
