"""Minimal reader for .cabal package descriptions.

Understands just enough of the format to find modules: top-level fields,
component stanzas, ``common`` stanzas pulled in with ``import:``, and
``if``/``else`` blocks, whose fields are flattened into the enclosing
stanza (every branch counts).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from graphex.core.exceptions import CabalFileError

_FIELD = re.compile(r"^(?P<name>[A-Za-z][A-Za-z0-9_-]*)\s*:(?P<value>.*)$")
_SECTION = re.compile(r"^(?P<kind>[A-Za-z][A-Za-z0-9_-]*)(?:\s+(?P<name>[^\s{]+))?\s*\{?$")
_CONDITIONAL = re.compile(r"^(if\b|else\b|elif\b|\{|\})")
_SEPARATORS = re.compile(r"[,\s]+")


@dataclass
class CabalStanza:
    """A section such as ``library`` or ``executable foo``."""

    kind: str
    name: str | None = None
    fields: dict[str, list[str]] = field(default_factory=dict)

    def add(self, name: str, value: str) -> None:
        self.fields.setdefault(name.lower(), []).append(value)

    def values(self, name: str) -> list[str]:
        """All comma/space separated items of a field, across occurrences."""
        items: list[str] = []
        for value in self.fields.get(name.lower(), []):
            items.extend(item for item in _SEPARATORS.split(value) if item)
        return items

    def first(self, name: str) -> str | None:
        values = self.values(name)
        return values[0] if values else None


@dataclass
class CabalPackage:
    """A parsed .cabal file."""

    path: Path
    top: CabalStanza
    stanzas: list[CabalStanza]

    @property
    def name(self) -> str | None:
        return self.top.first("name")

    @property
    def root(self) -> Path:
        return self.path.parent

    def components(self, kind: str) -> list[CabalStanza]:
        """Stanzas of one kind with their common stanzas merged in."""
        return [self._resolve(s) for s in self.stanzas if s.kind == kind]

    def _resolve(self, stanza: CabalStanza, seen: frozenset[str] = frozenset()) -> CabalStanza:
        commons = {s.name: s for s in self.stanzas if s.kind == "common"}
        merged = CabalStanza(kind=stanza.kind, name=stanza.name)
        for common_name in stanza.values("import"):
            common = commons.get(common_name)
            if common is None or common_name in seen:
                continue
            resolved = self._resolve(common, seen | {common_name})
            for key, values in resolved.fields.items():
                merged.fields.setdefault(key, []).extend(values)
        for key, values in stanza.fields.items():
            merged.fields.setdefault(key, []).extend(values)
        return merged


def parse_cabal(text: str, path: Path) -> CabalPackage:
    """Parse .cabal text. Raises CabalFileError on unrecognised top-level lines."""
    top = CabalStanza(kind="package")
    stanzas: list[CabalStanza] = []
    current = top
    # (stanza, field name, indent) of the field that may continue on the next line
    open_field: tuple[CabalStanza, str, int] | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("--"):
            continue
        indent = len(raw) - len(raw.lstrip())

        if indent == 0:
            open_field = None
            field_match = _FIELD.match(stripped)
            if field_match:
                current = top
                top.add(field_match["name"], field_match["value"].strip())
                open_field = (top, field_match["name"], 0)
                continue
            section_match = _SECTION.match(stripped)
            if section_match is None:
                raise CabalFileError(f"{path}:{lineno}: cannot parse {stripped!r}")
            current = CabalStanza(kind=section_match["kind"].lower(), name=section_match["name"])
            stanzas.append(current)
            continue

        if open_field is not None and indent > open_field[2]:
            stanza, name, _ = open_field
            stanza.add(name, stripped)
            continue

        field_match = _FIELD.match(stripped)
        if field_match:
            current.add(field_match["name"], field_match["value"].strip())
            open_field = (current, field_match["name"], indent)
        elif _CONDITIONAL.match(stripped):
            open_field = None
        else:
            raise CabalFileError(f"{path}:{lineno}: cannot parse {stripped!r}")

    return CabalPackage(path=path, top=top, stanzas=stanzas)


def read_cabal_file(path: Path) -> CabalPackage:
    """Read and parse a .cabal file. Raises CabalFileError."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CabalFileError(f"Cannot read {path}: {e}") from e
    return parse_cabal(text, path)
