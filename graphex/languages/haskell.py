"""Haskell import collector built on tree-sitter.

Every ``import`` declaration in the syntax tree yields its module name and
optional package. tree-sitter recovers from syntax errors, so imports in a
partly broken file still count. CPP is not run: imports from every
conditional branch are dependencies.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_language

from graphex.core.exceptions import ParseError
from graphex.languages.models import Import, ParseResult

# Node types naming the imported module across grammar versions
_MODULE_TYPES = ("module", "qualified_module", "module_name")
_PACKAGE_TYPES = ("import_package", "string")


@lru_cache(maxsize=1)
def _parser() -> Parser:
    return Parser(get_language("haskell"))


class HaskellParser:
    """Parser for Haskell and literate Haskell source files."""

    suffixes = (".hs", ".lhs")

    def supports(self, file: Path) -> bool:
        return file.suffix in self.suffixes

    def parse(self, file: Path) -> ParseResult:
        """Parse a Haskell file and extract imported module names."""
        try:
            source = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {file}: {e}") from e

        if file.suffix == ".lhs":
            source = unlit(source)
        return ParseResult(file=file, imports=parse_imports(source))


def unlit(source: str) -> str:
    """Keep only the code of a literate Haskell file.

    Handles both bird tracks (``> code``) and ``\\begin{code}`` blocks.
    Prose lines become blank so line numbers are preserved.
    """
    lines: list[str] = []
    in_block = False
    for line in source.splitlines():
        stripped = line.strip()
        if stripped == "\\begin{code}":
            in_block = True
            lines.append("")
        elif stripped == "\\end{code}":
            in_block = False
            lines.append("")
        elif in_block:
            lines.append(line)
        elif line.startswith(">"):
            lines.append(line[2:] if line.startswith("> ") else line[1:])
        else:
            lines.append("")
    return "\n".join(lines) + "\n"


def parse_imports(source: str) -> list[Import]:
    """Imports of a source text, in file order."""
    tree = _parser().parse(source.encode("utf-8"))
    imports: list[Import] = []

    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_named and node.type == "import":
            imp = _import_from_node(node)
            if imp is not None:
                imports.append(imp)
            continue
        stack.extend(reversed(node.children))
    return imports


def _import_from_node(node: Node) -> Import | None:
    module = node.child_by_field_name("module") or _first_child(node, _MODULE_TYPES)
    if module is None:
        return None

    package = node.child_by_field_name("package") or _first_child(node, _PACKAGE_TYPES)
    return Import(
        module=_text(module).replace(" ", ""),
        package=_text(package).strip('"') if package is not None else None,
    )


def _first_child(node: Node, types: tuple[str, ...]) -> Node | None:
    return next((child for child in node.named_children if child.type in types), None)


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""
