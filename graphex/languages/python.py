"""Python AST parser for extracting module imports."""

from __future__ import annotations

import ast
from pathlib import Path

from graphex.core.exceptions import ParseError
from graphex.languages.models import Import, ParseResult


def path_to_module(path: Path) -> str:
    """Convert a relative file path to a dotted module name."""
    parts = list(path.with_suffix("").parts)

    if parts and parts[0] == "src":
        parts = parts[1:]
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


class PythonParser:
    """Parser for Python source files using the ast module.

    Relative imports are resolved against module names computed from
    paths relative to ``root``.
    """

    suffixes = (".py",)

    def __init__(self, root: Path | None = None) -> None:
        self._root = root

    def supports(self, file: Path) -> bool:
        return file.suffix in self.suffixes

    def module_name(self, file: Path) -> str:
        if self._root is not None:
            try:
                return path_to_module(file.relative_to(self._root))
            except ValueError:
                pass
        return path_to_module(Path(file.name))

    def parse(self, file: Path) -> ParseResult:
        """Parse a Python file and extract its imports."""
        try:
            source = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {file}: {e}") from e

        try:
            tree = ast.parse(source, filename=str(file))
        except SyntaxError as e:
            raise ParseError(f"Syntax error in {file}: {e}") from e

        visitor = _ImportVisitor(self.module_name(file), is_package=file.stem == "__init__")
        visitor.visit(tree)
        return ParseResult(file=file, imports=visitor.imports)


class _ImportVisitor(ast.NodeVisitor):
    """AST visitor that collects import statements at any nesting level."""

    def __init__(self, module_name: str, is_package: bool) -> None:
        self.imports: list[Import] = []
        self._module_name = module_name
        self._is_package = is_package

    def visit_Import(self, node: ast.Import) -> None:
        """Handle: import foo, import foo.bar, import foo as f"""
        for alias in node.names:
            self.imports.append(Import(module=alias.name))

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        """Handle: from foo import bar, from . import bar, from foo import *"""
        module = node.module or ""

        if node.level > 0:
            module = self._resolve_relative_import(node.level, module)
        if not module:
            return

        names = tuple(alias.name for alias in node.names if alias.name != "*")
        self.imports.append(Import(module=module, names=names))

    def _resolve_relative_import(self, level: int, module: str) -> str:
        """Resolve a relative import to an absolute module path."""
        parts = self._module_name.split(".") if self._module_name else []
        package = parts if self._is_package else parts[:-1]

        if level - 1 > len(package):
            return module

        base_parts = package[: len(package) - (level - 1)]
        if module:
            return ".".join(base_parts + [module])
        return ".".join(base_parts)
