"""
Language parsers: Extract module imports from source code.

Components:
    - LanguageParser: Protocol defining the parser interface
    - HaskellParser: Line-start import scraper for Haskell files
    - PythonParser: AST-based import collector for Python files
    - ParseResult: Container for the imports found in one file

Adding a new language:
    1. Create a new parser class implementing LanguageParser protocol
    2. Implement parse() to return ParseResult
    3. Implement supports() to check file extensions
"""

from graphex.languages.base import LanguageParser
from graphex.languages.haskell import HaskellParser
from graphex.languages.models import Import, ParseResult
from graphex.languages.python import PythonParser

__all__ = [
    "LanguageParser",
    "HaskellParser",
    "Import",
    "ParseResult",
    "PythonParser",
]
