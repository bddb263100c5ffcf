"""Graphex custom exceptions."""


class GraphexError(Exception):
    """Base exception for Graphex errors."""


class GraphLoadError(GraphexError):
    """Graph input could not be decoded."""


class ParseError(GraphexError):
    """Error parsing a source file."""


class CabalFileError(GraphexError):
    """A .cabal manifest could not be read."""


class DiscoveryError(GraphexError):
    """Nothing to discover in the requested location."""
