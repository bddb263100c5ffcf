"""Data models for module discovery."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Module:
    """A named unit and the source file it resolves to, if any."""

    name: str
    path: Path | None = None

    @property
    def has_file(self) -> bool:
        return self.path is not None


class DiscoveryStats:
    """Statistics from a discovery pass."""

    def __init__(self) -> None:
        self.modules: int = 0
        self.parsed: int = 0
        self.missing: int = 0
        self.skipped: int = 0
        self.edges: int = 0
        self.errors: list[str] = []

    def __repr__(self) -> str:
        return (
            f"DiscoveryStats(modules={self.modules}, parsed={self.parsed}, "
            f"missing={self.missing}, skipped={self.skipped}, "
            f"edges={self.edges}, errors={len(self.errors)})"
        )
