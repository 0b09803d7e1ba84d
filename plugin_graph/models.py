"""Data models for the plugin dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Manifest:
    """A parsed composer.json: declared name plus requirement constraints."""

    name: str
    requires: dict[str, str]
    path: Path


@dataclass
class Package:
    """A node in the dependency graph."""

    name: str
    folder_name: str
    dependencies: list[str] = field(default_factory=list)
    is_external: bool = False

    @property
    def label(self) -> str:
        return self.folder_name


@dataclass
class SkippedFolder:
    """A scanned folder that contributed no package, with the reason."""

    folder_name: str
    reason: str


@dataclass
class PluginGraph:
    """Result of a scan: packages keyed by manifest name plus external usage."""

    root: Path
    show_external: bool = False
    packages: dict[str, Package] = field(default_factory=dict)
    external_counts: dict[str, int] = field(default_factory=dict)
    skipped: list[SkippedFolder] = field(default_factory=list)

    def sorted_packages(self) -> list[Package]:
        """All packages ordered by label, then name, for reproducible output."""
        return sorted(self.packages.values(), key=lambda p: (p.folder_name, p.name))

    def internal_packages(self) -> list[Package]:
        return [p for p in self.sorted_packages() if not p.is_external]

    def is_displayed(self, package: Package) -> bool:
        return self.show_external or not package.is_external

    def displayed_packages(self) -> list[Package]:
        return [p for p in self.sorted_packages() if self.is_displayed(p)]

    def displayed_edges(self) -> list[tuple[Package, Package]]:
        """(source, target) pairs whose endpoints both pass the display filter."""
        edges: list[tuple[Package, Package]] = []
        for source in self.displayed_packages():
            for dep in source.dependencies:
                target = self.packages.get(dep)
                if target is None or not self.is_displayed(target):
                    continue
                edges.append((source, target))
        return edges
