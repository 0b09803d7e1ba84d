"""Graph builder — scan a plugins directory and link packages by their requirements."""

from __future__ import annotations

from pathlib import Path

import structlog

from plugin_graph.exceptions import ManifestError, PluginsDirError
from plugin_graph.manifest import is_package_reference, read_manifest
from plugin_graph.models import Manifest, Package, PluginGraph, SkippedFolder

log = structlog.get_logger("plugin_graph.scan")


def build_graph(root: Path | str, show_external: bool = False) -> PluginGraph:
    """Scan *root* and return the full dependency graph.

    Every immediate subdirectory with a readable ``composer.json`` becomes an
    internal package keyed by its declared name. Requirement keys of the form
    ``vendor/name`` then become edges; anything not found among the scanned
    packages is counted in ``external_counts`` and, when *show_external* is
    set, also materialized as an external node.

    Raises ``PluginsDirError`` if *root* cannot be listed. Per-folder manifest
    problems are logged and recorded in ``graph.skipped``.
    """
    graph = PluginGraph(root=Path(root), show_external=show_external)
    manifests = _discover_packages(graph)
    for manifest in manifests.values():
        _link_requirements(graph, graph.packages[manifest.name], manifest)
    log.info(
        "scan.done",
        root=str(graph.root),
        internal=len(manifests),
        external=len(graph.external_counts),
        skipped=len(graph.skipped),
    )
    return graph


def _list_folders(root: Path) -> list[Path]:
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise PluginsDirError(root, e.strerror or str(e)) from e
    return [entry for entry in entries if entry.is_dir()]


def _discover_packages(graph: PluginGraph) -> dict[str, Manifest]:
    """Register one internal package per parsable manifest.

    Returns the manifests keyed by package name; on a name collision the
    later folder (in name order) replaces the earlier one.
    """
    manifests: dict[str, Manifest] = {}
    for folder in _list_folders(graph.root):
        try:
            manifest = read_manifest(folder)
        except ManifestError as e:
            log.warning(
                "scan.manifest_skipped",
                folder=folder.name,
                error=type(e).__name__,
                reason=e.reason,
            )
            graph.skipped.append(SkippedFolder(folder_name=folder.name, reason=e.reason))
            continue

        previous = graph.packages.get(manifest.name)
        if previous is not None:
            log.warning(
                "scan.duplicate_name",
                name=manifest.name,
                kept=folder.name,
                replaced=previous.folder_name,
            )
        graph.packages[manifest.name] = Package(
            name=manifest.name,
            folder_name=folder.name,
        )
        manifests[manifest.name] = manifest
    return manifests


def _link_requirements(graph: PluginGraph, package: Package, manifest: Manifest) -> None:
    for dep in manifest.requires:
        if not is_package_reference(dep):
            continue

        target = graph.packages.get(dep)
        if target is not None and not target.is_external:
            package.dependencies.append(dep)
            continue

        graph.external_counts[dep] = graph.external_counts.get(dep, 0) + 1
        if not graph.show_external:
            continue

        package.dependencies.append(dep)
        if target is None:
            graph.packages[dep] = Package(name=dep, folder_name=dep, is_external=True)
            log.debug("scan.external_added", name=dep, first_seen_in=package.folder_name)
