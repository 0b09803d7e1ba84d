"""plugin-graph: dependency graphs for a directory of Composer plugin packages."""

__version__ = "0.1.0"

from plugin_graph.exceptions import (
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    ManifestReadError,
    PluginGraphError,
    PluginsDirError,
    RenderError,
    RendererNotFoundError,
)
from plugin_graph.graph import build_graph
from plugin_graph.manifest import read_manifest
from plugin_graph.models import Manifest, Package, PluginGraph, SkippedFolder
from plugin_graph.renderers import (
    find_dot,
    render_dot,
    render_graphviz,
    render_mermaid,
    write_mermaid,
)
from plugin_graph.summary import format_summary

__all__ = [
    "Manifest",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestReadError",
    "Package",
    "PluginGraph",
    "PluginGraphError",
    "PluginsDirError",
    "RenderError",
    "RendererNotFoundError",
    "SkippedFolder",
    "build_graph",
    "find_dot",
    "format_summary",
    "read_manifest",
    "render_dot",
    "render_graphviz",
    "render_mermaid",
    "write_mermaid",
]
