"""Mermaid flowchart output."""

from __future__ import annotations

from pathlib import Path

from plugin_graph.models import PluginGraph

MERMAID_HEADER = "graph TD"


def _quote(label: str) -> str:
    return '"' + label.replace('"', "#quot;") + '"'


def render_mermaid(graph: PluginGraph) -> str:
    """Return a ``graph TD`` document with one ``"A" --> "B"`` line per displayed edge.

    Both ends are labelled with the folder name. Edges touching an external
    package are dropped unless the graph was built with external display on.
    """
    lines = [MERMAID_HEADER]
    for source, target in graph.displayed_edges():
        lines.append(f"    {_quote(source.label)} --> {_quote(target.label)}")
    return "\n".join(lines) + "\n"


def write_mermaid(graph: PluginGraph, path: Path) -> Path:
    """Write :func:`render_mermaid` output to *path* as UTF-8. ``OSError`` propagates."""
    path.write_text(render_mermaid(graph), encoding="utf-8")
    return path
