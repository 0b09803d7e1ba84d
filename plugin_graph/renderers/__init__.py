"""Graph renderers — Mermaid flow diagrams and Graphviz images."""

from plugin_graph.renderers.graphviz import find_dot, render_dot, render_graphviz
from plugin_graph.renderers.mermaid import render_mermaid, write_mermaid

__all__ = ["find_dot", "render_dot", "render_graphviz", "render_mermaid", "write_mermaid"]
