"""Graphviz output — DOT source plus rendering through the ``dot`` executable."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

import structlog

from plugin_graph.exceptions import RenderError, RendererNotFoundError
from plugin_graph.models import Package, PluginGraph

log = structlog.get_logger("plugin_graph.render")

DOT_BINARY = "dot"
INTERNAL_FILL = "#f0f0f0"
EXTERNAL_FILL = "#ffe0e0"
EDGE_COLOR = "#666666"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _node_line(package: Package) -> str:
    fill = EXTERNAL_FILL if package.is_external else INTERNAL_FILL
    return (
        f"    {_quote(package.name)} [label={_quote(package.label)}, "
        f'fillcolor="{fill}", style="rounded,filled"];'
    )


def render_dot(graph: PluginGraph) -> str:
    """Return the DOT description of the displayed part of *graph*.

    Nodes are identified by package name and labelled with the folder name;
    external packages get a distinct fill colour.
    """
    lines = [
        "digraph PluginDependencies {",
        "    rankdir=TB;",
        "    node [shape=box, style=rounded];",
        f'    edge [color="{EDGE_COLOR}"];',
    ]
    for package in graph.displayed_packages():
        lines.append(_node_line(package))
    for source, target in graph.displayed_edges():
        lines.append(f"    {_quote(source.name)} -> {_quote(target.name)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def find_dot(dot_binary: str = DOT_BINARY) -> str:
    """Return the resolved path of the Graphviz executable.

    Raises ``RendererNotFoundError`` if it is not on PATH.
    """
    resolved = shutil.which(dot_binary)
    if resolved is None:
        raise RendererNotFoundError(
            f"Graphviz executable '{dot_binary}' not found on PATH. Please install Graphviz first."
        )
    return resolved


def render_graphviz(
    graph: PluginGraph,
    output_path: Path,
    dot_binary: str = DOT_BINARY,
) -> Path:
    """Render *graph* to an image at *output_path* via ``dot``.

    The image format is taken from the output suffix (``.svg`` by default).
    The intermediate ``.dot`` file is always removed.

    Raises ``RenderError`` if the DOT file cannot be written, or if ``dot``
    cannot be launched or exits non-zero.
    """
    fmt = output_path.suffix.lstrip(".") or "svg"
    try:
        fd, dot_file = tempfile.mkstemp(suffix=".dot", prefix="deps")
    except OSError as e:
        raise RenderError(f"failed to create temp file: {e}") from e

    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(render_dot(graph))
        except OSError as e:
            raise RenderError(f"failed to write DOT file: {e}") from e

        cmd = [dot_binary, f"-T{fmt}", "-o", str(output_path), dot_file]
        log.debug("render.dot_start", cmd=cmd)
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            log.warning("render.dot_failed", returncode=e.returncode, stderr=stderr)
            raise RenderError(
                f"dot command failed (exit {e.returncode}): {stderr}"
            ) from e
        except OSError as e:
            raise RenderError(f"failed to run dot command: {e}") from e
    finally:
        os.unlink(dot_file)

    return output_path
