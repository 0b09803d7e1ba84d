"""CLI entry point: plugin-graph.

Usage:
    plugin-graph --dir ./plugins                       # Mermaid + SVG into ./output
    plugin-graph --dir ./plugins --format mermaid      # Mermaid only
    plugin-graph --dir ./plugins --show-external -o out
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
import structlog

from plugin_graph.core.logging import setup_logging
from plugin_graph.exceptions import PluginsDirError, RenderError, RendererNotFoundError
from plugin_graph.graph import build_graph
from plugin_graph.renderers.graphviz import DOT_BINARY, find_dot, render_graphviz
from plugin_graph.renderers.mermaid import write_mermaid
from plugin_graph.summary import format_summary

log = structlog.get_logger("plugin_graph.cli")

# Defaults (overridable via env vars)
_DEFAULT_OUTPUT_DIR = os.environ.get("PLUGIN_GRAPH_OUTPUT_DIR", "output")
_DEFAULT_SHOW_EXTERNAL = os.environ.get("PLUGIN_GRAPH_SHOW_EXTERNAL", "").lower() in (
    "1",
    "true",
    "yes",
)

MERMAID_FILENAME = "dependencies.mmd"
SVG_FILENAME = "dependencies.svg"

FORMATS = ("mermaid", "graphviz", "both")


def _wants(output_format: str, fmt: str) -> bool:
    return output_format in (fmt, "both")


@click.command()
@click.option("-d", "--dir", "plugins_dir", default=None, help="Directory containing plugin folders")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(FORMATS),
    default="both",
    show_default=True,
    help="Output format",
)
@click.option(
    "-o",
    "--output",
    "output_dir",
    default=_DEFAULT_OUTPUT_DIR,
    show_default=True,
    help="Output directory for generated files",
)
@click.option(
    "--show-external/--no-show-external",
    default=_DEFAULT_SHOW_EXTERNAL,
    help="Include external dependencies in the graphs",
)
@click.option("--dot-binary", default=DOT_BINARY, show_default=True, help="Graphviz executable")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    plugins_dir: str | None,
    output_format: str,
    output_dir: str,
    show_external: bool,
    dot_binary: str,
    verbose: bool,
) -> None:
    """Plugin-Graph: dependency graphs for a directory of Composer plugins."""
    setup_logging(verbose)

    if not plugins_dir:
        click.echo("Error: Please specify plugins directory with --dir", err=True)
        sys.exit(1)

    try:
        find_dot(dot_binary)
    except RendererNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        click.echo(f"Error: Failed to create output directory {out}: {e}", err=True)
        sys.exit(1)

    try:
        graph = build_graph(Path(plugins_dir), show_external=show_external)
    except PluginsDirError as e:
        click.echo(f"Error: Failed to scan plugins: {e}", err=True)
        sys.exit(1)

    if _wants(output_format, "mermaid"):
        mermaid_path = out / MERMAID_FILENAME
        try:
            write_mermaid(graph, mermaid_path)
        except OSError as e:
            log.error("cli.mermaid_write_failed", path=str(mermaid_path), error=str(e))
            click.echo(f"Failed to write Mermaid file: {e}", err=True)
        else:
            click.echo(f"Mermaid graph saved to {mermaid_path}")

    if _wants(output_format, "graphviz"):
        svg_path = out / SVG_FILENAME
        try:
            render_graphviz(graph, svg_path, dot_binary=dot_binary)
        except RenderError as e:
            click.echo(f"Failed to generate SVG: {e}", err=True)
        else:
            click.echo(f"SVG graph saved to {svg_path}")

    click.echo()
    click.echo(format_summary(graph), nl=False)


if __name__ == "__main__":
    main()
