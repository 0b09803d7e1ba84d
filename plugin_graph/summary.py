"""Console summary of internal dependency chains and external usage."""

from __future__ import annotations

from plugin_graph.models import PluginGraph


def format_summary(graph: PluginGraph) -> str:
    lines = ["Internal Dependencies Summary:"]
    for package in graph.internal_packages():
        if not package.dependencies:
            continue
        lines.append("")
        lines.append(f"{package.label}:")
        for dep in package.dependencies:
            target = graph.packages[dep]
            if target.is_external:
                lines.append(f"  ├─ {dep} (external)")
            else:
                lines.append(f"  ├─ {target.label}")

    if graph.external_counts:
        lines.append("")
        lines.append("External Dependencies Summary:")
        for dep, count in sorted(graph.external_counts.items()):
            lines.append(f"  {dep}: used by {count} plugin(s)")

    return "\n".join(lines) + "\n"
