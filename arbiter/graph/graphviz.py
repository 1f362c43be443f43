"""
Generate Graphviz DOT from a workflow graph and optionally render it with `dot`.
Rendering problems are logged and never abort compilation.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from arbiter.graph.dag import DirectedAcyclicGraph

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "svg"


def _dot_id(name: str) -> str:
    """Quoted DOT identifier; names are unique within a graph."""
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def graph_to_dot(graph: DirectedAcyclicGraph, graph_name: str = "G") -> str:
    """
    Produce a DOT digraph: one node per vertex labeled with the action name,
    unlabeled edges.
    """
    lines = [f"digraph {_dot_id(graph_name)} {{"]
    for name in graph:
        lines.append(f"  {_dot_id(name)} [label={_dot_id(name)}];")
    for e in graph.edges():
        lines.append(f"  {_dot_id(e.source)} -> {_dot_id(e.target)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_graphviz(
    graph: DirectedAcyclicGraph,
    path: str | Path,
    fmt: str = DEFAULT_FORMAT,
    graph_name: str = "G",
) -> Path | None:
    """
    Write the DOT file to path and render it next to it as <stem>.<fmt>.

    Returns:
        Path of the rendered file, or None when writing or rendering failed.
    """
    dot_path = Path(path)
    rendered = dot_path.with_suffix(f".{fmt}")
    try:
        dot_path.write_text(graph_to_dot(graph, graph_name), encoding="utf-8")
        result = subprocess.run(
            ["dot", f"-T{fmt}", str(dot_path), "-o", str(rendered)],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.warning("Error generating Graphviz for %s: %s", dot_path, e)
        return None

    if result.returncode != 0:
        logger.warning(
            "dot command exited unsuccessfully with exit code %d: %s",
            result.returncode,
            result.stderr.strip(),
        )
        return None
    return rendered
