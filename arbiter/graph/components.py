"""Weakly connected components: vertices linked by a path when edge direction is ignored."""

from __future__ import annotations

from collections import deque

from arbiter.graph.dag import DirectedAcyclicGraph


def connected_components(graph: DirectedAcyclicGraph) -> list[list[str]]:
    """
    Partition the vertices of graph into maximal connected sets, ignoring edge direction.

    Components are listed in order of their first vertex; vertices within a component
    keep the graph's insertion order.
    """
    component_of: dict[str, int] = {}
    count = 0
    for root in graph:
        if root in component_of:
            continue
        q: deque[str] = deque([root])
        component_of[root] = count
        while q:
            n = q.popleft()
            for m in graph.neighbors(n):
                if m not in component_of:
                    component_of[m] = count
                    q.append(m)
        count += 1

    components: list[list[str]] = [[] for _ in range(count)]
    for name in graph:
        components[component_of[name]].append(name)
    return components
