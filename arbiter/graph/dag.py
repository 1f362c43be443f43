"""
Directed acyclic graph over workflow actions, addressed by action name.
Edges that would close a cycle are rejected when added.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from arbiter.errors import CycleError, DuplicateActionError
from arbiter.workflow.actions import Action, WorkflowEdge


@dataclass
class DirectedAcyclicGraph:
    """
    Adjacency-list DAG. Vertices are Actions stored by name; insertion order of
    vertices and of each vertex's edges is preserved.
    """

    _vertices: dict[str, Action] = field(default_factory=dict)
    _outgoing: dict[str, list[WorkflowEdge]] = field(default_factory=dict)
    _incoming: dict[str, list[WorkflowEdge]] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vertices))

    def vertex(self, name: str) -> Action:
        return self._vertices[name]

    def vertices(self) -> list[Action]:
        """All vertices in insertion order."""
        return list(self._vertices.values())

    def edges(self) -> list[WorkflowEdge]:
        """All edges, grouped by source in vertex insertion order."""
        return [e for name in self._vertices for e in self._outgoing[name]]

    def add_vertex(self, action: Action) -> str:
        """
        Add an action as a vertex and return its name.
        Adding an equal action twice is a no-op; a different action with the same name is rejected.
        """
        existing = self._vertices.get(action.name)
        if existing is not None:
            if existing != action:
                raise DuplicateActionError(action.name)
            return action.name
        self._vertices[action.name] = action
        self._outgoing[action.name] = []
        self._incoming[action.name] = []
        return action.name

    def remove_vertex(self, name: str) -> None:
        """Remove a vertex and every edge touching it."""
        self._require(name)
        for e in self._outgoing.pop(name):
            self._incoming[e.target] = [x for x in self._incoming[e.target] if x.source != name]
        for e in self._incoming.pop(name):
            self._outgoing[e.source] = [x for x in self._outgoing[e.source] if x.target != name]
        del self._vertices[name]

    def has_edge(self, source: str, target: str) -> bool:
        return any(e.target == target for e in self._outgoing.get(source, ()))

    def add_edge(self, source: str, target: str, condition: str | None = None) -> bool:
        """
        Add the edge source -> target. Returns False when the edge already exists.

        Raises:
            KeyError: If either endpoint is not a vertex.
            CycleError: If the edge is a self-loop or target already reaches source.
        """
        self._require(source)
        self._require(target)
        if source == target:
            raise CycleError(source, target)
        if self.has_edge(source, target):
            return False
        if source in self.descendants(target):
            raise CycleError(source, target)
        edge = WorkflowEdge(source, target, condition)
        self._outgoing[source].append(edge)
        self._incoming[target].append(edge)
        return True

    def in_degree(self, name: str) -> int:
        return len(self._incoming[name])

    def out_degree(self, name: str) -> int:
        return len(self._outgoing[name])

    def incoming_edges(self, name: str) -> list[WorkflowEdge]:
        return list(self._incoming[name])

    def outgoing_edges(self, name: str) -> list[WorkflowEdge]:
        return list(self._outgoing[name])

    def successors(self, name: str) -> list[str]:
        """Targets of edges from name (order preserved)."""
        return [e.target for e in self._outgoing[name]]

    def predecessors(self, name: str) -> list[str]:
        """Sources of edges into name (order preserved)."""
        return [e.source for e in self._incoming[name]]

    def neighbors(self, name: str) -> list[str]:
        """Adjacent vertices ignoring edge direction."""
        return self.predecessors(name) + self.successors(name)

    def descendants(self, name: str) -> set[str]:
        """BFS from name; every vertex reachable by at least one edge."""
        q: deque[str] = deque(self.successors(name))
        seen: set[str] = set()
        while q:
            n = q.popleft()
            if n in seen:
                continue
            seen.add(n)
            q.extend(self.successors(n))
        return seen

    def sources(self) -> list[str]:
        """Vertices with in-degree 0."""
        return [n for n in self._vertices if not self._incoming[n]]

    def sinks(self) -> list[str]:
        """Vertices with out-degree 0."""
        return [n for n in self._vertices if not self._outgoing[n]]

    def vertices_of_type(self, action_type: str) -> list[Action]:
        return [a for a in self._vertices.values() if a.type == action_type]

    def induced_subgraph(self, names: Iterable[str]) -> DirectedAcyclicGraph:
        """
        New graph restricted to the given vertices, keeping every original edge
        whose endpoints are both retained. Vertex order follows this graph.
        """
        keep = set(names)
        sub = DirectedAcyclicGraph()
        for name, action in self._vertices.items():
            if name in keep:
                sub.add_vertex(action)
        for e in self.edges():
            if e.source in keep and e.target in keep:
                sub._link(e)
        return sub

    def add_graph(self, other: DirectedAcyclicGraph) -> None:
        """Copy every vertex and edge of other into this graph."""
        for action in other.vertices():
            self.add_vertex(action)
        for e in other.edges():
            self.add_edge(e.source, e.target, e.condition)

    def copy(self) -> DirectedAcyclicGraph:
        return self.induced_subgraph(self._vertices)

    def _link(self, edge: WorkflowEdge) -> None:
        # Only for edges already known to keep the graph acyclic.
        self._outgoing[edge.source].append(edge)
        self._incoming[edge.target].append(edge)

    def _require(self, name: str) -> None:
        if name not in self._vertices:
            raise KeyError(f"Vertex {name!r} not in graph")
