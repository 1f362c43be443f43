"""
Turn a dependency DAG into a structured graph made only of sequences and matched
fork/join pairs.

Independent components run in parallel under one fork/join pair. Inside a
component, the vertices with no remaining dependencies are peeled off as one
layer (a single step, or a fork/join block when there are several) and the rest
is processed the same way and chained after that layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from arbiter.errors import GraphSynthesisError
from arbiter.graph.components import connected_components
from arbiter.graph.dag import DirectedAcyclicGraph
from arbiter.workflow.actions import FORK, JOIN, control_action


@dataclass(frozen=True)
class SynthesizedGraph:
    """A structured graph with its unique entry (in-degree 0) and exit (out-degree 0) vertex."""

    graph: DirectedAcyclicGraph
    entry: str | None
    exit: str | None


def fork_name(pair_id: int) -> str:
    return f"{FORK}-{pair_id}"


def join_name(pair_id: int) -> str:
    return f"{JOIN}-{pair_id}"


class GraphSynthesizer:
    """
    Synthesizes one workflow. Fork/join pairs are numbered from 0 in creation
    order, so use a fresh instance per workflow.
    """

    def __init__(self) -> None:
        self.fork_count = 0

    def synthesize(self, graph: DirectedAcyclicGraph) -> SynthesizedGraph:
        """Build the structured graph for every vertex of graph. The input is not modified."""
        return self._process_components(graph.copy())

    def _process_components(self, parent: DirectedAcyclicGraph) -> SynthesizedGraph:
        component_graphs = [
            self._build_component(parent.induced_subgraph(component))
            for component in connected_components(parent)
        ]

        result = DirectedAcyclicGraph()
        for g in component_graphs:
            result.add_graph(g)

        if len(component_graphs) > 1:
            fork, join = self._add_fork_join(result)
            for g in component_graphs:
                for name in g.sources():
                    result.add_edge(fork, name)
                for name in g.sinks():
                    result.add_edge(name, join)

        return _with_endpoints(result)

    def _build_component(self, subgraph: DirectedAcyclicGraph) -> DirectedAcyclicGraph:
        """
        Peel layers off one connected subgraph (consumed in place) while it stays
        connected, chaining each layer after the previous one. A remainder that
        splits into several components is handed back to _process_components.
        """
        result = DirectedAcyclicGraph()
        previous_exit: str | None = None
        while len(subgraph):
            if previous_exit is not None and len(connected_components(subgraph)) > 1:
                rest = self._process_components(subgraph)
                result.add_graph(rest.graph)
                result.add_edge(previous_exit, rest.entry)
                break

            wavefront = subgraph.sources()
            if not wavefront:
                raise GraphSynthesisError("No vertex with in-degree 0 found in component")

            if len(wavefront) == 1:
                layer_entry = layer_exit = result.add_vertex(subgraph.vertex(wavefront[0]))
            else:
                layer_entry, layer_exit = self._add_fork_join(result)
                for name in wavefront:
                    result.add_vertex(subgraph.vertex(name))
                    result.add_edge(layer_entry, name)
                    result.add_edge(name, layer_exit)

            if previous_exit is not None:
                result.add_edge(previous_exit, layer_entry)
            previous_exit = layer_exit

            for name in wavefront:
                subgraph.remove_vertex(name)
        return result

    def _add_fork_join(self, graph: DirectedAcyclicGraph) -> tuple[str, str]:
        pair_id = self.fork_count
        self.fork_count += 1
        fork = graph.add_vertex(control_action(fork_name(pair_id), FORK, fork_join_id=pair_id))
        join = graph.add_vertex(control_action(join_name(pair_id), JOIN, fork_join_id=pair_id))
        return fork, join


def synthesize(graph: DirectedAcyclicGraph) -> SynthesizedGraph:
    """Convenience: GraphSynthesizer().synthesize(graph)."""
    return GraphSynthesizer().synthesize(graph)


def _with_endpoints(graph: DirectedAcyclicGraph) -> SynthesizedGraph:
    if not len(graph):
        return SynthesizedGraph(graph, None, None)
    sources = graph.sources()
    sinks = graph.sinks()
    if len(sources) != 1 or len(sinks) != 1:
        raise GraphSynthesisError(
            f"Expected one entry and one exit, found entries {sources} and exits {sinks}"
        )
    return SynthesizedGraph(graph, sources[0], sinks[0])
