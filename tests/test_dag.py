"""
Tests for DirectedAcyclicGraph: vertices, edges, cycle rejection, subgraphs.
"""

import pytest

from arbiter.errors import CycleError, DuplicateActionError
from arbiter.graph.dag import DirectedAcyclicGraph
from arbiter.workflow.actions import Action


def _graph(names, edges=()):
    g = DirectedAcyclicGraph()
    for n in names:
        g.add_vertex(Action(name=n, type="test"))
    for s, t in edges:
        g.add_edge(s, t)
    return g


def _edge_set(g):
    return {(e.source, e.target) for e in g.edges()}


def test_add_vertex_returns_name_and_keeps_order():
    """Vertices are addressed by name and iterate in insertion order."""
    g = _graph(["c", "a", "b"])
    assert list(g) == ["c", "a", "b"]
    assert len(g) == 3
    assert "a" in g
    assert "z" not in g


def test_add_equal_vertex_twice_is_noop():
    """Re-adding an equal action does not duplicate it."""
    g = DirectedAcyclicGraph()
    g.add_vertex(Action(name="a", type="test"))
    assert g.add_vertex(Action(name="a", type="test")) == "a"
    assert len(g) == 1


def test_add_conflicting_vertex_rejected():
    """A different action under an existing name is a duplicate."""
    g = DirectedAcyclicGraph()
    g.add_vertex(Action(name="a", type="test"))
    with pytest.raises(DuplicateActionError) as exc_info:
        g.add_vertex(Action(name="a", type="other"))
    assert exc_info.value.name == "a"


def test_add_edge_and_degrees():
    """Edges update successors, predecessors and degrees."""
    g = _graph(["a", "b", "c"], [("a", "b"), ("a", "c")])
    assert g.successors("a") == ["b", "c"]
    assert g.predecessors("b") == ["a"]
    assert g.out_degree("a") == 2
    assert g.in_degree("c") == 1
    assert g.sources() == ["a"]
    assert g.sinks() == ["b", "c"]


def test_duplicate_edge_returns_false():
    g = _graph(["a", "b"], [("a", "b")])
    assert g.add_edge("a", "b") is False
    assert len(g.edges()) == 1


def test_edge_to_unknown_vertex_raises_key_error():
    g = _graph(["a"])
    with pytest.raises(KeyError):
        g.add_edge("a", "missing")


def test_self_loop_rejected():
    """An edge from a vertex to itself is a cycle."""
    g = _graph(["a"])
    with pytest.raises(CycleError) as exc_info:
        g.add_edge("a", "a")
    assert "Self-loop" in str(exc_info.value)


def test_cycle_rejected_and_graph_unchanged():
    """An edge closing a cycle is rejected and not added."""
    g = _graph(["a", "b", "c"], [("a", "b"), ("b", "c")])
    with pytest.raises(CycleError) as exc_info:
        g.add_edge("c", "a")
    assert exc_info.value.source == "c"
    assert exc_info.value.target == "a"
    assert _edge_set(g) == {("a", "b"), ("b", "c")}


def test_descendants():
    g = _graph(["a", "b", "c", "d"], [("a", "b"), ("b", "c")])
    assert g.descendants("a") == {"b", "c"}
    assert g.descendants("d") == set()


def test_remove_vertex_drops_touching_edges():
    """Removing a vertex removes its edges in both directions."""
    g = _graph(["a", "b", "c"], [("a", "b"), ("b", "c")])
    g.remove_vertex("b")
    assert list(g) == ["a", "c"]
    assert g.edges() == []
    assert g.out_degree("a") == 0
    assert g.in_degree("c") == 0


def test_induced_subgraph_keeps_inner_edges():
    """Only edges with both endpoints retained survive."""
    g = _graph(["a", "b", "c", "d"], [("a", "b"), ("b", "c"), ("c", "d")])
    sub = g.induced_subgraph(["b", "c", "d"])
    assert list(sub) == ["b", "c", "d"]
    assert _edge_set(sub) == {("b", "c"), ("c", "d")}
    # source graph untouched
    assert len(g) == 4


def test_copy_is_independent():
    g = _graph(["a", "b"], [("a", "b")])
    c = g.copy()
    c.remove_vertex("a")
    assert "a" in g
    assert g.has_edge("a", "b")


def test_add_graph_merges_vertices_and_edges():
    g = _graph(["a", "b"], [("a", "b")])
    other = _graph(["c", "d"], [("c", "d")])
    g.add_graph(other)
    assert list(g) == ["a", "b", "c", "d"]
    assert _edge_set(g) == {("a", "b"), ("c", "d")}


def test_vertices_of_type():
    g = DirectedAcyclicGraph()
    g.add_vertex(Action(name="a", type="java"))
    g.add_vertex(Action(name="b", type="shell"))
    g.add_vertex(Action(name="c", type="java"))
    assert [a.name for a in g.vertices_of_type("java")] == ["a", "c"]


def test_incoming_and_outgoing_edges():
    g = _graph(["a", "b", "c"], [("a", "c"), ("b", "c")])
    assert [(e.source, e.target) for e in g.incoming_edges("c")] == [("a", "c"), ("b", "c")]
    assert [(e.source, e.target) for e in g.outgoing_edges("a")] == [("a", "c")]
    assert g.outgoing_edges("c") == []
