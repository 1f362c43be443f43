"""Workflow graph construction: DAG, components, fork/join synthesis, scaffolding."""

from arbiter.graph.builder import (
    WorkflowGraph,
    build_input_graph,
    build_workflow_graph,
    scaffold,
)
from arbiter.graph.components import connected_components
from arbiter.graph.dag import DirectedAcyclicGraph
from arbiter.graph.graphviz import generate_graphviz, graph_to_dot
from arbiter.graph.synthesis import GraphSynthesizer, SynthesizedGraph, synthesize

__all__ = [
    "DirectedAcyclicGraph",
    "GraphSynthesizer",
    "SynthesizedGraph",
    "WorkflowGraph",
    "build_input_graph",
    "build_workflow_graph",
    "connected_components",
    "generate_graphviz",
    "graph_to_dot",
    "scaffold",
    "synthesize",
]
