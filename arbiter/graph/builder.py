"""
Build the complete control-flow graph of a workflow: the dependency DAG is
synthesized into fork/join structure, then wrapped with start, end, the optional
error handler and the optional kill node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from arbiter.config.model import Config
from arbiter.errors import MissingDependencyError, ReservedActionTypeError
from arbiter.graph.dag import DirectedAcyclicGraph
from arbiter.graph.synthesis import GraphSynthesizer, SynthesizedGraph
from arbiter.interpolation import interpolate
from arbiter.workflow.actions import END, KILL, START, Action, Workflow, control_action

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkflowGraph:
    """Final graph of one workflow and the names of its special vertices."""

    name: str
    graph: DirectedAcyclicGraph
    start: str
    end: str
    kill: str | None = None
    error_handler: str | None = None


def _check_declared(action: Action) -> None:
    if action.is_control:
        raise ReservedActionTypeError(action.name, action.type)


def build_input_graph(workflow: Workflow) -> DirectedAcyclicGraph:
    """
    Dependency DAG of the declared actions: an edge dep -> action for each dependency.

    Raises:
        ReservedActionTypeError: If an action uses a control type.
        DuplicateActionError: If two different actions share a name.
        MissingDependencyError: If a dependency names no declared action.
        CycleError: If the dependencies are cyclic (a self-dependency included).
    """
    graph = DirectedAcyclicGraph()
    for a in workflow.actions:
        _check_declared(a)
        graph.add_vertex(a)

    for a in workflow.actions:
        for dep in sorted(a.dependencies):
            if dep not in graph:
                raise MissingDependencyError(a.name, dep)
            graph.add_edge(dep, a.name)
    return graph


def scaffold(
    workflow: Workflow,
    config: Config,
    synthesized: SynthesizedGraph,
) -> WorkflowGraph:
    """
    Attach start, end, the error handler and the kill node to a synthesized graph.
    Takes ownership of synthesized.graph.

    The kill node is created only when the config sets both a kill name and a kill
    message; it has no edges and is used only as an error transition target.
    """
    graph = synthesized.graph

    start = graph.add_vertex(control_action(START, START))
    end = graph.add_vertex(control_action(END, END))

    error_handler = None
    tail = end
    if workflow.error_handler is not None:
        _check_declared(workflow.error_handler)
        error_handler = graph.add_vertex(workflow.error_handler)
        graph.add_edge(error_handler, end)
        tail = error_handler

    if synthesized.entry is None:
        graph.add_edge(start, tail)
    else:
        graph.add_edge(start, synthesized.entry)
        graph.add_edge(synthesized.exit, tail)

    kill = None
    if config.kill_name is not None and config.kill_message is not None:
        message = interpolate(config.kill_message, {"name": workflow.name})
        kill = graph.add_vertex(
            control_action(config.kill_name, KILL, named_args={"message": message})
        )

    return WorkflowGraph(
        name=workflow.name,
        graph=graph,
        start=start,
        end=end,
        kill=kill,
        error_handler=error_handler,
    )


def build_workflow_graph(
    workflow: Workflow,
    config: Config,
    input_graph: DirectedAcyclicGraph | None = None,
) -> WorkflowGraph:
    """
    Build the complete control-flow graph for a workflow.

    input_graph may be passed when the caller already built it with build_input_graph.
    """
    if input_graph is None:
        input_graph = build_input_graph(workflow)
    synthesizer = GraphSynthesizer()
    synthesized = synthesizer.synthesize(input_graph)
    logger.debug(
        "Workflow %s: %d actions, %d fork/join pairs",
        workflow.name,
        len(input_graph),
        synthesizer.fork_count,
    )
    return scaffold(workflow, config, synthesized)
