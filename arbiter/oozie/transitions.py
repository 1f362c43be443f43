"""
Transition resolution: walk the finished workflow graph depth-first from start
and compute, for every visited node, its ok and error transitions and the
arguments it is rendered with.

The resulting EmissionRecords are what the XML writer consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from arbiter.config.model import ActionType, Config
from arbiter.errors import GraphSynthesisError
from arbiter.graph.builder import WorkflowGraph
from arbiter.graph.dag import DirectedAcyclicGraph
from arbiter.interpolation import interpolate, interpolate_args, referenced_list_variables
from arbiter.workflow.actions import END, FORK, JOIN, KILL, START, Action

KIND_ACTION = "action"

OK_TRANSITION_VARIABLE = "okTransition"


@dataclass(frozen=True)
class EmissionRecord:
    """
    One node of the output document, in emission order.

    kind is start, fork, join, action, kill or end. For actions, arguments holds
    (element name, values) entries in order and configuration the merged
    properties, to be placed at configuration_position among the entries.
    """

    name: str
    kind: str
    ok: str | None = None
    error: str | None = None
    paths: tuple[str, ...] = ()
    action_type: str | None = None
    tag: str | None = None
    xmlns: str | None = None
    arguments: tuple[tuple[str, tuple[str, ...]], ...] = ()
    configuration: dict[str, str] = field(default_factory=dict)
    configuration_position: int = 0
    message: str | None = None

    __hash__ = None  # type: ignore[assignment]


def depth_first_order(graph: DirectedAcyclicGraph, start: str) -> list[str]:
    """Vertices reachable from start in depth-first preorder, successors in edge order."""
    order: list[str] = []
    seen: set[str] = set()
    stack = [start]
    while stack:
        n = stack.pop()
        if n in seen:
            continue
        seen.add(n)
        order.append(n)
        stack.extend(reversed(graph.successors(n)))
    return order


def success_transition(graph: DirectedAcyclicGraph, name: str) -> str | None:
    """
    The single successor of name. end, kill and fork have none here (a fork's
    successors are its parallel paths).

    Raises:
        GraphSynthesisError: If any other node does not have exactly one successor.
    """
    action = graph.vertex(name)
    if action.type in (END, KILL, FORK):
        return None
    successors = graph.successors(name)
    if len(successors) != 1:
        raise GraphSynthesisError(
            f"Expected exactly one transition for {name!r}, found {successors}"
        )
    return successors[0]


def enclosing_join(graph: DirectedAcyclicGraph, name: str) -> str | None:
    """
    Join of the innermost fork/join pair around name, or None.

    Walks backward along first incoming edges collecting forks, and forward along
    first outgoing edges collecting joins; the first fork whose paired join was
    also seen encloses the node. Nodes without incoming or outgoing edges are
    never enclosed.
    """
    if graph.in_degree(name) == 0 or graph.out_degree(name) == 0:
        return None

    forks: list[int | None] = []
    curr = name
    while graph.in_degree(curr) > 0:
        curr = graph.predecessors(curr)[0]
        if graph.vertex(curr).type == FORK:
            forks.append(graph.vertex(curr).fork_join_id)

    joins: dict[int | None, str] = {}
    curr = name
    while graph.out_degree(curr) > 0:
        curr = graph.successors(curr)[0]
        if graph.vertex(curr).type == JOIN:
            joins.setdefault(graph.vertex(curr).fork_join_id, curr)

    for pair_id in forks:
        if pair_id is not None and pair_id in joins:
            return joins[pair_id]
    return None


def action_arguments(action: Action, action_type: ActionType) -> tuple[tuple[str, tuple[str, ...]], ...]:
    """
    Argument entries of an action: the type's default args interpolated with the
    action's named args (positional args act as list variables), followed by the
    positional args not consumed that way.
    """
    named = action.named_args
    defaults = action_type.default_interpolations
    list_args = action.positional_args

    interpolated = interpolate_args(action_type.default_args, named, defaults, list_args) or {}
    consumed = referenced_list_variables(action_type.default_args, list_args)
    remaining = {k: v for k, v in list_args.items() if k not in consumed}
    positional = interpolate_args(remaining, named, defaults) or {}

    entries = [(k, tuple(v)) for k, v in interpolated.items()]
    entries.extend((k, tuple(v)) for k, v in positional.items())
    return tuple(entries)


def merged_configuration(action: Action, action_type: ActionType) -> dict[str, str]:
    """Action type properties overlaid by the action's own configuration properties."""
    merged = dict(action_type.properties)
    merged.update(action.configuration_properties)
    return merged


class TransitionResolver:
    """Resolves workflow graphs against one merged configuration."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._action_types: dict[str, ActionType] = {}

    def action_type(self, name: str | None) -> ActionType:
        """Cached lookup; raises UnknownActionTypeError for undeclared types."""
        key = name or ""
        if key not in self._action_types:
            self._action_types[key] = self.config.action_type(key)
        return self._action_types[key]

    def resolve(self, wg: WorkflowGraph) -> list[EmissionRecord]:
        """
        Emission records for every node reachable from start, in depth-first order,
        then the kill node (if any) and the end node.
        """
        graph = wg.graph
        default_error = wg.error_handler or wg.kill or wg.end
        final_error = wg.kill or wg.end

        records: list[EmissionRecord] = []
        for name in depth_first_order(graph, wg.start):
            action = graph.vertex(name)
            transition = success_transition(graph, name)
            if action.type == START:
                records.append(EmissionRecord(name=name, kind=START, ok=transition))
            elif action.type == FORK:
                records.append(
                    EmissionRecord(name=name, kind=FORK, paths=tuple(graph.successors(name)))
                )
            elif action.type == JOIN:
                records.append(EmissionRecord(name=name, kind=JOIN, ok=transition))
            elif action.type in (END, KILL):
                continue
            else:
                base_error = final_error if name == wg.error_handler else default_error
                records.append(self._action_record(graph, action, transition, base_error))

        if wg.kill is not None:
            kill = graph.vertex(wg.kill)
            records.append(
                EmissionRecord(name=kill.name, kind=KILL, message=kill.named_args.get("message"))
            )
        records.append(EmissionRecord(name=wg.end, kind=END))
        return records

    def _action_record(
        self,
        graph: DirectedAcyclicGraph,
        action: Action,
        transition: str | None,
        base_error: str,
    ) -> EmissionRecord:
        action_type = self.action_type(action.type)

        ok = action.force_ok if action.force_ok is not None else transition
        forced_error = interpolate(
            action.force_error,
            {OK_TRANSITION_VARIABLE: ok} if ok is not None else {},
            action_type.default_interpolations,
        )
        if forced_error is not None:
            error = forced_error
        else:
            error = enclosing_join(graph, action.name) or base_error

        return EmissionRecord(
            name=action.name,
            kind=KIND_ACTION,
            ok=ok,
            error=error,
            action_type=action_type.name,
            tag=action_type.tag,
            xmlns=action_type.xmlns,
            arguments=action_arguments(action, action_type),
            configuration=merged_configuration(action, action_type),
            configuration_position=action_type.configuration_position,
        )


def resolve_transitions(wg: WorkflowGraph, config: Config) -> list[EmissionRecord]:
    """Convenience: TransitionResolver(config).resolve(wg)."""
    return TransitionResolver(config).resolve(wg)
