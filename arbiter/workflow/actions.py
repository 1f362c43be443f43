"""Action, edge, and workflow entities."""

from __future__ import annotations

from dataclasses import dataclass, field

START = "start"
END = "end"
FORK = "fork"
JOIN = "join"
KILL = "kill"

CONTROL_TYPES = frozenset({START, END, FORK, JOIN, KILL})


@dataclass(frozen=True)
class Action:
    """
    One workflow step.

    User-declared actions carry a type naming an ActionType from the configuration.
    Synthetic control nodes use one of CONTROL_TYPES; fork and join nodes of one
    parallel region share a fork_join_id.
    """

    name: str
    type: str | None = None
    dependencies: frozenset[str] = frozenset()
    conditional_dependencies: dict[str, str] = field(default_factory=dict)
    force_ok: str | None = None
    force_error: str | None = None
    positional_args: dict[str, list[str]] = field(default_factory=dict)
    named_args: dict[str, str] = field(default_factory=dict)
    configuration_properties: dict[str, str] = field(default_factory=dict)
    fork_join_id: int | None = None

    # Values are dicts, so the generated field hash is unusable; graphs key by name.
    __hash__ = None  # type: ignore[assignment]

    @property
    def is_control(self) -> bool:
        return self.type in CONTROL_TYPES


@dataclass(frozen=True)
class WorkflowEdge:
    """A directed edge between two action names; condition is reserved for decision nodes."""

    source: str
    target: str
    condition: str | None = None


@dataclass(frozen=True)
class Workflow:
    """A named list of actions with an optional error handler."""

    name: str
    actions: tuple[Action, ...] = ()
    error_handler: Action | None = None

    __hash__ = None  # type: ignore[assignment]


def control_action(name: str, action_type: str, **kwargs) -> Action:
    """Create a synthetic control node."""
    return Action(name=name, type=action_type, **kwargs)
