"""Exceptions raised while reading, merging, and compiling workflows."""

from __future__ import annotations


class ArbiterError(Exception):
    """Base class for all Arbiter errors."""


class WorkflowGraphError(ArbiterError):
    """Raised when a workflow cannot be turned into a valid control-flow graph."""


class MissingDependencyError(WorkflowGraphError):
    """Raised when an action depends on a name that no action declares.

    Attributes:
        action: Name of the action declaring the dependency.
        dependency: The unresolved dependency name.
    """

    def __init__(self, action: str, dependency: str) -> None:
        self.action = action
        self.dependency = dependency
        super().__init__(f"Missing action for dependency {dependency!r} of {action!r}")


class CycleError(WorkflowGraphError):
    """Raised when an edge would close a cycle (a self-loop included).

    Attributes:
        source: Source vertex name of the rejected edge.
        target: Target vertex name of the rejected edge.
    """

    def __init__(self, source: str, target: str, message: str | None = None) -> None:
        self.source = source
        self.target = target
        if message is None:
            if source == target:
                message = f"Self-loop on {source!r}"
            else:
                message = f"Edge {source!r} -> {target!r} would create a cycle"
        super().__init__(message)


class GraphSynthesisError(WorkflowGraphError):
    """Raised when an internal graph invariant does not hold."""


class DuplicateActionError(WorkflowGraphError):
    """Raised when two different actions share one name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate action name {name!r}")


class ReservedActionTypeError(WorkflowGraphError):
    """Raised when a declared action uses a control tag (start, end, fork, join, kill) as its type."""

    def __init__(self, name: str, action_type: str) -> None:
        self.name = name
        self.action_type = action_type
        super().__init__(f"Action {name!r} uses reserved type {action_type!r}")


class UnknownActionTypeError(ArbiterError, LookupError):
    """Raised when an action type name is not declared by the configuration."""

    def __init__(self, action_type: str) -> None:
        self.action_type = action_type
        super().__init__(f"Unknown action type {action_type!r}")


class ConfigurationConflictError(ArbiterError):
    """Raised when configurations declare one action type with a different tag or xmlns."""

    def __init__(self, action_type: str, field_name: str) -> None:
        self.action_type = action_type
        self.field_name = field_name
        super().__init__(f"{field_name} does not match for action type {action_type!r}")


class DocumentError(ArbiterError, ValueError):
    """Raised when a workflow or configuration document is malformed."""
