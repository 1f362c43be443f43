"""Workflow entities and the YAML workflow reader."""

from arbiter.workflow.actions import (
    CONTROL_TYPES,
    END,
    FORK,
    JOIN,
    KILL,
    START,
    Action,
    Workflow,
    WorkflowEdge,
    control_action,
)
from arbiter.workflow.loader import (
    action_from_dict,
    load_workflow,
    load_workflows,
    workflow_from_dict,
)

__all__ = [
    "CONTROL_TYPES",
    "END",
    "FORK",
    "JOIN",
    "KILL",
    "START",
    "Action",
    "Workflow",
    "WorkflowEdge",
    "action_from_dict",
    "control_action",
    "load_workflow",
    "load_workflows",
    "workflow_from_dict",
]
