"""
Workflow reader: builds Workflow entities from YAML files or parsed dicts.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from arbiter.errors import DocumentError
from arbiter.workflow.actions import Action, Workflow
from arbiter.yaml_reader import (
    optional_str,
    read_yaml_mapping,
    required_str,
    str_list,
    str_list_map,
    str_map,
)


def action_from_dict(data: dict[str, Any]) -> Action:
    """Build an Action from its YAML mapping."""
    if not isinstance(data, dict):
        raise DocumentError(f"Action must be a mapping, got {type(data).__name__}")
    name = required_str(data, "name", "action")
    where = f"action {name!r}"
    try:
        return Action(
            name=name,
            type=optional_str(data, "type"),
            dependencies=frozenset(str_list(data, "dependencies")),
            conditional_dependencies=str_map(data, "conditionalDependencies"),
            force_ok=optional_str(data, "forceOk"),
            force_error=optional_str(data, "forceError"),
            positional_args=str_list_map(data, "positionalArgs"),
            named_args=str_map(data, "namedArgs"),
            configuration_properties=str_map(data, "configurationProperties"),
        )
    except DocumentError as e:
        raise DocumentError(f"{where}: {e}") from e


def workflow_from_dict(data: dict[str, Any]) -> Workflow:
    """
    Build a Workflow from a parsed document.
    Keys other than name, actions and errorHandler are ignored.
    """
    name = required_str(data, "name", "workflow")
    actions = data.get("actions") or []
    if not isinstance(actions, list):
        raise DocumentError(f"workflow {name!r}: 'actions' must be a list")
    error_handler = data.get("errorHandler")
    return Workflow(
        name=name,
        actions=tuple(action_from_dict(a) for a in actions),
        error_handler=action_from_dict(error_handler) if error_handler is not None else None,
    )


def load_workflow(path: str | Path) -> Workflow:
    """Read one workflow YAML file."""
    data = read_yaml_mapping(path)
    try:
        return workflow_from_dict(data)
    except DocumentError as e:
        raise DocumentError(f"{path}: {e}") from e


def load_workflows(paths: Iterable[str | Path] | None) -> list[Workflow]:
    """Read workflow files in order; None yields an empty list."""
    return [load_workflow(p) for p in paths or ()]
