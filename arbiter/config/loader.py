"""
Configuration reader: builds Config entities from YAML files or parsed dicts.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from arbiter.config.model import ActionType, Config
from arbiter.errors import DocumentError
from arbiter.yaml_reader import (
    optional_str,
    read_yaml_mapping,
    required_str,
    str_list_map,
    str_map,
)


def action_type_from_dict(data: dict[str, Any]) -> ActionType:
    """Build an ActionType from its YAML mapping."""
    if not isinstance(data, dict):
        raise DocumentError(f"Action type must be a mapping, got {type(data).__name__}")
    name = required_str(data, "name", "action type")
    position = data.get("configurationPosition", 0)
    if isinstance(position, bool) or not isinstance(position, int):
        raise DocumentError(
            f"action type {name!r}: 'configurationPosition' must be an integer, got {position!r}"
        )
    return ActionType(
        name=name,
        tag=required_str(data, "tag", f"action type {name!r}"),
        xmlns=optional_str(data, "xmlns"),
        default_args=str_list_map(data, "defaultArgs"),
        properties=str_map(data, "properties"),
        default_interpolations=str_map(data, "defaultInterpolations"),
        configuration_position=position,
    )


def config_from_dict(data: dict[str, Any]) -> Config:
    """Build a Config from a parsed document; unknown keys are ignored."""
    action_types = data.get("actionTypes") or []
    if not isinstance(action_types, list):
        raise DocumentError("'actionTypes' must be a list")
    return Config(
        action_types=tuple(action_type_from_dict(a) for a in action_types),
        kill_name=optional_str(data, "killName"),
        kill_message=optional_str(data, "killMessage"),
    )


def load_config(path: str | Path, low_precedence: bool = False) -> Config:
    """Read one configuration YAML file; low_precedence marks every action type of it."""
    data = read_yaml_mapping(path)
    try:
        config = config_from_dict(data)
    except DocumentError as e:
        raise DocumentError(f"{path}: {e}") from e
    return config.with_precedence(True) if low_precedence else config


def load_configs(paths: Iterable[str | Path] | None, low_precedence: bool = False) -> list[Config]:
    """Read configuration files in order; None yields an empty list."""
    return [load_config(p, low_precedence) for p in paths or ()]
