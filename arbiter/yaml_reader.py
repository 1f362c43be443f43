"""
YAML document reading shared by the workflow and configuration loaders.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from arbiter.errors import DocumentError

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that leaves date-like scalars as strings."""


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def read_yaml_mapping(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML file whose root is a mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        DocumentError: If the YAML is invalid, empty, or not a mapping.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Could not load file: {file_path}")

    try:
        data = yaml.load(file_path.read_text(encoding="utf-8"), Loader=DocumentLoader)
    except yaml.YAMLError as e:
        raise DocumentError(f"Failed to parse YAML file {file_path}: {e}") from e

    if data is None:
        raise DocumentError(f"YAML file {file_path} is empty")
    if not isinstance(data, dict):
        raise DocumentError(f"YAML file {file_path}: expected mapping, got {type(data).__name__}")
    return data


def as_str(value: Any) -> str:
    """Scalar as a string; booleans in YAML spelling."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise DocumentError(f"Expected a scalar, got {type(value).__name__}")
    return str(value)


def optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if value is None else as_str(value)


def str_map(data: dict[str, Any], key: str) -> dict[str, str]:
    """Mapping of scalars under key (missing means empty)."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return {as_str(k): as_str(v) for k, v in value.items()}


def str_list_map(data: dict[str, Any], key: str) -> dict[str, list[str]]:
    """Mapping of key -> list of scalars; a lone scalar becomes a one-element list."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentError(f"'{key}' must be a mapping, got {type(value).__name__}")
    result: dict[str, list[str]] = {}
    for k, v in value.items():
        if v is None:
            result[as_str(k)] = []
        elif isinstance(v, list):
            result[as_str(k)] = [as_str(x) for x in v]
        else:
            result[as_str(k)] = [as_str(v)]
    return result


def str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentError(f"'{key}' must be a list, got {type(value).__name__}")
    return [as_str(x) for x in value]


def required_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        raise DocumentError(f"{where}: '{key}' is required")
    return as_str(value)
