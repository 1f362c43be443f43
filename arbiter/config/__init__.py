"""Action type configuration: entities, YAML reader, and merging."""

from arbiter.config.loader import (
    action_type_from_dict,
    config_from_dict,
    load_config,
    load_configs,
)
from arbiter.config.merger import (
    all_values_equal,
    first_non_null,
    merge_collection_maps,
    merge_configurations,
    merge_maps,
    precedence_order,
)
from arbiter.config.model import ActionType, Config

__all__ = [
    "ActionType",
    "Config",
    "action_type_from_dict",
    "all_values_equal",
    "config_from_dict",
    "first_non_null",
    "load_config",
    "load_configs",
    "merge_collection_maps",
    "merge_configurations",
    "merge_maps",
    "precedence_order",
]
