"""
Merge several configurations into one.

Action types declared once are kept as they are. Action types declared in several
configurations are combined; low-precedence declarations are applied first so that
normal ones override them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from arbiter.config.model import ActionType, Config
from arbiter.errors import ConfigurationConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def precedence_order(action_types: Iterable[ActionType]) -> list[ActionType]:
    """Low-precedence action types first; otherwise declaration order is kept."""
    return sorted(action_types, key=lambda a: not a.low_precedence)


def merge_maps(
    action_types: Iterable[ActionType],
    transform: Callable[[ActionType], dict[str, T] | None],
) -> dict[str, T]:
    """Merge the maps selected by transform; later maps overwrite earlier keys."""
    result: dict[str, T] = {}
    for a in action_types:
        result.update(transform(a) or {})
    return result


def merge_collection_maps(
    action_types: Iterable[ActionType],
    transform: Callable[[ActionType], dict[str, list[T]] | None],
) -> dict[str, list[T]]:
    """Merge maps of lists; lists under the same key are concatenated in order."""
    result: dict[str, list[T]] = {}
    for a in action_types:
        for key, values in (transform(a) or {}).items():
            result.setdefault(key, []).extend(values)
    return result


def all_values_equal(items: Iterable[U], transform: Callable[[U], T]) -> bool:
    """True when transform yields the same value for every item."""
    return len({transform(i) for i in items}) <= 1


def first_non_null(items: Iterable[U], transform: Callable[[U], T | None]) -> T | None:
    """First value of transform(item) that is not None."""
    for i in items:
        value = transform(i)
        if value is not None:
            return value
    return None


def _merge_action_types(name: str, declared: list[ActionType]) -> ActionType:
    ordered = precedence_order(declared)
    if not all_values_equal(ordered, lambda a: a.tag):
        raise ConfigurationConflictError(name, "tag")
    if not all_values_equal(ordered, lambda a: a.xmlns):
        raise ConfigurationConflictError(name, "xmlns")

    return ActionType(
        name=name,
        tag=ordered[0].tag,
        xmlns=ordered[0].xmlns,
        default_args=merge_collection_maps(ordered, lambda a: a.default_args),
        properties=merge_maps(ordered, lambda a: a.properties),
        default_interpolations=merge_maps(ordered, lambda a: a.default_interpolations),
        configuration_position=ordered[-1].configuration_position,
    )


def merge_configurations(configs: Sequence[Config]) -> Config:
    """
    Merge configs into one Config.

    Kill name and kill message are taken from the first config that sets them.

    Raises:
        ConfigurationConflictError: If one action type is declared with different tags or namespaces.
    """
    by_name: dict[str, list[ActionType]] = {}
    for c in configs:
        for a in c.action_types:
            by_name.setdefault(a.name, []).append(a)

    action_types: list[ActionType] = []
    for name, declared in by_name.items():
        if len(declared) == 1:
            action_types.append(declared[0])
        else:
            logger.debug("Merging %d declarations of action type %s", len(declared), name)
            action_types.append(_merge_action_types(name, declared))

    return Config(
        action_types=tuple(action_types),
        kill_name=first_non_null(configs, lambda c: c.kill_name),
        kill_message=first_non_null(configs, lambda c: c.kill_message),
    )
