"""Action type and configuration entities."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from arbiter.errors import UnknownActionTypeError


@dataclass(frozen=True)
class ActionType:
    """How an action type is rendered: XML tag, namespace, default arguments and properties."""

    name: str
    tag: str | None = None
    xmlns: str | None = None
    default_args: dict[str, list[str]] = field(default_factory=dict)
    properties: dict[str, str] = field(default_factory=dict)
    default_interpolations: dict[str, str] = field(default_factory=dict)
    configuration_position: int = 0
    low_precedence: bool = False

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Config:
    """A complete configuration: action types plus the optional kill node name and message."""

    action_types: tuple[ActionType, ...] = ()
    kill_name: str | None = None
    kill_message: str | None = None

    __hash__ = None  # type: ignore[assignment]

    def action_type(self, name: str) -> ActionType:
        """
        Look up an action type by exact name.

        Raises:
            UnknownActionTypeError: If no action type has that name.
        """
        for a in self.action_types:
            if a.name == name:
                return a
        raise UnknownActionTypeError(name)

    def with_precedence(self, low_precedence: bool) -> Config:
        """Copy of this config with every action type marked low (or normal) precedence."""
        return replace(
            self,
            action_types=tuple(replace(a, low_precedence=low_precedence) for a in self.action_types),
        )
