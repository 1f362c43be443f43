"""
Variable interpolation for action arguments. Variables are written $$name$$;
unknown variables are left as they are. Variables used inside the value of another
variable are resolved as well; a variable that refers back to itself is an error.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from arbiter.errors import DocumentError

PREFIX = "$$"
SUFFIX = "$$"

_TOKEN = re.compile(re.escape(PREFIX) + r"(.+?)" + re.escape(SUFFIX))


def _variables(
    named_args: Mapping[str, str],
    defaults: Mapping[str, str] | None,
) -> dict[str, str]:
    """Defaults overlaid by named args."""
    variables = dict(defaults or {})
    variables.update(named_args)
    return variables


def _substitute(value: str, variables: Mapping[str, str], resolving: tuple[str, ...] = ()) -> str:
    """Replace known tokens, resolving tokens inside substituted values too."""

    def replace(m: re.Match[str]) -> str:
        name = m.group(1)
        if name not in variables:
            return m.group(0)
        if name in resolving:
            chain = " -> ".join(resolving + (name,))
            raise DocumentError(f"Variable {name!r} refers to itself: {chain}")
        return _substitute(variables[name], variables, resolving + (name,))

    return _TOKEN.sub(replace, value)


def interpolate(
    template: str | None,
    named_args: Mapping[str, str] | None,
    defaults: Mapping[str, str] | None = None,
) -> str | None:
    """Interpolate a single string. None passes through unchanged."""
    if template is None or named_args is None:
        return template
    return _substitute(template, _variables(named_args, defaults))


def list_variable(value: str) -> str | None:
    """Variable name when value is exactly one $$name$$ token, else None."""
    m = _TOKEN.fullmatch(value)
    if m is None or SUFFIX in m.group(1):
        return None
    return m.group(1)


def interpolate_args(
    args: Mapping[str, list[str]] | None,
    named_args: Mapping[str, str] | None,
    defaults: Mapping[str, str] | None = None,
    list_args: Mapping[str, list[str]] | None = None,
) -> Mapping[str, list[str]] | None:
    """
    Interpolate every value of a key -> values mapping and return a new mapping.

    A value that is exactly $$name$$ where name is a key of list_args expands into
    all of that list's values. When there is nothing to interpolate with, args is
    returned as is.
    """
    if args is None or (named_args is None and not list_args):
        return args

    variables = _variables(named_args or {}, defaults)
    list_args = list_args or {}
    result: dict[str, list[str]] = {}
    for key, values in args.items():
        expanded: list[str] = []
        for value in values:
            name = list_variable(value)
            if name is not None and name in list_args:
                expanded.extend(list_args[name])
            else:
                expanded.append(_substitute(value, variables))
        result[key] = expanded
    return result


def referenced_list_variables(
    args: Mapping[str, list[str]] | None,
    list_args: Mapping[str, list[str]] | None,
) -> set[str]:
    """Keys of list_args used as whole-value $$name$$ tokens somewhere in args."""
    if not args or not list_args:
        return set()
    used: set[str] = set()
    for values in args.values():
        for value in values:
            name = list_variable(value)
            if name is not None and name in list_args:
                used.add(name)
    return used
