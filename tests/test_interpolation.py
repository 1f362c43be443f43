"""
Tests for $$name$$ interpolation of strings and argument maps.
"""

import pytest

from arbiter.errors import DocumentError
from arbiter.interpolation import (
    interpolate,
    interpolate_args,
    list_variable,
    referenced_list_variables,
)

NAMED_ARGS = {"key": "value"}


def test_null_named_args_returns_same_mapping():
    """Nothing to interpolate with: the input mapping itself is returned."""
    args = {"one": ["two", "three"]}
    assert interpolate_args(args, None) is args


def test_result_is_a_new_mapping():
    args = {"one": ["two", "three"]}
    result = interpolate_args(args, NAMED_ARGS)
    assert result is not args
    assert result == args
    assert result["one"] is not args["one"]


def test_interpolation():
    args = {"one": ["$$key$$", "three"]}
    assert interpolate_args(args, NAMED_ARGS) == {"one": ["value", "three"]}


def test_single_string_interpolation():
    assert interpolate("hello $$key$$", NAMED_ARGS) == "hello value"


def test_multiple_tokens_in_one_value():
    assert interpolate("$$a$$-$$b$$", {"a": "x", "b": "y"}) == "x-y"


def test_unknown_variable_left_unchanged():
    assert interpolate("hello $$other$$", NAMED_ARGS) == "hello $$other$$"


def test_none_template_passes_through():
    assert interpolate(None, NAMED_ARGS) is None


def test_named_args_override_defaults():
    defaults = {"key": "default", "extra": "e"}
    assert interpolate("$$key$$ $$extra$$", NAMED_ARGS, defaults) == "value e"


def test_defaults_used_when_named_args_empty():
    assert interpolate("$$key$$", {}, {"key": "default"}) == "default"


def test_oozie_expressions_untouched():
    """Oozie ${...} expressions are not Arbiter variables."""
    assert interpolate("${wf:id()} $$key$$", NAMED_ARGS) == "${wf:id()} value"


def test_list_variable():
    assert list_variable("$$files$$") == "files"
    assert list_variable("prefix $$files$$") is None
    assert list_variable("plain") is None
    assert list_variable("$$a$$-$$b$$") is None


def test_list_args_expand_whole_value_tokens():
    args = {"arg": ["$$files$$", "$$key$$", "x $$files$$"]}
    result = interpolate_args(args, NAMED_ARGS, list_args={"files": ["f1", "f2"]})
    assert result == {"arg": ["f1", "f2", "value", "x $$files$$"]}


def test_list_args_without_named_args():
    args = {"arg": ["$$files$$"]}
    assert interpolate_args(args, None, list_args={"files": ["f1"]}) == {"arg": ["f1"]}


def test_referenced_list_variables():
    args = {"arg": ["$$files$$", "$$key$$"], "other": ["$$dirs$$"]}
    list_args = {"files": ["f1"], "env": ["A=1"]}
    assert referenced_list_variables(args, list_args) == {"files"}
    assert referenced_list_variables(None, list_args) == set()


def test_variables_inside_values_are_resolved():
    assert interpolate("$$a$$", {"a": "$$b$$", "b": "x"}) == "x"


def test_default_interpolation_refers_to_named_arg():
    """A default may be built from a named arg of the action."""
    result = interpolate_args({"jar": ["$$lib$$"]}, {"dir": "/opt"}, {"lib": "$$dir$$/x.jar"})
    assert result == {"jar": ["/opt/x.jar"]}


def test_repeated_variable_is_not_a_cycle():
    assert interpolate("$$a$$ $$a$$", {"a": "$$b$$", "b": "x"}) == "x x"


def test_self_referencing_variable_rejected():
    with pytest.raises(DocumentError):
        interpolate("$$a$$", {"a": "x$$a$$"})


def test_indirect_cycle_rejected():
    with pytest.raises(DocumentError, match="a -> b -> a"):
        interpolate("$$a$$", {"a": "$$b$$", "b": "$$a$$"})
