"""
Tests for the YAML workflow and configuration readers.
"""

import tempfile
from pathlib import Path

import pytest

from arbiter.config.loader import action_type_from_dict, load_config, load_configs
from arbiter.config.model import ActionType, Config
from arbiter.errors import DocumentError
from arbiter.workflow.actions import Action, Workflow
from arbiter.workflow.loader import load_workflow, load_workflows, workflow_from_dict

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "arbiter"


def test_read_config():
    config = load_config(FIXTURES / "testconfig.yaml")

    expected = Config(
        action_types=(
            ActionType(
                name="test",
                tag="testaction",
                xmlns="uri:oozie:test-action:0.1",
                configuration_position=1,
                default_args={"a": ["a", "b", "c"]},
                properties={"p1": "v1", "p2": "v2"},
            ),
        ),
        kill_name="kill",
        kill_message="message",
    )
    assert config == expected


def test_read_low_priority_config():
    config = load_config(FIXTURES / "testconfig.yaml", low_precedence=True)
    assert config.action_type("test").low_precedence is True


def test_load_configs_none():
    assert load_configs(None) == []


def test_read_workflow():
    workflow = load_workflow(FIXTURES / "testworkflow.yaml")

    expected = Workflow(
        name="name",
        actions=(
            Action(name="action1", type="test", positional_args={"one": ["two", "three"]}),
            Action(
                name="action2",
                type="test",
                dependencies=frozenset({"action1"}),
                named_args={"nameArg": "value"},
                positional_args={"two": ["four", "six"]},
            ),
        ),
        error_handler=Action(name="error", type="errorTest", positional_args={"e": ["f", "g"]}),
    )
    assert workflow == expected


def test_read_conditional_dependencies():
    """conditionalDependencies are read but do not become dependencies."""
    workflow = load_workflow(FIXTURES / "decision_node_workflow.yaml")
    action2 = workflow.actions[1]
    assert action2.conditional_dependencies == {"action1": "${test:elFunction()}"}
    assert action2.dependencies == frozenset()


def test_load_workflows_in_order():
    workflows = load_workflows([FIXTURES / "testworkflow.yaml", FIXTURES / "cyclic_workflow.yaml"])
    assert [w.name for w in workflows] == ["name", "cyclic"]


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_workflow(FIXTURES / "does_not_exist.yaml")


def test_invalid_yaml():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(DocumentError):
            load_workflow(path)


def test_empty_document():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "empty.yaml"
        path.write_text("")
        with pytest.raises(DocumentError):
            load_config(path)


def test_root_must_be_mapping():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(DocumentError):
            load_workflow(path)


def test_workflow_name_required():
    with pytest.raises(DocumentError, match="'name' is required"):
        workflow_from_dict({"actions": []})


def test_action_name_required():
    with pytest.raises(DocumentError):
        workflow_from_dict({"name": "wf", "actions": [{"type": "test"}]})


def test_scalars_read_as_strings():
    """Numbers, booleans and dates keep a string form."""
    workflow = workflow_from_dict(
        {
            "name": "wf",
            "actions": [
                {
                    "name": "a",
                    "type": "test",
                    "namedArgs": {"retries": 3, "enabled": True},
                    "positionalArgs": {"arg": "single"},
                }
            ],
        }
    )
    action = workflow.actions[0]
    assert action.named_args == {"retries": "3", "enabled": "true"}
    assert action.positional_args == {"arg": ["single"]}


def test_dates_not_converted():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "dates.yaml"
        path.write_text(
            "name: wf\n"
            "actions:\n"
            "  - name: a\n"
            "    type: test\n"
            "    positionalArgs:\n"
            "      arg: [--date, 2016-01-01]\n"
        )
        workflow = load_workflow(path)
    assert workflow.actions[0].positional_args == {"arg": ["--date", "2016-01-01"]}


def test_configuration_position_must_be_integer():
    with pytest.raises(DocumentError):
        action_type_from_dict({"name": "java", "configurationPosition": "two"})


def test_action_type_defaults():
    action_type = action_type_from_dict({"name": "java", "tag": "java"})
    assert action_type == ActionType(name="java", tag="java")


def test_action_type_tag_required():
    """An action type without an XML tag is rejected, not rendered under another name."""
    with pytest.raises(DocumentError, match="'tag' is required"):
        action_type_from_dict({"name": "java"})
