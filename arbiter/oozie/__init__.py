"""Oozie output: transition resolution and workflow.xml rendering."""

from arbiter.oozie.transitions import (
    EmissionRecord,
    TransitionResolver,
    depth_first_order,
    enclosing_join,
    resolve_transitions,
    success_transition,
)
from arbiter.oozie.xml_writer import build_document, render_workflow, write_workflow

__all__ = [
    "EmissionRecord",
    "TransitionResolver",
    "build_document",
    "depth_first_order",
    "enclosing_join",
    "render_workflow",
    "resolve_transitions",
    "success_transition",
    "write_workflow",
]
