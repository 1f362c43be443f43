"""
Render emission records as an Oozie workflow.xml document.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from arbiter.errors import DocumentError
from arbiter.oozie.transitions import KIND_ACTION, EmissionRecord
from arbiter.workflow.actions import END, FORK, JOIN, KILL, START

WORKFLOW_XMLNS = "uri:oozie:workflow:0.2"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
OUTPUT_FILE_NAME = "workflow.xml"


def autogenerated_comment(workflow_name: str, generated_at: datetime) -> str:
    return (
        f"<!-- {workflow_name} workflow autogenerated by Arbiter on "
        f"{generated_at.strftime(DATE_FORMAT)} -->"
    )


def _configuration_element(parent: ET.Element, properties: dict[str, str]) -> None:
    # Oozie requires at least one property inside a configuration element
    if not properties:
        return
    configuration = ET.SubElement(parent, "configuration")
    for key, value in properties.items():
        prop = ET.SubElement(configuration, "property")
        ET.SubElement(prop, "name").text = key
        ET.SubElement(prop, "value").text = value


def _inner_elements(body: ET.Element, record: EmissionRecord) -> None:
    """Argument elements, one per value, with the configuration block at its position."""
    placed = False
    for i, (key, values) in enumerate(record.arguments):
        if i == record.configuration_position:
            _configuration_element(body, record.configuration)
            placed = True
        for value in values:
            ET.SubElement(body, key).text = value
    if not placed:
        _configuration_element(body, record.configuration)


def _action_element(root: ET.Element, record: EmissionRecord) -> None:
    if not record.tag:
        raise DocumentError(f"Action {record.name!r} of type {record.action_type!r} has no tag")
    action = ET.SubElement(root, "action", {"name": record.name})
    body = ET.SubElement(action, record.tag)
    if record.xmlns is not None:
        body.set("xmlns", record.xmlns)
    _inner_elements(body, record)
    ET.SubElement(action, "ok", {"to": record.ok or ""})
    ET.SubElement(action, "error", {"to": record.error or ""})


def build_document(workflow_name: str, records: Sequence[EmissionRecord]) -> ET.Element:
    """Root workflow-app element holding one element per record, in record order."""
    root = ET.Element("workflow-app", {"xmlns": WORKFLOW_XMLNS, "name": workflow_name})
    for record in records:
        if record.kind == START:
            ET.SubElement(root, "start", {"to": record.ok or ""})
        elif record.kind == FORK:
            fork = ET.SubElement(root, "fork", {"name": record.name})
            for path in record.paths:
                ET.SubElement(fork, "path", {"start": path})
        elif record.kind == JOIN:
            ET.SubElement(root, "join", {"name": record.name, "to": record.ok or ""})
        elif record.kind == KILL:
            kill = ET.SubElement(root, "kill", {"name": record.name})
            ET.SubElement(kill, "message").text = record.message or ""
        elif record.kind == END:
            ET.SubElement(root, "end", {"name": record.name})
        elif record.kind == KIND_ACTION:
            _action_element(root, record)
        else:
            raise ValueError(f"Unknown record kind {record.kind!r} for {record.name!r}")
    return root


def render_workflow(
    workflow_name: str,
    records: Sequence[EmissionRecord],
    generated_at: datetime | None = None,
) -> str:
    """
    Full document text: declaration, the autogenerated comment, then the
    two-space indented workflow-app element.
    """
    root = build_document(workflow_name, records)
    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    comment = autogenerated_comment(workflow_name, generated_at or datetime.now())
    return "\n".join([XML_DECLARATION, comment, body]) + "\n"


def write_workflow(
    output_dir: str | Path,
    workflow_name: str,
    records: Sequence[EmissionRecord],
    generated_at: datetime | None = None,
) -> Path:
    """Write workflow.xml into output_dir (which must exist) and return its path."""
    path = Path(output_dir) / OUTPUT_FILE_NAME
    path.write_text(render_workflow(workflow_name, records, generated_at), encoding="utf-8")
    return path
