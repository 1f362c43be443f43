"""
Compile workflows into Oozie workflow.xml files.

Each workflow is compiled independently: dependency graph, fork/join synthesis,
start/end/kill wiring, transition resolution, then XML output in
<output>/<workflow name>/workflow.xml. The first failing workflow aborts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from arbiter.config.model import Config
from arbiter.graph.builder import WorkflowGraph, build_input_graph, build_workflow_graph
from arbiter.graph.graphviz import DEFAULT_FORMAT, generate_graphviz
from arbiter.oozie.transitions import EmissionRecord, TransitionResolver
from arbiter.oozie.xml_writer import write_workflow
from arbiter.workflow.actions import Workflow

logger = logging.getLogger(__name__)


def compile_workflow(workflow: Workflow, config: Config) -> list[EmissionRecord]:
    """Emission records for one workflow, without writing anything."""
    return TransitionResolver(config).resolve(build_workflow_graph(workflow, config))


class WorkflowGenerator:
    """Generates Oozie workflows from Arbiter workflows using one merged configuration."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.resolver = TransitionResolver(config)

    def build_graph(
        self,
        workflow: Workflow,
        output_dir: Path | None = None,
        graphviz: bool = False,
        graphviz_format: str = DEFAULT_FORMAT,
    ) -> WorkflowGraph:
        """
        Build the control-flow graph, exporting the input and final graphs to
        Graphviz in output_dir when requested.
        """
        input_graph = build_input_graph(workflow)
        if graphviz and output_dir is not None:
            generate_graphviz(
                input_graph, output_dir / f"{workflow.name}-input.dot", graphviz_format, workflow.name
            )

        wg = build_workflow_graph(workflow, self.config, input_graph)
        if graphviz and output_dir is not None:
            generate_graphviz(wg.graph, output_dir / f"{workflow.name}.dot", graphviz_format, workflow.name)
        return wg

    def generate(
        self,
        output_base: str | Path,
        workflows: Iterable[Workflow],
        *,
        graphviz: bool = False,
        graphviz_format: str = DEFAULT_FORMAT,
        generated_at: datetime | None = None,
    ) -> list[Path]:
        """
        Write one workflow.xml per workflow under output_base.

        Returns:
            Paths of the written files, in workflow order.

        Raises:
            ArbiterError: The first compile error; later workflows are not processed.
        """
        base = Path(output_base)
        base.mkdir(parents=True, exist_ok=True)
        generated_at = generated_at or datetime.now()

        written: list[Path] = []
        for workflow in workflows:
            output_dir = base / workflow.name
            output_dir.mkdir(parents=True, exist_ok=True)

            wg = self.build_graph(workflow, output_dir, graphviz, graphviz_format)
            records = self.resolver.resolve(wg)
            path = write_workflow(output_dir, workflow.name, records, generated_at)
            logger.info("Wrote %s (%d nodes)", path, len(records))
            written.append(path)
        return written
