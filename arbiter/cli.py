"""
Arbiter CLI: compile YAML workflow definitions into Oozie workflow.xml files.
"""

import argparse
import logging
import sys

from arbiter.config import load_configs, merge_configurations
from arbiter.errors import ArbiterError
from arbiter.generator import WorkflowGenerator
from arbiter.graph.graphviz import DEFAULT_FORMAT
from arbiter.log_config import configure_logging
from arbiter.workflow import load_workflows

logger = logging.getLogger("arbiter.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arbiter",
        description="Arbiter: generate Oozie workflows from YAML workflow definitions",
    )
    parser.add_argument(
        "-c", "--config", nargs="+", action="extend", default=[], help="Configuration file"
    )
    parser.add_argument(
        "-l",
        "--low-priority-config",
        nargs="+",
        action="extend",
        default=[],
        help="Low-priority configuration file",
    )
    parser.add_argument(
        "-i", "--input", nargs="+", action="extend", required=True, help="Input Arbiter workflow file"
    )
    parser.add_argument("-o", "--output", required=True, help="Output directory")
    parser.add_argument(
        "-g",
        "--graphviz",
        nargs="?",
        const=DEFAULT_FORMAT,
        default=None,
        metavar="FORMAT",
        help=f"Generate the Graphviz DOT file and render it (default format: {DEFAULT_FORMAT})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 on success, 1 on errors
    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        configs = load_configs(args.config)
        configs.extend(load_configs(args.low_priority_config, low_precedence=True))
        config = merge_configurations(configs)
        workflows = load_workflows(args.input)

        generator = WorkflowGenerator(config)
        generator.generate(
            args.output,
            workflows,
            graphviz=args.graphviz is not None,
            graphviz_format=args.graphviz or DEFAULT_FORMAT,
        )
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except (ArbiterError, OSError) as e:
        logger.error("Unable to generate workflows: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
