"""Command-line interface router for topo-strict."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import IO, Any

import structlog

from topo_strict.config import LOG_LEVELS, OUTPUT_FORMATS, load_config
from topo_strict.definition import load_problem
from topo_strict.observability import configure_logging
from topo_strict.ui.render import CLIRenderer, create_renderer

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="topo-strict",
        description=(
            "Deterministic topological ordering with strict key validation.\n\n"
            "Common workflows:\n"
            "  topo-strict solve problem.toml    Print the solved order\n"
            "  topo-strict check problem.yaml    Validate keys, targets and cycles\n"
            "  topo-strict show problem.json     Dump the problem and its graph\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="Problem definition file (.toml, .yaml, .yml or .json).")
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to settings TOML (default: ./topo-strict.toml if present).",
    )
    common.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default from settings: text).",
    )
    common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Minimum level for diagnostic logs written to stderr.",
    )
    common.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Write diagnostic logs as JSON lines.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    solve = subparsers.add_parser("solve", parents=[common], help="Print the solved order.")
    solve.add_argument(
        "--show-problem",
        action="store_true",
        default=None,
        help="Print the problem dump before the order.",
    )
    solve.add_argument(
        "--show-graph",
        action="store_true",
        default=None,
        help="Print the compiled graph before the order.",
    )
    solve.set_defaults(handler=_cmd_solve)

    check = subparsers.add_parser(
        "check", parents=[common], help="Validate the problem without printing the order."
    )
    check.set_defaults(handler=_cmd_check)

    show = subparsers.add_parser("show", parents=[common], help="Dump the problem and graph.")
    show.set_defaults(handler=_cmd_show)

    return parser


def run_cli(argv: Sequence[str] | None = None, *, stream: IO[str] | None = None) -> int:
    """Parse ``argv`` and run the selected command; errors propagate to the caller."""

    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(
        args.config_path,
        cli_overrides={
            "output.format": args.output_format,
            "output.show_problem": getattr(args, "show_problem", None),
            "output.show_graph": getattr(args, "show_graph", None),
            "observability.log_level": args.log_level,
            "observability.json_logs": args.json_logs,
        },
    )
    observability = config["observability"]
    configure_logging(observability["log_level"], json_logs=observability["json_logs"])

    renderer = create_renderer(stream=stream)
    logger.debug("cli_command_started", command=args.command, file=args.file)
    handler = args.handler
    return int(handler(args, config, renderer))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_solve(args: argparse.Namespace, config: dict[str, Any], renderer: CLIRenderer) -> int:
    output = config["output"]
    problem = load_problem(args.file)
    graph = problem.to_graph()
    order = graph.solve()

    if output["format"] == "json":
        payload: dict[str, object] = {"order": order}
        if output["show_problem"]:
            payload["problem"] = str(problem)
        if output["show_graph"]:
            payload["graph"] = str(graph)
        renderer.json(payload)
        return 0

    if output["show_problem"]:
        renderer.section("problem", str(problem))
    if output["show_graph"]:
        renderer.section("graph", str(graph))
    renderer.items(order)
    return 0


def _cmd_check(args: argparse.Namespace, config: dict[str, Any], renderer: CLIRenderer) -> int:
    problem = load_problem(args.file)
    order = problem.solve()

    if config["output"]["format"] == "json":
        renderer.json({"valid": True, "items": len(order), "groups": len(problem.groups)})
    else:
        renderer.ok(f"{args.file}: {len(order)} items, {len(problem.groups)} groups")
    return 0


def _cmd_show(args: argparse.Namespace, config: dict[str, Any], renderer: CLIRenderer) -> int:
    problem = load_problem(args.file)
    graph = problem.to_graph()

    if config["output"]["format"] == "json":
        renderer.json(
            {
                "ids": [
                    {"id": item.key, "before": list(item.before), "after": list(item.after)}
                    for item in problem.items()
                ],
                "groups": {key: list(members) for key, members in problem.groups.items()},
                "edges": [list(edge) for edge in graph.edges],
            }
        )
        return 0

    renderer.section("problem", str(problem))
    renderer.text(str(graph))
    return 0


__all__ = ["build_parser", "run_cli"]
