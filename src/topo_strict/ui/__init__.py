"""Command-line surface: argparse router and plain-text renderer."""

from topo_strict.ui.cli import build_parser, run_cli
from topo_strict.ui.render import CLIRenderer, create_renderer

__all__ = ["CLIRenderer", "build_parser", "create_renderer", "run_cli"]
