"""Output rendering for the topo-strict command line.

Purpose
- Provide a thin rendering layer so commands print deterministic plain text
  or JSON without formatting logic of their own.
"""

from __future__ import annotations

import json
import sys
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class CLIRenderer:
    """Thin CLI output renderer writing to ``stdout`` by default."""

    def __init__(self, *, stream: IO[str] | None = None, verbose: bool = False) -> None:
        self.verbose = verbose
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def text(self, line: str) -> None:
        """Print a plain text line."""

        print(line, file=self.stream)

    def blank(self) -> None:
        print(file=self.stream)

    def section(self, title: str, body: str) -> None:
        """Print a titled block followed by a blank line."""

        self.text(f"# {title}")
        self.text(body)
        self.blank()

    def items(self, entries: Sequence[str]) -> None:
        """Print one entry per line."""

        for entry in entries:
            self.text(entry)

    def json(self, payload: object) -> None:
        """Print ``payload`` as deterministic JSON."""

        self.text(json.dumps(payload, sort_keys=True, ensure_ascii=False))

    def ok(self, label: str) -> None:
        self.text(f"OK  {label}")


def create_renderer(*, verbose: bool = False, stream: IO[str] | None = None) -> CLIRenderer:
    """Create a renderer for the current process."""

    return CLIRenderer(stream=stream, verbose=verbose)


__all__ = ["CLIRenderer", "create_renderer"]
