"""Deterministic depth-first topological sort over a ``Graph``."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING

import structlog

from topo_strict.errors import CycleError

if TYPE_CHECKING:
    from topo_strict.graph import Graph

logger = structlog.get_logger(__name__)


class Search:
    """Single-use depth-first search producing one topological order.

    Roots and edge targets are both visited in reverse-alphabetical order of
    their ids. Each node is prepended to the result once everything reachable
    from it has been emitted, so the result only depends on node ids and the
    edge set, never on insertion order.

    ``_marked`` holds every node the search has entered and is never cleared;
    a node that is marked but still ``_remaining`` is on the current path.
    """

    __slots__ = ("_graph", "_remaining", "_marked", "_result")

    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self._remaining: set[int] = set(range(len(graph)))
        self._marked: set[int] = set()
        self._result: deque[str] = deque()

    def run(self) -> list[str]:
        """Run the search and return node ids in order; raise ``CycleError`` on a cycle."""
        for index in self._ordered(self._remaining):
            self._visit(index)

        logger.debug("graph_search_completed", node_count=len(self._result))
        return list(self._result)

    def _visit(self, start: int) -> None:
        if not self._enter(start):
            return

        frames: list[tuple[int, Iterator[int]]] = [(start, self._iter_targets(start))]
        while frames:
            node, targets = frames[-1]
            for target in targets:
                if self._enter(target):
                    frames.append((target, self._iter_targets(target)))
                    break
            else:
                frames.pop()
                self._remaining.discard(node)
                self._result.appendleft(self._graph.node_id(node))

    def _enter(self, index: int) -> bool:
        if index not in self._remaining:
            return False
        if index in self._marked:
            node_id = self._graph.node_id(index)
            logger.debug("graph_search_cycle", node_id=node_id)
            raise CycleError(info={"id": node_id})
        self._marked.add(index)
        return True

    def _iter_targets(self, index: int) -> Iterator[int]:
        return iter(self._ordered(self._graph.target_indexes(index)))

    def _ordered(self, indexes: set[int] | tuple[int, ...]) -> list[int]:
        return sorted(indexes, key=self._graph.node_id, reverse=True)


__all__ = ["Search"]
