"""Index-based directed graph compiled from a ``Problem``."""

from __future__ import annotations

from collections.abc import Iterator

from topo_strict.errors import ProblemKeyError
from topo_strict.search import Search


class Graph:
    """Directed graph of string node ids with add-once nodes.

    Nodes live in an id table; each node's adjacency list stores the indexes
    of its edge targets. Parallel edges are kept as-is.
    """

    __slots__ = ("_ids", "_index", "_targets")

    def __init__(self) -> None:
        self._ids: list[str] = []
        self._index: dict[str, int] = {}
        self._targets: list[list[int]] = []

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    @property
    def nodes(self) -> tuple[str, ...]:
        """Node ids in insertion order."""
        return tuple(self._ids)

    @property
    def edges(self) -> tuple[tuple[str, str], ...]:
        """All edges as ``(from, to)`` pairs sorted by source, then target."""
        ordered: list[tuple[str, str]] = []
        for source in sorted(self._ids):
            for target in self.targets(source):
                ordered.append((source, target))
        return tuple(ordered)

    def targets(self, node_id: str) -> tuple[str, ...]:
        """Edge targets of ``node_id``, sorted, parallel edges repeated."""
        index = self._require(node_id)
        return tuple(sorted(self._ids[target] for target in self._targets[index]))

    def add_node(self, node_id: str) -> None:
        """Add a node; raise ``ProblemKeyError`` if it already exists."""
        if node_id in self._index:
            raise ProblemKeyError(
                f"Id {node_id!r} is already in the graph",
                info={"key": node_id},
            )
        self._index[node_id] = len(self._ids)
        self._ids.append(node_id)
        self._targets.append([])

    def add_edge(self, from_id: str, to_id: str) -> None:
        """Add a directed edge ``from_id -> to_id`` between existing nodes."""
        source = self._require(from_id)
        target = self._require(to_id)
        self._targets[source].append(target)

    def solve(self) -> list[str]:
        """Return a deterministic topological order or raise ``CycleError``."""
        return Search(self).run()

    def node_id(self, index: int) -> str:
        return self._ids[index]

    def target_indexes(self, index: int) -> tuple[int, ...]:
        return tuple(self._targets[index])

    def __str__(self) -> str:
        if not self._ids:
            return "Empty graph"

        sections = ["\n".join(["nodes", "-----", *sorted(self._ids)])]
        edges = self.edges
        if edges:
            lines = [f"from: {source}, to: {target}" for source, target in edges]
            sections.append("\n".join(["edges", "-----", *lines]))
        return "\n\n".join(sections)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._ids)}, edges={sum(map(len, self._targets))})"

    def _require(self, node_id: str) -> int:
        try:
            return self._index[node_id]
        except KeyError:
            raise ProblemKeyError(
                f"Id {node_id!r} is not in the graph",
                info={"key": node_id},
            ) from None


__all__ = ["Graph"]
