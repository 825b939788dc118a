"""Registry of items and groups compiled into a solvable ``Graph``."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import structlog

from topo_strict.graph import Graph
from topo_strict.key_set import KeySet
from topo_strict.keys import ErrorInfo, ErrorType, KeyType
from topo_strict.validation import Validatable

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Item:
    """An id to be ordered with the constraints it was added with."""

    key: str
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()


@dataclass(slots=True)
class Group:
    """A named, insertion-ordered collection of item ids."""

    key: str
    members: list[str] = field(default_factory=list)


class Problem(Validatable):
    """Items, groups and ordering constraints that can be solved into one order.

    Items and groups share a single key namespace. Constraint targets may name
    keys that are added later, as long as they exist by the time the problem
    is compiled or solved::

        problem = Problem()
        problem.add("foo", before="bar")
        problem.add("bar")
        problem.solve()  # ["foo", "bar"]
    """

    def __init__(self) -> None:
        self._entries: dict[str, Item | Group] = {}

    @property
    def ids(self) -> tuple[str, ...]:
        """Item ids in registration order."""
        return tuple(key for key, entry in self._entries.items() if isinstance(entry, Item))

    @property
    def groups(self) -> Mapping[str, tuple[str, ...]]:
        """Group keys mapped to their member ids, in registration order."""
        return MappingProxyType(
            {
                key: tuple(entry.members)
                for key, entry in self._entries.items()
                if isinstance(entry, Group)
            }
        )

    @property
    def keys_by_type(self) -> dict[str, list[str]]:
        return {"ids": list(self.ids), "groups": list(self.groups)}

    @property
    def keys(self) -> list[str]:
        by_type = self.keys_by_type
        return [*by_type["ids"], *by_type["groups"]]

    def items(self) -> tuple[Item, ...]:
        return tuple(entry for entry in self._entries.values() if isinstance(entry, Item))

    def get(self, key: str) -> Item | Group | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, *args: Any, **options: Any) -> None:
        """Add ids with optional ``before``/``after`` constraints and ``group``.

        Raises ``AddError`` for malformed arguments and ``ValidationError`` for
        invalid, duplicated or colliding keys. Nothing is added on failure.
        """
        key_set = KeySet(*args, **options)
        key_set.validate(self.keys_by_type)
        self._add_key_set(key_set)

    def to_graph(self) -> Graph:
        """Validate every constraint target and compile the problem into a ``Graph``."""
        self._validate()
        return self._to_full_graph()

    def solve(self) -> list[str]:
        """Return item ids in an order satisfying every constraint.

        Raises ``ValidationError`` for constraint targets that do not exist and
        ``CycleError`` when the constraints are contradictory.
        """
        return self.to_graph().solve()

    def _add_key_set(self, key_set: KeySet) -> None:
        before = tuple(key_set.before)
        after = tuple(key_set.after)
        for key in key_set.ids:
            self._entries[key] = Item(key, before=before, after=after)

        if key_set.group is not None:
            group = self._entries.get(key_set.group)
            if not isinstance(group, Group):
                group = self._entries[key_set.group] = Group(key_set.group)
            group.members.extend(key_set.ids)

        logger.debug("problem_keys_added", ids=list(key_set.ids), group=key_set.group)

    def _get_error_info(self) -> list[ErrorInfo]:
        info: list[ErrorInfo] = []
        for item in self.items():
            for key_type, targets in ((KeyType.BEFORE, item.before), (KeyType.AFTER, item.after)):
                info.extend(
                    ErrorInfo(ErrorType.MISSING_TARGET, key_type, target)
                    for target in targets
                    if target not in self._entries
                )
        return info

    def _to_full_graph(self) -> Graph:
        graph = self._to_graph_with_nodes()
        edge_count = 0
        for key, (before, after) in self._apply_groups().items():
            for target in before:
                graph.add_edge(key, target)
            for source in after:
                graph.add_edge(source, key)
            edge_count += len(before) + len(after)

        logger.debug("problem_graph_built", node_count=len(graph), edge_count=edge_count)
        return graph

    def _to_graph_with_nodes(self) -> Graph:
        graph = Graph()
        for key in self.ids:
            graph.add_node(key)
        return graph

    def _apply_groups(self) -> dict[str, tuple[list[str], list[str]]]:
        return {
            item.key: (self._expand(item.before), self._expand(item.after))
            for item in self.items()
        }

    def _expand(self, targets: tuple[str, ...]) -> list[str]:
        expanded: list[str] = []
        for target in targets:
            entry = self._entries[target]
            if isinstance(entry, Group):
                expanded.extend(entry.members)
            else:
                expanded.append(target)
        return expanded

    def __str__(self) -> str:
        items = sorted(self.items(), key=lambda item: item.key)
        groups = sorted(self.groups.items())
        if not items and not groups:
            return "Empty problem"

        sections: list[str] = []
        if items:
            lines = ["ids", "---"]
            for item in items:
                lines.append(item.key)
                lines.extend(f"    before: {target}" for target in item.before)
                lines.extend(f"    after: {target}" for target in item.after)
            sections.append("\n".join(lines))
        if groups:
            lines = ["groups", "------"]
            for key, members in groups:
                lines.append(key)
                lines.extend(f"    {member}" for member in members)
            sections.append("\n".join(lines))
        return "\n\n".join(sections)

    def __repr__(self) -> str:
        return f"Problem(ids={len(self.ids)}, groups={len(self.groups)})"


__all__ = ["Group", "Item", "Problem"]
