"""Unit tests for the deterministic depth-first topological sort."""

from __future__ import annotations

import random

import pytest

from topo_strict.errors import CycleError
from topo_strict.graph import Graph
from topo_strict.search import Search

pytestmark = pytest.mark.unit


def _graph(nodes: list[str], edges: list[tuple[str, str]]) -> Graph:
    graph = Graph()
    for node_id in nodes:
        graph.add_node(node_id)
    for source, target in edges:
        graph.add_edge(source, target)
    return graph


def _assert_respects_edges(order: list[str], edges: list[tuple[str, str]]) -> None:
    position = {node_id: index for index, node_id in enumerate(order)}
    for source, target in edges:
        assert position[source] < position[target], (source, target)


def test_unconstrained_nodes_come_out_alphabetically() -> None:
    assert _graph(["c", "a", "b"], []).solve() == ["a", "b", "c"]


def test_single_edge_pulls_source_ahead_of_target() -> None:
    assert _graph(["a", "b", "c"], [("c", "a")]).solve() == ["b", "c", "a"]


def test_diamond() -> None:
    edges = [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")]

    assert _graph(["d", "c", "b", "a"], edges).solve() == ["a", "b", "c", "d"]


def test_result_does_not_depend_on_insertion_order() -> None:
    nodes = [f"node-{index:02d}" for index in range(30)]
    rng = random.Random(20_260_101)
    edges = [
        (nodes[source], nodes[target])
        for source in range(len(nodes))
        for target in range(source + 1, len(nodes))
        if rng.random() < 0.15
    ]
    expected = _graph(nodes, edges).solve()
    _assert_respects_edges(expected, edges)

    for _ in range(5):
        shuffled_nodes = nodes[:]
        shuffled_edges = edges[:]
        rng.shuffle(shuffled_nodes)
        rng.shuffle(shuffled_edges)
        assert _graph(shuffled_nodes, shuffled_edges).solve() == expected


def test_parallel_edges_do_not_change_the_order() -> None:
    single = _graph(["a", "b", "c"], [("b", "a"), ("c", "a")]).solve()
    doubled = _graph(["a", "b", "c"], [("b", "a"), ("b", "a"), ("c", "a"), ("c", "a")]).solve()

    assert doubled == single == ["b", "c", "a"]


def test_two_node_cycle_reports_the_revisited_node() -> None:
    graph = _graph(["a", "b"], [("a", "b"), ("b", "a")])

    with pytest.raises(CycleError) as error:
        graph.solve()

    assert error.value.node_id == "b"
    assert str(error.value) == "Cycle detected at node with id 'b'"


def test_self_loop_is_a_cycle() -> None:
    with pytest.raises(CycleError) as error:
        _graph(["a", "b"], [("a", "a")]).solve()

    assert error.value.node_id == "a"


def test_cycle_behind_an_acyclic_prefix_is_detected() -> None:
    graph = _graph(["a", "b", "c", "d"], [("d", "a"), ("a", "b"), ("b", "c"), ("c", "a")])

    with pytest.raises(CycleError):
        graph.solve()


def test_deep_chain_does_not_recurse() -> None:
    nodes = [f"n{index:05d}" for index in range(5_000)]
    # Each node points at its predecessor, so the first root walks the whole chain.
    edges = [(nodes[index + 1], nodes[index]) for index in range(len(nodes) - 1)]

    assert _graph(nodes, edges).solve() == list(reversed(nodes))


def test_search_can_be_run_directly() -> None:
    graph = _graph(["a", "b"], [("a", "b")])

    assert Search(graph).run() == ["a", "b"]
