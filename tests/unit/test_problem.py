"""Unit tests for the Problem registry and its graph compilation."""

from __future__ import annotations

import pytest

from topo_strict.errors import AddError, ProblemKeyError, ValidationError
from topo_strict.problem import Group, Item, Problem

pytestmark = pytest.mark.unit


def test_new_problem_is_empty() -> None:
    problem = Problem()

    assert len(problem) == 0
    assert problem.ids == ()
    assert dict(problem.groups) == {}
    assert problem.keys == []
    assert problem.solve() == []
    assert repr(problem) == "Problem(ids=0, groups=0)"


def test_add_registers_items_with_their_constraints() -> None:
    problem = Problem()
    problem.add("a", "b", before="c", after=["d", "e"])

    assert problem.ids == ("a", "b")
    assert problem.get("a") == Item("a", before=("c",), after=("d", "e"))
    assert problem.get("b") == Item("b", before=("c",), after=("d", "e"))
    assert problem.get("c") is None
    assert "a" in problem
    assert "c" not in problem


def test_groups_accumulate_members_across_calls() -> None:
    problem = Problem()
    problem.add("a", group="g")
    problem.add("b", "c", group="g")
    problem.add("d", group="h")

    assert dict(problem.groups) == {"g": ("a", "b", "c"), "h": ("d",)}
    assert problem.get("g") == Group("g", ["a", "b", "c"])
    assert problem.keys_by_type == {"ids": ["a", "b", "c", "d"], "groups": ["g", "h"]}
    assert problem.keys == ["a", "b", "c", "d", "g", "h"]
    assert len(problem) == 6


def test_groups_view_is_read_only() -> None:
    problem = Problem()
    problem.add("a", group="g")

    with pytest.raises(TypeError):
        problem.groups["g"] = ("b",)  # type: ignore[index]


def test_failed_add_leaves_the_problem_unchanged() -> None:
    problem = Problem()
    problem.add("a", group="g")

    with pytest.raises(ValidationError) as error:
        problem.add("b", "a", "g", group="h")

    assert error.value.keys == ("a", "g")
    assert problem.ids == ("a",)
    assert dict(problem.groups) == {"g": ("a",)}


def test_group_key_cannot_reuse_an_item_id() -> None:
    problem = Problem()
    problem.add("a")

    with pytest.raises(ValidationError) as error:
        problem.add("b", group="a")

    assert [str(item) for item in error.value.errors] == [
        "Group key 'a' is already in use as an id"
    ]


def test_add_rejects_unknown_options() -> None:
    with pytest.raises(AddError):
        Problem().add("a", priority=1)


def test_missing_targets_are_reported_together_in_item_order() -> None:
    problem = Problem()
    problem.add("x", before=["m1", "m2"], after="m3")
    problem.add("y", before="m4", after="x")

    with pytest.raises(ValidationError) as error:
        problem.solve()

    assert error.value.keys == ("m1", "m2", "m3", "m4")
    assert [str(item) for item in error.value.errors] == [
        "Before key 'm1' does not exist",
        "Before key 'm2' does not exist",
        "After key 'm3' does not exist",
        "Before key 'm4' does not exist",
    ]
    assert all(isinstance(item, ProblemKeyError) for item in error.value.errors)


def test_constraint_targets_may_be_added_later() -> None:
    problem = Problem()
    problem.add("x", after="g")

    with pytest.raises(ValidationError):
        problem.solve()

    problem.add("y", group="g")

    assert problem.solve() == ["y", "x"]


def test_to_graph_expands_group_targets() -> None:
    problem = Problem()
    problem.add("a", before="g")
    problem.add("b", "c", group="g")
    problem.add("d", after="a")

    graph = problem.to_graph()

    assert graph.nodes == ("a", "b", "c", "d")
    assert graph.edges == (("a", "b"), ("a", "c"), ("a", "d"))


def test_group_keys_are_not_graph_nodes() -> None:
    problem = Problem()
    problem.add("a", group="g")

    graph = problem.to_graph()

    assert "g" not in graph
    assert graph.nodes == ("a",)


def test_empty_group_is_a_valid_target() -> None:
    problem = Problem()
    problem.add(group="g")
    problem.add("x", before="g")

    assert dict(problem.groups) == {"g": ()}
    assert problem.solve() == ["x"]


def test_solve_is_repeatable() -> None:
    problem = Problem()
    problem.add("c", after="a")
    problem.add("a", "b")

    assert problem.solve() == problem.solve() == ["a", "b", "c"]


def test_str_dumps_ids_and_groups_sorted_by_key() -> None:
    problem = Problem()
    problem.add("foo", before="omg", after="wtf")
    problem.add("bar", before="wut")
    problem.add("baz", group="groupA")

    assert str(problem) == (
        "ids\n"
        "---\n"
        "bar\n"
        "    before: wut\n"
        "baz\n"
        "foo\n"
        "    before: omg\n"
        "    after: wtf\n"
        "\n"
        "groups\n"
        "------\n"
        "groupA\n"
        "    baz"
    )


def test_str_of_empty_problem() -> None:
    assert str(Problem()) == "Empty problem"
