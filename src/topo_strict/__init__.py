"""
topo-strict — deterministic topological ordering with strict key validation.

Declare items with ``before``/``after`` constraints (optionally collected
into groups) on a ``Problem`` and solve it into one reproducible order::

    from topo_strict import Problem

    problem = Problem()
    problem.add("a", "b", group="setup")
    problem.add("c", after="setup")
    problem.solve()  # ["a", "b", "c"]

Importing the package has no side effects; logging is only configured by the
command line.
"""

from topo_strict.errors import (
    AddError,
    CycleError,
    DefinitionError,
    ProblemKeyError,
    TopoStrictError,
    ValidationError,
    aggregate_errors,
    filter_errors,
)
from topo_strict.graph import Graph
from topo_strict.problem import Group, Item, Problem

__version__ = "1.0.0"

__all__ = [
    "AddError",
    "CycleError",
    "DefinitionError",
    "Graph",
    "Group",
    "Item",
    "Problem",
    "ProblemKeyError",
    "TopoStrictError",
    "ValidationError",
    "__version__",
    "aggregate_errors",
    "filter_errors",
]
