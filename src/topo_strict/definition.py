"""Load a ``Problem`` from a TOML, YAML or JSON definition file.

A definition is a mapping with an ``items`` list. Each entry is either an
options mapping accepted by ``Problem.add`` or a bare string id::

    # problem.toml
    [[items]]
    ids = ["foo"]
    before = "bar"

    [[items]]
    ids = ["bar", "baz"]
    group = "rest"
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

import yaml

from topo_strict.errors import DefinitionError
from topo_strict.problem import Problem

YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})
SUPPORTED_SUFFIXES: Final[tuple[str, ...]] = (".json", ".toml", ".yaml", ".yml")


def load_problem(path: str | Path) -> Problem:
    """Read ``path`` and build a ``Problem`` from its ``items`` entries."""

    resolved = Path(path).expanduser()
    return build_problem(load_definition(resolved), source=str(resolved))


def load_definition(path: Path) -> dict[str, Any]:
    """Parse a definition file into its root mapping."""

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DefinitionError(
            f"unsupported definition format {suffix or '<none>'!r} for {path}; "
            f"expected one of {', '.join(SUPPORTED_SUFFIXES)}",
            info={"path": str(path)},
        )

    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise DefinitionError(
            f"definition file not found: {path}", info={"path": str(path)}
        ) from exc
    except OSError as exc:
        raise DefinitionError(
            f"unable to read definition file {path}: {exc}", info={"path": str(path)}
        ) from exc

    try:
        if suffix == ".toml":
            payload: object = tomllib.loads(raw.decode("utf-8"))
        elif suffix in YAML_SUFFIXES:
            payload = yaml.safe_load(raw)
        else:
            payload = json.loads(raw)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise DefinitionError(
            f"invalid {suffix.lstrip('.').upper()} in {path}: {exc}",
            info={"path": str(path)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise DefinitionError(
            f"definition file {path} is not valid UTF-8", info={"path": str(path)}
        ) from exc

    if not isinstance(payload, Mapping):
        raise DefinitionError(
            f"definition root must be a mapping: {path}", info={"path": str(path)}
        )
    return dict(payload)


def build_problem(payload: Mapping[str, Any], *, source: str = "<definition>") -> Problem:
    """Build a ``Problem`` by adding every ``items`` entry in order.

    ``AddError`` and ``ValidationError`` from ``Problem.add`` propagate
    unchanged; shape errors of the definition itself raise ``DefinitionError``.
    """

    unknown = sorted(str(key) for key in payload if key != "items")
    if unknown:
        raise DefinitionError(
            f"unknown top-level key {unknown[0]!r} in {source}",
            info={"path": source},
        )

    entries = payload.get("items", [])
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
        raise DefinitionError(f"'items' must be a list in {source}", info={"path": source})

    problem = Problem()
    for index, entry in enumerate(entries):
        if isinstance(entry, str):
            problem.add(entry)
        elif isinstance(entry, Mapping):
            problem.add(dict(entry))
        else:
            raise DefinitionError(
                f"'items[{index}]' must be a string or a mapping in {source}",
                info={"path": source},
            )
    return problem


__all__ = ["SUPPORTED_SUFFIXES", "build_problem", "load_definition", "load_problem"]
