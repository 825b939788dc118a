"""Error taxonomy and aggregation helpers for topo-strict.

Every error raised by the library derives from ``TopoStrictError`` and carries
a structured ``info`` mapping next to its message, so callers can react to the
offending value without parsing text.

Validation failures are reported as one ``ValidationError`` wrapping every
individual ``ProblemKeyError`` found. The wrapped errors are available both as
``ValidationError.errors`` and as the ``ExceptionGroup`` set as ``__cause__``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, ClassVar, TypeVar

_E = TypeVar("_E", bound=BaseException)


class TopoStrictError(Exception):
    """Base class for all topo-strict errors."""

    default_message: ClassVar[str] = "topo-strict failure"

    def __init__(
        self,
        message: str | None = None,
        *,
        info: Mapping[str, Any] | None = None,
    ) -> None:
        self.info: dict[str, Any] = dict(info or {})
        self.short_message = (
            message if message is not None else self.get_default_message(self.info)
        )
        super().__init__(self.short_message)

    @property
    def message(self) -> str:
        return str(self)

    @classmethod
    def get_default_message(cls, info: Mapping[str, Any]) -> str:
        return cls.default_message


class AddError(TopoStrictError):
    """Raised when ``Problem.add`` receives arguments of an unsupported shape."""

    default_message = "Invalid arguments passed to add method"


class ProblemKeyError(TopoStrictError):
    """A single problem key is not acceptable.

    Instances are collected inside ``ValidationError`` when adding to, solving
    or compiling a ``Problem``, and raised directly by ``Graph`` node lookups.
    The offending key is stored as ``info["key"]``.
    """

    default_message = "Invalid key"

    @property
    def key(self) -> Any:
        return self.info.get("key")


class ValidationError(TopoStrictError):
    """Raised when key validation finds one or more problems."""

    default_message = "Key validation failed"

    def __init__(self, errors: Sequence[BaseException]) -> None:
        self.errors: tuple[BaseException, ...] = tuple(errors)
        super().__init__()
        if self.errors:
            rendered = "\n".join(f"- {error}" for error in self.errors)
            self.args = (f"{self.short_message}:\n{rendered}",)

    @property
    def keys(self) -> tuple[Any, ...]:
        """Offending keys of every wrapped ``ProblemKeyError``, in order."""
        return tuple(
            error.key for error in self.errors if isinstance(error, ProblemKeyError)
        )


class CycleError(TopoStrictError):
    """Raised when a cycle is detected while solving a Problem or Graph."""

    @classmethod
    def get_default_message(cls, info: Mapping[str, Any]) -> str:
        message = "Cycle detected"
        node_id = info.get("id")
        if node_id:
            message += f" at node with id {node_id!r}"
        return message

    @property
    def node_id(self) -> str | None:
        return self.info.get("id")


class DefinitionError(TopoStrictError):
    """Raised when a problem definition file cannot be loaded."""

    default_message = "Invalid problem definition"


def aggregate_errors(errors: Iterable[Exception]) -> ExceptionGroup[Exception] | None:
    """Combine ``errors`` into one ``ExceptionGroup``, or ``None`` if there are none."""

    collected = list(errors)
    if not collected:
        return None
    return ExceptionGroup(ValidationError.default_message, collected)


def filter_errors(error: BaseException, error_type: type[_E]) -> list[_E]:
    """Return every error of ``error_type`` reachable from ``error``.

    Walks ``__cause__`` chains, ``ExceptionGroup`` members and the ``errors``
    of ``ValidationError`` instances. Each error is reported once, depth-first.
    """

    matches: list[_E] = []
    seen: set[int] = set()
    for item in _iter_nested(error, seen):
        if isinstance(item, error_type):
            matches.append(item)
    return matches


def _iter_nested(error: BaseException, seen: set[int]) -> Iterator[BaseException]:
    if id(error) in seen:
        return
    seen.add(id(error))
    yield error

    children: list[BaseException] = []
    if isinstance(error, ValidationError):
        children.extend(error.errors)
    if isinstance(error, BaseExceptionGroup):
        children.extend(error.exceptions)
    if error.__cause__ is not None:
        children.append(error.__cause__)

    for child in children:
        yield from _iter_nested(child, seen)


__all__ = [
    "AddError",
    "CycleError",
    "DefinitionError",
    "ProblemKeyError",
    "TopoStrictError",
    "ValidationError",
    "aggregate_errors",
    "filter_errors",
]
