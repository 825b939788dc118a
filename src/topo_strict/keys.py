"""Key predicates and error-info rendering shared by key validation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from topo_strict.errors import ProblemKeyError


class ErrorType(StrEnum):
    """Situation that made a key unacceptable."""

    INVALID_KEY = "invalidKey"
    DUPLICATION = "duplication"
    ID_COLLISION = "idCollision"
    GROUP_COLLISION = "groupCollision"
    MISSING_TARGET = "missingTarget"


class KeyType(StrEnum):
    """Role the offending key plays in an ``add`` call."""

    ID = "id"
    BEFORE = "before"
    AFTER = "after"
    GROUP = "group"

    @property
    def display_name(self) -> str:
        if self is KeyType.ID:
            return "Id"
        return f"{self.value.capitalize()} key"


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Structured description of one key problem, rendered by ``error_for_info``."""

    type: ErrorType
    key_type: KeyType
    key: Any


def is_invalid_key(key: object) -> bool:
    """Return ``True`` unless ``key`` is a non-empty string."""
    return not isinstance(key, str) or not key


def same_key(left: object, right: object) -> bool:
    # 0 == False and 1 == True must not count as the same key.
    return type(left) is type(right) and left == right


def contains_key(keys: Sequence[object], key: object) -> bool:
    return any(same_key(candidate, key) for candidate in keys)


def get_duplicates(keys: Sequence[object]) -> list[object]:
    """Return each value appearing more than once in ``keys``, in first-seen order."""

    duplicates: list[object] = []
    for index, key in enumerate(keys):
        if contains_key(duplicates, key):
            continue
        if contains_key(keys[index + 1 :], key):
            duplicates.append(key)
    return duplicates


def normalize_array_option(option: object) -> list[Any]:
    """Coerce an ``ids``/``before``/``after`` option to a new list.

    ``None`` becomes an empty list, lists and tuples are copied, and any other
    value (including falsy ones such as ``""`` or ``0``) is wrapped.
    """

    if option is None:
        return []
    if isinstance(option, (list, tuple)):
        return list(option)
    return [option]


def error_for_info(info: ErrorInfo) -> ProblemKeyError:
    """Convert an ``ErrorInfo`` record into a ``ProblemKeyError`` with a clear message."""

    subject = f"{info.key_type.display_name} {info.key!r}"

    if info.type is ErrorType.INVALID_KEY:
        message = f"{subject} must be a non-empty string"
    elif info.type is ErrorType.DUPLICATION:
        if info.key_type is KeyType.GROUP:
            message = f"{subject} also appears in ids"
        else:
            message = f"Duplicate id {info.key!r}"
    elif info.type is ErrorType.ID_COLLISION:
        if info.key_type is KeyType.GROUP:
            message = f"{subject} is already in use as an id"
        else:
            message = f"{subject} has already been added"
    elif info.type is ErrorType.GROUP_COLLISION:
        message = f"{subject} is already in use as a group key"
    else:
        message = f"{subject} does not exist"

    return ProblemKeyError(message, info={"key": info.key})


__all__ = [
    "ErrorInfo",
    "ErrorType",
    "KeyType",
    "contains_key",
    "error_for_info",
    "get_duplicates",
    "is_invalid_key",
    "normalize_array_option",
    "same_key",
]
