"""Normalization and validation of one batch of ``Problem.add`` arguments."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from topo_strict.errors import AddError
from topo_strict.keys import (
    ErrorInfo,
    ErrorType,
    KeyType,
    contains_key,
    get_duplicates,
    is_invalid_key,
    normalize_array_option,
)
from topo_strict.validation import Validatable

OPTION_NAMES: Final[tuple[str, ...]] = ("ids", "before", "after", "group")


class KeySet(Validatable):
    """Canonical form of the arguments of a single ``Problem.add`` call.

    Accepts any number of ids or id sequences, optionally followed by one
    options mapping, plus keyword options. Recognized options are ``ids``,
    ``before``, ``after`` and ``group``::

        KeySet("a", "b", group="g")
        KeySet(["a", "b"], {"after": "x"})
        KeySet({"ids": "a", "before": ["b", "c"]})
    """

    def __init__(self, *args: Any, **options: Any) -> None:
        normalized = self._normalize_args(args, options)
        self.ids: list[Any] = normalized["ids"]
        self.before: list[Any] = normalized["before"]
        self.after: list[Any] = normalized["after"]
        # Falsy group keys other than None are kept so validation can flag them.
        self.group: Any = normalized.get("group")

    def __repr__(self) -> str:
        return (
            f"KeySet(ids={self.ids!r}, before={self.before!r}, "
            f"after={self.after!r}, group={self.group!r})"
        )

    def validate(self, existing_keys: Mapping[str, Sequence[str]]) -> None:
        """Raise ``ValidationError`` if this batch cannot be added.

        ``existing_keys`` maps ``"ids"`` and ``"groups"`` to the keys already
        registered in the problem.
        """
        self._validate(existing_keys)

    def _get_error_info(self, existing_keys: Mapping[str, Sequence[str]]) -> list[ErrorInfo]:
        return [
            *self._get_invalid_key_info(),
            *self._get_duplication_info(),
            *self._get_collision_info(existing_keys),
        ]

    def _get_invalid_key_info(self) -> list[ErrorInfo]:
        info: list[ErrorInfo] = []
        for key_type, keys in (
            (KeyType.ID, self.ids),
            (KeyType.BEFORE, self.before),
            (KeyType.AFTER, self.after),
        ):
            info.extend(
                ErrorInfo(ErrorType.INVALID_KEY, key_type, key)
                for key in keys
                if is_invalid_key(key)
            )
        if self.group is not None and is_invalid_key(self.group):
            info.append(ErrorInfo(ErrorType.INVALID_KEY, KeyType.GROUP, self.group))
        return info

    def _get_duplication_info(self) -> list[ErrorInfo]:
        info = [
            ErrorInfo(ErrorType.DUPLICATION, KeyType.ID, key)
            for key in get_duplicates(self.ids)
        ]
        if self.group is not None and contains_key(self.ids, self.group):
            info.append(ErrorInfo(ErrorType.DUPLICATION, KeyType.GROUP, self.group))
        return info

    def _get_collision_info(self, existing_keys: Mapping[str, Sequence[str]]) -> list[ErrorInfo]:
        existing_ids = existing_keys.get("ids", ())
        existing_groups = existing_keys.get("groups", ())

        info = [
            ErrorInfo(ErrorType.ID_COLLISION, KeyType.ID, key)
            for key in _intersection(self.ids, existing_ids)
        ]
        info.extend(
            ErrorInfo(ErrorType.GROUP_COLLISION, KeyType.ID, key)
            for key in _intersection(self.ids, existing_groups)
        )
        if isinstance(self.group, str) and self.group in set(existing_ids):
            info.append(ErrorInfo(ErrorType.ID_COLLISION, KeyType.GROUP, self.group))
        return info

    @classmethod
    def _normalize_args(
        cls,
        args: Sequence[Any],
        keyword_options: Mapping[str, Any],
    ) -> dict[str, Any]:
        normalized = cls._normalize_unflattened_args(args, keyword_options)
        normalized["ids"] = _flatten(normalized["ids"])
        return normalized

    @classmethod
    def _normalize_unflattened_args(
        cls,
        args: Sequence[Any],
        keyword_options: Mapping[str, Any],
    ) -> dict[str, Any]:
        ids, options = cls._split_args(args)
        if keyword_options:
            if options is not None:
                raise AddError(
                    "Options may be passed as a mapping or as keywords, not both",
                    info={"option": sorted(keyword_options)[0]},
                )
            options = keyword_options
        normalized = cls._normalize_options(options or {})
        normalized["ids"] = ids + normalized["ids"]
        return normalized

    @staticmethod
    def _split_args(args: Sequence[Any]) -> tuple[list[Any], Mapping[str, Any] | None]:
        ids: list[Any] = []
        for index, arg in enumerate(args):
            if isinstance(arg, Mapping):
                if index != len(args) - 1:
                    raise AddError(
                        "The options mapping must be the last argument",
                        info={"arg": args[index + 1]},
                    )
                return ids, arg
            ids.append(arg)
        return ids, None

    @staticmethod
    def _normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
        unknown = sorted(str(name) for name in options if name not in OPTION_NAMES)
        if unknown:
            raise AddError(
                f"Unrecognized add option {unknown[0]!r}",
                info={"option": unknown[0]},
            )

        normalized = dict(options)
        for name in ("ids", "before", "after"):
            normalized[name] = normalize_array_option(options.get(name))
        return normalized


def _flatten(values: Sequence[Any]) -> list[Any]:
    flattened: list[Any] = []
    for value in values:
        if isinstance(value, (list, tuple)):
            flattened.extend(value)
        else:
            flattened.append(value)
    return flattened


def _intersection(keys: Sequence[Any], existing: Sequence[str]) -> list[str]:
    existing_set = set(existing)
    result: list[str] = []
    for key in keys:
        if isinstance(key, str) and key in existing_set and key not in result:
            result.append(key)
    return result


__all__ = ["OPTION_NAMES", "KeySet"]
