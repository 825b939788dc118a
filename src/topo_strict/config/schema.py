"""
topo-strict — settings schema and validation.

Purpose
- Define the command-line settings defaults and strict validation rules.
- Provide deterministic deep-merge helpers for layering settings sources.

Functional requirements
- Validate settings payloads and return structured issues (field path + message).
- Reject unknown sections and fields instead of silently ignoring them.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, TypedDict, cast

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("json", "text")
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


class OutputConfig(TypedDict):
    format: str
    show_problem: bool
    show_graph: bool


class ObservabilityConfig(TypedDict):
    log_level: str
    json_logs: bool


class SolverConfig(TypedDict):
    output: OutputConfig
    observability: ObservabilityConfig


DEFAULT_CONFIG: Final[SolverConfig] = {
    "output": {
        "format": "text",
        "show_problem": False,
        "show_graph": False,
    },
    "observability": {
        "log_level": "WARNING",
        "json_logs": False,
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


class ConfigValidationError(ValueError):
    """Raised when settings validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


def default_config() -> SolverConfig:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``."""

    merged = copy.deepcopy(dict(base))
    _merge_into(merged, overlay)
    return merged


def validate_config(config: Mapping[str, object] | object) -> tuple[ConfigValidationIssue, ...]:
    """Return every issue found in ``config``; empty when valid."""

    issues = _IssueCollector()
    if not isinstance(config, Mapping):
        issues.add("<root>", f"expected object, got {type(config).__name__}")
        return issues.items()

    _reject_unknown_keys(config, set(DEFAULT_CONFIG), "", issues)

    output = config.get("output", {})
    if isinstance(output, Mapping):
        _reject_unknown_keys(output, set(DEFAULT_CONFIG["output"]), "output", issues)
        if "format" in output:
            _check_enum(output["format"], "output.format", issues, allowed_values=OUTPUT_FORMATS)
        for name in ("show_problem", "show_graph"):
            if name in output:
                _check_bool(output[name], f"output.{name}", issues)
    else:
        issues.add("output", f"expected object, got {type(output).__name__}")

    observability = config.get("observability", {})
    if isinstance(observability, Mapping):
        _reject_unknown_keys(
            observability, set(DEFAULT_CONFIG["observability"]), "observability", issues
        )
        if "log_level" in observability:
            _check_enum(
                observability["log_level"],
                "observability.log_level",
                issues,
                allowed_values=LOG_LEVELS,
            )
        if "json_logs" in observability:
            _check_bool(observability["json_logs"], "observability.json_logs", issues)
    else:
        issues.add("observability", f"expected object, got {type(observability).__name__}")

    return issues.items()


def assert_valid_config(config: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate ``config`` and raise ``ConfigValidationError`` on failure."""

    issues = validate_config(config)
    if issues:
        raise ConfigValidationError(issues)
    return merge_config(default_config(), cast("Mapping[str, object]", config))


def _check_bool(value: object, path: str, issues: _IssueCollector) -> None:
    if not isinstance(value, bool):
        issues.add(path, f"expected boolean, got {type(value).__name__}")


def _check_enum(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> None:
    if not isinstance(value, str):
        issues.add(path, f"expected string, got {type(value).__name__}")
        return
    if value not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {value!r}; expected one of: {expected}")


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(str(key) for key in payload):
        if key not in allowed:
            issues.add(f"{path}.{key}" if path else key, "unknown field")


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge_into(existing, value)
        elif isinstance(value, Mapping):
            nested: dict[str, Any] = {}
            _merge_into(nested, value)
            target[key] = nested
        else:
            target[key] = copy.deepcopy(value)


__all__ = [
    "DEFAULT_CONFIG",
    "LOG_LEVELS",
    "OUTPUT_FORMATS",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ObservabilityConfig",
    "OutputConfig",
    "SolverConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "validate_config",
]
