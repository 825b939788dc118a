"""Shared gather-then-raise validation logic."""

from __future__ import annotations

from typing import Any

import structlog

from topo_strict.errors import ProblemKeyError, ValidationError, aggregate_errors
from topo_strict.keys import ErrorInfo, error_for_info

logger = structlog.get_logger(__name__)


class Validatable:
    """Base for objects that collect every key problem before failing.

    Subclasses override ``_get_error_info``; ``_validate`` renders the records
    and raises a single ``ValidationError`` when any exist.
    """

    def _validate(self, *args: Any) -> None:
        errors = self._get_errors(*args)
        group = aggregate_errors(errors)
        if group is not None:
            logger.debug(
                "key_validation_failed",
                source=type(self).__name__,
                error_count=len(errors),
            )
            raise ValidationError(group.exceptions) from group

    def _get_errors(self, *args: Any) -> list[ProblemKeyError]:
        return [error_for_info(info) for info in self._get_error_info(*args)]

    def _get_error_info(self, *args: Any) -> list[ErrorInfo]:
        return []


__all__ = ["Validatable"]
