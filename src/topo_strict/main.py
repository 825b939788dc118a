"""Executable CLI entrypoint for ``topo_strict``."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING

from topo_strict.config import ConfigLoadError, ConfigValidationError
from topo_strict.errors import AddError, CycleError, DefinitionError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence


class ExitCode(IntEnum):
    """Deterministic process exit-code contract."""

    SUCCESS = 0
    INVALID_PROBLEM = 1
    USAGE_ERROR = 2
    CYCLE_DETECTED = 3
    CONFIG_ERROR = 4
    INTERNAL_ERROR = 5


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Entrypoint used by ``python -m topo_strict`` and the console script."""

    try:
        from topo_strict.ui.cli import run_cli

        return _normalize_exit_code(run_cli(argv))
    except SystemExit as exc:
        return _normalize_exit_code(exc.code)
    except Exception as exc:  # noqa: BLE001 - CLI boundary normalization.
        exit_code = _route_exception(exc)
        _emit_failure(exc, exit_code)
        return int(exit_code)


def _normalize_exit_code(raw_code: object) -> int:
    if raw_code is None:
        return int(ExitCode.SUCCESS)
    if isinstance(raw_code, int) and raw_code in set(ExitCode):
        return raw_code
    if isinstance(raw_code, str) and raw_code.strip():
        _write_stderr(raw_code.strip())
    return int(ExitCode.INTERNAL_ERROR)


def _route_exception(exc: BaseException) -> ExitCode:
    if isinstance(exc, CycleError):
        return ExitCode.CYCLE_DETECTED
    if isinstance(exc, (AddError, ValidationError)):
        return ExitCode.INVALID_PROBLEM
    if isinstance(exc, (ConfigLoadError, ConfigValidationError, DefinitionError)):
        return ExitCode.CONFIG_ERROR
    return ExitCode.INTERNAL_ERROR


def _emit_failure(exc: BaseException, exit_code: ExitCode) -> None:
    if exit_code is ExitCode.INTERNAL_ERROR:
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        return
    _write_stderr(str(exc).strip() or exc.__class__.__name__)


def _write_stderr(message: str) -> None:
    sys.stderr.write(message.rstrip("\n") + "\n")


__all__ = ["ExitCode", "cli_entrypoint"]
