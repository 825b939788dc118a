"""
topo-strict — unit tests for the settings loader

Purpose
- Validate deterministic settings loading from defaults, TOML, env overrides, and CLI overrides.

What this test file should cover
- Precedence: CLI > env > file > defaults.
- Env var path mapping and boolean coercion.
- Implicit ``topo-strict.toml`` discovery and explicit path requirements.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from topo_strict.config import (
    DEFAULT_CONFIG,
    ConfigLoadError,
    ConfigValidationError,
    load_config,
)

pytestmark = pytest.mark.unit


def _write_config(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_any_source(tmp_path: Path) -> None:
    assert load_config(environ={}, cwd=tmp_path) == DEFAULT_CONFIG


def test_loader_precedence_default_file_env_cli(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "settings.toml",
        """
[output]
format = "json"
""".strip(),
    )

    file_loaded = load_config(config_path, environ={})
    env_loaded = load_config(config_path, environ={"TOPO_STRICT_OUTPUT_FORMAT": "text"})
    cli_loaded = load_config(
        config_path,
        environ={"TOPO_STRICT_OUTPUT_FORMAT": "text"},
        cli_overrides={"output.format": "json"},
    )

    assert file_loaded["output"]["format"] == "json"
    assert env_loaded["output"]["format"] == "text"
    assert cli_loaded["output"]["format"] == "json"
    assert cli_loaded["observability"] == DEFAULT_CONFIG["observability"]


def test_implicit_config_file_is_discovered_in_cwd(tmp_path: Path) -> None:
    _write_config(
        tmp_path / "topo-strict.toml",
        """
[observability]
log_level = "DEBUG"
""".strip(),
    )

    loaded = load_config(environ={}, cwd=tmp_path)

    assert loaded["observability"]["log_level"] == "DEBUG"
    assert loaded["output"] == DEFAULT_CONFIG["output"]


def test_explicit_config_file_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="config file not found"):
        load_config(tmp_path / "missing.toml", environ={})


def test_invalid_toml_raises_load_error(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "settings.toml", "[output\nformat = 1")

    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_config(config_path, environ={})


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), (" Yes ", True), ("on", True), ("0", False), ("off", False)],
)
def test_env_boolean_coercion(tmp_path: Path, raw: str, expected: bool) -> None:
    loaded = load_config(
        environ={"TOPO_STRICT_OBSERVABILITY_JSON_LOGS": raw, "TOPO_STRICT_OUTPUT_SHOW_GRAPH": raw},
        cwd=tmp_path,
    )

    assert loaded["observability"]["json_logs"] is expected
    assert loaded["output"]["show_graph"] is expected


def test_env_boolean_rejects_other_values(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="TOPO_STRICT_OUTPUT_SHOW_PROBLEM"):
        load_config(environ={"TOPO_STRICT_OUTPUT_SHOW_PROBLEM": "maybe"}, cwd=tmp_path)


def test_unrelated_env_vars_are_ignored(tmp_path: Path) -> None:
    loaded = load_config(
        environ={"TOPO_STRICT_UNKNOWN": "x", "OUTPUT_FORMAT": "json"},
        cwd=tmp_path,
    )

    assert loaded == DEFAULT_CONFIG


def test_none_cli_overrides_are_skipped(tmp_path: Path) -> None:
    loaded = load_config(
        environ={"TOPO_STRICT_OUTPUT_FORMAT": "json"},
        cli_overrides={"output.format": None, "output.show_problem": True},
        cwd=tmp_path,
    )

    assert loaded["output"] == {"format": "json", "show_problem": True, "show_graph": False}


def test_invalid_env_value_fails_validation(tmp_path: Path) -> None:
    with pytest.raises(ConfigValidationError) as error:
        load_config(environ={"TOPO_STRICT_OUTPUT_FORMAT": "xml"}, cwd=tmp_path)

    assert [issue.path for issue in error.value.issues] == ["output.format"]


def test_invalid_file_reports_every_issue(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "settings.toml",
        """
[output]
format = "yaml"
show_graph = "yes"
colour = true

[observability]
log_level = 10
""".strip(),
    )

    with pytest.raises(ConfigValidationError) as error:
        load_config(config_path, environ={})

    assert [issue.path for issue in error.value.issues] == [
        "output.colour",
        "output.format",
        "output.show_graph",
        "observability.log_level",
    ]
