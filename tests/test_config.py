# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskgraph.config import ConfigError, Settings, load_settings


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "taskgraph.yml"
    p.write_text(text, encoding="utf-8")
    return p


def test_defaults_without_file_or_env() -> None:
    s = load_settings(env={})

    assert s == Settings()
    assert s.log_level_no == logging.WARNING


def test_yaml_file_values(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "log_level: debug\n"
        "log_file: logs/taskgraph.log\n"
        "graph_order: sorted\n"
        "color: false\n",
    )

    s = load_settings(path, env={})

    assert s.log_level == "DEBUG"
    assert s.log_file == Path("logs/taskgraph.log")
    assert s.graph_order == "sorted"
    assert s.color is False


def test_config_path_from_env_and_env_overrides(tmp_path: Path) -> None:
    path = _write(tmp_path, "graph_order: sorted\nlog_level: INFO\n")

    s = load_settings(
        env={
            "TASKGRAPH_CONFIG": str(path),
            "TASKGRAPH_LOG_LEVEL": "error",
            "TASKGRAPH_COLOR": "no",
        }
    )

    assert s.graph_order == "sorted"
    assert s.log_level == "ERROR"
    assert s.color is False


@pytest.mark.parametrize(
    "text, match",
    [
        ("- a\n- b\n", "mapping"),
        ("colour: true\n", "unknown key"),
        ("color: maybe\n", "boolean"),
        ("graph_order: random\n", "graph_order"),
        ("log_level: LOUD\n", "log_level"),
        ("log_level: [1\n", "invalid YAML"),
        ("1: a\nfoo: b\n", "keys must be strings"),
    ],
)
def test_invalid_yaml_settings(tmp_path: Path, text: str, match: str) -> None:
    path = _write(tmp_path, text)

    with pytest.raises(ConfigError, match=match):
        load_settings(path, env={})


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="cannot read"):
        load_settings(tmp_path / "nope.yml", env={})


def test_env_graph_order_and_log_file_override_yaml(tmp_path: Path) -> None:
    path = _write(tmp_path, "graph_order: insertion\nlog_file: from-yaml.log\n")

    s = load_settings(
        path,
        env={
            "TASKGRAPH_GRAPH_ORDER": " Sorted ",
            "TASKGRAPH_LOG_FILE": str(tmp_path / "from-env.log"),
        },
    )

    assert s.graph_order == "sorted"
    assert s.log_file == tmp_path / "from-env.log"


def test_env_invalid_graph_order_is_rejected() -> None:
    with pytest.raises(ConfigError, match="graph_order"):
        load_settings(env={"TASKGRAPH_GRAPH_ORDER": "random"})
