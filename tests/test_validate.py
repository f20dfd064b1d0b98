# tests/test_validate.py

from __future__ import annotations

import pytest

from taskgraph.engine.validate import (
    InputError,
    NotFoundError,
    SubtaskNotFound,
    TaskNotFound,
    ValidationError,
    parse_count,
    parse_duration,
    parse_name,
)


@pytest.mark.parametrize("raw, expected", [("5", 5), (" 0 ", 0), ("12\n", 12)])
def test_parse_duration_accepts_non_negative_integers(raw, expected) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "2.5", "3 days", "-1"])
def test_parse_duration_rejects_bad_input(raw) -> None:
    with pytest.raises(InputError):
        parse_duration(raw)


def test_parse_count_message_names_the_field() -> None:
    with pytest.raises(InputError, match="number of subtasks"):
        parse_count("many")


def test_parse_name_strips_and_rejects_empty() -> None:
    assert parse_name("  Build  ") == "Build"
    assert parse_name("Write docs") == "Write docs"

    with pytest.raises(InputError):
        parse_name("   ")


def test_error_hierarchy() -> None:
    assert issubclass(InputError, ValidationError)
    assert issubclass(TaskNotFound, NotFoundError)
    assert issubclass(SubtaskNotFound, NotFoundError)
    assert issubclass(NotFoundError, LookupError)
