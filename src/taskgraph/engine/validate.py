# src/taskgraph/engine/validate.py

"""
Validation rules and error types.

This module holds:
- the exceptions used for command flow control,
- parsing of raw user input (names, durations, counts),
- the consistency check between the relation index and the
  task/subtask containers.

It does NOT prompt or print.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .registry import Registry


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ValidationError(Exception):
    """
    Fatal validation error used for command flow control.

    Raised when an operation must be aborted and the user sent back
    to the menu.
    """


class InputError(ValidationError):
    """Raw user input could not be turned into a value."""


class NotFoundError(LookupError):
    """A task or subtask addressed by name does not exist."""


class TaskNotFound(NotFoundError):
    pass


class SubtaskNotFound(NotFoundError):
    pass


# ---------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------

def parse_name(raw: str, *, what: str = "name") -> str:
    """
    Strip a name read from the console.

    Empty names are rejected; anything else is accepted as is,
    including names already used by another task.
    """
    name = (raw or "").strip()
    if not name:
        raise InputError(f"{what} must be a non-empty string")
    return name


def parse_duration(raw: str) -> int:
    """Parse a duration in days (non-negative integer)."""
    return _parse_non_negative_int(raw, what="duration")


def parse_count(raw: str) -> int:
    """Parse a number of subtasks (non-negative integer)."""
    return _parse_non_negative_int(raw, what="number of subtasks")


def _parse_non_negative_int(raw: str, *, what: str) -> int:
    s = (raw or "").strip()
    try:
        n = int(s)
    except ValueError as e:
        raise InputError(f"{what} must be an integer, got '{s}'") from e

    if n < 0:
        raise InputError(f"{what} must not be negative, got {n}")

    return n


# ---------------------------------------------------------------------
# Relation index consistency
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single consistency problem.

    `code` is a stable identifier suitable for tests and filtering.
    """

    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    issues: Sequence[ValidationIssue]

    @property
    def ok(self) -> bool:
        return not self.issues


def check_relations(registry: "Registry") -> ValidationResult:
    """
    Compare the relation index against the task/subtask containers.

    For every task name the index must hold, as a multiset, exactly the
    subtask names of all tasks with that name. Sources without edges
    must not appear at all.
    """
    expected: dict[str, Counter[str]] = {}
    for task in registry.tasks:
        if task.subtasks:
            expected.setdefault(task.name, Counter()).update(task.subtask_names)

    actual = {source: Counter(dests) for source, dests in registry.relations.items()}

    issues: list[ValidationIssue] = []

    for source in expected.keys() - actual.keys():
        issues.append(
            ValidationIssue(
                code="relation_source_missing",
                message=f"No relations recorded for task '{source}'",
            )
        )

    for source in actual.keys() - expected.keys():
        issues.append(
            ValidationIssue(
                code="relation_source_orphaned",
                message=f"Relations recorded for unknown task '{source}'",
            )
        )

    for source in expected.keys() & actual.keys():
        missing = expected[source] - actual[source]
        extra = actual[source] - expected[source]
        for dest in sorted(missing.elements()):
            issues.append(
                ValidationIssue(
                    code="relation_edge_missing",
                    message=f"Missing edge {source} -> {dest}",
                )
            )
        for dest in sorted(extra.elements()):
            issues.append(
                ValidationIssue(
                    code="relation_edge_orphaned",
                    message=f"Orphaned edge {source} -> {dest}",
                )
            )

    issues.sort(key=lambda i: (i.code, i.message))
    return ValidationResult(issues=tuple(issues))
