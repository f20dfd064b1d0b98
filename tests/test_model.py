# tests/test_model.py

from __future__ import annotations

import pytest

from taskgraph.engine.model import Rename, Subtask, Task
from taskgraph.engine.validate import SubtaskNotFound


def _task(*names: str) -> Task:
    task = Task(task_id="T1", name="Build", duration=5)
    for i, name in enumerate(names, start=1):
        task.add_subtask(Subtask(subtask_id=f"S{i}", name=name, duration=i))
    return task


def test_add_subtask_keeps_insertion_order() -> None:
    task = _task("Design", "Code", "Test")
    assert task.subtask_names == ["Design", "Code", "Test"]


def test_find_subtask_returns_each_added_subtask_once() -> None:
    names = ["Design", "Code", "Test", "Ship"]
    task = _task(*names)

    found = [task.find_subtask(n) for n in names]

    assert [s.name for s in found] == names
    assert len({s.subtask_id for s in found}) == len(names)


def test_find_subtask_first_match_wins_and_missing_is_none() -> None:
    task = _task("Code", "Code")

    assert task.find_subtask("Code").subtask_id == "S1"
    assert task.find_subtask("Nope") is None


def test_remove_subtask_leaves_siblings_in_order() -> None:
    task = _task("Design", "Code", "Test")

    removed = task.remove_subtask("Code")

    assert removed.name == "Code"
    assert task.find_subtask("Code") is None
    assert task.subtask_names == ["Design", "Test"]


def test_remove_subtask_removes_only_first_duplicate() -> None:
    task = _task("Code", "Design", "Code")

    removed = task.remove_subtask("Code")

    assert removed.subtask_id == "S1"
    assert [s.subtask_id for s in task.subtasks] == ["S2", "S3"]


def test_remove_missing_subtask_raises_and_changes_nothing() -> None:
    task = _task("Design", "Code")

    with pytest.raises(SubtaskNotFound):
        task.remove_subtask("Deploy")

    assert task.subtask_names == ["Design", "Code"]


def test_edit_returns_rename_record() -> None:
    task = _task()

    change = task.edit("Release", 7)

    assert change == Rename(old_name="Build", new_name="Release")
    assert change.changed
    assert (task.name, task.duration) == ("Release", 7)


def test_subtask_edit_overwrites_both_fields() -> None:
    sub = Subtask(subtask_id="S1", name="Code", duration=3)

    change = sub.edit("Code", 4)

    assert not change.changed
    assert (sub.name, sub.duration) == ("Code", 4)


def test_task_remove_discards_and_returns_subtasks() -> None:
    task = _task("Design", "Code")

    removed = task.remove()

    assert [s.name for s in removed] == ["Design", "Code"]
    assert task.subtasks == []
