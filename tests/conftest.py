# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from taskgraph.config import Settings
from taskgraph.engine.model import Task
from taskgraph.engine.registry import Registry


@pytest.fixture()
def settings() -> Settings:
    """Defaults with colour off so output can be compared verbatim."""
    return Settings(color=False)


@pytest.fixture()
def registry() -> Registry:
    return Registry()


@pytest.fixture()
def make_task(registry: Registry) -> Callable[..., Task]:
    """
    Build and register a task in one call.

    make_task("Build", 5, [("Design", 2), ("Code", 3)])
    """

    def _make(name: str, duration: int, subtasks: Iterable[tuple[str, int]] = ()) -> Task:
        task = registry.new_task(name, duration)
        for sub_name, sub_duration in subtasks:
            task.add_subtask(registry.new_subtask(sub_name, sub_duration))
        registry.add_task(task)
        return task

    return _make


@pytest.fixture()
def feed_input(monkeypatch: pytest.MonkeyPatch) -> Callable[[Iterable[str]], list[str]]:
    """
    Replace builtins.input with a scripted sequence of lines.

    Returns the list the prompts are collected into. Running past the
    end of the script raises EOFError, like a closed stdin.
    """

    def _feed(lines: Iterable[str]) -> list[str]:
        it = iter(lines)
        prompts: list[str] = []

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
        return prompts

    return _feed
