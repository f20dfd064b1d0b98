# src/taskgraph/engine/render.py

"""
Rendering helpers for console output.

This module is responsible for:
- task / subtask lines (Display Tasks),
- the relation graph listing (Display Graph).

It is presentation-only: it must not mutate registry state.
"""

from __future__ import annotations

import sys
from typing import Iterable

from .model import Subtask, Task
from .registry import RelationIndex


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[90m"

GRAPH_ORDERS = ("insertion", "sorted")


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    return sys.stdout.isatty()


def _paint(s: str, code: str, *, color: bool) -> str:
    if color and _supports_color():
        return f"{code}{s}{_RESET}"
    return s


# ---------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------

def format_subtask(subtask: Subtask) -> str:
    return f"    Subtask: {subtask.name} ({subtask.duration} days)"


def format_task(task: Task, *, color: bool = False) -> list[str]:
    """
    Lines for one task: its header, then one line per subtask
    in insertion order.
    """
    header = f"Task: {task.name}, Duration: {task.duration} days"
    lines = [_paint(header, _BOLD, color=color)]
    lines.extend(format_subtask(s) for s in task.subtasks)
    return lines


def render_tasks(tasks: Iterable[Task], *, color: bool = True) -> None:
    """
    Print every task in insertion order.

    Prints a placeholder line when there is nothing to show.
    """
    shown = False
    for task in tasks:
        for line in format_task(task, color=color):
            print(line)
        shown = True

    if not shown:
        print(_paint("No tasks.", _DIM, color=color))


# ---------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------

def format_graph(relations: RelationIndex, *, order: str = "insertion") -> list[str]:
    """
    One line per source: `source -> dest dest ...`.

    `order` is "insertion" (index order) or "sorted" (by source name;
    destinations keep their recorded order).
    """
    if order not in GRAPH_ORDERS:
        raise ValueError(f"Unknown graph order: {order}")

    items = list(relations.items())
    if order == "sorted":
        items.sort(key=lambda item: item[0])

    return [f"{source} -> {' '.join(dests)}" for source, dests in items]


def render_graph(relations: RelationIndex, *, order: str = "insertion", color: bool = True) -> None:
    lines = format_graph(relations, order=order)
    if not lines:
        print(_paint("No relations.", _DIM, color=color))
        return

    for line in lines:
        print(line)
