# src/taskgraph/engine/registry.py

"""
Task registry and relation index.

The registry owns every Task (and through them every Subtask) and the
relation index recording task name -> subtask name edges.

Rules:
- all mutations that affect edges go through the registry,
  which applies the change to the containers first and then to the
  index, so both stay in step;
- entities never call back into the registry;
- names are not unique: lookups by name return the first match in
  insertion order, ids are the stable handle.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, Iterator, Optional

from .model import Rename, Subtask, Task
from .validate import TaskNotFound

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Relation index
# ---------------------------------------------------------------------

class RelationIndex:
    """
    Ordered mapping source name -> list of destination names.

    Sources keep the order in which they were first added.
    A source whose list becomes empty is dropped.
    """

    def __init__(self) -> None:
        self._edges: dict[str, list[str]] = {}

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> "RelationIndex":
        """Derive the index from the task/subtask containers."""
        index = cls()
        for task in tasks:
            for subtask in task.subtasks:
                index.add_edge(task.name, subtask.name)
        return index

    def add_edge(self, source: str, destination: str) -> None:
        self._edges.setdefault(source, []).append(destination)

    def remove_edge(self, source: str, destination: str) -> bool:
        """
        Remove the first `destination` recorded under `source`.

        Returns False (and changes nothing) if there is no such edge.
        """
        dests = self._edges.get(source)
        if not dests or destination not in dests:
            return False

        dests.remove(destination)
        if not dests:
            del self._edges[source]
        return True

    def destinations(self, source: str) -> list[str]:
        return list(self._edges.get(source, ()))

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for source, dests in self._edges.items():
            yield source, list(dests)

    def __contains__(self, source: object) -> bool:
        return source in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelationIndex):
            return NotImplemented
        return self._edges == other._edges

    def __repr__(self) -> str:
        return f"RelationIndex({self._edges!r})"


# ---------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------

class Registry:
    """
    Owner of all tasks and of the relation index.
    """

    def __init__(self) -> None:
        self.tasks: list[Task] = []
        self.relations = RelationIndex()
        self._task_seq = itertools.count(1)
        self._subtask_seq = itertools.count(1)

    # -----------------------------------------------------------------
    # Factories (ids are registry-scoped)
    # -----------------------------------------------------------------

    def new_task(self, name: str, duration: int) -> Task:
        return Task(task_id=f"T{next(self._task_seq)}", name=name, duration=duration)

    def new_subtask(self, name: str, duration: int) -> Subtask:
        return Subtask(subtask_id=f"S{next(self._subtask_seq)}", name=name, duration=duration)

    # -----------------------------------------------------------------
    # Tasks
    # -----------------------------------------------------------------

    def add_task(self, task: Task) -> None:
        """
        Append a task and record one edge per subtask it already owns.
        """
        self.tasks.append(task)
        for subtask in task.subtasks:
            self.add_edge(task.name, subtask.name)

        logger.debug(
            "Added task %s '%s' (%d days, %d subtasks)",
            task.task_id,
            task.name,
            task.duration,
            len(task.subtasks),
        )

    def find_task(self, name: str) -> Optional[Task]:
        """Return the first task called `name`, or None."""
        for task in self.tasks:
            if task.name == name:
                return task
        return None

    def find_task_by_id(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None

    def remove_task(self, name: str) -> Task:
        """
        Remove the first task called `name` together with its subtasks.

        Only the edges of the removed task are dropped; another task with
        the same name keeps its own. Raises TaskNotFound if nothing matches.
        """
        task = self.find_task(name)
        if task is None:
            raise TaskNotFound(f"Task not found: {name}")

        self.tasks.remove(task)
        for subtask in task.remove():
            self.remove_edge(task.name, subtask.name)

        logger.debug("Removed task %s '%s'", task.task_id, task.name)
        return task

    def edit_task(self, task: Task, new_name: str, new_duration: int) -> Rename:
        """
        Rename/re-time a task and move its edges to the new name.
        """
        change = task.edit(new_name, new_duration)
        if change.changed:
            for subtask in task.subtasks:
                self.remove_edge(change.old_name, subtask.name)
                self.add_edge(change.new_name, subtask.name)

        logger.debug(
            "Edited task %s: '%s' -> '%s' (%d days)",
            task.task_id,
            change.old_name,
            change.new_name,
            new_duration,
        )
        return change

    # -----------------------------------------------------------------
    # Subtasks
    # -----------------------------------------------------------------

    def add_subtask(self, task: Task, subtask: Subtask) -> None:
        task.add_subtask(subtask)
        self.add_edge(task.name, subtask.name)
        logger.debug("Added subtask %s '%s' to task %s", subtask.subtask_id, subtask.name, task.task_id)

    def remove_subtask(self, task: Task, name: str) -> Subtask:
        """
        Remove the first subtask of `task` called `name` and its edge.

        Raises SubtaskNotFound (from Task.remove_subtask) if nothing matches.
        """
        subtask = task.remove_subtask(name)
        self.remove_edge(task.name, subtask.name)
        logger.debug("Removed subtask %s '%s' from task %s", subtask.subtask_id, name, task.task_id)
        return subtask

    def edit_subtask(
        self,
        task: Task,
        subtask: Subtask,
        new_name: str,
        new_duration: int,
    ) -> Rename:
        change = subtask.edit(new_name, new_duration)
        if change.changed:
            self.remove_edge(task.name, change.old_name)
            self.add_edge(task.name, change.new_name)

        logger.debug(
            "Edited subtask %s of task %s: '%s' -> '%s' (%d days)",
            subtask.subtask_id,
            task.task_id,
            change.old_name,
            change.new_name,
            new_duration,
        )
        return change

    # -----------------------------------------------------------------
    # Relation index
    # -----------------------------------------------------------------

    def add_edge(self, source: str, destination: str) -> None:
        self.relations.add_edge(source, destination)

    def remove_edge(self, source: str, destination: str) -> None:
        """Remove one `source -> destination` edge; no-op if absent."""
        if not self.relations.remove_edge(source, destination):
            logger.debug("No edge %s -> %s to remove", source, destination)

    def rebuild_relations(self) -> None:
        """Re-derive the relation index from the containers."""
        self.relations = RelationIndex.from_tasks(self.tasks)
