# src/taskgraph/engine/model.py

"""
Core domain models.

This module defines the in-memory representations of tasks and
subtasks, along with the change records their mutations return.

Entities never hold a reference to the registry that owns them:
a mutation returns what changed and the owner updates its own
bookkeeping. No console I/O should happen here.
"""

from dataclasses import dataclass, field
from typing import Optional

from .validate import SubtaskNotFound


# ---------------------------------------------------------------------
# Change records
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Rename:
    """
    Result of an edit: the name before and after.

    Returned even when the name did not change.
    """

    old_name: str
    new_name: str

    @property
    def changed(self) -> bool:
        return self.old_name != self.new_name


# ---------------------------------------------------------------------
# Subtask
# ---------------------------------------------------------------------

@dataclass(slots=True)
class Subtask:
    """
    Leaf unit of work, owned by exactly one Task.

    Removal is the owning Task's job (see Task.remove_subtask).
    """

    subtask_id: str
    name: str
    duration: int

    def edit(self, new_name: str, new_duration: int) -> Rename:
        change = Rename(old_name=self.name, new_name=new_name)
        self.name = new_name
        self.duration = new_duration
        return change


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(slots=True)
class Task:
    """
    Top-level unit of work.

    Notes:
    - task_id is assigned by the registry and never changes.
    - name is a display attribute; several tasks may share it.
    - subtasks keep insertion order; duplicate names are allowed.
    """

    task_id: str
    name: str
    duration: int
    subtasks: list[Subtask] = field(default_factory=list)

    # -----------------------------------------------------------------
    # Subtasks
    # -----------------------------------------------------------------

    def add_subtask(self, subtask: Subtask) -> None:
        self.subtasks.append(subtask)

    def find_subtask(self, name: str) -> Optional[Subtask]:
        """Return the first subtask called `name`, or None."""
        for subtask in self.subtasks:
            if subtask.name == name:
                return subtask
        return None

    def remove_subtask(self, name: str) -> Subtask:
        """
        Remove the first subtask called `name` and return it.

        Raises SubtaskNotFound if there is none; the sequence is then
        left untouched.
        """
        for i, subtask in enumerate(self.subtasks):
            if subtask.name == name:
                del self.subtasks[i]
                return subtask

        raise SubtaskNotFound(f"Subtask not found: {name}")

    # -----------------------------------------------------------------
    # Own lifecycle
    # -----------------------------------------------------------------

    def edit(self, new_name: str, new_duration: int) -> Rename:
        change = Rename(old_name=self.name, new_name=new_name)
        self.name = new_name
        self.duration = new_duration
        return change

    def remove(self) -> list[Subtask]:
        """Discard every owned subtask and return them."""
        removed = list(self.subtasks)
        self.subtasks.clear()
        return removed

    # -----------------------------------------------------------------
    # Convenience properties
    # -----------------------------------------------------------------

    @property
    def subtask_names(self) -> list[str]:
        return [s.name for s in self.subtasks]
