# src/taskgraph/cli.py

"""
Command-line interface for taskgraph.

This module:
- defines argument parsing for the program itself,
- runs the numbered menu loop,
- delegates registry mutation to engine modules and output to render.

KISS rule: keep menu handlers small and predictable.
"""

import argparse
import dataclasses
import logging
from typing import Callable

from taskgraph.config import ConfigError, Settings, load_settings
from taskgraph.engine.registry import Registry
from taskgraph.engine.render import GRAPH_ORDERS, render_graph, render_tasks
from taskgraph.engine.validate import (
    NotFoundError,
    SubtaskNotFound,
    TaskNotFound,
    ValidationError,
    parse_count,
    parse_duration,
    parse_name,
)
from taskgraph.logging_setup import setup_logging

logger = logging.getLogger(__name__)

MENU = (
    "Menu:\n"
    "1. Add Task\n"
    "2. Display Tasks\n"
    "3. Edit Task\n"
    "4. Edit Subtask\n"
    "5. Remove Task\n"
    "6. Remove Subtask\n"
    "7. Display Graph\n"
    "8. Exit"
)

EXIT_CHOICE = "8"


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskgraph",
        description="Interactive task/subtask organizer",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="YAML settings file (default: $TASKGRAPH_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (logs go to stderr)",
    )
    parser.add_argument(
        "--graph-order",
        type=str,
        default=None,
        choices=list(GRAPH_ORDERS),
        help="Order of Display Graph lines",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    return parser


# ---------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------

def _ask(prompt: str) -> str:
    """Read one line; EOFError propagates to the menu loop."""
    return input(prompt)


def _ask_name(prompt: str) -> str:
    return parse_name(_ask(prompt))


def _ask_duration(prompt: str) -> int:
    return parse_duration(_ask(prompt))


# ---------------------------------------------------------------------
# Menu handlers
# ---------------------------------------------------------------------

def menu_add_task(registry: Registry, settings: Settings) -> None:
    """
    Collect a task and its subtasks, then register it in one step.

    Any invalid input aborts the whole task: nothing half-built is added.
    """
    name = _ask_name("Enter task name: ")
    duration = _ask_duration("Enter task duration (in days): ")

    task = registry.new_task(name, duration)

    count = parse_count(_ask(f"Enter the number of subtasks for task {task.name}: "))
    for _ in range(count):
        subtask_name = _ask_name("Enter subtask name: ")
        subtask_duration = _ask_duration("Enter subtask duration (in days): ")
        task.add_subtask(registry.new_subtask(subtask_name, subtask_duration))

    registry.add_task(task)
    print("Task added successfully.")


def menu_display_tasks(registry: Registry, settings: Settings) -> None:
    render_tasks(registry.tasks, color=settings.color)


def menu_edit_task(registry: Registry, settings: Settings) -> None:
    task_name = _ask("Enter the name of the task to edit: ").strip()

    task = registry.find_task(task_name)
    if task is None:
        raise TaskNotFound(f"Task not found: {task_name}")

    new_name = _ask_name("Enter the new name for the task: ")
    new_duration = _ask_duration("Enter the new duration for the task (in days): ")

    registry.edit_task(task, new_name, new_duration)
    print("Task edited successfully.")


def menu_edit_subtask(registry: Registry, settings: Settings) -> None:
    task_name = _ask("Enter the name of the task containing the subtask to edit: ").strip()

    task = registry.find_task(task_name)
    if task is None:
        raise TaskNotFound(f"Task not found: {task_name}")

    subtask_name = _ask("Enter the name of the subtask to edit: ").strip()
    subtask = task.find_subtask(subtask_name)
    if subtask is None:
        raise SubtaskNotFound(f"Subtask not found: {subtask_name}")

    new_name = _ask_name("Enter the new name for the subtask: ")
    new_duration = _ask_duration("Enter the new duration for the subtask (in days): ")

    registry.edit_subtask(task, subtask, new_name, new_duration)
    print("Subtask edited successfully.")


def menu_remove_task(registry: Registry, settings: Settings) -> None:
    task_name = _ask("Enter the name of the task to remove: ").strip()

    registry.remove_task(task_name)
    print("Task removed successfully.")


def menu_remove_subtask(registry: Registry, settings: Settings) -> None:
    task_name = _ask("Enter the name of the task containing the subtask to remove: ").strip()

    task = registry.find_task(task_name)
    if task is None:
        raise TaskNotFound(f"Task not found: {task_name}")

    subtask_name = _ask("Enter the name of the subtask to remove: ").strip()
    registry.remove_subtask(task, subtask_name)
    print("Subtask removed successfully.")


def menu_display_graph(registry: Registry, settings: Settings) -> None:
    render_graph(registry.relations, order=settings.graph_order, color=settings.color)


Handler = Callable[[Registry, Settings], None]

HANDLERS: dict[str, Handler] = {
    "1": menu_add_task,
    "2": menu_display_tasks,
    "3": menu_edit_task,
    "4": menu_edit_subtask,
    "5": menu_remove_task,
    "6": menu_remove_subtask,
    "7": menu_display_graph,
}


# ---------------------------------------------------------------------
# Menu loop
# ---------------------------------------------------------------------

def _not_found_message(e: NotFoundError) -> str:
    if isinstance(e, SubtaskNotFound):
        return "Subtask not found."
    return "Task not found."


def run_menu(registry: Registry, settings: Settings) -> int:
    """
    Show the menu until the user picks Exit or input ends.

    Errors raised by a handler are reported and the loop goes on.
    """
    while True:
        print(MENU)
        try:
            choice = _ask("Enter your choice: ").strip()
        except EOFError:
            print()
            choice = EXIT_CHOICE

        if choice == EXIT_CHOICE:
            print("Exiting the program.")
            return 0

        handler = HANDLERS.get(choice)
        if handler is None:
            logger.info("Invalid menu choice: %r", choice)
            print("Invalid choice. Please try again.")
            continue

        try:
            handler(registry, settings)
        except NotFoundError as e:
            logger.info("%s", e)
            print(_not_found_message(e))
        except ValidationError as e:
            logger.info("Rejected input: %s", e)
            print(f"Error: {e}")
        except EOFError:
            print()
            print("Exiting the program.")
            return 0


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    overrides: dict[str, object] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.graph_order:
        overrides["graph_order"] = args.graph_order
    if args.no_color:
        overrides["color"] = False
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    try:
        setup_logging(level=settings.log_level_no, log_file=settings.log_file)
    except OSError as e:
        print(f"Error: cannot open log file {settings.log_file}: {e}")
        return 1
    logger.debug("Starting with %s", settings)

    try:
        return run_menu(Registry(), settings)
    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
