from __future__ import annotations

from enum import Enum

from .errors import (
    AmbiguousTaskError,
    InvalidTaskNameError,
    MissingTaskError,
    MixedAllTasksError,
    ReservedTaskNameError,
)
from .types import ALL_TASKS, PARAM_PREFIX


_WHITESPACE = (" ", "\t", "\n")


class TaskSelection(Enum):
    NONE = "none"
    SINGLE = "single"
    MULTI = "multi"

    def usage(self) -> str:
        if self is TaskSelection.SINGLE:
            return "<task>"
        if self is TaskSelection.MULTI:
            return f"<task>[,<task>...]|{ALL_TASKS}"
        return ""


def valid_task_name(name: str) -> bool:
    if name.startswith(PARAM_PREFIX):
        return False
    return not any(ws in name for ws in _WHITESPACE)


def split_task_names(field: str) -> list[str]:
    """Split a comma-separated task field, dropping empty fragments.

    Duplicates are removed keeping the first occurrence. The all-tasks
    sentinel is passed through untouched; callers decide whether it is
    allowed.
    """
    names: list[str] = []
    for name in field.split(","):
        if not name or name in names:
            continue
        if name != ALL_TASKS and not valid_task_name(name):
            raise InvalidTaskNameError(f"Invalid task name: {name!r}")
        names.append(name)
    return names


def _single(tokens: list[str]) -> tuple[list[str], list[str]]:
    if not tokens:
        raise MissingTaskError("Require single task but none is given")

    names = split_task_names(tokens[0])
    if not names:
        raise MissingTaskError("Require single task but none is given")
    if len(names) > 1:
        raise AmbiguousTaskError(f"Require single task but several are given: {','.join(names)}")
    if names[0] == ALL_TASKS:
        raise ReservedTaskNameError(f"Require single task name but found {ALL_TASKS!r}")

    return names, tokens[1:]


def _multi(tokens: list[str]) -> tuple[list[str], list[str]]:
    if not tokens:
        raise MissingTaskError("Require one or more tasks but none is given")

    names = split_task_names(tokens[0])
    if not names:
        raise MissingTaskError("Require one or more tasks but none is given")
    if len(names) > 1 and ALL_TASKS in names:
        raise MixedAllTasksError(f"When given, {ALL_TASKS!r} must be the only task")

    return names, tokens[1:]


def select_tasks(selection: TaskSelection, tokens: list[str]) -> tuple[list[str], list[str]]:
    """Peel task names off the front of ``tokens``.

    Returns ``(task_names, remaining_tokens)``. The input list is not
    modified.
    """
    if selection is TaskSelection.SINGLE:
        return _single(tokens)
    if selection is TaskSelection.MULTI:
        return _multi(tokens)
    return [], list(tokens)
