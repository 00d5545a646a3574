from __future__ import annotations

import logging
from datetime import datetime

from .errors import ParserConfigurationError
from .params import ArgHandler
from .tasks import TaskSelection, select_tasks
from .types import Command


logger = logging.getLogger(__name__)


def warn_unused(tokens: list[str]) -> None:
    if tokens:
        logger.warning("Ignoring unused arguments: %s", tokens)


class CommandParser:
    """Parse the raw arguments of one operation into a :class:`Command`.

    Task names are peeled off first, the remaining tokens go to the arg
    handler. The first error aborts the parse.
    """

    def __init__(self, operation: str, tasks: TaskSelection, args: ArgHandler):
        if not isinstance(tasks, TaskSelection):
            raise ParserConfigurationError(
                f"Argument parser for {operation!r} does not know how to handle tasks"
            )
        if not isinstance(args, ArgHandler):
            raise ParserConfigurationError(
                f"Argument parser for {operation!r} does not know how to handle parameters"
            )
        self.operation = operation
        self.tasks = tasks
        self.args = args

    def parse_with_unused(
        self, tokens: list[str], now: datetime | None = None
    ) -> tuple[Command, list[str]]:
        """Parse ``tokens``, returning the command and any unconsumed tokens."""
        if now is None:
            now = datetime.now().astimezone()

        task_names, rest = select_tasks(self.tasks, list(tokens))
        unused, quantities = self.args.handle(rest, now)

        command = Command(
            operation=self.operation,
            tasks=tuple(task_names),
            quantities=tuple(quantities),
        )
        return command, unused

    def parse(self, tokens: list[str], now: datetime | None = None) -> Command:
        command, unused = self.parse_with_unused(tokens, now)
        warn_unused(unused)
        return command
