from __future__ import annotations

from dataclasses import dataclass

from tilo.command.query import query_arg_handler
from tilo.engine.params import ArgHandler
from tilo.engine.parser import CommandParser
from tilo.engine.tasks import TaskSelection
from tilo.engine.types import Config


@dataclass(frozen=True)
class Operation:
    name: str
    summary: str
    parser: CommandParser
    footer: str = ""

    def usage(self) -> str:
        parts = ["tilo", self.name]
        first = self.parser.tasks.usage()
        if first:
            parts.append(first)
        if self.parser.args.params:
            parts.append("[params...]")
        return " ".join(parts)


def _operation(
    name: str,
    summary: str,
    tasks: TaskSelection,
    args: ArgHandler | None = None,
    footer: str = "",
) -> Operation:
    return Operation(
        name=name,
        summary=summary,
        parser=CommandParser(name, tasks, args if args is not None else ArgHandler()),
        footer=footer,
    )


def build_operations(config: Config) -> dict[str, Operation]:
    """Create every operation with its own parser.

    Called once at startup; the result is treated as read-only.
    """
    operations = [
        _operation("start", "Start a task", TaskSelection.SINGLE),
        _operation("stop", "Stop the current task", TaskSelection.NONE),
        _operation("current", "Show the current task", TaskSelection.NONE),
        _operation("abort", "Abort the current task without saving it", TaskSelection.NONE),
        _operation("ping", "Check whether the server is running", TaskSelection.NONE),
        _operation("shutdown", "Shut down the server", TaskSelection.NONE),
        _operation(
            "query",
            "Show time spent on tasks",
            TaskSelection.MULTI,
            query_arg_handler(config),
            footer="Without a time param, today's activity is shown.",
        ),
    ]
    return {op.name: op for op in operations}
