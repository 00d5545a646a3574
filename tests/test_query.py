from datetime import date, datetime

import pytest

from tilo.command.operations import build_operations
from tilo.command.query import query_arg_handler
from tilo.engine.errors import (
    AmbiguousTaskError,
    MixedAllTasksError,
    ReservedTaskNameError,
    UnbalancedModifiersError,
)
from tilo.engine.types import ALL_TASKS, Config, Quantity


NOW = datetime(2023, 6, 15, 12, 0)


def test_empty_query_defaults_to_today():
    unused, quantities = query_arg_handler(Config()).handle([], NOW)

    assert unused == []
    assert quantities == [Quantity.day(date(2023, 6, 15))]


def test_days_and_range_params():
    handler = query_arg_handler(Config())

    _, quantities = handler.handle([":days=2023-01-01,2023-01-02", ":range", "2023-02-01:2023-02-10"], NOW)

    assert quantities == [
        Quantity.day(date(2023, 1, 1)),
        Quantity.day(date(2023, 1, 2)),
        Quantity.between(date(2023, 2, 1), date(2023, 2, 10)),
    ]


def test_week_start_from_config():
    handler = query_arg_handler(Config(week_start="sunday"))

    _, quantities = handler.handle([":this-week"], NOW)

    assert quantities[0].values == ("2023-06-11", "2023-06-15")


def test_query_operation_parses_between():
    op = build_operations(Config())["query"]

    cmd = op.parser.parse(
        [ALL_TASKS, ":between=2020-01-01,2020-01-31,2020-02-01,2020-02-28"], NOW
    )

    assert cmd.tasks == (ALL_TASKS,)
    assert cmd.quantities == (
        Quantity.between(date(2020, 1, 1), date(2020, 1, 31)),
        Quantity.between(date(2020, 2, 1), date(2020, 2, 28)),
    )


def test_query_operation_rejects_unbalanced_between():
    op = build_operations(Config())["query"]
    with pytest.raises(UnbalancedModifiersError):
        op.parser.parse(["a", ":between=2020-01-01,2020-01-31,2020-02-01"], NOW)


def test_query_operation_rejects_mixed_all():
    op = build_operations(Config())["query"]
    with pytest.raises(MixedAllTasksError):
        op.parser.parse([f"{ALL_TASKS},x", ":today"], NOW)


def test_start_operation_takes_single_task():
    op = build_operations(Config())["start"]

    assert op.parser.parse(["report"], NOW).tasks == ("report",)
    with pytest.raises(AmbiguousTaskError):
        op.parser.parse(["a,b"], NOW)
    with pytest.raises(ReservedTaskNameError):
        op.parser.parse([ALL_TASKS], NOW)


def test_operations_without_tasks():
    operations = build_operations(Config())

    for name in ("stop", "current", "abort", "ping", "shutdown"):
        cmd = operations[name].parser.parse([], NOW)
        assert cmd.operation == name
        assert cmd.tasks == ()
        assert cmd.quantities == ()


def test_operation_usage():
    operations = build_operations(Config())

    assert operations["start"].usage() == "tilo start <task>"
    assert operations["stop"].usage() == "tilo stop"
    assert operations["query"].usage().startswith("tilo query <task>")
