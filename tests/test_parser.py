import logging
from datetime import date, datetime

import pytest

from tilo.engine.errors import MissingTaskError, ParserConfigurationError, UnknownParameterError
from tilo.engine.params import ArgHandler
from tilo.engine.parser import CommandParser
from tilo.engine.tasks import TaskSelection
from tilo.engine.temporal import temporal_details, temporal_params
from tilo.engine.types import Command, Quantity


NOW = datetime(2023, 6, 15, 12, 0)


def _query_parser() -> CommandParser:
    return CommandParser(
        "query", TaskSelection.MULTI, ArgHandler(temporal_params(temporal_details()))
    )


def test_parser_requires_task_selection():
    with pytest.raises(ParserConfigurationError):
        CommandParser("query", None, ArgHandler())  # type: ignore[arg-type]


def test_parser_requires_arg_handler():
    with pytest.raises(ParserConfigurationError):
        CommandParser("query", TaskSelection.MULTI, None)  # type: ignore[arg-type]


def test_parse_builds_command():
    cmd = _query_parser().parse(["a,b", ":yesterday"], NOW)

    assert cmd == Command(
        operation="query",
        tasks=("a", "b"),
        quantities=(Quantity.day(date(2023, 6, 14)),),
    )


def test_task_error_short_circuits_params():
    with pytest.raises(MissingTaskError):
        _query_parser().parse([], NOW)


def test_param_error_fails_parse():
    with pytest.raises(UnknownParameterError):
        _query_parser().parse(["a", ":today", ":bogus"], NOW)


def test_unused_tokens_are_warned_not_failed(caplog):
    with caplog.at_level(logging.WARNING, logger="tilo.engine.parser"):
        cmd = _query_parser().parse(["a", "stray", ":today"], NOW)

    assert cmd.tasks == ("a",)
    assert "Ignoring unused arguments" in caplog.text
    assert "stray" in caplog.text


def test_parse_with_unused_returns_leftovers():
    cmd, unused = _query_parser().parse_with_unused(["a", "stray", ":today", "more"], NOW)

    assert unused == ["stray", "more"]
    assert cmd.quantities == (Quantity.day(date(2023, 6, 15)),)


def test_parse_does_not_modify_tokens():
    tokens = ["a", ":today"]
    _query_parser().parse(tokens, NOW)
    assert tokens == ["a", ":today"]


def test_parse_reads_clock_when_now_missing():
    cmd = _query_parser().parse(["a", ":today"])
    assert cmd.quantities[0].values[0] in {
        date.today().isoformat(),
        datetime.now().astimezone().date().isoformat(),
    }
