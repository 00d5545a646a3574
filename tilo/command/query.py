from __future__ import annotations

from datetime import datetime

from tilo.engine.params import ArgHandler, Param
from tilo.engine.quantifier import DateQuantifier, ListQuantifier, PairQuantifier
from tilo.engine.temporal import days_ago, temporal_details, temporal_params
from tilo.engine.types import Config, Quantity


def _today(now: datetime) -> list[Quantity]:
    # A query without any temporal param asks about today.
    return [days_ago(now, 0)]


def query_params(config: Config) -> list[Param]:
    details = temporal_details(epoch=config.epoch, week_start=config.week_start)
    return [
        *temporal_params(details),
        Param(
            name="days",
            requires_argument=True,
            quantifier=ListQuantifier(DateQuantifier()),
            description="Activity on each of the given days",
        ),
        Param(
            name="range",
            requires_argument=True,
            quantifier=PairQuantifier(DateQuantifier()),
            description="Activity from the first to the second day (inclusive)",
        ),
    ]


def query_arg_handler(config: Config) -> ArgHandler:
    return ArgHandler(query_params(config), default=_today)
