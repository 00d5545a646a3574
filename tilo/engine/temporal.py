from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import partial

from .errors import NumericParseError
from .params import Param
from .quantifier import split_modifiers
from .types import (
    DEFAULT_EPOCH,
    DEFAULT_WEEK_START,
    Quantity,
    parse_iso_date,
    parse_year_month,
)


Resolver = Callable[..., Quantity]

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _today(now: datetime | date) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def _parse_offset(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise NumericParseError(f"Not a number: {text!r}")
    try:
        return int(text)
    except ValueError:
        raise NumericParseError(f"Number too large: {text[:20]}...") from None


def _week_start(today: date, *, week_start: str) -> date:
    if week_start == "sunday":
        # Convert weekday (Mon=0..Sun=6) into days since Sunday.
        return today - timedelta(days=(today.weekday() + 1) % 7)

    # ISO week (Mon start)
    return today - timedelta(days=today.weekday())


def days_ago(now: datetime | date, days: int) -> Quantity:
    """Day quantity for the calendar date ``days`` before now."""
    try:
        return Quantity.day(_today(now) - timedelta(days=days))
    except OverflowError:
        raise NumericParseError(f"Day offset out of range: {days}") from None


def weeks_ago(now: datetime | date, weeks: int, *, week_start: str = DEFAULT_WEEK_START) -> Quantity:
    """Between quantity for the whole week ``weeks`` before the current one.

    The end is clamped to today so the current week never reaches into the
    future.
    """
    today = _today(now)
    try:
        start = _week_start(today, week_start=week_start) - timedelta(weeks=weeks)
        end = start + timedelta(days=6)
    except OverflowError:
        raise NumericParseError(f"Week offset out of range: {weeks}") from None
    if end > today:
        end = today
    return Quantity.between(start, end)


def months_ago(now: datetime | date, months: int) -> Quantity:
    """Month quantity for the month ``months`` before the current one."""
    # Work from the 1st: stepping back from the 31st must not spill into
    # the following month.
    first = _today(now).replace(day=1)
    year, month0 = divmod(first.year * 12 + first.month - 1 - months, 12)
    if not 1 <= year <= 9999:
        raise NumericParseError(f"Month offset out of range: {months}")
    return Quantity.month(year, month0 + 1)


def years_ago(now: datetime | date, years: int) -> Quantity:
    return Quantity.year(_today(now).year - years)


def since(now: datetime | date, start: str) -> Quantity:
    """Between quantity from ``start`` up to and including today."""
    return Quantity.between(parse_iso_date(start), _today(now))


def between(now: datetime | date, start: str, end: str) -> Quantity:
    return Quantity.between(parse_iso_date(start), parse_iso_date(end))


def get_day(now: datetime | date, text: str) -> Quantity:
    return Quantity.day(parse_iso_date(text))


def get_month(now: datetime | date, text: str) -> Quantity:
    return Quantity.month(*parse_year_month(text))


def get_year(now: datetime | date, text: str) -> Quantity:
    return Quantity.year(_parse_offset(text))


def get_weeks_ago(now: datetime | date, text: str, *, week_start: str = DEFAULT_WEEK_START) -> Quantity:
    return weeks_ago(now, _parse_offset(text), week_start=week_start)


def get_months_ago(now: datetime | date, text: str) -> Quantity:
    return months_ago(now, _parse_offset(text))


def get_years_ago(now: datetime | date, text: str) -> Quantity:
    return years_ago(now, _parse_offset(text))


def fixed_day_offset(days: int) -> Resolver:
    return partial(_fixed, days_ago, days)


def fixed_week_offset(weeks: int, *, week_start: str = DEFAULT_WEEK_START) -> Resolver:
    return partial(_fixed, partial(weeks_ago, week_start=week_start), weeks)


def fixed_month_offset(months: int) -> Resolver:
    return partial(_fixed, months_ago, months)


def fixed_year_offset(years: int) -> Resolver:
    return partial(_fixed, years_ago, years)


def _fixed(func: Callable[[datetime | date, int], Quantity], offset: int, now: datetime | date) -> Quantity:
    return func(now, offset)


@dataclass(frozen=True)
class TemporalDetail:
    """A temporal flag: its name, modifier arity and pure resolver.

    ``resolve`` is called as ``resolve(now, *modifiers)`` with exactly
    ``arity`` modifiers.
    """

    name: str
    arity: int
    resolve: Resolver
    description: str
    usage: str = ""

    def __post_init__(self):
        if self.arity not in (0, 1, 2):
            raise ValueError(f"Unsupported modifier arity for {self.name}: {self.arity}")


class TemporalQuantifier:
    """Quantifier backed by a temporal detail.

    Modifiers may be repeated: a list of ``arity * m`` fragments resolves to
    ``m`` quantities.
    """

    def __init__(self, detail: TemporalDetail):
        self.detail = detail

    def parse(self, text: str, now: datetime) -> list[Quantity]:
        if self.detail.arity == 0:
            return [self.detail.resolve(now)]
        return [
            self.detail.resolve(now, *modifiers)
            for modifiers in split_modifiers(text, self.detail.arity)
        ]

    def describe(self) -> str:
        return self.detail.usage


def temporal_details(
    *, epoch: date = DEFAULT_EPOCH, week_start: str = DEFAULT_WEEK_START
) -> list[TemporalDetail]:
    return [
        # Fixed day
        TemporalDetail("today", 0, fixed_day_offset(0), "Today's activity"),
        TemporalDetail("yesterday", 0, fixed_day_offset(1), "Yesterday's activity"),
        # Fixed week
        TemporalDetail(
            "this-week", 0, fixed_week_offset(0, week_start=week_start), "This week's activity"
        ),
        TemporalDetail(
            "last-week", 0, fixed_week_offset(1, week_start=week_start), "Last week's activity"
        ),
        # Fixed month
        TemporalDetail("this-month", 0, fixed_month_offset(0), "This month's activity"),
        TemporalDetail("last-month", 0, fixed_month_offset(1), "Last month's activity"),
        # Fixed year
        TemporalDetail("this-year", 0, fixed_year_offset(0), "This year's activity"),
        TemporalDetail("last-year", 0, fixed_year_offset(1), "Last year's activity"),
        TemporalDetail(
            "ever",
            0,
            partial(_since_epoch, epoch.isoformat()),
            f"All activity since {epoch.isoformat()}",
        ),
        # One modifier
        TemporalDetail("day", 1, get_day, "Activity on the given day", "YYYY-MM-DD"),
        TemporalDetail("month", 1, get_month, "Activity in the given month", "YYYY-MM"),
        TemporalDetail("year", 1, get_year, "Activity in the given year", "YYYY"),
        TemporalDetail(
            "weeks-ago",
            1,
            partial(get_weeks_ago, week_start=week_start),
            "Activity in the week N weeks ago",
            "N",
        ),
        TemporalDetail("months-ago", 1, get_months_ago, "Activity in the month N months ago", "N"),
        TemporalDetail("years-ago", 1, get_years_ago, "Activity in the year N years ago", "N"),
        TemporalDetail("since", 1, since, "Activity since the given day", "YYYY-MM-DD"),
        # Two modifiers
        TemporalDetail(
            "between",
            2,
            between,
            "Activity between two days (inclusive)",
            "YYYY-MM-DD,YYYY-MM-DD",
        ),
    ]


def _since_epoch(epoch: str, now: datetime | date) -> Quantity:
    return since(now, epoch)


def temporal_params(details: list[TemporalDetail]) -> list[Param]:
    return [
        Param(
            name=d.name,
            requires_argument=d.arity > 0,
            quantifier=TemporalQuantifier(d),
            description=d.description,
        )
        for d in details
    ]
