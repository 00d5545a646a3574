from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .errors import ArgumentError, UnbalancedModifiersError
from .types import Quantity, QueryKind, parse_iso_date, parse_year, parse_year_month


class Quantifier(Protocol):
    """Turns the raw argument of a param into quantities."""

    def parse(self, text: str, now: datetime) -> list[Quantity]: ...

    def describe(self) -> str: ...


def split_modifiers(text: str, arity: int) -> list[list[str]]:
    """Split ``text`` on commas into groups of ``arity`` modifiers."""
    fragments = text.split(",")
    if len(fragments) % arity != 0:
        raise UnbalancedModifiersError(
            f"Unbalanced modifiers: {text!r} (expected a multiple of {arity})"
        )
    return [fragments[i : i + arity] for i in range(0, len(fragments), arity)]


class DateQuantifier:
    def parse(self, text: str, now: datetime) -> list[Quantity]:
        return [Quantity.day(parse_iso_date(text))]

    def describe(self) -> str:
        return "YYYY-MM-DD"


class MonthQuantifier:
    def parse(self, text: str, now: datetime) -> list[Quantity]:
        return [Quantity.month(*parse_year_month(text))]

    def describe(self) -> str:
        return "YYYY-MM"


class YearQuantifier:
    def parse(self, text: str, now: datetime) -> list[Quantity]:
        return [Quantity.year(parse_year(text))]

    def describe(self) -> str:
        return "YYYY"


class ListQuantifier:
    """Comma-separated list of elements, one or more quantities each."""

    def __init__(self, elem: Quantifier):
        self.elem = elem

    def parse(self, text: str, now: datetime) -> list[Quantity]:
        out: list[Quantity] = []
        for part in text.split(","):
            out.extend(self.elem.parse(part, now))
        return out

    def describe(self) -> str:
        return f"{self.elem.describe()},..."


class PairQuantifier:
    """Two elements joined by ``:``, combined into one between-quantity.

    The range runs from the first day covered by the first element to the
    last day covered by the second, so a pair of months spans both of them
    in full.
    """

    separator = ":"

    def __init__(self, elem: Quantifier):
        self.elem = elem

    def parse(self, text: str, now: datetime) -> list[Quantity]:
        fields = text.split(self.separator)
        if len(fields) != 2:
            raise UnbalancedModifiersError(f"Not a pair: {text!r}")

        first = self.elem.parse(fields[0], now)
        second = self.elem.parse(fields[1], now)
        if len(first) != 1 or len(second) != 1:
            raise ArgumentError(f"Pair elements must be single values: {text!r}")

        start, _ = first[0].span()
        _, end = second[0].span()
        return [Quantity.between(start, end)]

    def describe(self) -> str:
        elem = self.elem.describe()
        return f"{elem}{self.separator}{elem}"


class RawQuantifier:
    """Build quantities of a fixed kind straight from the given values.

    No resolution happens: the comma-separated fragments are taken as the
    quantity values, grouped by the kind's arity and validated on
    construction.
    """

    _usage = {
        QueryKind.DAY: "YYYY-MM-DD",
        QueryKind.MONTH: "YYYY-MM",
        QueryKind.YEAR: "YYYY",
        QueryKind.BETWEEN: "YYYY-MM-DD,YYYY-MM-DD",
    }

    def __init__(self, kind: QueryKind):
        self.kind = kind

    def parse(self, text: str, now: datetime) -> list[Quantity]:
        return [Quantity(self.kind, tuple(group)) for group in split_modifiers(text, self.kind.arity)]

    def describe(self) -> str:
        return self._usage[self.kind]
