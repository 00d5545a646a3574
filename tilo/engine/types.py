import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Final

from .errors import InvalidDateError, InvalidYearMonthError, NumericParseError


PARAM_PREFIX: Final[str] = ":"
ALL_TASKS: Final[str] = PARAM_PREFIX + "all"

DEFAULT_EPOCH: Final[date] = date(1970, 1, 1)
DEFAULT_WEEK_START: Final[str] = "iso"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_YEAR_MONTH = re.compile(r"[0-9]{4}-[0-9]{2}")
_YEAR = re.compile(r"[0-9]{4}")


class QueryKind(Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    BETWEEN = "between"

    @property
    def arity(self) -> int:
        return 2 if self is QueryKind.BETWEEN else 1


@dataclass
class Config:
    epoch: date = DEFAULT_EPOCH
    week_start: str = DEFAULT_WEEK_START
    log_level: str = DEFAULT_LOG_LEVEL


def parse_iso_date(text: str) -> date:
    """Parse a strict yyyy-mm-dd date."""
    if not _ISO_DATE.fullmatch(text):
        raise InvalidDateError(f"Not a valid date: {text}")
    try:
        return date(int(text[0:4]), int(text[5:7]), int(text[8:10]))
    except ValueError:
        raise InvalidDateError(f"Not a valid date: {text}") from None


def parse_year_month(text: str) -> tuple[int, int]:
    """Parse a strict yyyy-mm year and month."""
    if not _YEAR_MONTH.fullmatch(text):
        raise InvalidYearMonthError(f"Not a valid year-month: {text}")
    year, month = int(text[0:4]), int(text[5:7])
    if year < 1 or not 1 <= month <= 12:
        raise InvalidYearMonthError(f"Not a valid year-month: {text}")
    return year, month


def parse_year(text: str) -> int:
    if not _YEAR.fullmatch(text) or int(text) < 1:
        raise NumericParseError(f"Not a valid year: {text}")
    return int(text)


def format_year(year: int) -> str:
    if not 1 <= year <= 9999:
        raise NumericParseError(f"Year out of range: {year}")
    return f"{year:04d}"


def format_year_month(year: int, month: int) -> str:
    return f"{format_year(year)}-{month:02d}"


_VALIDATORS = {
    QueryKind.DAY: parse_iso_date,
    QueryKind.MONTH: parse_year_month,
    QueryKind.YEAR: parse_year,
    QueryKind.BETWEEN: parse_iso_date,
}


@dataclass(frozen=True)
class Quantity:
    """A validated piece of query information.

    Values are checked against the format implied by ``kind`` on
    construction: day -> (yyyy-mm-dd,), month -> (yyyy-mm,), year -> (yyyy,),
    between -> (yyyy-mm-dd, yyyy-mm-dd).
    """

    kind: QueryKind
    values: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))
        if len(self.values) != self.kind.arity:
            raise ValueError(
                f"{self.kind.value} takes {self.kind.arity} value(s), got {len(self.values)}"
            )
        validate = _VALIDATORS[self.kind]
        for value in self.values:
            validate(value)

    @classmethod
    def day(cls, d: date) -> "Quantity":
        return cls(QueryKind.DAY, (d.isoformat(),))

    @classmethod
    def month(cls, year: int, month: int) -> "Quantity":
        return cls(QueryKind.MONTH, (format_year_month(year, month),))

    @classmethod
    def year(cls, year: int) -> "Quantity":
        return cls(QueryKind.YEAR, (format_year(year),))

    @classmethod
    def between(cls, start: date, end: date) -> "Quantity":
        return cls(QueryKind.BETWEEN, (start.isoformat(), end.isoformat()))

    def span(self) -> tuple[date, date]:
        """Return the first and last calendar day covered."""
        if self.kind is QueryKind.DAY:
            d = parse_iso_date(self.values[0])
            return d, d

        if self.kind is QueryKind.MONTH:
            year, month = parse_year_month(self.values[0])
            first = date(year, month, 1)
            if month == 12:
                last = date(year, 12, 31)
            else:
                last = date(year, month + 1, 1) - timedelta(days=1)
            return first, last

        if self.kind is QueryKind.YEAR:
            year = parse_year(self.values[0])
            return date(year, 1, 1), date(year, 12, 31)

        return parse_iso_date(self.values[0]), parse_iso_date(self.values[1])

    def to_list(self) -> list[str]:
        return [self.kind.value, *self.values]


@dataclass(frozen=True)
class Command:
    operation: str
    tasks: tuple[str, ...] = ()
    quantities: tuple[Quantity, ...] = field(default_factory=tuple)

    @property
    def all_tasks(self) -> bool:
        return self.tasks == (ALL_TASKS,)

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "tasks": list(self.tasks),
            "quantities": [q.to_list() for q in self.quantities],
        }
