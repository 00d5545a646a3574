"""Exception hierarchy for tilo argument parsing.

Input errors derive from :class:`ArgumentError` and are shown to the user as
the single reason a parse failed. :class:`ParserConfigurationError` signals a
bug in how a command was registered and is never reported as bad input.

Hierarchy
---------
TiloError
├── ParserConfigurationError
└── ArgumentError
    ├── UnknownParameterError
    ├── MissingArgumentError
    ├── MissingTaskError
    ├── AmbiguousTaskError
    ├── ReservedTaskNameError
    ├── MixedAllTasksError
    ├── InvalidTaskNameError
    ├── InvalidDateError
    ├── InvalidYearMonthError
    ├── UnbalancedModifiersError
    └── NumericParseError
"""

from __future__ import annotations


class TiloError(Exception):
    """Base exception for all tilo errors."""


class ParserConfigurationError(TiloError):
    """Raised when a command parser or param registry is set up incorrectly."""


class ArgumentError(TiloError, ValueError):
    """Base for every error caused by the tokens a user passed in.

    ``param`` names the flag whose argument was being parsed, when known.
    """

    def __init__(self, message: str, *, param: str | None = None) -> None:
        super().__init__(message)
        self.param: str | None = param

    def __str__(self) -> str:
        message = super().__str__()
        if self.param:
            return f"{self.param}: {message}"
        return message


# --- Params ---------------------------------------------------------------

class UnknownParameterError(ArgumentError):
    """Raised when a flag-shaped token names no registered param."""


class MissingArgumentError(ArgumentError):
    """Raised when a param requires an argument but none follows."""


# --- Tasks ----------------------------------------------------------------

class MissingTaskError(ArgumentError):
    """Raised when a task is required but none is given."""


class AmbiguousTaskError(ArgumentError):
    """Raised when a single task is required but several are given."""


class ReservedTaskNameError(ArgumentError):
    """Raised when the all-tasks sentinel is used where one real task is needed."""


class MixedAllTasksError(ArgumentError):
    """Raised when the all-tasks sentinel is combined with other task names."""


class InvalidTaskNameError(ArgumentError):
    """Raised when a task name starts with the flag prefix or contains whitespace."""


# --- Temporal modifiers ---------------------------------------------------

class InvalidDateError(ArgumentError):
    """Raised when a modifier is not a yyyy-mm-dd date."""


class InvalidYearMonthError(ArgumentError):
    """Raised when a modifier is not a yyyy-mm year and month."""


class UnbalancedModifiersError(ArgumentError):
    """Raised when the modifier count is not a multiple of the param's arity."""


class NumericParseError(ArgumentError):
    """Raised when a modifier is not a usable integer."""
