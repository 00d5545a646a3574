from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from .errors import (
    ArgumentError,
    MissingArgumentError,
    ParserConfigurationError,
    UnknownParameterError,
)
from .quantifier import Quantifier
from .types import PARAM_PREFIX, Quantity


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Param:
    name: str
    requires_argument: bool
    quantifier: Quantifier
    description: str

    def usage(self) -> str:
        flag = PARAM_PREFIX + self.name
        if not self.requires_argument:
            return flag
        return f"{flag}={self.quantifier.describe() or 'VALUE'}"


def is_param(token: str) -> bool:
    return token.startswith(PARAM_PREFIX)


def split_param(token: str) -> tuple[str, str | None]:
    """Split ``:name=value`` into ``("name", "value")``.

    The value is ``None`` when the token carries no ``=``.
    """
    body = token[len(PARAM_PREFIX) :]
    name, sep, value = body.partition("=")
    return name, value if sep else None


class ArgHandler:
    """Registry of params for one command, and the scanner that applies it.

    Params are registered once when the command is set up; registering the
    same name twice is a configuration error.
    """

    def __init__(
        self,
        params: Iterable[Param] = (),
        *,
        default: Callable[[datetime], list[Quantity]] | None = None,
    ):
        self._params: dict[str, Param] = {}
        self._default = default
        for param in params:
            self._register(param)

    def _register(self, param: Param) -> None:
        if param.name in self._params:
            raise ParserConfigurationError(f"Duplicate parameter name: {param.name}")
        self._params[param.name] = param

    @property
    def params(self) -> list[Param]:
        return list(self._params.values())

    def lookup(self, name: str) -> Param | None:
        return self._params.get(name)

    def handle(self, tokens: list[str], now: datetime) -> tuple[list[str], list[Quantity]]:
        """Scan ``tokens`` and resolve every recognized param.

        Returns ``(unused_tokens, quantities)``. Raises on the first bad
        token; nothing is returned alongside an error.
        """
        unused: list[str] = []
        quantities: list[Quantity] = []

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if not is_param(token):
                unused.append(token)
                i += 1
                continue

            name, value = split_param(token)
            param = self.lookup(name)
            if param is None:
                raise UnknownParameterError(f"Unknown parameter: {PARAM_PREFIX}{name}")

            step = 1
            if param.requires_argument:
                if value is None:
                    if i + 1 >= len(tokens):
                        raise MissingArgumentError(
                            f"Missing argument: {param.usage()}", param=PARAM_PREFIX + name
                        )
                    value = tokens[i + 1]
                    step = 2
                argument = value
            else:
                if value is not None:
                    # An argument given to a flag that takes none is reported, not dropped.
                    unused.append(value)
                argument = ""

            logger.debug("param %s%s argument=%r", PARAM_PREFIX, name, argument)
            try:
                quantities.extend(param.quantifier.parse(argument, now))
            except ArgumentError as e:
                e.param = PARAM_PREFIX + name
                raise

            i += step

        if not quantities and self._default is not None:
            quantities = list(self._default(now))

        return unused, quantities
