from __future__ import annotations

import logging
import sys


# Loggers whose warnings are always shown, whatever the configured level.
_ALWAYS_WARN = ("tilo.engine.parser",)


def setup_logging(level: int | str = logging.WARNING) -> None:
    """
    Configure logging with a single stderr handler.

    Call this ONCE, very early (before the first command is parsed).
    Unused-argument warnings stay visible even at level ERROR or above.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt="tilo: %(levelname)s: %(message)s")

    # Level filtering happens on the loggers so _ALWAYS_WARN can get through.
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    warn_level = min(root.level, logging.WARNING)
    for name in _ALWAYS_WARN:
        logging.getLogger(name).setLevel(warn_level)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
