from __future__ import annotations

import tomllib
from pathlib import Path

from platformdirs import user_config_dir

from tilo.engine.errors import InvalidDateError
from tilo.engine.types import Config, parse_iso_date


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_config_path() -> Path:
    return Path(user_config_dir("tilo")) / "config.toml"


def default_config_toml(config: Config | None = None) -> str:
    cfg = config or Config()
    # Keep it minimal and editable.
    return (
        "# tilo configuration\n"
        "\n"
        "[query]\n"
        "# First day covered by :ever\n"
        f'epoch = "{cfg.epoch.isoformat()}"\n'
        '# Week start: "iso" (Mon) or "sunday"\n'
        f'week_start = "{cfg.week_start}"\n'
        "\n"
        "[logging]\n"
        "# DEBUG, INFO, WARNING, ERROR or CRITICAL\n"
        f'level = "{cfg.log_level}"\n'
    )


def ensure_default_config_file(path: Path | None = None) -> Path:
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    if not config_path.exists():
        config_path.write_text(default_config_toml(), encoding="utf-8")
    return config_path


def load_config(path: Path | None = None, *, create_if_missing: bool = True) -> tuple[Config, dict]:
    """Load config.toml, returning (Config, meta).

    Meta contains useful diagnostics for debug output. Invalid values are
    listed under "warnings" so the caller can log them once logging is set up.
    """

    config_path = path or get_config_path()
    meta: dict = {"path": str(config_path), "loaded": False, "created": False, "warnings": []}

    if create_if_missing:
        before = config_path.exists()
        ensure_default_config_file(config_path)
        meta["created"] = not before

    if not config_path.exists():
        return Config(), meta

    try:
        raw = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        meta["error"] = f"config_read_error: {e}"
        return Config(), meta

    cfg = Config()

    query = raw.get("query")
    if isinstance(query, dict):
        epoch = query.get("epoch")
        if isinstance(epoch, str):
            try:
                cfg.epoch = parse_iso_date(epoch.strip())
            except InvalidDateError:
                meta["warnings"].append(f"Ignoring invalid epoch in config: {epoch!r}")

        week_start = query.get("week_start")
        if isinstance(week_start, str):
            week_start_norm = week_start.strip().lower()
            if week_start_norm in {"iso", "sunday"}:
                cfg.week_start = week_start_norm
            else:
                meta["warnings"].append(f"Ignoring invalid week_start in config: {week_start!r}")

    logging_section = raw.get("logging")
    if isinstance(logging_section, dict):
        level = logging_section.get("level")
        if isinstance(level, str):
            if level.strip().upper() in _LOG_LEVELS:
                cfg.log_level = level.strip().upper()
            else:
                meta["warnings"].append(f"Ignoring invalid log level in config: {level!r}")

    meta["loaded"] = True
    return cfg, meta
