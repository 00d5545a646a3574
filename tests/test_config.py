from datetime import date
from pathlib import Path
from tempfile import TemporaryDirectory

from tilo.engine.types import Config
from tilo.store.config import default_config_toml, get_config_path, load_config


def test_load_config_defaults_when_missing():
    with TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.toml"
        cfg, meta = load_config(path, create_if_missing=False)

    assert isinstance(cfg, Config)
    assert cfg.epoch == date(1970, 1, 1)
    assert meta["loaded"] is False


def test_load_config_creates_default_file(tmp_path):
    path = tmp_path / "nested" / "config.toml"

    cfg, meta = load_config(path)

    assert meta["created"] is True
    assert meta["loaded"] is True
    assert path.read_text(encoding="utf-8") == default_config_toml()
    assert cfg == Config()


def test_load_config_parses_values():
    with TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.toml"
        path.write_text(
            "[query]\n"
            'epoch = "2010-05-01"\n'
            'week_start = "Sunday"\n'
            "\n"
            "[logging]\n"
            'level = "debug"\n',
            encoding="utf-8",
        )

        cfg, meta = load_config(path, create_if_missing=False)

    assert meta["loaded"] is True
    assert cfg.epoch == date(2010, 5, 1)
    assert cfg.week_start == "sunday"
    assert cfg.log_level == "DEBUG"


def test_load_config_ignores_invalid_values(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[query]\n"
        'epoch = "yesterday"\n'
        'week_start = "friday"\n'
        "\n"
        "[logging]\n"
        'level = "loud"\n',
        encoding="utf-8",
    )

    cfg, meta = load_config(path, create_if_missing=False)

    assert cfg == Config()
    assert meta["warnings"] == [
        "Ignoring invalid epoch in config: 'yesterday'",
        "Ignoring invalid week_start in config: 'friday'",
        "Ignoring invalid log level in config: 'loud'",
    ]


def test_load_config_reports_broken_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[query\n", encoding="utf-8")

    cfg, meta = load_config(path, create_if_missing=False)

    assert cfg == Config()
    assert meta["error"].startswith("config_read_error")


def test_config_path_follows_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_config_path() == tmp_path / "tilo" / "config.toml"
