"""Test user defaults in config.toml."""

import stat

import pytest

from sqlshape.settings import Settings, SettingsError, load_settings, parse_setting, save_setting


def test_defaults_without_file():
    assert load_settings() == Settings()


def test_load_from_file(isolated_home):
    config_file = isolated_home["config_file"]
    config_file.parent.mkdir(parents=True)
    config_file.write_text(
        '[defaults]\ndialect = "hive"\nformat = "json"\nlog = false\n'
        "retention_days = 7\nunknown = 1\n"
    )
    assert load_settings() == Settings(
        dialect="hive", output_format="json", log=False, retention_days=7
    )


@pytest.mark.parametrize(
    "body",
    [
        "[defaults]\nformat = \"yaml\"\n",
        "[defaults]\nlog = \"yes\"\n",
        "[defaults]\nretention_days = true\n",
        "[defaults]\nretention_days = 0\n",
        "[defaults\n",
    ],
)
def test_invalid_file(isolated_home, body):
    config_file = isolated_home["config_file"]
    config_file.parent.mkdir(parents=True)
    config_file.write_text(body)
    with pytest.raises(SettingsError):
        load_settings()


def test_save_round_trip_and_permissions(isolated_home):
    save_setting("dialect", "spark")
    path = save_setting("log", False)

    assert path == isolated_home["config_file"]
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    settings = load_settings()
    assert settings.dialect == "spark"
    assert settings.log is False


@pytest.mark.parametrize(
    "key,raw,expected",
    [
        ("dialect", "hive", "hive"),
        ("format", "json", "json"),
        ("log", "FALSE", False),
        ("retention_days", "14", 14),
    ],
)
def test_parse_setting(key, raw, expected):
    assert parse_setting(key, raw) == expected


@pytest.mark.parametrize(
    "key,raw",
    [("colour", "red"), ("log", "maybe"), ("retention_days", "soon"), ("format", "xml")],
)
def test_parse_setting_rejects(key, raw):
    with pytest.raises(SettingsError):
        parse_setting(key, raw)


def test_save_unknown_key():
    with pytest.raises(SettingsError):
        save_setting("colour", "red")
