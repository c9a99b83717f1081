"""User defaults — ~/.sqlshape/config.toml."""

from __future__ import annotations

import os
import stat
import tomllib
from dataclasses import dataclass
from pathlib import Path

_CONFIG_FILE = Path.home() / ".sqlshape" / "config.toml"

OUTPUT_FORMATS = ("text", "json")


class SettingsError(Exception):
    """Raised when the config file holds a value of the wrong type."""


@dataclass
class Settings:
    dialect: str | None = None
    output_format: str = "text"
    log: bool = True
    retention_days: int = 30


# config key -> (Settings attribute, expected type)
_KEYS: dict[str, tuple[str, type]] = {
    "dialect": ("dialect", str),
    "format": ("output_format", str),
    "log": ("log", bool),
    "retention_days": ("retention_days", int),
}


def _escape_toml_value(v: str) -> str:
    """Escape a string for safe inclusion in a TOML double-quoted value."""
    return v.replace("\\", "\\\\").replace('"', '\\"')


def _toml_literal(v: object) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, int):
        return str(v)
    return f'"{_escape_toml_value(str(v))}"'


def _write_toml(defaults: dict[str, object]) -> None:
    lines = ["[defaults]"]
    lines.extend(f"{k} = {_toml_literal(v)}" for k, v in defaults.items())
    lines.append("")

    _CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    _CONFIG_FILE.write_text("\n".join(lines))
    os.chmod(_CONFIG_FILE, stat.S_IRUSR | stat.S_IWUSR)  # 0600


def _load_defaults() -> dict[str, object]:
    if not _CONFIG_FILE.exists():
        return {}
    try:
        data = tomllib.loads(_CONFIG_FILE.read_text())
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"{_CONFIG_FILE}: {e}") from e
    return dict(data.get("defaults", {}))


def _check(key: str, value: object) -> object:
    attr, expected = _KEYS[key]
    # bool is an int subclass; keep `retention_days = true` out.
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise SettingsError(f"'{key}' must be {expected.__name__}, got {value!r}")
    if key == "format" and value not in OUTPUT_FORMATS:
        raise SettingsError(f"'format' must be one of {', '.join(OUTPUT_FORMATS)}")
    if key == "retention_days" and value < 1:
        raise SettingsError("'retention_days' must be at least 1")
    return value


def load_settings() -> Settings:
    """Read defaults from the config file. Unknown keys are ignored."""
    settings = Settings()
    for key, value in _load_defaults().items():
        if key in _KEYS:
            setattr(settings, _KEYS[key][0], _check(key, value))
    return settings


def parse_setting(key: str, raw: str) -> object:
    """Convert a command-line string to the typed value for `key`."""
    if key not in _KEYS:
        raise SettingsError(f"Unknown setting '{key}'. Valid: {', '.join(_KEYS)}")
    expected = _KEYS[key][1]
    if expected is bool:
        lowered = raw.lower()
        if lowered not in ("true", "false"):
            raise SettingsError(f"'{key}' must be true or false, got '{raw}'")
        return _check(key, lowered == "true")
    if expected is int:
        try:
            return _check(key, int(raw))
        except ValueError as e:
            raise SettingsError(f"'{key}' must be an integer, got '{raw}'") from e
    return _check(key, raw)


def save_setting(key: str, value: object) -> Path:
    """Persist one default to the config file."""
    if key not in _KEYS:
        raise SettingsError(f"Unknown setting '{key}'. Valid: {', '.join(_KEYS)}")
    defaults = _load_defaults()
    defaults[key] = _check(key, value)
    _write_toml(defaults)
    return _CONFIG_FILE
