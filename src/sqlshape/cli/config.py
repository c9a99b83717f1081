"""The `config` command group: manage defaults in ~/.sqlshape/config.toml."""

from __future__ import annotations

import click

from sqlshape.cli._shared import settings_or_exit
from sqlshape.settings import SettingsError, parse_setting, save_setting


@click.group()
def config() -> None:
    """Manage defaults (~/.sqlshape/config.toml)."""


@config.command("show")
def config_show() -> None:
    """Show the effective defaults."""
    settings = settings_or_exit()
    click.echo(f"dialect = {settings.dialect or '(sqlglot default)'}")
    click.echo(f"format = {settings.output_format}")
    click.echo(f"log = {str(settings.log).lower()}")
    click.echo(f"retention_days = {settings.retention_days}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a default.

    \b
    Examples:
      sqlshape config set dialect hive
      sqlshape config set format json
      sqlshape config set log false
    """
    try:
        path = save_setting(key, parse_setting(key, value))
    except SettingsError as e:
        raise click.BadParameter(str(e)) from e
    click.echo(f"Saved {key} to {path}")
