"""CLI entry point."""

from __future__ import annotations

import click

from sqlshape.cli.classify import classify
from sqlshape.cli.config import config


@click.group()
@click.version_option(package_name="sqlshape")
def main() -> None:
    """sqlshape: result-set and SELECT classification for SQL statements."""


main.add_command(classify)
main.add_command(config)
