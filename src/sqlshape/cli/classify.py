"""The `classify` command: run SQL through the classification pipeline."""

from __future__ import annotations

import click
from sqlglot.dialects.dialect import Dialect

from sqlshape.classlog import cleanup_old_logs, log_classification
from sqlshape.cli._output import format_result
from sqlshape.cli._shared import resolve_sql_stdin, settings_or_exit
from sqlshape.policy import run_policy


@click.command()
@click.argument("sql", required=False)
@click.option("--from-stdin", is_flag=True, help="Read SQL from stdin.")
@click.option("--dialect", default=None, help="SQL dialect (hive, spark, duckdb, etc.)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default=None,
    help="Output format. Defaults to the configured format, else text.",
)
@click.option("--no-log", is_flag=True, help="Do not record this run in the classification log.")
def classify(
    sql: str | None,
    from_stdin: bool,
    dialect: str | None,
    output_format: str | None,
    no_log: bool,
) -> None:
    """Report whether SQL yields a result set and whether it is a SELECT."""
    settings = settings_or_exit()
    sql = resolve_sql_stdin(sql, from_stdin)
    dialect = dialect or settings.dialect

    try:
        Dialect.get_or_raise(dialect)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--dialect'") from e

    result = run_policy(sql, dialect=dialect)

    output = format_result(result, output_format=output_format or settings.output_format)
    if output:
        click.echo(output)

    if settings.log and not no_log:
        c = result.classification
        log_classification(
            sql=result.original_sql,
            dialect=dialect,
            label=c.label if c else None,
            has_result_set=c.has_result_set if c else None,
            is_select=c.is_select if c else None,
            blocked=result.blocked,
            diagnostics=result.codes(),
        )
        cleanup_old_logs(retention_days=settings.retention_days)

    if result.blocked:
        raise SystemExit(1)
