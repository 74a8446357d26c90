"""Click CLI for Tabletkeeper."""

from __future__ import annotations

import re
import sys

import click

from tabletkeeper import __version__
from tabletkeeper.config import TabletkeeperConfig
from tabletkeeper.core.builder import build_intent
from tabletkeeper.core.dispatcher import build_and_dispatch
from tabletkeeper.core.profiles import IteratorProfileRegistry
from tabletkeeper.core.reporter import (
    print_dispatch_report,
    print_profiles_report,
    print_request_report,
    print_scan_settings_report,
)
from tabletkeeper.core.scanner import ScanSettings
from tabletkeeper.errors import TabletkeeperError
from tabletkeeper.options import options_from_params


def _build_config(ctx: click.Context) -> TabletkeeperConfig:
    """Build config from YAML file and CLI overrides."""
    params = ctx.params
    config_file = params.get("config_file")

    try:
        if config_file:
            config = TabletkeeperConfig.from_yaml(config_file)
        else:
            config = TabletkeeperConfig()
    except FileNotFoundError as e:
        _fail(e)

    return config.merge_cli_overrides(**params)


def _fail(error: Exception | str) -> None:
    """Report an error and abort with a non-zero status."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _get_table_ops(config: TabletkeeperConfig):  # noqa: ANN202
    """Create the table operations backend."""
    from tabletkeeper.engine.local import LocalTableOperations

    return LocalTableOperations(config.known_tables, config.state_file)


def _get_profiles(config: TabletkeeperConfig) -> IteratorProfileRegistry:
    """Load the iterator profiles from configuration."""
    try:
        return IteratorProfileRegistry.from_config(config.iterator_profiles)
    except (TypeError, ValueError) as e:
        _fail(f"invalid iterator_profiles configuration: {e}")


def _resolve_tables(config: TabletkeeperConfig, table_ops) -> list[str]:  # noqa: ANN001
    """Resolve which tables to process.

    Returns:
        List of table names.
    """
    if config.table:
        return [config.table]

    if config.tables:
        tables = [t.strip() for t in config.tables if t.strip()]
        if not tables:
            _fail("--tables must name at least one table")
        return tables

    if config.pattern:
        try:
            regex = re.compile(config.pattern)
        except re.error as e:
            _fail(f"invalid table pattern '{config.pattern}': {e}")
        tables = [t for t in table_ops.list_tables() if regex.fullmatch(t)]
        if not tables:
            _fail(f"no tables match pattern '{config.pattern}'")
        return tables

    _fail("must specify --table, --tables, or --pattern")
    return []


@click.group()
@click.version_option(version=__version__, prog_name="tabletkeeper")
def main() -> None:
    """Tabletkeeper - Compaction requests for sorted key/value tables."""


@main.command()
@click.option("--table", "-t", help="Table to compact.")
@click.option("--tables", help="Comma-separated list of tables (format: t1,t2).")
@click.option("--pattern", "-p", help="Regular expression selecting tables to compact.")
@click.option("--begin-row", "-b", "begin_row", help="Begin row (inclusive).")
@click.option("--end-row", "-e", "end_row", help="End row (exclusive).")
@click.option("--noFlush", "-nf", "no_flush", is_flag=True, help="Do not flush table data in memory before compacting.")
@click.option("--wait", "-w", is_flag=True, help="Wait for compact to finish.")
@click.option("--profile", "-pn", "profile", help="Iterator profile name.")
@click.option("--strategy", "-s", help="Compaction strategy class name.")
@click.option(
    "--strategyConfig",
    "-sc",
    "strategy_config",
    help="Key value options for compaction strategy. Expects <prop>=<value>{,<prop>=<value>}",
)
@click.option("--cancel", is_flag=True, help="Cancel user initiated compactions.")
@click.option("--dry-run", is_flag=True, default=None, help="Build and show the request, do not dispatch.")
@click.option("--state-file", help="YAML file holding local compaction state.")
@click.option("--config-file", "-c", help="YAML configuration file.")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR).")
@click.pass_context
def compact(ctx: click.Context, **kwargs: str | None) -> None:
    """Set all tablets of a table to major compact as soon as possible."""
    config = _build_config(ctx)
    if kwargs.get("tables"):
        config = config.merge_cli_overrides(tables=kwargs["tables"].split(","))
    config.setup_logging()

    options = options_from_params(ctx.params)
    registry = _get_profiles(config)
    try:
        table_ops = _get_table_ops(config)
    except TabletkeeperError as e:
        _fail(e)
    tables = _resolve_tables(config, table_ops)

    click.echo(f"Processing {len(tables)} table(s)...\n")
    for table_name in tables:
        try:
            if config.dry_run:
                intent = build_intent(options, table_name, registry)
                click.echo(print_request_report(intent))
                click.echo(f"  [DRY RUN] Would dispatch request for {table_name}\n")
                continue

            result = build_and_dispatch(options, table_name, registry, table_ops)
        except TabletkeeperError as e:
            _fail(e)

        click.echo(print_dispatch_report(result))


@main.command("scan-settings")
@click.option("--table", "-t", required=True, help="Table the scan session reads.")
@click.option("--readahead-threshold", "readahead_threshold", type=int, help="Batches read before prefetching.")
@click.option("--batch-size", "batch_size", type=int, help="Entries fetched per batch.")
@click.option("--config-file", "-c", help="YAML configuration file.")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR).")
@click.pass_context
def scan_settings(ctx: click.Context, **kwargs: str | int | None) -> None:
    """Validate and show the scan settings for a table."""
    config = _build_config(ctx)
    config.setup_logging()

    try:
        settings = ScanSettings.from_config(config, config.table)
    except (TabletkeeperError, TypeError) as e:
        _fail(e)

    click.echo(print_scan_settings_report(settings))


@main.command()
@click.option("--config-file", "-c", help="YAML configuration file.")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR).")
@click.pass_context
def profiles(ctx: click.Context, **kwargs: str | None) -> None:
    """List the configured iterator profiles."""
    config = _build_config(ctx)
    config.setup_logging()

    click.echo(print_profiles_report(_get_profiles(config)))
