"""
Command-line interface for debounced-callback.

The CLI replays call traces against a virtual clock so a debounce timing
can be checked without writing code, and prints the effective configuration.
"""

import asyncio
import json
import logging
from dataclasses import replace
from typing import List, Optional

import typer
import yaml

from .application.simulation import SimulationReport, simulate
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import ApplicationConfig
from .infrastructure.logging.setup import setup_logging

cli = typer.Typer(
    name="debounced-callback",
    help="Trailing-edge debouncing with per-call futures"
)

logger = logging.getLogger(__name__)


def _load(config_file: Optional[str], log_level: Optional[str]) -> ApplicationConfig:
    config = ConfigLoader().load_config(config_file)
    if log_level:
        config.logging.level = log_level.upper()
    if config.debug:
        config.logging.level = "DEBUG"
    setup_logging(config.logging)
    return config


def _parse_times(calls: str) -> List[float]:
    try:
        return [float(part) for part in calls.split(",") if part.strip()]
    except ValueError:
        raise typer.BadParameter(f"Call times must be comma separated numbers, got {calls!r}")


def _print_report(report: SimulationReport) -> None:
    typer.echo(f"delay={report.config.delay_ms}ms max_wait={report.config.max_wait_ms}ms")
    for execution in report.executions:
        typer.echo(
            f"execute at t={execution.at_ms:g}ms with args of call #{execution.call_index} "
            f"(t={execution.call_at_ms:g}ms)")
    for outcome in report.outcomes:
        settled = outcome.result if outcome.error is None else outcome.error
        typer.echo(f"  call #{outcome.call_index} at t={outcome.call_at_ms:g}ms -> {settled}")


@cli.command("simulate")
def simulate_calls(
    calls: str = typer.Option(
        ..., "--calls", help="Comma separated call times in milliseconds"
    ),
    delay: Optional[float] = typer.Option(
        None, "--delay", "-d", help="Debounce delay in milliseconds"
    ),
    max_wait: Optional[float] = typer.Option(
        None, "--max-wait", "-m", help="Maximum wait in milliseconds"
    ),
    flush_at: Optional[float] = typer.Option(
        None, "--flush-at", help="Issue flush() at this time in milliseconds"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the report as JSON"
    )
) -> None:
    """Replay call times against a virtual clock and show the executions."""
    try:
        config = _load(config_file, log_level)
        debounce_config = config.debounce
        if delay is not None:
            debounce_config = replace(debounce_config, delay_ms=delay)
        if max_wait is not None:
            debounce_config = replace(debounce_config, max_wait_ms=max_wait)
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)

    times = _parse_times(calls)
    logger.info(f"Simulating {len(times)} call(s) with {debounce_config}")

    try:
        report = asyncio.run(simulate(times, debounce_config, flush_at_ms=flush_at))
    except ValueError as e:
        typer.echo(f"Simulation error: {e}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)


@cli.command()
def show_config(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Output format (yaml or json)"
    )
) -> None:
    """Print the effective configuration."""
    try:
        config = ConfigLoader().load_config(config_file)
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)

    data = config.to_dict()
    if format.lower() == "json":
        typer.echo(json.dumps(data, indent=2))
    elif format.lower() == "yaml":
        typer.echo(yaml.safe_dump(data, default_flow_style=False, indent=2))
    else:
        typer.echo(f"Unsupported format: {format}", err=True)
        raise typer.Exit(code=2)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
