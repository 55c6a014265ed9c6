"""
Root Typer application for the ottl-playground CLI.

Commands:
    executors   List registered executors
    run         Run statements against a payload file
    detect      Print the signal kind of a payload file
    serve       Start the HTTP API
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer

from ottl_playground import __version__
from ottl_playground.cli.utils import console, err_console, print_table, read_text
from ottl_playground.core.errors import PayloadError
from ottl_playground.core.logging import configure_logging
from ottl_playground.core.settings import get_settings
from ottl_playground.execution.dispatcher import StatementDispatcher
from ottl_playground.execution.metadata import list_executors
from ottl_playground.execution.signals import detect_signal_kind
from ottl_playground.executors import build_default_registry

app = typer.Typer(
    name="ottl-playground",
    help="Run telemetry statements against interchangeable executors.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ottl-playground {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log dispatch events to stderr."),
) -> None:
    """ottl-playground CLI: list executors and run statements."""
    configure_logging(
        level="DEBUG" if verbose else "WARNING",
        json_format=False,
        stream=sys.stderr,
    )


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("executors")
def executors(
    json_out: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List registered executors."""
    descriptors = list_executors(build_default_registry())
    if json_out:
        typer.echo(json.dumps(descriptors))
        return
    print_table(descriptors, title="Executors")


@app.command("run")
def run(
    executor: str = typer.Argument(..., help="Executor id (see `executors`)."),
    payload: Path = typer.Option(..., "--payload", "-p", help="OTLP/JSON payload file."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Executor configuration file."),  # noqa: UP007
    signal: str | None = typer.Option(  # noqa: UP007
        None,
        "--signal",
        "-s",
        help="logs, traces or metrics. Detected from the payload when omitted.",
    ),
) -> None:
    """Run statements and print the {value, logs, error?} result as JSON."""
    payload_text = read_text(payload)
    config_text = read_text(config)

    if signal is None:
        try:
            signal = detect_signal_kind(payload_text).value
        except PayloadError as e:
            err_console.print(f"[bold red]Error[/bold red]: {e.message}")
            raise typer.Exit(code=2) from e

    dispatcher = StatementDispatcher(build_default_registry())
    result = dispatcher.execute(executor, signal, config_text, payload_text)
    typer.echo(json.dumps(result.to_dict()))
    if result.error is not None:
        raise typer.Exit(code=1)


@app.command("detect")
def detect(
    payload: Path = typer.Argument(..., help="OTLP/JSON payload file."),
) -> None:
    """Print the signal kind carried by a payload file."""
    try:
        kind = detect_signal_kind(read_text(payload))
    except PayloadError as e:
        err_console.print(f"[bold red]Error[/bold red]: {e.message}")
        raise typer.Exit(code=2) from e
    typer.echo(kind.value)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address"),  # noqa: UP007
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),  # noqa: UP007
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    console.print(f"[bold green]Starting ottl-playground API[/bold green] on {host}:{port}")
    uvicorn.run(
        "ottl_playground.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


__all__ = ["app"]
