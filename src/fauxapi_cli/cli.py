"""Typer-based command line interface for pfSense FauxAPI automation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.json import JSON
from rich.logging import RichHandler

from fauxapi_cli import __version__
from fauxapi_cli.client import ACTIONS
from fauxapi_cli.commands.config import config_app
from fauxapi_cli.commands.system import system_app
from fauxapi_cli.config import Settings
from fauxapi_cli.connection import (
    ApiKeyOption,
    ApiSecretOption,
    DebugOption,
    InsecureOption,
    TimeoutOption,
    UriOption,
    connection_params,
)
from fauxapi_cli.exceptions import FauxApiError
from fauxapi_cli.io.payload_input import load_json_payload
from fauxapi_cli.sdk import create_client
from fauxapi_cli.services.config_service import is_ok, response_message

app = typer.Typer(
    no_args_is_help=True,
    help="CLI for pfSense automation via the FauxAPI.",
)
app.add_typer(config_app, name="config")
app.add_typer(system_app, name="system")
console = Console()


def _render(payload: Any) -> None:
    """Render API payloads in a readable JSON format."""

    console.print(JSON.from_data(payload))


def setup_logging(level: str) -> None:
    """Configure logging for the CLI; log records go to stderr."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_params(values: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got '{value}'.", param_hint="--param")
        params[key.strip()] = item
    return params


@app.callback()
def common_options(
    ctx: typer.Context,
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Optional .env file with FAUXAPI_CLI_* variables.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to FAUXAPI_CLI_LOG_LEVEL.",
    ),
) -> None:
    """Load shared configuration for all commands."""

    settings = Settings.from_env_file(env_file)
    setup_logging(log_level or settings.log_level)
    ctx.obj = {"settings": settings}


@app.command("version")
def show_version() -> None:
    """Show the installed fauxapi-cli version."""

    console.print(f"fauxapi-cli {__version__}")


@app.command("test-connection")
def test_connection(
    ctx: typer.Context,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Validate API credentials with a system_stats call."""

    settings: Settings = ctx.obj["settings"]
    params = connection_params(settings, uri, api_key, api_secret, debug, insecure, timeout)

    try:
        client = create_client(params)
        result = client.system_stats()
    except FauxApiError as exc:
        console.print(f"API request failed: {exc}", style="bold red")
        raise typer.Exit(code=1) from exc

    if not is_ok(result):
        console.print(
            f"Authentication failed: {response_message(result) or 'unexpected response'}",
            style="bold red",
        )
        raise typer.Exit(code=1)

    console.print(f"Connected to {params.uri}", style="bold green")
    _render(result)


@app.command("call")
def call_action(
    ctx: typer.Context,
    action: Annotated[str, typer.Argument(help="FauxAPI action name, e.g. system_stats.")],
    param: Annotated[
        list[str] | None,
        typer.Option("--param", "-p", help="Query parameter as key=value; repeatable."),
    ] = None,
    data_file: Annotated[
        str | None,
        typer.Option("--data-file", "-f", help="JSON body file, or '-' for stdin."),
    ] = None,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Invoke any FauxAPI action and print the raw JSON response."""

    method = ACTIONS.get(action)
    if method is None:
        raise typer.BadParameter(
            f"Unknown action '{action}'. Known actions: {', '.join(sorted(ACTIONS))}.",
            param_hint="ACTION",
        )

    query = _parse_params(param or [])
    settings: Settings = ctx.obj["settings"]
    params = connection_params(settings, uri, api_key, api_secret, debug, insecure, timeout)

    result: Any = None
    try:
        data = load_json_payload(data_file) if data_file is not None else None
        client = create_client(params)
        result = client.invoke(method, action, data, query)
    except FauxApiError as exc:
        console.print(f"API request failed: {exc}", style="bold red")
        raise typer.Exit(code=1) from exc
    except (ValueError, OSError) as exc:
        console.print(f"Invalid input: {exc}", style="bold red")
        raise typer.Exit(code=1) from exc

    _render(result)


def main() -> None:
    app()
