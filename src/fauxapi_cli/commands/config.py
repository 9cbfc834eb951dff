"""Config command group implementation."""

from __future__ import annotations

from typing import Annotated, Literal

import typer
from rich.console import Console
from rich.json import JSON
from rich.table import Table

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
from fauxapi_cli.firewall_client import FauxApiObject
from fauxapi_cli.io.payload_input import load_config_payload
from fauxapi_cli.sdk import create_client
from fauxapi_cli.services.config_service import ConfigService, is_ok, response_message

config_app = typer.Typer(no_args_is_help=True, help="Read, back up and write the system configuration.")
console = Console()

OutputFormat = Literal["table", "json"]

BackupOption = Annotated[
    bool,
    typer.Option("--backup/--no-backup", help="Take a config backup before writing."),
]
ReloadOption = Annotated[
    bool,
    typer.Option("--reload/--no-reload", help="Reload the configuration after writing."),
]
ConfigFileOption = Annotated[
    str,
    typer.Option("--file", "-f", help="Path to a JSON config file, or '-' for stdin."),
]


def _build_service(
    ctx: typer.Context,
    uri: str | None,
    api_key: str | None,
    api_secret: str | None,
    debug: bool | None,
    insecure: bool | None,
    timeout: float | None,
) -> ConfigService:
    settings: Settings = ctx.obj["settings"]
    params = connection_params(settings, uri, api_key, api_secret, debug, insecure, timeout)
    return ConfigService(create_client(params))


def _handle_api_exception(exc: Exception) -> None:
    console.print(f"API request failed: {exc}", style="bold red")
    raise typer.Exit(code=1) from exc


def _render_result(action: str, response: FauxApiObject) -> None:
    if is_ok(response):
        console.print(f"{action}: ok", style="bold green")
    else:
        console.print(f"{action}: {response_message(response) or 'failed'}", style="bold red")
    console.print(JSON.from_data(response))
    if not is_ok(response):
        raise typer.Exit(code=1)


def _render_backups(backups: list[FauxApiObject], output: OutputFormat) -> None:
    if output == "json":
        console.print(JSON.from_data(backups))
        return

    table = Table(title="Configuration Backups")
    table.add_column("Filename")
    table.add_column("Timestamp")
    table.add_column("Description")
    table.add_column("Version")
    table.add_column("Size", justify="right")

    for backup in backups:
        table.add_row(
            str(backup.get("filename", "")),
            str(backup.get("timestamp", "")),
            str(backup.get("description", "")),
            str(backup.get("version", "")),
            str(backup.get("filesize", "")),
        )

    console.print(table)


@config_app.command("get")
def config_get(
    ctx: typer.Context,
    config_file: Annotated[
        str | None,
        typer.Option("--config-file", help="Backup file to read instead of the live config."),
    ] = None,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Print the system configuration (the part usable with 'config set')."""

    config: FauxApiObject = {}
    try:
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        config = service.get_config(config_file)
    except FauxApiError as exc:
        _handle_api_exception(exc)
    except ValueError as exc:
        console.print(str(exc), style="bold red")
        raise typer.Exit(code=1) from exc

    console.print(JSON.from_data(config))


@config_app.command("backup")
def config_backup(
    ctx: typer.Context,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Take a configuration backup on the firewall."""

    response: FauxApiObject = {}
    try:
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        response = service.backup()
    except FauxApiError as exc:
        _handle_api_exception(exc)

    _render_result("config_backup", response)


@config_app.command("backup-list")
def config_backup_list(
    ctx: typer.Context,
    output: Annotated[
        OutputFormat,
        typer.Option("--output", help="Response format: table or json."),
    ] = "table",
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """List configuration backups available on the firewall."""

    backups: list[FauxApiObject] = []
    try:
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        backups = service.list_backups()
    except FauxApiError as exc:
        _handle_api_exception(exc)

    _render_backups(backups, output)


@config_app.command("reload")
def config_reload(
    ctx: typer.Context,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Reload config.xml on the firewall."""

    response: FauxApiObject = {}
    try:
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        response = service.reload()
    except FauxApiError as exc:
        _handle_api_exception(exc)

    _render_result("config_reload", response)


@config_app.command("restore")
def config_restore(
    ctx: typer.Context,
    config_file: Annotated[
        str,
        typer.Argument(help="Full path of the backup, e.g. /cf/conf/backup/config-1.xml."),
    ],
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Restore a configuration backup."""

    response: FauxApiObject = {}
    try:
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        response = service.restore(config_file)
    except FauxApiError as exc:
        _handle_api_exception(exc)
    except ValueError as exc:
        console.print(str(exc), style="bold red")
        raise typer.Exit(code=1) from exc

    _render_result("config_restore", response)


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    file_path: ConfigFileOption,
    do_backup: BackupOption = True,
    do_reload: ReloadOption = True,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Replace the whole system configuration.

    The input must be the FULL configuration, e.g. the output of
    'fauxapi config get', not only the section being changed.
    Use 'config patch' for partial updates.
    """

    response: FauxApiObject = {}
    try:
        config = load_config_payload(file_path)
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        response = service.set_config(config, do_backup=do_backup, do_reload=do_reload)
    except FauxApiError as exc:
        _handle_api_exception(exc)
    except (ValueError, OSError) as exc:
        console.print(f"Invalid input: {exc}", style="bold red")
        raise typer.Exit(code=1) from exc

    _render_result("config_set", response)


@config_app.command("patch")
def config_patch(
    ctx: typer.Context,
    file_path: ConfigFileOption,
    do_backup: BackupOption = True,
    do_reload: ReloadOption = True,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Merge a partial configuration into the running configuration.

    Input example:

    {
      "system": {
        "dnsserver": ["1.1.1.1", "9.9.9.9"]
      }
    }
    """

    response: FauxApiObject = {}
    try:
        patch = load_config_payload(file_path)
        service = _build_service(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        response = service.patch_config(patch, do_backup=do_backup, do_reload=do_reload)
    except FauxApiError as exc:
        _handle_api_exception(exc)
    except (ValueError, OSError) as exc:
        console.print(f"Invalid input: {exc}", style="bold red")
        raise typer.Exit(code=1) from exc

    _render_result("config_patch", response)
