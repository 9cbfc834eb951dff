"""System command group implementation."""

from __future__ import annotations

import json
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON

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
from fauxapi_cli.firewall_client import FauxApiClientProtocol
from fauxapi_cli.models.requests import FunctionCall, SendEvent
from fauxapi_cli.sdk import create_client

system_app = typer.Typer(no_args_is_help=True, help="System status, events and maintenance.")
console = Console()


def _build_client(
    ctx: typer.Context,
    uri: str | None,
    api_key: str | None,
    api_secret: str | None,
    debug: bool | None,
    insecure: bool | None,
    timeout: float | None,
) -> FauxApiClientProtocol:
    settings: Settings = ctx.obj["settings"]
    params = connection_params(settings, uri, api_key, api_secret, debug, insecure, timeout)
    return create_client(params)


def _handle_api_exception(exc: Exception) -> None:
    console.print(f"API request failed: {exc}", style="bold red")
    raise typer.Exit(code=1) from exc


def _parse_arg(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


@system_app.command("stats")
def system_stats(
    ctx: typer.Context,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Show CPU, memory, disk and uptime statistics."""

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.system_stats()
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("gateway-status")
def gateway_status(
    ctx: typer.Context,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Show gateway status data."""

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.gateway_status()
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("interface-stats")
def interface_stats(
    ctx: typer.Context,
    interface: Annotated[
        str,
        typer.Argument(help="Real interface name (e.g. em0), not an alias like WAN."),
    ],
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Show statistics for one interface."""

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.interface_stats(params={"interface": interface})
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("rules")
def rule_get(
    ctx: typer.Context,
    rule_number: Annotated[
        int | None,
        typer.Option("--rule-number", min=0, help="Only return this rule."),
    ] = None,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Show the loaded pf rules (pfctl -sr -vv)."""

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.rule_get(params={"rule_number": rule_number})
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("update-urltables")
def alias_update_urltables(
    ctx: typer.Context,
    table: Annotated[
        str | None,
        typer.Option("--table", help="Only update this urltable alias."),
    ] = None,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Refresh urltable aliases from their source URLs."""

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.alias_update_urltables(params={"table": table})
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("send-event")
def send_event(
    ctx: typer.Context,
    command: Annotated[
        list[str],
        typer.Argument(help="Event command, e.g. 'filter reload' or 'service restart sshd'."),
    ],
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Run a pfSense send_event command.

    Permitted commands:

    filter: reload, sync

    interface: all, newip, reconfigure (optionally followed by an interface name)

    service: reload, restart, sync (optionally followed by a service name)
    """

    try:
        event = SendEvent(command=" ".join(command))
    except ValidationError as exc:
        console.print(f"Invalid input: {exc.errors()[0]['msg']}", style="bold red")
        raise typer.Exit(code=1) from exc

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.send_event(event.to_payload())
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("function-call")
def function_call(
    ctx: typer.Context,
    function: Annotated[str, typer.Argument(help="pfSense PHP function name.")],
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Function arguments; JSON literals are decoded."),
    ] = None,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Call a pfSense PHP function listed in /etc/pfsense_function_calls.txt."""

    try:
        call = FunctionCall(function=function, args=[_parse_arg(arg) for arg in args or []])
    except ValidationError as exc:
        console.print(f"Invalid input: {exc.errors()[0]['msg']}", style="bold red")
        raise typer.Exit(code=1) from exc

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.function_call(call.to_payload())
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))


@system_app.command("reboot")
def system_reboot(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", help="Confirm the reboot."),
    ] = False,
    uri: UriOption = None,
    api_key: ApiKeyOption = None,
    api_secret: ApiSecretOption = None,
    debug: DebugOption = None,
    insecure: InsecureOption = None,
    timeout: TimeoutOption = None,
) -> None:
    """Reboot the firewall."""

    if not yes:
        console.print("Refusing to reboot without --yes.", style="bold red")
        raise typer.Exit(code=1)

    result: Any = None
    try:
        client = _build_client(ctx, uri, api_key, api_secret, debug, insecure, timeout)
        result = client.system_reboot()
    except FauxApiError as exc:
        _handle_api_exception(exc)

    console.print(JSON.from_data(result))
