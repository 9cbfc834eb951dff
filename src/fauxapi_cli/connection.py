"""Shared connection option resolution for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import typer

from fauxapi_cli.config import Settings

UriOption = Annotated[
    str | None,
    typer.Option("--uri", help="pfSense base URL, e.g. https://fw.example.com."),
]
ApiKeyOption = Annotated[str | None, typer.Option("--api-key", help="FauxAPI key.")]
ApiSecretOption = Annotated[str | None, typer.Option("--api-secret", help="FauxAPI secret.")]
DebugOption = Annotated[
    bool | None,
    typer.Option(
        "--debug/--no-debug",
        help="Ask the server to add debug data to responses. Defaults to FAUXAPI_CLI_DEBUG.",
        show_default=False,
    ),
]
InsecureOption = Annotated[
    bool | None,
    typer.Option(
        "--insecure/--no-insecure",
        help="Disable TLS certificate verification. Defaults to FAUXAPI_CLI_VERIFY_SSL.",
        show_default=False,
    ),
]
TimeoutOption = Annotated[
    float | None,
    typer.Option("--timeout", min=0.1, help="Request timeout in seconds."),
]


@dataclass(frozen=True, slots=True)
class ConnectionParams:
    """Resolved connection parameters for the FauxAPI client."""

    uri: str
    api_key: str
    api_secret: str
    debug: bool
    insecure: bool
    timeout: float


def _resolve(value: str | None, default: str | None, option_name: str) -> str:
    if value:
        return value
    if default:
        return default
    raise typer.BadParameter(
        f"Provide --{option_name} or set FAUXAPI_CLI_{option_name.upper().replace('-', '_')}."
    )


def connection_params(
    settings: Settings,
    uri: str | None,
    api_key: str | None,
    api_secret: str | None,
    debug: bool | None,
    insecure: bool | None,
    timeout: float | None,
) -> ConnectionParams:
    """Resolve command options and settings into client kwargs."""

    return ConnectionParams(
        uri=_resolve(uri, settings.uri, "uri"),
        api_key=_resolve(api_key, settings.api_key, "api-key"),
        api_secret=_resolve(api_secret, settings.api_secret, "api-secret"),
        debug=debug if debug is not None else settings.debug,
        insecure=insecure if insecure is not None else not settings.verify_ssl,
        timeout=timeout if timeout is not None else settings.timeout,
    )
