"""HTTP client for the pfSense FauxAPI."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal
from urllib.parse import urlencode

import httpx

from fauxapi_cli.auth import generate_auth_token
from fauxapi_cli.exceptions import ConfigError, DecodeError, TransportError

if TYPE_CHECKING:
    from fauxapi_cli.config import Settings

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST"]
QueryParams = Mapping[str, object]

API_PATH = "/fauxapi/v1/"
AUTH_HEADER = "fauxapi-auth"
DEFAULT_TIMEOUT = 30.0

ACTIONS: dict[str, HttpMethod] = {
    "alias_update_urltables": "GET",
    "config_backup": "GET",
    "config_backup_list": "GET",
    "config_get": "GET",
    "config_patch": "POST",
    "config_reload": "GET",
    "config_restore": "GET",
    "config_set": "POST",
    "function_call": "POST",
    "gateway_status": "GET",
    "interface_stats": "GET",
    "rule_get": "GET",
    "send_event": "POST",
    "system_reboot": "GET",
    "system_stats": "GET",
}


def _require(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise ConfigError(f"{name} is required")
    return value


def _require_header_safe(value: str | None, name: str) -> str:
    # The key travels verbatim as the first field of the auth header.
    value = _require(value, name)
    if not value.isascii() or not value.isprintable():
        raise ConfigError(f"{name} must contain printable ASCII characters only")
    if ":" in value:
        raise ConfigError(f"{name} must not contain ':'")
    return value


def _query_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FauxApiClient:
    """Client for the FauxAPI endpoints of a pfSense host.

    Responses are returned as decoded JSON without interpretation. An HTTP
    error status does not raise: the server reports failures in the JSON
    envelope and the caller is expected to inspect it.
    """

    def __init__(
        self,
        uri: str | None,
        api_key: str | None,
        api_secret: str | None,
        debug: bool = False,
        insecure: bool = False,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self._uri = _require(uri, "uri").rstrip("/")
        self._api_key = _require_header_safe(api_key, "api_key")
        self._api_secret = _require(api_secret, "api_secret")
        self._debug = bool(debug)
        self._insecure = bool(insecure)
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.BaseTransport | None = None
    ) -> FauxApiClient:
        return cls(
            uri=settings.uri,
            api_key=settings.api_key,
            api_secret=settings.api_secret,
            debug=settings.debug,
            insecure=not settings.verify_ssl,
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def debug(self) -> bool:
        """Ask the server to include debug data in every response."""
        return self._debug

    @debug.setter
    def debug(self, value: object) -> None:
        self._debug = bool(value)

    @property
    def insecure(self) -> bool:
        """Skip TLS certificate verification."""
        return self._insecure

    @insecure.setter
    def insecure(self, value: object) -> None:
        self._insecure = bool(value)

    def build_url(
        self,
        action: str,
        params: QueryParams | None = None,
        *,
        debug: bool | None = None,
    ) -> str:
        """Return the request URL for ``action``.

        ``action`` always comes first and cannot be overridden by ``params``.
        Parameters set to ``None`` are left out of the query string.
        """

        if debug is None:
            debug = self._debug

        query: dict[str, str] = {"action": action}
        if debug:
            query["__debug"] = "true"
        for key, value in (params or {}).items():
            if key == "action" or value is None:
                continue
            query[key] = _query_value(value)
        return f"{self._uri}{API_PATH}?{urlencode(query)}"

    def build_headers(self) -> dict[str, str]:
        return {
            AUTH_HEADER: generate_auth_token(self._api_key, self._api_secret),
            "Content-Type": "application/json",
        }

    def invoke(
        self,
        method: HttpMethod,
        action: str,
        data: Any = None,
        params: QueryParams | None = None,
    ) -> Any:
        """Send one authenticated request and return the decoded JSON response.

        Raises TransportError when no response is received and DecodeError when
        the body is not JSON.
        """

        # Flags may be flipped between calls; read them once per request.
        debug = self._debug
        verify = not self._insecure

        url = self.build_url(action, params, debug=debug)
        content = json.dumps(data, separators=(",", ":")) if data else None

        logger.debug("FauxAPI %s %s (verify=%s)", method, action, verify)
        try:
            with httpx.Client(
                verify=verify, timeout=self._timeout, transport=self._transport
            ) as http:
                response = http.request(method, url, headers=self.build_headers(), content=content)
        except httpx.TransportError as exc:
            raise TransportError(
                f"{method} {action} failed: {exc}", method=method, url=url
            ) from exc

        logger.debug("FauxAPI %s %s -> HTTP %s", method, action, response.status_code)
        return self._decode(action, response)

    @staticmethod
    def _decode(action: str, response: httpx.Response) -> Any:
        body = response.text
        try:
            return json.loads(body)
        except ValueError as exc:
            logger.debug(
                "FauxAPI %s returned a non-JSON body (HTTP %s)", action, response.status_code
            )
            raise DecodeError(
                f"Response to {action} is not valid JSON (HTTP {response.status_code})",
                status_code=response.status_code,
                body=body,
            ) from exc

    def alias_update_urltables(self, params: QueryParams | None = None) -> Any:
        """Refresh urltable aliases from their source URLs; ``table`` limits it to one."""
        return self.invoke("GET", "alias_update_urltables", params=params)

    def config_backup(self) -> Any:
        """Take a configuration backup under /cf/conf/backup/."""
        return self.invoke("GET", "config_backup")

    def config_backup_list(self) -> Any:
        """List the available configuration backups."""
        return self.invoke("GET", "config_backup_list")

    def config_get(self, params: QueryParams | None = None) -> Any:
        """Return the system configuration, or a backup given ``config_file``."""
        return self.invoke("GET", "config_get", params=params)

    def config_patch(self, data: Any = None, params: QueryParams | None = None) -> Any:
        """Merge a partial configuration into the running one.

        ``do_backup`` and ``do_reload`` default to true on the server.
        """
        return self.invoke("POST", "config_patch", data, params)

    def config_reload(self) -> Any:
        """Reload config.xml on the host."""
        return self.invoke("GET", "config_reload")

    def config_restore(self, params: QueryParams | None = None) -> Any:
        """Restore the backup named by ``config_file``."""
        return self.invoke("GET", "config_restore", params=params)

    def config_set(self, data: Any = None, params: QueryParams | None = None) -> Any:
        """Replace the whole system configuration.

        ``data`` must be the full configuration (``data.config`` of a
        config_get response), not only the part being changed.
        """
        return self.invoke("POST", "config_set", data, params)

    def function_call(self, data: Any) -> Any:
        """Call a whitelisted pfSense PHP function: ``{"function": ..., "args": [...]}``."""
        return self.invoke("POST", "function_call", data)

    def gateway_status(self) -> Any:
        return self.invoke("GET", "gateway_status")

    def interface_stats(self, params: QueryParams | None = None) -> Any:
        """Return statistics for the real interface name given as ``interface``."""
        return self.invoke("GET", "interface_stats", params=params)

    def rule_get(self, params: QueryParams | None = None) -> Any:
        """Return loaded pf rules, or the one selected by ``rule_number``."""
        return self.invoke("GET", "rule_get", params=params)

    def send_event(self, data: Any) -> Any:
        """Run a pfSense send_event command such as ``["filter reload"]``."""
        return self.invoke("POST", "send_event", data)

    def system_reboot(self) -> Any:
        return self.invoke("GET", "system_reboot")

    def system_stats(self) -> Any:
        return self.invoke("GET", "system_stats")
