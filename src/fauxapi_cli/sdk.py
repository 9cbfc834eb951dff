"""Factory for the FauxAPI client used by the CLI."""

from typing import cast

from fauxapi_cli.client import FauxApiClient
from fauxapi_cli.connection import ConnectionParams
from fauxapi_cli.firewall_client import FauxApiClientProtocol


def create_client(connection: ConnectionParams) -> FauxApiClientProtocol:
    """Create a configured FauxAPI client."""

    client = FauxApiClient(
        uri=connection.uri,
        api_key=connection.api_key,
        api_secret=connection.api_secret,
        debug=connection.debug,
        insecure=connection.insecure,
        timeout=connection.timeout,
    )
    return cast(FauxApiClientProtocol, client)
