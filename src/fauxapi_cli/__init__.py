"""pfSense FauxAPI client and CLI package."""

from importlib.metadata import PackageNotFoundError, version

from fauxapi_cli.client import ACTIONS, FauxApiClient
from fauxapi_cli.exceptions import ConfigError, DecodeError, FauxApiError, TransportError

__all__ = [
    "ACTIONS",
    "ConfigError",
    "DecodeError",
    "FauxApiClient",
    "FauxApiError",
    "TransportError",
    "__version__",
]

try:
    __version__ = version("fauxapi-cli")
except PackageNotFoundError:
    __version__ = "0.1.0"
