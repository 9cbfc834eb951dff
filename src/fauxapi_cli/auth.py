"""FauxAPI request authentication.

Every request carries a ``fauxapi-auth`` header of the form::

    apikey:timestamp:nonce:sha256(apisecret + timestamp + nonce)

The server rejects tokens whose timestamp falls outside its validity window,
so a token is generated per request and never cached.
"""

from __future__ import annotations

import hashlib
import random
import string
from datetime import UTC, datetime

NONCE_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
NONCE_LENGTH = 8
TIMESTAMP_FORMAT = "%Y%m%dZ%H%M%S"

_random = random.SystemRandom()


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Return a random alphanumeric nonce."""

    return "".join(_random.choice(NONCE_ALPHABET) for _ in range(length))


def generate_timestamp(now: datetime | None = None) -> str:
    """Return the UTC timestamp in the ``YYYYMMDDZHHMMSS`` form the server expects."""

    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def compute_hash(api_secret: str, timestamp: str, nonce: str) -> str:
    digest = hashlib.sha256(f"{api_secret}{timestamp}{nonce}".encode())
    return digest.hexdigest()


def generate_auth_token(
    api_key: str,
    api_secret: str,
    *,
    timestamp: str | None = None,
    nonce: str | None = None,
) -> str:
    """Build the value of the ``fauxapi-auth`` header."""

    timestamp = timestamp or generate_timestamp()
    nonce = nonce or generate_nonce()
    return ":".join([api_key, timestamp, nonce, compute_hash(api_secret, timestamp, nonce)])
