"""JSON payload input for commands that post data to the firewall."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import cast

Record = dict[str, object]


def load_json_payload(source: str) -> object:
    """Load a JSON document from a file or stdin (``-``)."""

    text = _read_text(source)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {_describe(source)}: {exc}") from exc


def load_config_payload(source: str) -> Record:
    """Load a configuration object for config set/patch."""

    payload = load_json_payload(source)
    record = _normalize_record(payload)
    if record is None:
        raise ValueError("Configuration input must be a JSON object with string keys")
    if not record:
        raise ValueError("Configuration input must not be an empty object")
    return record


def _read_text(source: str) -> str:
    if source == "-":
        content = sys.stdin.read()
    else:
        content = Path(source).read_text(encoding="utf-8")

    if not content.strip():
        raise ValueError("Input is empty")
    return content


def _describe(source: str) -> str:
    return "stdin" if source == "-" else source


def _normalize_record(value: object) -> Record | None:
    if not isinstance(value, dict):
        return None

    normalized: Record = {}
    for key, item in cast(dict[object, object], value).items():
        if not isinstance(key, str):
            return None
        normalized[key] = item
    return normalized
