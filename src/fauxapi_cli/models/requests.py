"""Request body models for the FauxAPI POST actions."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

# send_event combinations pfSense accepts through FauxAPI.
SEND_EVENT_COMMANDS: dict[str, frozenset[str]] = {
    "filter": frozenset({"reload", "sync"}),
    "interface": frozenset({"all", "newip", "reconfigure"}),
    "service": frozenset({"reload", "restart", "sync"}),
}

_FUNCTION_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SendEvent(BaseModel):
    """A pfSense send_event command, e.g. ``filter reload``."""

    command: str = Field(min_length=1)

    @field_validator("command")
    @classmethod
    def validate_command(cls, value: str) -> str:
        words = value.split()
        if len(words) < 2:
            raise ValueError("send_event command must be '<group> <verb>', e.g. 'filter reload'")

        group, verb = words[0].lower(), words[1].lower()
        verbs = SEND_EVENT_COMMANDS.get(group)
        if verbs is None:
            raise ValueError(f"Unsupported send_event group: {words[0]}")
        if verb not in verbs:
            raise ValueError(f"Unsupported send_event action for {group}: {words[1]}")
        if group == "filter" and len(words) > 2:
            raise ValueError(f"'{group} {verb}' does not take arguments")

        return " ".join([group, verb, *words[2:]])

    def to_payload(self) -> list[str]:
        return [self.command]


class FunctionCall(BaseModel):
    """A call to a pfSense PHP function enabled in /etc/pfsense_function_calls.txt."""

    function: str = Field(min_length=1)
    args: list[object] = Field(default_factory=list)

    @field_validator("function")
    @classmethod
    def validate_function(cls, value: str) -> str:
        name = value.strip()
        if not _FUNCTION_NAME_RE.match(name):
            raise ValueError(f"Invalid function name: {value}")
        return name

    def to_payload(self) -> dict[str, object]:
        return {"function": self.function, "args": list(self.args)}
