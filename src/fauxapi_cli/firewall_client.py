"""Typed protocol for FauxAPI client interactions used by services/commands."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

FauxApiObject = dict[str, object]
QueryParams = Mapping[str, object]


class FauxApiClientProtocol(Protocol):
    """Subset of client methods used by this project."""

    def invoke(
        self,
        method: str,
        action: str,
        data: Any = None,
        params: QueryParams | None = None,
    ) -> Any: ...

    def alias_update_urltables(self, params: QueryParams | None = None) -> Any: ...

    def config_backup(self) -> Any: ...

    def config_backup_list(self) -> Any: ...

    def config_get(self, params: QueryParams | None = None) -> Any: ...

    def config_patch(self, data: Any = None, params: QueryParams | None = None) -> Any: ...

    def config_reload(self) -> Any: ...

    def config_restore(self, params: QueryParams | None = None) -> Any: ...

    def config_set(self, data: Any = None, params: QueryParams | None = None) -> Any: ...

    def function_call(self, data: Any) -> Any: ...

    def gateway_status(self) -> Any: ...

    def interface_stats(self, params: QueryParams | None = None) -> Any: ...

    def rule_get(self, params: QueryParams | None = None) -> Any: ...

    def send_event(self, data: Any) -> Any: ...

    def system_reboot(self) -> Any: ...

    def system_stats(self) -> Any: ...
