from __future__ import annotations

from typing import Any

import pytest
from typer.testing import CliRunner

from fauxapi_cli.connection import ConnectionParams


def _envelope(action: str, data: object = None, message: str = "ok") -> dict[str, object]:
    return {"callid": "5b3b2b4c1a2f9", "action": action, "message": message, "data": data}


class InMemoryFauxApiClient:
    def __init__(self) -> None:
        self.config: dict[str, object] = {"system": {"hostname": "pfsense", "domain": "lan"}}
        self.backups: list[dict[str, object]] = []
        self.calls: list[tuple[str, dict[str, object]]] = []
        self.params: ConnectionParams | None = None

    @property
    def last_call(self) -> tuple[str, dict[str, object]] | None:
        return self.calls[-1] if self.calls else None

    def seed_backup(self, filename: str) -> None:
        self.backups.append(
            {
                "filename": filename,
                "timestamp": "20240102Z030405",
                "description": "fauxapi-PFFA@192.0.2.1: update via fauxapi",
                "version": "22.2",
                "filesize": 34567,
            }
        )

    def _record(self, name: str, **kwargs: object) -> None:
        self.calls.append((name, kwargs))

    def invoke(
        self,
        method: str,
        action: str,
        data: Any = None,
        params: Any = None,
    ) -> dict[str, object]:
        self._record("invoke", method=method, action=action, data=data, params=params)
        return _envelope(action, {"echo": data})

    def alias_update_urltables(self, params: Any = None) -> dict[str, object]:
        self._record("alias_update_urltables", params=params)
        return _envelope("alias_update_urltables", {"updates": {}})

    def config_backup(self) -> dict[str, object]:
        self._record("config_backup")
        filename = f"/cf/conf/backup/config-{len(self.backups) + 1}.xml"
        self.seed_backup(filename)
        return _envelope("config_backup", {"backup_config_file": filename})

    def config_backup_list(self) -> dict[str, object]:
        self._record("config_backup_list")
        return _envelope("config_backup_list", {"backup_files": list(self.backups)})

    def config_get(self, params: Any = None) -> dict[str, object]:
        self._record("config_get", params=params)
        return _envelope(
            "config_get", {"config_file": "/cf/conf/config.xml", "config": self.config}
        )

    def config_patch(self, data: Any = None, params: Any = None) -> dict[str, object]:
        self._record("config_patch", data=data, params=params)
        self.config.update(data or {})
        return _envelope("config_patch", {"do_backup": True, "do_reload": True})

    def config_reload(self) -> dict[str, object]:
        self._record("config_reload")
        return _envelope("config_reload")

    def config_restore(self, params: Any = None) -> dict[str, object]:
        self._record("config_restore", params=params)
        filenames = {backup["filename"] for backup in self.backups}
        if (params or {}).get("config_file") not in filenames:
            return _envelope("config_restore", message="config_file does not exist")
        return _envelope("config_restore", {"config_file": params["config_file"]})

    def config_set(self, data: Any = None, params: Any = None) -> dict[str, object]:
        self._record("config_set", data=data, params=params)
        self.config = dict(data or {})
        return _envelope("config_set", {"do_backup": True, "do_reload": True})

    def function_call(self, data: Any) -> dict[str, object]:
        self._record("function_call", data=data)
        return _envelope("function_call", {"return": None})

    def gateway_status(self) -> dict[str, object]:
        self._record("gateway_status")
        return _envelope("gateway_status", {"gateway_status": {}})

    def interface_stats(self, params: Any = None) -> dict[str, object]:
        self._record("interface_stats", params=params)
        return _envelope("interface_stats", {"stats": {"inpkts": 10}})

    def rule_get(self, params: Any = None) -> dict[str, object]:
        self._record("rule_get", params=params)
        return _envelope("rule_get", {"rules": []})

    def send_event(self, data: Any) -> dict[str, object]:
        self._record("send_event", data=data)
        return _envelope("send_event")

    def system_reboot(self) -> dict[str, object]:
        self._record("system_reboot")
        return _envelope("system_reboot")

    def system_stats(self) -> dict[str, object]:
        self._record("system_stats")
        return _envelope("system_stats", {"stats": {"cpu": "3.2", "mem": "21"}})


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def connection_args() -> list[str]:
    return [
        "--uri",
        "https://fw.example.com",
        "--api-key",
        "PFFAexample",
        "--api-secret",
        "super-secret",
    ]


@pytest.fixture
def fauxapi_client(monkeypatch: pytest.MonkeyPatch) -> InMemoryFauxApiClient:
    client = InMemoryFauxApiClient()

    def _create_client(params: ConnectionParams) -> InMemoryFauxApiClient:
        client.params = params
        return client

    monkeypatch.setattr("fauxapi_cli.cli.create_client", _create_client)
    monkeypatch.setattr("fauxapi_cli.commands.config.create_client", _create_client)
    monkeypatch.setattr("fauxapi_cli.commands.system.create_client", _create_client)
    return client
