"""Business logic for the configuration commands."""

from __future__ import annotations

from typing import cast

from fauxapi_cli.firewall_client import FauxApiClientProtocol, FauxApiObject


def response_message(response: object) -> str:
    """Return the ``message`` field of a FauxAPI response envelope."""

    if not isinstance(response, dict):
        return ""
    message = cast(dict[object, object], response).get("message")
    return str(message) if message is not None else ""


def is_ok(response: object) -> bool:
    return response_message(response).lower() == "ok"


class ConfigService:
    """Service wrapper around the FauxAPI config_* actions.

    FauxAPI answers with an envelope such as
    ``{"callid": ..., "action": ..., "message": "ok", "data": {...}}``;
    this service unwraps ``data`` where a command needs it.
    """

    def __init__(self, client: FauxApiClientProtocol):
        self._client = client

    def get_config(self, config_file: str | None = None) -> FauxApiObject:
        response = self._client.config_get(params={"config_file": config_file})
        data = self._normalize_object_dict(self._normalize_object_dict(response).get("data"))
        config = data.get("config")
        if not isinstance(config, dict):
            raise ValueError(f"config_get returned no configuration: {response_message(response)}")
        return self._normalize_object_dict(config)

    def list_backups(self) -> list[FauxApiObject]:
        response = self._client.config_backup_list()
        data = self._normalize_object_dict(self._normalize_object_dict(response).get("data"))
        raw_backups = data.get("backup_files")
        if not isinstance(raw_backups, list):
            return []

        backups: list[FauxApiObject] = []
        for raw_backup in cast(list[object], raw_backups):
            backup = self._normalize_object_dict(raw_backup)
            if backup:
                backups.append(backup)
        return backups

    def backup(self) -> FauxApiObject:
        return self._normalize_object_dict(self._client.config_backup())

    def reload(self) -> FauxApiObject:
        return self._normalize_object_dict(self._client.config_reload())

    def restore(self, config_file: str) -> FauxApiObject:
        if not config_file.strip():
            raise ValueError("config_file must not be empty")
        return self._normalize_object_dict(
            self._client.config_restore(params={"config_file": config_file})
        )

    def set_config(
        self,
        config: FauxApiObject,
        *,
        do_backup: bool = True,
        do_reload: bool = True,
    ) -> FauxApiObject:
        if not config:
            raise ValueError("Refusing to set an empty configuration")
        response = self._client.config_set(
            config, params={"do_backup": do_backup, "do_reload": do_reload}
        )
        return self._normalize_object_dict(response)

    def patch_config(
        self,
        patch: FauxApiObject,
        *,
        do_backup: bool = True,
        do_reload: bool = True,
    ) -> FauxApiObject:
        if not patch:
            raise ValueError("Refusing to apply an empty configuration patch")
        response = self._client.config_patch(
            patch, params={"do_backup": do_backup, "do_reload": do_reload}
        )
        return self._normalize_object_dict(response)

    @staticmethod
    def _normalize_object_dict(value: object) -> FauxApiObject:
        if not isinstance(value, dict):
            return {}

        normalized: FauxApiObject = {}
        for key, item in cast(dict[object, object], value).items():
            if isinstance(key, str):
                normalized[key] = item
        return normalized
