from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from fauxapi_cli.cli import app
from fauxapi_cli.connection import ConnectionParams
from fauxapi_cli.exceptions import DecodeError, TransportError


def test_commands_require_connection_settings(runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["system", "stats"],
        env={
            "FAUXAPI_CLI_URI": "",
            "FAUXAPI_CLI_API_KEY": "",
            "FAUXAPI_CLI_API_SECRET": "",
        },
    )

    assert result.exit_code == 2


def test_settings_are_read_from_env_file(
    runner: CliRunner,
    fauxapi_client: Any,
    tmp_path: Path,
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "FAUXAPI_CLI_URI=https://fw.example.com\n"
        "FAUXAPI_CLI_API_KEY=PFFAenv\n"
        "FAUXAPI_CLI_API_SECRET=env-secret\n"
        "FAUXAPI_CLI_VERIFY_SSL=false\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["--env-file", str(env_file), "system", "stats"])

    assert result.exit_code == 0
    assert fauxapi_client.params == ConnectionParams(
        uri="https://fw.example.com",
        api_key="PFFAenv",
        api_secret="env-secret",
        debug=False,
        insecure=True,
        timeout=30.0,
    )


def test_test_connection_success(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(app, ["test-connection", *connection_args])

    assert result.exit_code == 0
    assert "Connected to https://fw.example.com" in result.stdout
    assert fauxapi_client.last_call == ("system_stats", {})


def test_test_connection_auth_failure(
    runner: CliRunner,
    connection_args: list[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class AuthFailureClient:
        def system_stats(self) -> object:
            return {"callid": "5b3b2b4c1a2f9", "message": "authentication failed"}

    def _create_client(_params: ConnectionParams) -> AuthFailureClient:
        return AuthFailureClient()

    monkeypatch.setattr("fauxapi_cli.cli.create_client", _create_client)

    result = runner.invoke(app, ["test-connection", *connection_args])

    assert result.exit_code == 1
    assert "Authentication failed: authentication failed" in result.stdout


def test_transport_error_exits_with_code_1(
    runner: CliRunner,
    connection_args: list[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class UnreachableClient:
        def gateway_status(self) -> object:
            raise TransportError(
                "connection refused",
                method="GET",
                url="https://fw.example.com/fauxapi/v1/?action=gateway_status",
            )

    def _create_client(_params: ConnectionParams) -> UnreachableClient:
        return UnreachableClient()

    monkeypatch.setattr("fauxapi_cli.commands.system.create_client", _create_client)

    result = runner.invoke(app, ["system", "gateway-status", *connection_args])

    assert result.exit_code == 1
    assert "API request failed: connection refused" in result.stdout


def test_call_invokes_generic_action(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(
        app,
        ["call", "rule_get", "--param", "rule_number=5", "--debug", *connection_args],
    )

    assert result.exit_code == 0
    assert fauxapi_client.last_call == (
        "invoke",
        {"method": "GET", "action": "rule_get", "data": None, "params": {"rule_number": "5"}},
    )
    assert fauxapi_client.params.debug is True


def test_call_rejects_unknown_action(runner: CliRunner, connection_args: list[str]) -> None:
    result = runner.invoke(app, ["call", "drop_tables", *connection_args])

    assert result.exit_code == 2


def test_call_reports_decode_error(
    runner: CliRunner,
    connection_args: list[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class HtmlClient:
        def invoke(self, method: str, action: str, data: Any = None, params: Any = None) -> object:
            raise DecodeError("not valid JSON", status_code=502, body="<html>")

    def _create_client(_params: ConnectionParams) -> HtmlClient:
        return HtmlClient()

    monkeypatch.setattr("fauxapi_cli.cli.create_client", _create_client)

    result = runner.invoke(app, ["call", "system_stats", *connection_args])

    assert result.exit_code == 1
    assert "API request failed: not valid JSON" in result.stdout


def test_config_patch_from_file(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
    tmp_path: Path,
) -> None:
    source = tmp_path / "patch.json"
    source.write_text('{"system": {"dnsserver": ["1.1.1.1"]}}', encoding="utf-8")

    result = runner.invoke(
        app,
        ["config", "patch", "--file", str(source), "--no-reload", *connection_args],
    )

    assert result.exit_code == 0
    assert "config_patch: ok" in result.stdout
    assert fauxapi_client.last_call == (
        "config_patch",
        {
            "data": {"system": {"dnsserver": ["1.1.1.1"]}},
            "params": {"do_backup": True, "do_reload": False},
        },
    )


def test_config_set_missing_file_returns_exit_code_1(
    runner: CliRunner,
    connection_args: list[str],
) -> None:
    result = runner.invoke(
        app,
        ["config", "set", "--file", "does-not-exist.json", *connection_args],
    )

    assert result.exit_code == 1
    assert "Invalid input" in result.stdout


def test_config_backup_list_json(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    fauxapi_client.seed_backup("/cf/conf/backup/config-1.xml")

    result = runner.invoke(app, ["config", "backup-list", "--output", "json", *connection_args])

    assert result.exit_code == 0
    assert "/cf/conf/backup/config-1.xml" in result.stdout


def test_config_restore_unknown_backup_returns_exit_code_1(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(
        app,
        ["config", "restore", "/cf/conf/backup/missing.xml", *connection_args],
    )

    assert result.exit_code == 1
    assert "config_file does not exist" in result.stdout
    assert fauxapi_client.last_call == (
        "config_restore",
        {"params": {"config_file": "/cf/conf/backup/missing.xml"}},
    )


def test_send_event_posts_command_list(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(app, ["system", "send-event", "filter", "reload", *connection_args])

    assert result.exit_code == 0
    assert fauxapi_client.last_call == ("send_event", {"data": ["filter reload"]})


def test_send_event_rejects_unknown_command(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(app, ["system", "send-event", "filter", "explode", *connection_args])

    assert result.exit_code == 1
    assert "Invalid input" in result.stdout
    assert fauxapi_client.calls == []


def test_function_call_decodes_json_args(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(
        app,
        ["system", "function-call", "get_service", "ntpd", "3", *connection_args],
    )

    assert result.exit_code == 0
    assert fauxapi_client.last_call == (
        "function_call",
        {"data": {"function": "get_service", "args": ["ntpd", 3]}},
    )


def test_reboot_requires_confirmation(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    refused = runner.invoke(app, ["system", "reboot", *connection_args])
    assert refused.exit_code == 1
    assert fauxapi_client.calls == []

    confirmed = runner.invoke(app, ["system", "reboot", "--yes", *connection_args])
    assert confirmed.exit_code == 0
    assert fauxapi_client.last_call == ("system_reboot", {})


def test_interface_stats_forwards_interface(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(app, ["system", "interface-stats", "em0", *connection_args])

    assert result.exit_code == 0
    assert fauxapi_client.last_call == ("interface_stats", {"params": {"interface": "em0"}})


def test_call_sends_data_file_as_body(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
    tmp_path: Path,
) -> None:
    source = tmp_path / "patch.json"
    source.write_text('{"system": {"timezone": "Etc/UTC"}}', encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "call",
            "config_patch",
            "-f",
            str(source),
            "--param",
            "do_reload=false",
            *connection_args,
        ],
    )

    assert result.exit_code == 0
    assert fauxapi_client.last_call == (
        "invoke",
        {
            "method": "POST",
            "action": "config_patch",
            "data": {"system": {"timezone": "Etc/UTC"}},
            "params": {"do_reload": "false"},
        },
    )


def test_call_rejects_invalid_data_file(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
    tmp_path: Path,
) -> None:
    source = tmp_path / "broken.json"
    source.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["call", "config_set", "-f", str(source), *connection_args])

    assert result.exit_code == 1
    assert "Invalid input" in result.stdout
    assert fauxapi_client.calls == []


def test_command_line_flags_override_env_settings(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    env = {"FAUXAPI_CLI_DEBUG": "true", "FAUXAPI_CLI_VERIFY_SSL": "false"}

    from_env = runner.invoke(app, ["system", "stats", *connection_args], env=env)
    assert from_env.exit_code == 0
    assert fauxapi_client.params.debug is True
    assert fauxapi_client.params.insecure is True

    overridden = runner.invoke(
        app,
        ["system", "stats", "--no-debug", "--no-insecure", *connection_args],
        env=env,
    )
    assert overridden.exit_code == 0
    assert fauxapi_client.params.debug is False
    assert fauxapi_client.params.insecure is False


def test_send_event_accepts_interface_argument(
    runner: CliRunner,
    connection_args: list[str],
    fauxapi_client: Any,
) -> None:
    result = runner.invoke(
        app,
        ["system", "send-event", "interface", "reconfigure", "wan", *connection_args],
    )

    assert result.exit_code == 0
    assert fauxapi_client.last_call == ("send_event", {"data": ["interface reconfigure wan"]})
