from unittest.mock import patch

import pytest

from conbeekit import cli
from conbeekit.api.errors import BridgeConnectionError
from conbeekit.config.settings import API_KEY_VAR, HOST_VAR, TIMEOUT_VAR, BridgeSettings
from conbeekit.models.api_response import ApiResponse
from conbeekit.models.light import Light, State

BRIDGE = ["--host", "bridge.local", "--api-key", "KEY"]


@pytest.fixture
def client_cls():
    with patch("conbeekit.cli.LightsClient") as lights_client:
        yield lights_client


@pytest.fixture
def client(client_cls):
    return client_cls.return_value


def test_list(client_cls, client, capsys):
    client.fetch_all_lights.return_value = [Light(id=1, name="a"), Light(id=2, name="b")]

    assert cli.main(BRIDGE + ["list"]) == 0

    client_cls.assert_called_once_with("bridge.local", "KEY", timeout=None)
    out = capsys.readouterr().out
    assert out.startswith("ID:              1\n")
    assert "State:\n\nID:              2\n" in out


def test_show(client, capsys):
    client.fetch_light.return_value = Light(id=4, name="desk", state=State(on=True))

    assert cli.main(BRIDGE + ["show", "4"]) == 0

    client.fetch_light.assert_called_once_with(4)
    assert capsys.readouterr().out.endswith("State:\nOn:              true\n")


@pytest.mark.parametrize("command, expected", [
    (["on", "3"], {"on": True}),
    (["off", "3"], {"on": False}),
    (["ct", "3", "200", "370"], {"bri": 200, "ct": 370}),
    (["xy", "3", "0.32", "0.45"], {"xy": [0.32, 0.45]}),
])
def test_state_commands(client, capsys, command, expected):
    client.set_light_state.return_value = [ApiResponse(success={"/lights/3/state/on": True})]

    assert cli.main(BRIDGE + command) == 0

    light_id, state = client.set_light_state.call_args.args
    assert light_id == 3
    assert state.to_payload() == expected
    assert capsys.readouterr().out == "/lights/3/state/on => True\n"


def test_rename(client, capsys):
    client.set_light_name.return_value = [ApiResponse(success={"/lights/3/name": "Desk lamp"})]

    assert cli.main(BRIDGE + ["rename", "3", "Desk lamp"]) == 0

    client.set_light_name.assert_called_once_with(3, "Desk lamp")
    assert capsys.readouterr().out == "/lights/3/name => Desk lamp\n"


def test_bridge_error_exits_with_1(client, capsys):
    client.fetch_light.side_effect = BridgeConnectionError("GET http://bridge.local/api/***/lights/1 failed")

    assert cli.main(BRIDGE + ["show", "1"]) == 1

    assert capsys.readouterr().err == "error: GET http://bridge.local/api/***/lights/1 failed\n"


@pytest.fixture
def bridge_env(monkeypatch, tmp_path):
    # no .env in reach, and no bridge variables from the outer environment
    monkeypatch.chdir(tmp_path)
    for name in (HOST_VAR, API_KEY_VAR, TIMEOUT_VAR):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_falls_back_to_environment(client_cls, bridge_env):
    bridge_env.setenv(HOST_VAR, "from-env")
    bridge_env.setenv(API_KEY_VAR, "ENVKEY")

    assert cli.main(["--timeout", "4", "list"]) == 0

    used = client_cls.from_settings.call_args.args[0]
    assert used == BridgeSettings(host="from-env", api_key="ENVKEY", timeout=4.0)


def test_host_flag_with_key_from_environment(client_cls, bridge_env):
    bridge_env.setenv(API_KEY_VAR, "ENVKEY")

    assert cli.main(["--host", "10.0.0.2", "list"]) == 0

    used = client_cls.from_settings.call_args.args[0]
    assert (used.host, used.api_key) == ("10.0.0.2", "ENVKEY")


def test_key_flag_with_host_from_environment(client_cls, bridge_env):
    bridge_env.setenv(HOST_VAR, "from-env")
    bridge_env.setenv(TIMEOUT_VAR, "1.5")

    assert cli.main(["--api-key", "FLAGKEY", "list"]) == 0

    used = client_cls.from_settings.call_args.args[0]
    assert used == BridgeSettings(host="from-env", api_key="FLAGKEY", timeout=1.5)


def test_flag_wins_over_environment(client_cls, bridge_env):
    bridge_env.setenv(HOST_VAR, "from-env")
    bridge_env.setenv(API_KEY_VAR, "ENVKEY")

    assert cli.main(["--host", "10.0.0.2", "list"]) == 0

    assert client_cls.from_settings.call_args.args[0].host == "10.0.0.2"


def test_missing_configuration(client_cls, bridge_env, capsys):
    assert cli.main(["--host", "10.0.0.2", "list"]) == 1

    assert "CONBEE_HOST and CONBEE_API_KEY must be set" in capsys.readouterr().err
    client_cls.from_settings.assert_not_called()
