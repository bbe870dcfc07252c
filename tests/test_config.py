import json
import logging
from unittest.mock import mock_open, patch

from lan_chat.constants import DEFAULT_SERVER_URL
from lan_chat.repositories import ConfigRepository


def test_load_config_defaults_when_missing():
    with patch("os.path.exists", return_value=False):
        repo = ConfigRepository()
        assert repo.load_config() == {}
        settings = repo.load_settings()
    assert settings.server_url == DEFAULT_SERVER_URL
    assert settings.message_interval_seconds == 5.0
    assert settings.peer_interval_seconds == 30.0
    assert settings.status_clear_seconds == 3.0


def test_load_settings_from_file(tmp_path):
    config_file = tmp_path / "lan_chat_config.json"
    config_file.write_text(
        json.dumps(
            {
                "server_url": "http://10.0.0.5:9000",
                "peers_path": "/api/peers",
                "time_unit_seconds": 0.5,
            }
        ),
        encoding="utf-8",
    )

    settings = ConfigRepository(str(config_file)).load_settings()

    assert settings.server_url == "http://10.0.0.5:9000"
    assert settings.url_for(settings.peers_path) == "http://10.0.0.5:9000/api/peers"
    assert settings.message_interval_seconds == 2.5
    assert settings.peer_interval_seconds == 15.0


def test_server_override_wins(tmp_path):
    config_file = tmp_path / "lan_chat_config.json"
    config_file.write_text(json.dumps({"server_url": "http://a:1"}), encoding="utf-8")

    settings = ConfigRepository(str(config_file)).load_settings("http://b:2")

    assert settings.server_url == "http://b:2"


def test_load_config_invalid_json_logs_warning(caplog):
    with patch("os.path.exists", return_value=True):
        with patch("builtins.open", mock_open(read_data="{bad-json")):
            repo = ConfigRepository()
            with caplog.at_level(logging.WARNING):
                config = repo.load_config()
    assert config == {}
    assert "Failed to load config from lan_chat_config.json" in caplog.text


def test_invalid_values_fall_back_to_defaults(tmp_path, caplog):
    config_file = tmp_path / "lan_chat_config.json"
    config_file.write_text(json.dumps({"time_unit_seconds": -1}), encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        settings = ConfigRepository(str(config_file)).load_settings("http://c:3")

    assert settings.time_unit_seconds == 1.0
    assert settings.server_url == "http://c:3"
    assert "Invalid settings" in caplog.text

