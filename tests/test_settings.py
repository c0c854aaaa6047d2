"""Pytest tests for settings management."""

import os
import pytest
import yaml
from unittest.mock import patch

from config.settings import Settings, DEFAULT_EXCLUDE_PREFIXES, DEFAULT_TUNNEL_PREFIXES


@pytest.fixture
def config_file(tmp_path):
    def write(data):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(data))
        return str(path)
    return write


class TestSettings:
    """Test cases for Settings class."""

    @pytest.mark.unit
    def test_defaults_without_file(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(str(tmp_path / "missing.yaml"))

        assert settings.get('dashboard.tick_interval') == 0.5
        assert settings.get('dashboard.history_size') == 300
        assert settings.get('dashboard.graph_window') == 300
        assert settings.get('interfaces.exclude_prefixes') == DEFAULT_EXCLUDE_PREFIXES
        assert settings.get('interfaces.tunnel_prefixes') == DEFAULT_TUNNEL_PREFIXES
        assert settings.get('network_manager.command_timeout') == 5
        assert settings.get('notifications.enabled') is True
        assert settings.get('logging.level') == 'INFO'
        assert settings.validate() == []

    @pytest.mark.unit
    def test_yaml_values(self, config_file):
        path = config_file({
            'dashboard': {'tick_interval': 1.0, 'history_size': 120},
            'interfaces': {'tunnel_prefixes': ['tun', 'wg', 'nordlynx']},
            'notifications': {'enabled': False},
        })
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(path)

        assert settings.get('dashboard.tick_interval') == 1.0
        assert settings.get('dashboard.history_size') == 120
        assert settings.get('dashboard.graph_window') == 300
        assert settings.get('interfaces.tunnel_prefixes') == ['tun', 'wg', 'nordlynx']
        assert settings.get('notifications.enabled') is False

    @pytest.mark.unit
    def test_environment_overrides_yaml(self, config_file):
        path = config_file({'dashboard': {'tick_interval': 1.0}})
        env = {
            'NETDASH_TICK_INTERVAL': '0.25',
            'NETDASH_HISTORY_SIZE': '60',
            'NETDASH_NOTIFICATIONS': 'off',
            'LOG_LEVEL': 'DEBUG',
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(path)

        assert settings.get('dashboard.tick_interval') == 0.25
        assert settings.get('dashboard.history_size') == 60
        assert settings.get('notifications.enabled') is False
        assert settings.get('logging.level') == 'DEBUG'

    @pytest.mark.unit
    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(str(path))
        assert settings.get('dashboard.tick_interval') == 0.5

    @pytest.mark.unit
    def test_get_missing_key(self, tmp_path):
        settings = Settings(str(tmp_path / "missing.yaml"))
        assert settings.get('dashboard.nope') is None
        assert settings.get('nope.deeper', 'fallback') == 'fallback'

    @pytest.mark.unit
    def test_reload(self, tmp_path, config_file):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(str(tmp_path / "missing.yaml"))
            settings.reload(config_file({'dashboard': {'graph_window': 60}}))
        assert settings.get('dashboard.graph_window') == 60

    @pytest.mark.unit
    def test_validate_reports_problems(self, config_file):
        path = config_file({
            'dashboard': {'tick_interval': 0, 'history_size': -1},
            'interfaces': {'exclude_prefixes': 'docker', 'wireless_prefixes': ['wl', '']},
        })
        with patch.dict(os.environ, {}, clear=True):
            errors = Settings(path).validate()

        assert "dashboard.tick_interval must be greater than 0" in errors
        assert "dashboard.history_size must be greater than 0" in errors
        assert "interfaces.exclude_prefixes must be a list of non-empty strings" in errors
        assert "interfaces.wireless_prefixes must be a list of non-empty strings" in errors
        assert len(errors) == 4

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (True, True), ('yes', True), ('1', True), ('ON', True),
        ('false', False), ('0', False), (0, False), (None, False),
    ])
    def test_parse_bool(self, tmp_path, value, expected):
        settings = Settings(str(tmp_path / "missing.yaml"))
        assert settings._parse_bool(value) is expected
