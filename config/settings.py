import os
import yaml
from typing import Dict, Any, Optional, List

DEFAULT_EXCLUDE_PREFIXES = ['docker', 'br-', 'veth', 'virbr']
DEFAULT_TUNNEL_PREFIXES = ['tun', 'wg', 'ppp', 'tap']
DEFAULT_WIRELESS_PREFIXES = ['wl', 'ww']
DEFAULT_PHYSICAL_PREFIXES = ['en', 'eth', 'em']


class Settings:
    """Configuration management for the network dashboard."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or os.getenv('NETDASH_CONFIG_FILE', 'config/config.yaml')
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and environment variables."""
        config = {}

        # Load from YAML file if exists
        if os.path.exists(self.config_file):
            with open(self.config_file, 'r') as f:
                config = yaml.safe_load(f) or {}

        dashboard = config.get('dashboard', {}) or {}
        interfaces = config.get('interfaces', {}) or {}
        network_manager = config.get('network_manager', {}) or {}
        notifications = config.get('notifications', {}) or {}
        logging_config = config.get('logging', {}) or {}

        # Override with environment variables
        config.update({
            'dashboard': {
                'tick_interval': float(os.getenv('NETDASH_TICK_INTERVAL', dashboard.get('tick_interval', 0.5))),
                'history_size': int(os.getenv('NETDASH_HISTORY_SIZE', dashboard.get('history_size', 300))),
                'graph_window': float(os.getenv('NETDASH_GRAPH_WINDOW', dashboard.get('graph_window', 300))),
            },
            'interfaces': {
                'exclude_prefixes': interfaces.get('exclude_prefixes', DEFAULT_EXCLUDE_PREFIXES),
                'tunnel_prefixes': interfaces.get('tunnel_prefixes', DEFAULT_TUNNEL_PREFIXES),
                'wireless_prefixes': interfaces.get('wireless_prefixes', DEFAULT_WIRELESS_PREFIXES),
                'physical_prefixes': interfaces.get('physical_prefixes', DEFAULT_PHYSICAL_PREFIXES),
            },
            'network_manager': {
                'command_timeout': float(os.getenv('NETDASH_COMMAND_TIMEOUT', network_manager.get('command_timeout', 5))),
            },
            'notifications': {
                'enabled': self._parse_bool(os.getenv('NETDASH_NOTIFICATIONS', notifications.get('enabled', True))),
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL', logging_config.get('level', 'INFO')),
                'file': os.getenv('LOG_FILE', logging_config.get('file', 'logs/net_dashboard.log')),
                'max_bytes': int(os.getenv('LOG_MAX_BYTES', logging_config.get('max_bytes', 10485760))),
                'backup_count': int(os.getenv('LOG_BACKUP_COUNT', logging_config.get('backup_count', 5))),
            },
        })

        return config

    def reload(self, config_file: Optional[str] = None) -> None:
        """Re-read configuration, optionally from a different file."""
        if config_file:
            self.config_file = config_file
        self.config = self._load_config()

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when valid)."""
        errors = []

        if self.get('dashboard.tick_interval', 0) <= 0:
            errors.append("dashboard.tick_interval must be greater than 0")
        if self.get('dashboard.history_size', 0) <= 0:
            errors.append("dashboard.history_size must be greater than 0")
        if self.get('dashboard.graph_window', 0) <= 0:
            errors.append("dashboard.graph_window must be greater than 0")

        for key in ('exclude_prefixes', 'tunnel_prefixes', 'wireless_prefixes', 'physical_prefixes'):
            prefixes = self.get(f'interfaces.{key}')
            if not isinstance(prefixes, list) or not all(isinstance(p, str) and p for p in prefixes):
                errors.append(f"interfaces.{key} must be a list of non-empty strings")

        return errors

    def _parse_bool(self, value: Any) -> bool:
        """Parse boolean value from various formats."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on')
        if isinstance(value, (int, float)):
            return bool(value)
        return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

# Global settings instance
settings = Settings()
