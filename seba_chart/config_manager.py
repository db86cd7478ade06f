"""
Configuration Manager for the chart tools

Handles loading and saving the JSON settings file: where song folders live,
what the chart file is called, and how logging is set up.
"""

import json
import logging
import os
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .console import print_info, print_success, print_warning, print_error

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages chart tool configuration with version tracking"""

    CONFIG_VERSION = 1

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager

        Args:
            config_path: Path to config file (defaults to the user config directory)
        """
        if config_path is None:
            config_path = self.get_default_config_path()

        self.config_path = Path(config_path)
        self.config: Dict[str, Any] = {}

    @staticmethod
    def get_default_config_path() -> Path:
        """Get default config path in AppData or ~/.config"""
        if sys.platform == 'win32':
            appdata = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
            config_dir = appdata / 'SebaChart'
        else:
            config_dir = Path.home() / '.config' / 'SebaChart'

        return config_dir / 'chart_config.json'

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file, creating default if not exists

        Returns:
            Configuration dictionary
        """
        if not self.config_path.exists():
            print_info(f"[Config] No config file found, creating default at {self.config_path}")
            self.config = self._create_default_config()
            self.save()
            return self.config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            print_error(f"[Config] Failed to parse config file: {e}")
            print_warning("[Config] Creating backup and using default config")
            self._backup_config()
            self.config = self._create_default_config()
            self.save()
            return self.config

        if not isinstance(loaded, dict):
            print_warning("[Config] Config file is not a JSON object, using default config")
            self._backup_config()
            self.config = self._create_default_config()
            self.save()
            return self.config

        # Fill in keys added since the file was written
        self.config = self._deep_merge_config(loaded, self._create_default_config())

        try:
            current_version = int(self.config.get('config_version', 1))
        except (TypeError, ValueError, OverflowError):
            current_version = 0
        if current_version < self.CONFIG_VERSION:
            print_warning(f"[Config] Config version {current_version} is outdated, updating to {self.CONFIG_VERSION}")
            self.save()

        print_success(f"[Config] Loaded configuration from {self.config_path}")
        return self.config

    def load_existing(self) -> Optional[Dict[str, Any]]:
        """
        Read the config file without creating, repairing or saving it

        Returns:
            Configuration dictionary merged over the defaults, or None when
            there is no usable config file
        """
        if not self.config_path.is_file():
            logger.debug(f"No config file at {self.config_path}")
            return None

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read config file {self.config_path}: {e}")
            return None

        if not isinstance(loaded, dict):
            logger.warning(f"Config file {self.config_path} is not a JSON object, ignoring it")
            return None

        self.config = self._deep_merge_config(loaded, self._create_default_config())
        return self.config

    def save(self):
        """Save configuration to file"""
        self.config['config_version'] = self.CONFIG_VERSION
        self.config['last_updated'] = datetime.now(timezone.utc).isoformat()

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2, ensure_ascii=False)

        print_success(f"[Config] Configuration saved to {self.config_path}")

    def _backup_config(self):
        """Create backup of current config file"""
        if not self.config_path.exists():
            return

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        backup_path = self.config_path.parent / f"chart_config_backup_{timestamp}.json"

        try:
            shutil.copy2(self.config_path, backup_path)
            print_info(f"[Config] Backup created: {backup_path}")
        except OSError as e:
            print_warning(f"[Config] Failed to create backup: {e}")

    def _create_default_config(self) -> Dict[str, Any]:
        """Create default configuration"""
        return {
            "config_version": self.CONFIG_VERSION,
            "last_updated": datetime.now(timezone.utc).isoformat(),

            "songs": {
                "root": "",                   # Folder holding one sub-folder per song
                "chart_filename": "notes.chart",
            },

            "logging": {
                "level": "INFO",
                "log_file": "",               # Empty = default location
                "max_size_mb": 10,
            },
        }

    def _deep_merge_config(self, user_config: dict, default_config: dict) -> dict:
        """
        Deep merge user config with default config, adding missing keys while preserving user values

        Args:
            user_config: User's existing config
            default_config: Default config template

        Returns:
            Merged config with all keys from default but user values where they exist
        """
        merged = default_config.copy()

        for key, value in user_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._deep_merge_config(value, merged[key])
            else:
                merged[key] = value

        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get config value by dot-separated path

        Args:
            key_path: Dot-separated path (e.g., "songs.chart_filename")
            default: Default value if key not found

        Returns:
            Config value or default
        """
        value = self.config

        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any):
        """
        Set config value by dot-separated path

        Args:
            key_path: Dot-separated path (e.g., "songs.root")
            value: Value to set
        """
        keys = key_path.split('.')
        config = self.config

        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    @property
    def songs_root(self) -> Optional[Path]:
        root = self.get('songs.root', '')
        return Path(root) if isinstance(root, str) and root else None

    @property
    def chart_filename(self) -> str:
        filename = self.get('songs.chart_filename')
        return filename if isinstance(filename, str) and filename else 'notes.chart'

    @property
    def log_level(self) -> str:
        return str(self.get('logging.level', 'INFO')).upper()

    @property
    def log_file(self) -> Optional[Path]:
        log_file = self.get('logging.log_file', '')
        return Path(log_file) if log_file else None
