"""Simple YAML configuration loader for multalert."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


ALERT_MODES = ("file", "tone", "device")

DEFAULT_CONFIG: Dict[str, Any] = {
    'listener': {
        'host': '0.0.0.0',
        'port': 12060,
        'buffer_size': 65536,
    },
    'alert': {
        'mode': 'file',
        'file_path': './handbell.wav',
        'player_command': 'aplay',
        'device': 'default',
        'tone': {
            'frequency_hz': 880,
            'duration_ms': 400,
            'volume': 0.6,
            'sample_rate': 44100,
            'fade_ms': 20,
        },
    },
    'logging': {
        'level': 'INFO',
        'file_path': 'data/logs/multalert.log',
        'console_output': True,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dicts."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class MultAlertConfig:
    """multalert configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults
                        are used.
        """
        self.config_file = Path(config_path) if config_path else None

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
        else:
            if not self.config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

            logger.info(f"Loading configuration from: {self.config_file}")
            self.config = self._load_config()

        self.validate()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping")

        config = _deep_merge(DEFAULT_CONFIG, loaded)

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        # Resolve alert sound file
        if 'alert' in config and config['alert'].get('file_path'):
            sound_path = config['alert']['file_path']
            if not os.path.isabs(sound_path):
                config['alert']['file_path'] = str(config_dir / sound_path)

        # Resolve log file path
        if 'logging' in config and config['logging'].get('file_path'):
            log_path = config['logging']['file_path']
            if not os.path.isabs(log_path):
                config['logging']['file_path'] = str(config_dir / log_path)

    def validate(self) -> None:
        """Check values that would otherwise fail later at start-up."""
        port = self.get('listener.port')
        if isinstance(port, bool) or not isinstance(port, int):
            raise ValueError(f"listener.port must be an integer: {port!r}")
        if not 0 <= port <= 65535:
            raise ValueError(f"listener.port out of range: {port}")

        buffer_size = self.get('listener.buffer_size')
        if not isinstance(buffer_size, int) or not 2 <= buffer_size <= 65536:
            raise ValueError(f"listener.buffer_size must be between 2 and 65536: {buffer_size!r}")

        mode = self.get('alert.mode')
        if mode not in ALERT_MODES:
            raise ValueError(f"alert.mode must be one of {', '.join(ALERT_MODES)}: {mode!r}")

        volume = self.get('alert.tone.volume')
        if not isinstance(volume, (int, float)) or not 0.0 <= volume <= 1.0:
            raise ValueError(f"alert.tone.volume must be between 0.0 and 1.0: {volume!r}")

        for key in ('frequency_hz', 'duration_ms', 'sample_rate'):
            value = self.get(f'alert.tone.{key}')
            if not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"alert.tone.{key} must be positive: {value!r}")

    def _walk(self, keys, create: bool = False) -> Optional[Dict[str, Any]]:
        """Return the mapping that holds the last of ``keys``, or None."""
        node = self.config
        for key in keys[:-1]:
            if create and key not in node:
                node[key] = {}
            node = node.get(key)
            if not isinstance(node, dict):
                return None
        return node

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``'alert.tone.volume'``."""
        keys = key_path.split('.')
        node, leaf = self._walk(keys), keys[-1]
        if node is None or leaf not in node:
            return default
        return node[leaf]

    def set(self, key_path: str, value: Any) -> None:
        """Override a dotted key, creating missing sections.

        Only used for command-line overrides before start-up.
        """
        keys = key_path.split('.')
        node = self._walk(keys, create=True)
        if node is None:
            raise ValueError(f"Cannot set '{key_path}': a parent key holds a value, not a section")
        node[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_log_file_path(self) -> str:
        """Get log file path."""
        log_path = self.get('logging.file_path', 'data/logs/multalert.log')
        return str(Path(log_path).absolute())
