# -*- coding: utf-8 -*-
"""
config_manager.py
-----------------
Configuration Management Module

Handles loading of config.yaml for the keystroke tracker. Missing sections
fall back to dataclass defaults.
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, fields

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"


@dataclass
class AppConfig:
    """Application configuration settings"""
    logging_level: str = "INFO"
    log_dir: str = "logs"
    logging_file_rotation_size: int = 10  # MB
    logging_file_rotation_count: int = 5


@dataclass
class LinkConfig:
    """Telemetry link configuration"""
    url: str = "ws://localhost:8080"
    reconnect_delay_ms: int = 5000


@dataclass
class TrackerConfig:
    """Keystroke tracker configuration"""
    workspace: Optional[str] = None  # folder opened as the workspace
    status_message_ms: int = 3000


@dataclass
class Config:
    """Main configuration container"""
    app: AppConfig = field(default_factory=AppConfig)
    link: LinkConfig = field(default_factory=LinkConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a config section from a dict, ignoring unknown keys."""
    if not data:
        return cls()
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """Configuration manager for loading and saving config files"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config: Optional[Config] = None

    def load_config(self) -> Config:
        """Load configuration from YAML file"""
        try:
            config_file = Path(self.config_path)

            if config_file.exists():
                logger.info(f"Loading configuration from {self.config_path}")
                with open(config_file, 'r', encoding='utf-8') as f:
                    config_data = yaml.safe_load(f) or {}

                self.config = self._create_config_from_dict(config_data)
            else:
                logger.warning(f"Config file not found at {self.config_path}, using defaults")
                self.config = Config()
                self.save_default_config()

            return self.config

        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            logger.info("Using default configuration")
            self.config = Config()
            return self.config

    def _create_config_from_dict(self, data: Dict[str, Any]) -> Config:
        """Create Config object from dictionary"""
        app_data = dict(data.get('app') or {})

        # logging settings are nested in the YAML layout
        logging_data = app_data.pop('logging', None) or {}
        if 'level' in logging_data:
            app_data['logging_level'] = logging_data['level']
        rotation = logging_data.get('file_rotation') or {}
        if 'size' in rotation:
            app_data['logging_file_rotation_size'] = rotation['size']
        if 'count' in rotation:
            app_data['logging_file_rotation_count'] = rotation['count']

        return Config(
            app=_section(AppConfig, app_data),
            link=_section(LinkConfig, data.get('link')),
            tracker=_section(TrackerConfig, data.get('tracker')),
        )

    def save_default_config(self):
        """Save default configuration to file"""
        try:
            config_file = Path(self.config_path)
            config_file.parent.mkdir(parents=True, exist_ok=True)

            config_dict = self._config_to_dict(Config())

            with open(config_file, 'w', encoding='utf-8') as f:
                yaml.dump(config_dict, f, default_flow_style=False, allow_unicode=True)

            logger.info(f"Default configuration saved to {self.config_path}")

        except Exception as e:
            logger.error(f"Failed to save default configuration: {e}")

    def _config_to_dict(self, config: Config) -> Dict[str, Any]:
        """Convert Config object to dictionary for YAML export"""
        return {
            "app": {
                "log_dir": config.app.log_dir,
                "logging": {
                    "level": config.app.logging_level,
                    "file_rotation": {
                        "size": config.app.logging_file_rotation_size,
                        "count": config.app.logging_file_rotation_count
                    }
                }
            },
            "link": {
                "url": config.link.url,
                "reconnect_delay_ms": config.link.reconnect_delay_ms
            },
            "tracker": {
                "workspace": config.tracker.workspace,
                "status_message_ms": config.tracker.status_message_ms
            }
        }
