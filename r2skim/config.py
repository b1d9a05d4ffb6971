#!/usr/bin/env python3
"""
r2skim Configuration Management
"""

import copy
import json
from pathlib import Path
from typing import Any

from .config_schemas import R2SkimConfig
from .utils.logger import get_logger

logger = get_logger(__name__)


class Config:
    """Configuration manager for r2skim"""

    DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
        "general": {"verbose": False, "quiet": False},
        "symbols": {
            "enabled": True,
            "search_paths": [],
            "use_codeview_path": True,
            "r2_flags": ["-2"],
            "load_retries": 2,
        },
        "driver": {"max_workers": 4, "extensions": [".exe", ".dll", ".sys"]},
        "output": {"json_indent": 2, "show_passing": True},
    }

    def __init__(self, config_path: str | None = None):
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.config_path = config_path or self._get_default_config_path()

        if Path(self.config_path).exists():
            self.load_config()

    def _get_default_config_path(self) -> str:
        """Get default configuration file path"""
        return str(Path.home() / ".r2skim" / "config.json")

    def load_config(self) -> None:
        """Load configuration from file"""
        try:
            with open(self.config_path) as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load config from {self.config_path}: {e}")
            return
        if isinstance(user_config, dict):
            self._merge_config(user_config)
        else:
            logger.warning(f"Ignoring config {self.config_path}: top level is not an object")

    def save_config(self) -> None:
        """Save configuration to file"""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, "w") as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def _merge_config(self, user_config: dict[str, Any]) -> None:
        """Merge user configuration with defaults"""
        for section, settings in user_config.items():
            if section in self.config and isinstance(settings, dict):
                self.config[section].update(settings)
            else:
                self.config[section] = settings

    def apply_overrides(self, overrides: dict[str, dict[str, Any]]) -> None:
        """Apply command-line overrides on top of the loaded configuration"""
        self._merge_config(overrides)

    def get(self, section: str, key: str | None = None, default: Any = None) -> Any:
        """Get configuration value"""
        if key is None:
            return self.config.get(section, default)
        return self.config.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set configuration value"""
        self.config.setdefault(section, {})[key] = value

    @property
    def typed_config(self) -> R2SkimConfig:
        """Validated, immutable view of the current settings"""
        known = {name: self.config[name] for name in self.DEFAULT_CONFIG if name in self.config}
        return R2SkimConfig.from_dict(known)

    def __getitem__(self, key):
        """Allow dict-like access"""
        return self.config[key]

    def __contains__(self, key):
        """Allow 'in' operator"""
        return key in self.config
