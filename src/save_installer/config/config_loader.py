"""
Configuration Loader

Reads config.yaml, applies environment overrides (a ``.env`` file is
honoured) and validates the result into a :class:`Config`.

Author: Save Game Installer Project
License: MIT
"""

import os
import yaml
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
from dotenv import load_dotenv

from .schema import Config

DEFAULT_CONFIG_PATH = "config.yaml"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_level(value: str) -> str:
    return value.strip().upper()


def _env_str(value: str) -> str:
    return value.strip()


# variable -> (section, key, converter)
ENV_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "APP_LOG_LEVEL": ("app", "log_level", _env_level),
    "SGI_DEBUG": ("diagnostics", "enabled", _env_flag),
    "SGI_MOVE": ("relocation", "move_instead_of_copy", _env_flag),
    "SGI_DOCUMENTS": ("paths", "documents", _env_str),
    "SGI_APP_DATA": ("paths", "app_data", _env_str),
    "SGI_INSTALL": ("paths", "install", _env_str),
    "SGI_PERIODIC_SWEEP": ("scheduling", "periodic_sweep", _env_str),
}


class ConfigLoader:
    """
    Loads the installer configuration.

    Precedence, highest first: environment variables, the YAML file, the
    model defaults. A missing file is not an error.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: YAML file to read; defaults to ``$CONFIG_PATH`` or
                ``config.yaml`` in the working directory
        """
        self.config_path = config_path or os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)

        load_dotenv()

    def load(self) -> Config:
        """
        Load and validate configuration.

        Raises:
            ValueError: If the YAML cannot be parsed or a value is invalid
        """
        config_data = self._load_yaml()
        config_data = self._merge_env_vars(config_data)

        return Config(**config_data)

    def _load_yaml(self) -> Dict[str, Any]:
        config_file = Path(self.config_path)
        if not config_file.exists():
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {config_file}")
        return data

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment overrides on top of the file values.

        Only variables that are set and non-empty take effect.
        """
        for variable, (section, key, convert) in ENV_OVERRIDES.items():
            value = os.getenv(variable)
            if not value:
                continue
            target = config_data.get(section)
            if not isinstance(target, dict):
                target = config_data[section] = {}
            target[key] = convert(value)
        return config_data


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration with a throwaway :class:`ConfigLoader`."""
    return ConfigLoader(config_path).load()
