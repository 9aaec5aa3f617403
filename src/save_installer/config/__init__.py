"""
Save Game Installer Configuration Module

Loads the YAML configuration, applies environment variable overrides and
validates it with Pydantic models.

Author: Save Game Installer Project
License: MIT
"""

from .schema import Config
from .config_loader import ConfigLoader, load_config

__all__ = ['Config', 'ConfigLoader', 'load_config']
