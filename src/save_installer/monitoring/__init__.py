"""
Monitoring Module

Watches staging folders for newly extracted mods.

Author: Save Game Installer Project
License: MIT
"""

from .watcher import StagingWatcher, ModFolderHandler

__all__ = ['StagingWatcher', 'ModFolderHandler']
