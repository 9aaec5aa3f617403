"""
Save Installer Core Module

Game registry, path resolution, save discovery and sweep orchestration.

Author: Save Game Installer Project
License: MIT
"""

from .registry import GameProfile, GAMES, GAME_IDS, profile_for, is_save_file
from .paths import PathResolver, KnownFolderProvider, ConfiguredFolderProvider, StaticFolderProvider
from .discovery import SaveDiscovery, ScanMode
from .orchestrator import SweepOrchestrator, SweepSummary, TriggerOutcome

__all__ = [
    'GameProfile', 'GAMES', 'GAME_IDS', 'profile_for', 'is_save_file',
    'PathResolver', 'KnownFolderProvider', 'ConfiguredFolderProvider', 'StaticFolderProvider',
    'SaveDiscovery', 'ScanMode',
    'SweepOrchestrator', 'SweepSummary', 'TriggerOutcome',
]
