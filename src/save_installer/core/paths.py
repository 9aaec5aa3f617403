"""
Path Resolution

Works out where extracted mods are staged for a game and where the game
keeps its saves. Folder lookups go through a known-folder provider that may
know nothing; resolution never raises.

Author: Save Game Installer Project
License: MIT
"""

import os
from typing import Dict, List, Mapping, Optional

from ..config.schema import PathsConfig
from ..utils.logger import get_logger
from .registry import profile_for

logger = get_logger(__name__)

DOCUMENTS = "documents"
APP_DATA = "app_data"
INSTALL = "install"


class KnownFolderProvider:
    """
    Resolves logical folder names to absolute paths.

    Names: ``documents``, ``app_data`` and ``install``. Any name may resolve
    to None.
    """

    def get(self, name: str) -> Optional[str]:
        raise NotImplementedError


class ConfiguredFolderProvider(KnownFolderProvider):
    """Known folders taken from the ``paths`` configuration section."""

    def __init__(self, config: PathsConfig):
        self.config = config

    def get(self, name: str) -> Optional[str]:
        return {
            DOCUMENTS: self.config.documents,
            APP_DATA: self.config.app_data,
            INSTALL: self.config.install,
        }.get(name)


class StaticFolderProvider(KnownFolderProvider):
    """Known folders from a plain mapping, for hosts that already know them."""

    def __init__(self, folders: Mapping[str, Optional[str]]):
        self.folders: Dict[str, Optional[str]] = dict(folders)

    def get(self, name: str) -> Optional[str]:
        return self.folders.get(name)


def normalize_path(path: str) -> str:
    return os.path.normpath(path)


def unique_paths(paths: List[str]) -> List[str]:
    """
    Normalize and de-duplicate paths, keeping first-seen order.

    Paths that differ only in case or separators (on case-insensitive
    platforms) collapse to one.
    """
    seen = set()
    result = []
    for path in paths:
        normalized = normalize_path(path)
        key = os.path.normcase(normalized)
        if key in seen:
            continue
        seen.add(key)
        result.append(normalized)
    return result


class PathResolver:
    """
    Computes staging roots and save destinations per game.
    """

    def __init__(
        self,
        provider: Optional[KnownFolderProvider] = None,
        config: Optional[PathsConfig] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize the resolver.

        Args:
            provider: Known-folder provider (defaults to configured folders)
            config: Paths configuration
            environ: Environment mapping (defaults to os.environ)
        """
        self.config = config or PathsConfig()
        self.provider = provider or ConfiguredFolderProvider(self.config)
        self.environ = environ if environ is not None else os.environ

    def _known_folder(self, name: str) -> Optional[str]:
        try:
            return self.provider.get(name) or None
        except Exception as e:
            logger.debug(f"Known folder '{name}' unavailable: {e}")
            return None

    def app_data_candidates(self) -> List[str]:
        """Package manager data folders that may hold per-game staging folders."""
        candidates = []

        app_data = self._known_folder(APP_DATA)
        if app_data:
            candidates.append(app_data)

        roaming = self.environ.get("APPDATA")
        if roaming:
            candidates.append(os.path.join(roaming, self.config.app_data_subdir))

        return unique_paths(candidates)

    def staging_roots(self, game_id: str) -> List[str]:
        """
        Candidate staging folders for a game.

        Args:
            game_id: Game identifier

        Returns:
            Normalized, de-duplicated list; empty if nothing is known
        """
        candidates = [
            os.path.join(base, game_id, "mods")
            for base in self.app_data_candidates()
        ]

        active = self._known_folder(INSTALL)
        if active:
            candidates.append(active)

        return unique_paths(candidates)

    def documents_root(self) -> str:
        """
        Documents folder: known folder, then the user profile, then a
        fixed drive root.
        """
        documents = self._known_folder(DOCUMENTS)
        if documents:
            return documents

        profile = self.environ.get(self.config.user_profile_env)
        if profile:
            return profile

        return self.config.fallback_root

    def save_destination(self, game_id: str) -> Optional[str]:
        """
        Save directory for a game.

        Returns:
            Absolute path, or None for unsupported games
        """
        profile = profile_for(game_id)
        if profile is None:
            return None
        return profile.saves_dir(self.documents_root())
