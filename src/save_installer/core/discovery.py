"""
Save Discovery

Finds save files, and their script-extender co-saves, inside one extracted
mod folder.

Two walks are used:

- Data-rooted: the mod has a ``Data`` (or ``data``) folder. Everything under
  it is searched, at any depth.
- Virtual root: no ``Data`` folder. Only files directly in the mod folder and
  the trees of immediate subfolders with "save" in their name are searched.

Author: Save Game Installer Project
License: MIT
"""

import os
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..utils.file_ops import list_entries
from ..utils.logger import get_logger
from .registry import GameProfile, profile_for

logger = get_logger(__name__)

# Only these two spellings are recognised.
DATA_FOLDER_NAMES = ("Data", "data")

SAVE_FOLDER_MARKER = "save"

# (depth of the directory being listed, child directory name) -> descend?
DescentPolicy = Callable[[int, str], bool]


class ScanMode(Enum):
    """How a mod folder is searched."""
    DATA_ROOTED = "data_rooted"
    VIRTUAL_ROOT = "virtual_root"


def descend_always(depth: int, name: str) -> bool:
    return True


def descend_save_folders(depth: int, name: str) -> bool:
    """At the top level only enter folders named like saves; below that, everything."""
    if depth == 0:
        return SAVE_FOLDER_MARKER in name.lower()
    return True


class SaveDiscovery:
    """
    Save file discovery for extracted mod folders.
    """

    def find_data_root(self, mod_root: str) -> Optional[str]:
        """Return the mod's ``Data`` folder, if it has one."""
        for name in DATA_FOLDER_NAMES:
            candidate = os.path.join(mod_root, name)
            if os.path.isdir(candidate):
                return candidate
        return None

    def discover(self, game_id: str, mod_root: str, report: Optional[List[str]] = None) -> List[str]:
        """
        Find save and co-save files in a mod folder.

        Args:
            game_id: Game identifier
            mod_root: Extracted mod folder
            report: Optional list that receives human-readable scan notes

        Returns:
            Absolute paths in discovery order, without duplicates
        """
        profile = profile_for(game_id)
        if profile is None:
            return []

        notes = report if report is not None else []

        data_root = self.find_data_root(mod_root)
        if data_root is not None:
            notes.append(f"  - Data root: {data_root}")
            saves = self.walk(profile, data_root, descend_always)
            found = self.add_cosaves(profile, saves)
            notes.append(f"    (Data scan) saves: {len(found)}")
            return found

        notes.append(f"  - No Data folder in \"{mod_root}\" -> treating mod root as Data")
        saves = self.walk(profile, mod_root, descend_save_folders)
        found = self.add_cosaves(profile, saves)
        notes.append(f"    (Root/Save-subdir scan) saves: {len(found)}")
        return found

    def scan_mode(self, mod_root: str) -> ScanMode:
        if self.find_data_root(mod_root) is not None:
            return ScanMode.DATA_ROOTED
        return ScanMode.VIRTUAL_ROOT

    def walk(self, profile: GameProfile, root: str, descend: DescentPolicy) -> List[str]:
        """
        Collect primary save files below ``root``.

        Iterative pre-order traversal; entries are visited in name order.
        Unreadable directories are treated as empty.

        Args:
            profile: Game profile supplying the save extensions
            root: Directory to start from
            descend: Policy deciding which child directories are entered

        Returns:
            Matching file paths
        """
        found = []
        # Work-list of (entry, depth of the directory containing it)
        stack = [(entry, 0) for entry in reversed(list_entries(root))]

        while stack:
            entry, depth = stack.pop()

            if entry.is_dir(follow_symlinks=False):
                if descend(depth, entry.name):
                    children = list_entries(entry.path)
                    stack.extend((child, depth + 1) for child in reversed(children))
            elif entry.is_file(follow_symlinks=False) and profile.is_save_file(entry.name):
                found.append(entry.path)

        return found

    def add_cosaves(self, profile: GameProfile, saves: List[str]) -> List[str]:
        """
        Append co-saves that sit next to discovered saves.

        ``slot1.ess`` pulls in ``slot1.skse`` when the game declares ``.skse``
        and the file exists.
        """
        result: Dict[str, None] = dict.fromkeys(saves)

        for save in saves:
            base, _ = os.path.splitext(save)
            for ext in profile.cosave_extensions:
                cosave = base + ext
                if cosave not in result and os.path.isfile(cosave):
                    result[cosave] = None

        return list(result)
