"""
Game Registry

Static table of supported games: how their save files are recognised and
where the game expects to find them.

Author: Save Game Installer Project
License: MIT
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class GameProfile:
    """Save-file rules for one game."""
    game_id: str
    label: str
    save_extensions: Tuple[str, ...]
    cosave_extensions: Tuple[str, ...]
    my_games_folder: str

    def saves_dir(self, documents_root: str) -> str:
        """Map a documents folder to this game's save directory."""
        return os.path.join(documents_root, "My Games", self.my_games_folder, "Saves")

    def is_save_file(self, filename: str) -> bool:
        """True if ``filename`` ends with one of the primary save extensions."""
        low = filename.lower()
        return any(low.endswith(ext) for ext in self.save_extensions)


def _profile(game_id, label, exts, cosaves, folder) -> GameProfile:
    return GameProfile(
        game_id=game_id,
        label=label,
        save_extensions=tuple(e.lower() for e in exts),
        cosave_extensions=tuple(e.lower() for e in cosaves),
        my_games_folder=folder
    )


_PROFILES = (
    # The Elder Scrolls
    _profile("skyrim", "Skyrim (LE)", [".ess"], [".skse"], "Skyrim"),
    _profile("skyrimse", "Skyrim Special Edition/AE", [".ess"], [".skse"], "Skyrim Special Edition"),
    _profile("oblivion", "Oblivion", [".ess"], [".obse"], "Oblivion"),
    _profile("morrowind", "Morrowind", [".ess"], [], "Morrowind"),

    # Fallout
    _profile("fallout3", "Fallout 3", [".fos"], [".fose"], "Fallout3"),
    _profile("falloutnv", "Fallout: New Vegas", [".fos"], [".nvse"], "FalloutNV"),
    _profile("fallout4", "Fallout 4", [".fos"], [".f4se"], "Fallout4"),

    _profile("starfield", "Starfield", [".sfs"], [], "Starfield"),
)


def build_game_table(profiles: Iterable[GameProfile]) -> Dict[str, GameProfile]:
    """Index profiles by identifier, rejecting duplicates."""
    table: Dict[str, GameProfile] = {}
    for profile in profiles:
        if profile.game_id in table:
            raise ValueError(f"Duplicate game identifier: {profile.game_id}")
        table[profile.game_id] = profile
    return table


GAMES: Dict[str, GameProfile] = build_game_table(_PROFILES)
GAME_IDS: Tuple[str, ...] = tuple(GAMES)


def profile_for(game_id: str) -> Optional[GameProfile]:
    """Look up a game profile; None for unsupported games."""
    return GAMES.get(game_id)


def is_supported(game_id: str) -> bool:
    return game_id in GAMES


def is_save_file(game_id: str, filename: str) -> bool:
    """
    Check whether ``filename`` is a primary save file for ``game_id``.

    Unknown games never match.
    """
    profile = GAMES.get(game_id)
    if profile is None:
        return False
    return profile.is_save_file(filename)


def display_label(game_id: str) -> str:
    profile = GAMES.get(game_id)
    return profile.label if profile else game_id
