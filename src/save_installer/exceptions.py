"""
Exceptions

Author: Save Game Installer Project
License: MIT
"""


class SaveInstallerError(Exception):
    """Base class for save installer errors."""


class DestinationUnavailableError(SaveInstallerError):
    """The game's save directory cannot be created or accessed."""

    def __init__(self, game_id: str, destination: str, reason: Exception):
        self.game_id = game_id
        self.destination = destination
        self.reason = reason
        super().__init__(f"Cannot access save directory for {game_id}: {destination} ({reason})")
