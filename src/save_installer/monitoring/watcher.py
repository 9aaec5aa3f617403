"""
Staging Folder Watcher

Monitors staging roots for newly extracted mod folders using the watchdog
library. A new mod folder is reported once nothing inside it has changed
for the debounce period, so the sweep sees the finished extraction.

Author: Save Game Installer Project
License: MIT
"""

import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Tuple
from threading import Lock
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from ..utils.logger import get_logger

logger = get_logger(__name__)


class ModFolderHandler(FileSystemEventHandler):
    """
    File system event handler for one staging root.

    Tracks top-level folders created in the staging root and refreshes
    their timestamp on any activity inside them.
    """

    def __init__(
        self,
        game_id: str,
        staging_root: str,
        on_mod_ready: Callable[[str, str], None],
        debounce_seconds: float = 5.0
    ):
        """
        Initialize the handler.

        Args:
            game_id: Game the staging root belongs to
            staging_root: Directory being watched
            on_mod_ready: Callback function(game_id, mod_folder) for settled folders
            debounce_seconds: Seconds without activity before a folder is settled
        """
        super().__init__()
        self.game_id = game_id
        self.staging_root = os.path.normpath(staging_root)
        self.on_mod_ready = on_mod_ready
        self.debounce_seconds = debounce_seconds

        # Pending mod folders with their last activity time
        self._pending: Dict[str, float] = {}
        self._lock = Lock()

    def _mod_folder_for(self, path: str):
        """Return the top-level folder under the staging root containing ``path``."""
        path = os.path.normpath(path)
        try:
            relative = os.path.relpath(path, self.staging_root)
        except ValueError:
            return None
        if relative == os.curdir or relative.startswith(os.pardir):
            return None
        top = relative.split(os.sep, 1)[0]
        return os.path.join(self.staging_root, top)

    def on_created(self, event):
        """Handle creation events."""
        mod_folder = self._mod_folder_for(event.src_path)
        if mod_folder is None:
            return

        with self._lock:
            if event.is_directory and os.path.normpath(event.src_path) == mod_folder:
                self._pending[mod_folder] = time.time()
                logger.debug(f"New mod folder: {mod_folder}")
            elif mod_folder in self._pending:
                self._pending[mod_folder] = time.time()

    def on_modified(self, event):
        """Handle modification events."""
        self._touch(event.src_path)

    def on_moved(self, event):
        """Handle moves; a folder renamed into place counts as new."""
        mod_folder = self._mod_folder_for(event.dest_path)
        if mod_folder is None:
            return
        with self._lock:
            if event.is_directory and os.path.normpath(event.dest_path) == mod_folder:
                self._pending[mod_folder] = time.time()
            elif mod_folder in self._pending:
                self._pending[mod_folder] = time.time()

    def _touch(self, path: str):
        mod_folder = self._mod_folder_for(path)
        if mod_folder is None:
            return
        with self._lock:
            if mod_folder in self._pending:
                self._pending[mod_folder] = time.time()

    def pending_folders(self) -> List[str]:
        with self._lock:
            return list(self._pending)

    def process_pending(self):
        """
        Report mod folders that have settled.

        Should be called periodically by the watcher.
        """
        current_time = time.time()
        settled = []

        with self._lock:
            for mod_folder, last_activity in list(self._pending.items()):
                if current_time - last_activity >= self.debounce_seconds:
                    settled.append(mod_folder)
                    del self._pending[mod_folder]

        # Callbacks run outside the lock
        for mod_folder in settled:
            if not Path(mod_folder).is_dir():
                logger.debug(f"Mod folder disappeared before processing: {mod_folder}")
                continue

            try:
                logger.info(f"Mod folder ready: {mod_folder}")
                self.on_mod_ready(self.game_id, mod_folder)
            except Exception as e:
                logger.error(f"Error processing mod folder {mod_folder}: {e}")


class StagingWatcher:
    """
    Watches the staging roots of several games.
    """

    def __init__(self, on_mod_ready: Callable[[str, str], None], debounce_seconds: float = 5.0):
        """
        Initialize the staging watcher.

        Args:
            on_mod_ready: Callback function(game_id, mod_folder)
            debounce_seconds: Seconds without activity before a folder is settled
        """
        self.on_mod_ready = on_mod_ready
        self.debounce_seconds = debounce_seconds
        self.observer = Observer()
        self.handlers: Dict[Tuple[str, str], ModFolderHandler] = {}
        self._running = False

    def add_staging_root(self, game_id: str, staging_root: str) -> bool:
        """
        Start watching a staging root.

        Args:
            game_id: Game identifier
            staging_root: Directory to watch

        Returns:
            True if the root is now watched
        """
        key = (game_id, os.path.normpath(staging_root))
        if key in self.handlers:
            return True

        if not os.path.isdir(staging_root):
            logger.debug(f"Staging root does not exist: {staging_root}")
            return False

        handler = ModFolderHandler(
            game_id=game_id,
            staging_root=staging_root,
            on_mod_ready=self.on_mod_ready,
            debounce_seconds=self.debounce_seconds
        )
        self.observer.schedule(handler, staging_root, recursive=True)
        self.handlers[key] = handler

        logger.info(f"Watching {staging_root} ({game_id})")
        return True

    def start(self):
        """Start the observer."""
        if self._running:
            logger.warning("StagingWatcher already running")
            return
        self.observer.start()
        self._running = True
        logger.info(f"StagingWatcher started, monitoring {len(self.handlers)} folders")

    def stop(self):
        """Stop the observer."""
        if not self._running:
            return
        self.observer.stop()
        self.observer.join(timeout=5.0)
        self._running = False
        logger.info("StagingWatcher stopped")

    def process_pending(self):
        """Process settled folders in all handlers (call periodically)."""
        for handler in list(self.handlers.values()):
            handler.process_pending()

    def get_watched_folders(self) -> List[str]:
        return [root for _, root in self.handlers]
