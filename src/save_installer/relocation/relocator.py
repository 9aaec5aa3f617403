"""
Save Relocator

Copies discovered save files into a game's save directory and, in cut mode,
removes the originals. One failing file never stops the rest of the batch.

Author: Save Game Installer Project
License: MIT
"""

import asyncio
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ..utils.file_ops import copy_file, ensure_directory, remove_file, same_file
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RelocationError:
    """A file that could not be fully relocated."""
    source: str
    destination: str
    stage: str  # "copy" or "delete"
    message: str


@dataclass
class RelocationResult:
    """Result of relocating a batch of files."""
    moved: int = 0
    relocated: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    errors: List[RelocationError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class Relocator:
    """
    Copy-then-delete file placement.

    Existing destination files are overwritten; the last sweep wins. A file
    that already is its own destination is left alone and never deleted.
    """

    def relocate(self, files: Iterable[str], destination_dir: str, cut: bool) -> RelocationResult:
        """
        Relocate files into ``destination_dir``.

        Args:
            files: Source file paths
            destination_dir: Target directory (created if missing)
            cut: Delete each source after it has been copied

        Returns:
            RelocationResult with the moved count and per-file errors
        """
        result = RelocationResult()

        for source in files:
            destination = os.path.join(destination_dir, os.path.basename(source))

            if same_file(source, destination):
                logger.debug(f"Already in place: {source}")
                result.skipped.append(source)
                continue

            try:
                ensure_directory(destination_dir)
                copy_file(source, destination)
            except OSError as e:
                logger.warning(f"Failed to copy {source}: {e}")
                result.errors.append(RelocationError(source, destination, "copy", str(e)))
                continue

            result.moved += 1
            result.relocated.append((source, destination))
            logger.debug(f"{'Moved' if cut else 'Copied'}: {source} -> {destination}")

            if cut:
                try:
                    remove_file(source)
                except OSError as e:
                    logger.warning(f"Copied but could not remove {source}: {e}")
                    result.errors.append(RelocationError(source, destination, "delete", str(e)))

        return result

    async def relocate_async(self, files: Iterable[str], destination_dir: str, cut: bool) -> RelocationResult:
        """Run :meth:`relocate` without blocking the event loop."""
        return await asyncio.to_thread(self.relocate, list(files), destination_dir, cut)
