"""
File Operation Utilities

Provides the filesystem primitives the sweeps rely on: tolerant directory
listing, existence checks, directory creation, copying with a fallback path
and idempotent deletion.

Author: Save Game Installer Project
License: MIT
"""

import os
import shutil
from pathlib import Path
from typing import List

from .logger import get_logger

logger = get_logger(__name__)


def path_exists(path: str) -> bool:
    """
    Check whether a path exists.

    Args:
        path: Path to check

    Returns:
        True if the path can be stat'ed
    """
    try:
        os.stat(path)
        return True
    except (OSError, ValueError):
        return False


def list_entries(directory: str) -> List[os.DirEntry]:
    """
    List a directory, sorted by name.

    A missing or unreadable directory lists as empty.

    Args:
        directory: Directory path

    Returns:
        Directory entries sorted by name
    """
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        return []

    entries.sort(key=lambda entry: entry.name)
    return entries


def same_file(first: str, second: str) -> bool:
    """True if both paths exist and name the same file."""
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


def ensure_directory(directory: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        directory: Directory path

    Raises:
        OSError: If the directory cannot be created
    """
    Path(directory).mkdir(parents=True, exist_ok=True)


def copy_file(source: str, destination: str) -> None:
    """
    Copy file contents, overwriting the destination.

    ``shutil.copyfile`` is tried first; if the platform primitive fails the
    file is read whole and written whole. Errors a second attempt
    cannot fix are raised as is.

    Args:
        source: Source file path
        destination: Destination file path

    Raises:
        shutil.SameFileError: If source and destination are the same file
        OSError: If neither copy strategy succeeds
    """
    ensure_directory(os.path.dirname(destination))

    try:
        shutil.copyfile(source, destination)
        return
    except (shutil.SameFileError, FileNotFoundError, PermissionError):
        raise
    except OSError as e:
        logger.debug(f"copyfile failed for {source}, falling back: {e}")

    data = Path(source).read_bytes()
    Path(destination).write_bytes(data)


def remove_file(path: str) -> bool:
    """
    Delete a file; deleting a file that is already gone is a no-op.

    Args:
        path: File to delete

    Returns:
        True if the file was deleted by this call

    Raises:
        OSError: If the file exists but cannot be deleted
    """
    try:
        os.unlink(path)
        return True
    except FileNotFoundError:
        logger.debug(f"Already removed: {path}")
        return False
