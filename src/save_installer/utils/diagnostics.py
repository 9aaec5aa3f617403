"""
Diagnostics Run-Log

Append-only text log of sweep reports, written under the documents folder
while diagnostics are enabled. Writing never raises.

Author: Save Game Installer Project
License: MIT
"""

import os
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from ..config.schema import DiagnosticsConfig
from .logger import get_logger

logger = get_logger(__name__)


class DiagnosticsLog:
    """
    Timestamped run-log sink.

    Each call to :meth:`write` appends one block::

        [2024-01-01T00:00:00.000Z] line 1
        line 2

    """

    def __init__(self, config: DiagnosticsConfig, documents_root: Callable[[], str]):
        """
        Initialize the run-log.

        Args:
            config: Diagnostics configuration
            documents_root: Callable returning the documents folder; resolved
                on every write so changed folders are picked up
        """
        self.config = config
        self._documents_root = documents_root

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def log_path(self) -> str:
        """Full path of the run-log file."""
        return os.path.join(
            self._documents_root(),
            self.config.directory,
            self.config.file_name
        )

    def write(self, lines: Iterable[str]) -> Optional[str]:
        """
        Append lines to the run-log.

        Args:
            lines: Report lines

        Returns:
            Path of the run-log, or None if disabled or the write failed
        """
        if not self.enabled:
            return None

        try:
            out_file = self.log_path
            os.makedirs(os.path.dirname(out_file), exist_ok=True)
            stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
            with open(out_file, 'a', encoding='utf-8') as f:
                f.write(f"[{stamp}] " + "\n".join(lines) + "\n\n")
            return out_file
        except Exception as e:
            logger.debug(f"Run-log write failed: {e}")
            return None
