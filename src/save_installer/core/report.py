"""
Sweep Report

Human-readable record of one sweep, written to the diagnostics run-log.

Author: Save Game Installer Project
License: MIT
"""

from typing import List, Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)


class SweepReport:
    """
    Ordered report lines plus the number of files moved.

    Every line is also logged at DEBUG level.
    """

    def __init__(self, header: Optional[str] = None):
        self.lines: List[str] = []
        self.moved = 0
        self.errors: List[str] = []
        if header:
            self.append(header)

    def append(self, line: str) -> None:
        self.lines.append(line)
        logger.debug(line)

    def error(self, line: str) -> None:
        """Record a failure line."""
        self.errors.append(line)
        self.append(line)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)
