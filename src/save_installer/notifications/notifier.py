"""
Notification Sinks

User-visible, fire-and-forget notifications. The orchestrator only depends
on ``notify(kind, message, display_ms)``; hosts plug in their own sink with
:class:`CallbackNotifier`.

Author: Save Game Installer Project
License: MIT
"""

import logging
from typing import Callable, Optional

from ..config.schema import NotificationConfig, NotificationLevel
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Notifier:
    """
    Base notification sink.

    Applies the configured prefix and enable flag; subclasses implement
    :meth:`_deliver`. Delivery failures are logged and swallowed.
    """

    def __init__(self, config: Optional[NotificationConfig] = None):
        self.config = config or NotificationConfig()

    def notify(self, kind: str, message: str, display_ms: Optional[int] = None) -> None:
        """
        Send a notification.

        Args:
            kind: One of the NotificationLevel values
            message: Message text (the prefix is added here)
            display_ms: Advisory display duration
        """
        if not self.config.enabled:
            return

        kind = getattr(kind, "value", kind)
        text = f"{self.config.prefix} {message}" if self.config.prefix else message
        try:
            self._deliver(kind, text, display_ms or self.config.display_ms)
        except Exception as e:
            logger.debug(f"Notification delivery failed: {e}")

    def _deliver(self, kind: str, message: str, display_ms: int) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Writes notifications to the ``save_installer.notifications`` logger."""

    LEVELS = {
        NotificationLevel.SUCCESS.value: logging.INFO,
        NotificationLevel.INFO.value: logging.INFO,
        NotificationLevel.WARNING.value: logging.WARNING,
        NotificationLevel.ERROR.value: logging.ERROR,
    }

    def __init__(self, config: Optional[NotificationConfig] = None):
        super().__init__(config)
        self._logger = get_logger("notifications")

    def _deliver(self, kind: str, message: str, display_ms: int) -> None:
        self._logger.log(self.LEVELS.get(kind, logging.INFO), message)


class CallbackNotifier(Notifier):
    """Forwards notifications to a host-provided callable."""

    def __init__(
        self,
        callback: Callable[[str, str, int], None],
        config: Optional[NotificationConfig] = None
    ):
        """
        Args:
            callback: Function(kind, message, display_ms)
            config: Notification configuration
        """
        super().__init__(config)
        self.callback = callback

    def _deliver(self, kind: str, message: str, display_ms: int) -> None:
        self.callback(kind, message, display_ms)
