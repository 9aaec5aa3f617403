"""
Notifications Module

User-visible notification sinks.

Author: Save Game Installer Project
License: MIT
"""

from .notifier import Notifier, LoggingNotifier, CallbackNotifier

__all__ = ['Notifier', 'LoggingNotifier', 'CallbackNotifier']
