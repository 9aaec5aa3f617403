"""
Scheduler Module

Startup and periodic sweep scheduling.

Author: Save Game Installer Project
License: MIT
"""

from .task_scheduler import TaskScheduler

__all__ = ['TaskScheduler']
