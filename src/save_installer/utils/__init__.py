"""
Utility Module

Logging setup, filesystem primitives and the diagnostics run-log.

Author: Save Game Installer Project
License: MIT
"""
