"""
Save Game Installer

Finds game saves shipped inside extracted mod packages and moves them into
the game's save folder.

Author: Save Game Installer Project
License: MIT
"""

__version__ = "0.2.0"
__app_name__ = "SGI"
