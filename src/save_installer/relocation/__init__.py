"""
Relocation Module

Places discovered save files into the game's save directory.

Author: Save Game Installer Project
License: MIT
"""

from .relocator import Relocator, RelocationResult, RelocationError

__all__ = ['Relocator', 'RelocationResult', 'RelocationError']
