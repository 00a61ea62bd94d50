"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import session_required, admin_required
from .game_logger import game_logger

__all__ = ['session_required', 'admin_required', 'game_logger']
