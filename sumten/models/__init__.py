"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GamePhase, GameMode, GameSettings, Selection
from .grid import Grid, normalize_rect
from .player import Player

__all__ = ['GamePhase', 'GameMode', 'GameSettings', 'Selection', 'Grid', 'normalize_rect', 'Player']
