"""
Services Package

Contains all business logic and service classes.
"""

from .broadcast_service import BroadcastCoordinator
from .game_service import GameSession, get_game_service, initialize_game_service
from .player_registry import PlayerRegistry
from .timer_service import TimerHandle, SocketIOScheduler

__all__ = [
    'BroadcastCoordinator',
    'GameSession', 'get_game_service', 'initialize_game_service',
    'PlayerRegistry',
    'TimerHandle', 'SocketIOScheduler'
]
