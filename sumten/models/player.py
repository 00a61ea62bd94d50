"""
Player Data Models

Contains player-related data structures.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .grid import Grid


@dataclass
class Player:
    """A connected participant. ``id`` is the Socket.IO session id."""
    id: str
    name: str
    score: int = 0
    is_ready: bool = False
    is_admin: bool = False
    grid: Optional[Grid] = None  # Own grid, normal mode only

    def to_summary(self) -> Dict:
        """Lobby entry as the client expects it."""
        return {'id': self.id, 'name': self.name, 'isReady': self.is_ready}

    def to_result(self) -> Dict:
        """Leaderboard entry."""
        return {'id': self.id, 'name': self.name, 'score': self.score}
