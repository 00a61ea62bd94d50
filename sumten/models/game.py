"""
Game Data Models

Contains session-level enums and data structures.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from .grid import normalize_rect


class GamePhase(Enum):
    """Lifecycle phase of the shared session."""
    WAITING = "waiting"
    STARTING = "starting"
    PLAYING = "playing"


class GameMode(Enum):
    """NORMAL gives every player a private grid; CAPTURE shares one grid."""
    NORMAL = "normal"
    CAPTURE = "capture"

    def toggled(self) -> "GameMode":
        return GameMode.CAPTURE if self is GameMode.NORMAL else GameMode.NORMAL


@dataclass
class GameSettings:
    """Admin-tunable settings, applied when the next round starts."""
    rows: int = 10
    cols: int = 20
    duration: int = 120

    def to_client(self) -> Dict[str, int]:
        # Key names used by the browser client
        return {'ROWS': self.rows, 'COLS': self.cols, 'GAME_DURATION': self.duration}


@dataclass(frozen=True)
class Selection:
    """A rectangle submitted by one player, stored normalized."""
    r1: int
    c1: int
    r2: int
    c2: int

    @classmethod
    def from_payload(cls, data: Any) -> Optional["Selection"]:
        """
        Builds a normalized selection from a ``select_area`` payload.

        Returns:
            Selection or None if any corner is missing or not an integer
        """
        if not isinstance(data, dict):
            return None
        try:
            corners = [data[key] for key in ('r1', 'c1', 'r2', 'c2')]
        except KeyError:
            return None
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in corners):
            return None
        return cls(*normalize_rect(*corners))

    def as_tuple(self):
        return self.r1, self.c1, self.r2, self.c2

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
