"""
Player Registry

Tracks connected players, their names, readiness and scores.
"""

from typing import Dict, List, Optional

from ..config.game_settings import MAX_NAME_LENGTH, DEFAULT_NAME_PREFIX
from ..models.player import Player


class PlayerRegistry:
    """
    In-memory registry of connected players keyed by connection id.

    Iteration order is registration order; the leaderboard relies on it to
    break score ties in favour of the earliest-registered player.
    """

    def __init__(self, admin_name: Optional[str] = None):
        self.admin_name = admin_name
        self.players: Dict[str, Player] = {}

    def register(self, player_id: str) -> Player:
        """Create a player with the default name, zero score, not ready."""
        name = f"{DEFAULT_NAME_PREFIX} {player_id[:4]}"
        player = Player(id=player_id, name=name, is_admin=self._is_admin_name(name))
        self.players[player_id] = player
        return player

    def get(self, player_id: str) -> Optional[Player]:
        return self.players.get(player_id)

    def remove(self, player_id: str) -> Optional[Player]:
        return self.players.pop(player_id, None)

    def rename(self, player_id: str, name: str) -> Optional[Player]:
        """Truncate to MAX_NAME_LENGTH and recompute the admin flag. Empty names are allowed."""
        player = self.players.get(player_id)
        if not player:
            return None
        player.name = name[:MAX_NAME_LENGTH]
        player.is_admin = self._is_admin_name(player.name)
        return player

    def set_ready(self, player_id: str, ready: bool) -> Optional[Player]:
        player = self.players.get(player_id)
        if player:
            player.is_ready = bool(ready)
        return player

    def toggle_ready(self, player_id: str) -> Optional[Player]:
        player = self.players.get(player_id)
        if player:
            player.is_ready = not player.is_ready
        return player

    def list(self) -> List[Player]:
        return list(self.players.values())

    def all_ready(self) -> bool:
        """True only when at least one player is registered and all are ready."""
        return bool(self.players) and all(p.is_ready for p in self.players.values())

    def reset_scores(self) -> None:
        for player in self.players.values():
            player.score = 0

    def reset_readiness(self) -> None:
        for player in self.players.values():
            player.is_ready = False

    def scores(self) -> Dict[str, int]:
        return {player_id: p.score for player_id, p in self.players.items()}

    def leaderboard(self) -> List[Dict]:
        """Players by score descending; ``sorted`` is stable so ties keep registration order."""
        ranked = sorted(self.players.values(), key=lambda p: p.score, reverse=True)
        return [p.to_result() for p in ranked]

    def summaries(self) -> List[Dict]:
        return [p.to_summary() for p in self.players.values()]

    def _is_admin_name(self, name: str) -> bool:
        return self.admin_name is not None and name == self.admin_name

    def __len__(self):
        return len(self.players)

    def __contains__(self, player_id):
        return player_id in self.players
