"""
Broadcast Service

Turns session changes into Socket.IO events. Every outbound message of the
protocol is emitted from here so the payload shapes live in one place.
"""

from typing import Dict, List, Optional

from ..models.game import GameSettings, Selection
from ..models.grid import Grid
from ..models.player import Player


class BroadcastCoordinator:
    """
    Emits state deltas to connected clients.

    ``to=None`` broadcasts to every connection; otherwise the event goes
    only to the given connection id.
    """

    def __init__(self, socketio):
        self.socketio = socketio

    def _emit(self, event: str, data, to: Optional[str] = None) -> None:
        if to is None:
            self.socketio.emit(event, data)
        else:
            self.socketio.emit(event, data, to=to)

    def init_state(self, player_id: str, snapshot: Dict) -> None:
        self._emit('init_game', snapshot, to=player_id)

    def player_list(self, players: List[Player]) -> None:
        self._emit('player_list_update', [p.to_summary() for p in players])

    def scores(self, players: List[Player]) -> None:
        self._emit('score_update', {p.id: p.score for p in players})

    def grid(self, grid: Grid, to: Optional[str] = None) -> None:
        self._emit('grid_update', {'grid': grid.to_list()}, to=to)

    def timer(self, seconds: int) -> None:
        self._emit('timer_update', seconds)

    def countdown(self, count: int) -> None:
        self._emit('countdown', count)

    def game_start(self, grid: Grid, timer: int, mode: str, to: Optional[str] = None) -> None:
        self._emit('game_start', {'grid': grid.to_list(), 'timer': timer, 'gameMode': mode}, to=to)

    def game_over(self, leaderboard: List[Dict]) -> None:
        self._emit('game_over', leaderboard)

    def settings(self, settings: GameSettings) -> None:
        self._emit('settings_update', settings.to_client())

    def mode(self, mode: str) -> None:
        self._emit('game_mode_update', mode)

    def block_cleared(self, player: Player, selection: Selection) -> None:
        self._emit('block_cleared', {
            'playerId': player.id,
            'playerName': player.name,
            'area': selection.to_dict()
        })

    def rectangle_count(self, count: int) -> None:
        self._emit('rectangle_count_update', {'count': count})

    def kicked(self, player_id: str) -> None:
        self._emit('kicked', {'reason': 'Removed by admin'}, to=player_id)
