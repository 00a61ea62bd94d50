"""
Game Service

Contains the authoritative game session: the lobby/countdown/playing
lifecycle, selection evaluation and the admin-only operations.
"""

import random
import threading
from dataclasses import replace
from typing import Any, Dict, Optional

from ..config.game_settings import TARGET_SUM, parse_settings_update
from ..models.game import GameMode, GamePhase, GameSettings, Selection
from ..models.grid import Grid
from ..models.player import Player
from ..utils.game_logger import game_logger
from .broadcast_service import BroadcastCoordinator
from .player_registry import PlayerRegistry
from .timer_service import TimerHandle


def _ignored(reason: str, **extra) -> Dict[str, Any]:
    return {'success': False, 'error': reason, **extra}


class GameSession:
    """
    The single shared game world.

    This class handles:
    - Player connect/disconnect, renames and readiness
    - The waiting -> starting -> playing -> waiting state machine
    - Selection evaluation against the normal or capture grid(s)
    - Admin operations gated by the player's ``is_admin`` flag

    Every public method runs under one re-entrant lock, so socket handlers
    and timer ticks never interleave. Each method returns a result dict:
    ``{'success': True, ...}`` when the session changed, otherwise
    ``{'success': False, 'error': reason}`` with no state change and
    nothing broadcast.
    """

    def __init__(self,
                 broadcaster: BroadcastCoordinator,
                 scheduler,
                 settings: Optional[GameSettings] = None,
                 admin_name: Optional[str] = None,
                 countdown_seconds: int = 3,
                 tick_seconds: float = 1.0,
                 rng=None):
        self.broadcaster = broadcaster
        self.scheduler = scheduler
        self.registry = PlayerRegistry(admin_name)
        self.settings = settings or GameSettings()
        self.countdown_seconds = countdown_seconds
        self.tick_seconds = tick_seconds
        self.rng = rng or random.Random()

        self.phase = GamePhase.WAITING
        self.mode = GameMode.NORMAL
        self.round_mode = GameMode.NORMAL
        self.round_settings = replace(self.settings)
        self.timer_seconds = self.settings.duration
        self.countdown = 0
        self.initial_grid: Optional[Grid] = None
        self.shared_grid: Optional[Grid] = None
        self.rounds_played = 0

        self._timer: Optional[TimerHandle] = None
        self._lock = threading.RLock()

    # ---- Connections ----

    def connect(self, player_id: str) -> Dict[str, Any]:
        """Register a new connection and send it the full snapshot."""
        with self._lock:
            player = self.registry.register(player_id)
            if self.phase == GamePhase.PLAYING and self.round_mode == GameMode.NORMAL and self.initial_grid:
                # Late joiners start from the untouched round grid
                player.grid = self.initial_grid.copy()

            self.broadcaster.init_state(player_id, self._snapshot_for(player))
            self.broadcaster.scores(self.registry.list())
            self.broadcaster.player_list(self.registry.list())
            return {'success': True, 'player': player.to_summary()}

    def disconnect(self, player_id: str) -> Dict[str, Any]:
        with self._lock:
            player = self.registry.remove(player_id)
            if not player:
                return _ignored('Unknown player')
            self.broadcaster.scores(self.registry.list())
            self.broadcaster.player_list(self.registry.list())
            return {'success': True, 'player': player.to_summary()}

    # ---- Lobby actions ----

    def rename(self, player_id: str, name: Any) -> Dict[str, Any]:
        with self._lock:
            if not isinstance(name, str):
                return _ignored('Name must be a string')
            player = self.registry.rename(player_id, name)
            if not player:
                return _ignored('Unknown player')
            self.broadcaster.player_list(self.registry.list())
            return {'success': True, 'name': player.name, 'is_admin': player.is_admin}

    def toggle_ready(self, player_id: str) -> Dict[str, Any]:
        with self._lock:
            if self.phase != GamePhase.WAITING:
                return _ignored('Readiness can only change in the lobby')
            player = self.registry.toggle_ready(player_id)
            if not player:
                return _ignored('Unknown player')
            self.broadcaster.player_list(self.registry.list())
            return {'success': True, 'is_ready': player.is_ready}

    def request_start(self, player_id: str) -> Dict[str, Any]:
        with self._lock:
            if player_id not in self.registry:
                return _ignored('Unknown player')
            if self.phase != GamePhase.WAITING:
                return _ignored('Game already starting or in progress')
            if not self.registry.all_ready():
                return _ignored('Not all players are ready')
            self._start_countdown(player_id)
            return {'success': True, 'phase': self.phase.value}

    # ---- Gameplay ----

    def select(self, player_id: str, data: Any) -> Dict[str, Any]:
        """
        Evaluates a rectangle selection.

        Only a rectangle summing to TARGET_SUM that still has uncleared
        cells scores; everything else is ignored silently.

        Args:
            player_id: Selecting player's connection id
            data: ``{r1, c1, r2, c2}`` payload

        Returns:
            dict: ``cleared`` and the new ``score`` on success
        """
        with self._lock:
            player = self.registry.get(player_id)
            if not player:
                return _ignored('Unknown player')
            if self.phase != GamePhase.PLAYING or self.timer_seconds <= 0:
                return _ignored('Round is not in progress')

            selection = Selection.from_payload(data)
            if selection is None:
                return _ignored('Malformed selection')

            grid = self._grid_for(player)
            if grid is None:
                return _ignored('Player has no grid')
            if not grid.in_bounds(*selection.as_tuple()):
                return _ignored('Selection out of bounds')

            total = grid.range_sum(*selection.as_tuple())
            if total != TARGET_SUM:
                return _ignored('Sum mismatch', sum=total)

            cleared = grid.clear_range(*selection.as_tuple())
            if cleared == 0:
                return _ignored('Area already cleared')

            player.score += cleared
            if self.round_mode == GameMode.CAPTURE:
                self.broadcaster.grid(grid)
                self.broadcaster.block_cleared(player, selection)
                self.broadcaster.rectangle_count(grid.count_rectangles_summing_to(TARGET_SUM))
            else:
                self.broadcaster.grid(grid, to=player_id)
            self.broadcaster.scores(self.registry.list())
            return {'success': True, 'cleared': cleared, 'score': player.score}

    # ---- Admin operations ----

    def is_admin(self, player_id: str) -> bool:
        with self._lock:
            player = self.registry.get(player_id)
            return bool(player and player.is_admin)

    def toggle_mode(self, player_id: str) -> Dict[str, Any]:
        with self._lock:
            if not self.is_admin(player_id):
                return _ignored('Admin only')
            if self.phase != GamePhase.WAITING:
                return _ignored('Mode can only change in the lobby')
            self.mode = self.mode.toggled()
            self.broadcaster.mode(self.mode.value)
            game_logger.log_game_event('mode_changed', player_id, mode=self.mode.value)
            return {'success': True, 'mode': self.mode.value}

    def update_settings(self, player_id: str, data: Any) -> Dict[str, Any]:
        """Apply the valid fields of a settings request; the rest keep their value."""
        with self._lock:
            if not self.is_admin(player_id):
                return _ignored('Admin only')
            if self.phase != GamePhase.WAITING:
                return _ignored('Settings can only change in the lobby')
            accepted = parse_settings_update(data)
            if not accepted:
                return _ignored('No valid settings supplied')
            self.settings = replace(self.settings, **accepted)
            self.broadcaster.settings(self.settings)
            game_logger.log_game_event('settings_changed', player_id, **accepted)
            return {'success': True, 'settings': self.settings.to_client()}

    def kick(self, player_id: str, target_id: Any) -> Dict[str, Any]:
        """Remove another player. The caller still has to close the target's socket."""
        with self._lock:
            if not self.is_admin(player_id):
                return _ignored('Admin only')
            if not isinstance(target_id, str) or target_id == player_id:
                return _ignored('Invalid kick target')
            if target_id not in self.registry:
                return _ignored('Unknown player')
            self.broadcaster.kicked(target_id)
            result = self.disconnect(target_id)
            game_logger.log_game_event('player_kicked', player_id, target=target_id)
            return {'success': True, 'kicked': target_id, 'player': result['player']}

    def force_start(self, player_id: str) -> Dict[str, Any]:
        """Start a fresh round immediately from any phase, replacing any running timer."""
        with self._lock:
            if not self.is_admin(player_id):
                return _ignored('Admin only')
            self._begin_round()
            return {'success': True, 'phase': self.phase.value}

    # ---- State machine ----

    def _start_countdown(self, player_id: Optional[str] = None) -> None:
        self._cancel_timer()
        self.phase = GamePhase.STARTING
        self.countdown = self.countdown_seconds
        self.broadcaster.countdown(self.countdown)
        self._timer = self.scheduler.every('countdown', self.tick_seconds, self._countdown_tick)
        game_logger.log_game_event('countdown_started', player_id, players=len(self.registry))

    def _countdown_tick(self, handle: TimerHandle) -> bool:
        with self._lock:
            if handle is not self._timer:
                return False
            try:
                self.countdown -= 1
                if self.countdown > 0:
                    self.broadcaster.countdown(self.countdown)
                    return True
                self._begin_round()
            except Exception as e:
                self._abort_to_lobby(handle, e)
            return False

    def _begin_round(self) -> None:
        """Generate the round grid(s), reset scores and start the round clock."""
        self._cancel_timer()
        self.round_settings = replace(self.settings)
        self.round_mode = self.mode
        self.initial_grid = Grid.generate(self.round_settings.rows, self.round_settings.cols, self.rng)
        self.shared_grid = self.initial_grid.copy() if self.round_mode == GameMode.CAPTURE else None

        self.registry.reset_scores()
        for player in self.registry.list():
            player.grid = None if self.shared_grid else self.initial_grid.copy()

        self.phase = GamePhase.PLAYING
        self.countdown = 0
        self.timer_seconds = self.round_settings.duration
        self.rounds_played += 1

        self.broadcaster.game_start(self.shared_grid or self.initial_grid, self.timer_seconds, self.round_mode.value)
        self.broadcaster.scores(self.registry.list())
        if self.shared_grid:
            self.broadcaster.rectangle_count(self.shared_grid.count_rectangles_summing_to(TARGET_SUM))

        self._timer = self.scheduler.every('round', self.tick_seconds, self._round_tick)
        game_logger.log_game_event(
            'round_started', None,
            round=self.rounds_played, mode=self.round_mode.value,
            rows=self.round_settings.rows, cols=self.round_settings.cols,
            duration=self.round_settings.duration, players=len(self.registry)
        )

    def _round_tick(self, handle: TimerHandle) -> bool:
        with self._lock:
            if handle is not self._timer or self.phase != GamePhase.PLAYING:
                return False
            try:
                self.timer_seconds = max(0, self.timer_seconds - 1)
                self.broadcaster.timer(self.timer_seconds)
                if self.timer_seconds > 0:
                    return True
                self._end_round()
            except Exception as e:
                self._abort_to_lobby(handle, e)
            return False

    def _abort_to_lobby(self, handle: TimerHandle, error: Exception) -> None:
        """A tick failed part-way: stop every timer and reopen the lobby."""
        game_logger.log_error(error, f'{handle.name}_tick')
        handle.cancel()
        self._cancel_timer()
        self.phase = GamePhase.WAITING
        self.countdown = 0
        game_logger.log_game_event('round_aborted', None, timer=handle.name, round=self.rounds_played)
        self.broadcaster.player_list(self.registry.list())

    def _end_round(self) -> None:
        self._timer = None
        self.phase = GamePhase.WAITING
        leaderboard = self.registry.leaderboard()
        self.registry.reset_readiness()
        self.broadcaster.game_over(leaderboard)
        self.broadcaster.player_list(self.registry.list())
        game_logger.log_game_event('round_over', None, round=self.rounds_played, leaderboard=leaderboard)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def shutdown(self) -> None:
        with self._lock:
            self._cancel_timer()

    # ---- Snapshots ----

    def _grid_for(self, player: Player) -> Optional[Grid]:
        if self.round_mode == GameMode.CAPTURE:
            return self.shared_grid
        return player.grid

    def _rectangle_count(self) -> Optional[int]:
        if self.phase == GamePhase.PLAYING and self.shared_grid:
            return self.shared_grid.count_rectangles_summing_to(TARGET_SUM)
        return None

    def _snapshot_for(self, player: Player) -> Dict[str, Any]:
        grid = self._grid_for(player) if self.phase == GamePhase.PLAYING else player.grid
        return {
            'gameState': self.phase.value,
            'gameMode': self.mode.value,
            'grid': grid.to_list() if grid else [],
            'timer': self.timer_seconds,
            'myId': player.id,
            'players': self.registry.summaries(),
            'settings': self.settings.to_client(),
            'rectangleCount': self._rectangle_count()
        }

    def get_public_state(self) -> Dict[str, Any]:
        """Session summary for the HTTP status API."""
        with self._lock:
            return {
                'phase': self.phase.value,
                'mode': self.mode.value,
                'timer': self.timer_seconds,
                'countdown': self.countdown,
                'rounds_played': self.rounds_played,
                'settings': self.settings.to_client(),
                'players': [dict(p.to_summary(), score=p.score) for p in self.registry.list()],
                'rectangle_count': self._rectangle_count()
            }


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameSession]:
    """Get the global game session instance."""
    return _game_service


def initialize_game_service(broadcaster: BroadcastCoordinator, scheduler, **kwargs) -> GameSession:
    """Initialize the global game session instance, stopping any previous one."""
    global _game_service
    if _game_service is not None:
        _game_service.shutdown()
    _game_service = GameSession(broadcaster, scheduler, **kwargs)
    return _game_service
