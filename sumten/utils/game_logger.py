"""
Game Logger Module for SumTen Server

This module provides structured logging for player actions, session
lifecycle events and errors raised while handling socket events.
"""

import logging
import json
import os
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path


class GameLogger:
    """
    Centralized logging system for the game server.

    Features:
    - Player action tracking keyed by connection id
    - Session lifecycle events (countdown, round start, round end)
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.configure(log_dir, level)

    def configure(self, log_dir: str, level: str) -> None:
        """Point the logger at a log directory and level, replacing its handlers."""
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('sumten_game')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        log_file = self._log_file()

        # File handler for detailed logs
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          player_id: Optional[str],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'player_id': player_id,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_player_action(self,
                          player_id: str,
                          action: str,
                          success: bool = True,
                          **kwargs):
        """
        Log a socket event sent by a player.

        Args:
            player_id: Connection id of the player
            action: Event name (e.g. 'select_area', 'toggle_ready')
            success: Whether the session applied the action
            **kwargs: Additional details to log
        """
        details = {'success': success, **kwargs}
        log_message = self._create_log_entry('PLAYER_ACTION', action, player_id, details)
        if success:
            self.logger.info(log_message)
        else:
            # Rejections are routine (failed guesses, wrong phase)
            self.logger.debug(log_message)

    def log_game_event(self,
                       event: str,
                       player_id: Optional[str] = None,
                       **kwargs):
        """
        Log session lifecycle events.

        Args:
            event: Type of event (e.g. 'countdown_started', 'round_started', 'round_over')
            player_id: Player that triggered the event, if any
            **kwargs: Additional game details
        """
        log_message = self._create_log_entry('GAME_EVENT', event, player_id, kwargs)
        self.logger.info(log_message)

    def log_error(self,
                  error: Exception,
                  action: str,
                  player_id: Optional[str] = None):
        """
        Log errors with full context.

        Args:
            error: Exception that occurred
            action: Action that was being performed
            player_id: Connection id if applicable
        """
        details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        log_message = self._create_log_entry('ERROR', action, player_id, details)
        self.logger.error(log_message)

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about logged events (useful for monitoring)."""
        try:
            log_file = self._log_file()
            if not log_file.exists():
                return {'error': 'No log file found for today'}

            stats = {
                'log_file': str(log_file),
                'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
                'total_entries': 0,
                'player_actions': 0,
                'game_events': 0,
                'errors': 0
            }

            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        stats['total_entries'] += 1
                        if 'PLAYER_ACTION' in line:
                            stats['player_actions'] += 1
                        elif 'GAME_EVENT' in line:
                            stats['game_events'] += 1
                        elif 'ERROR' in line:
                            stats['errors'] += 1

            return stats

        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}


# Global logger instance
game_logger = GameLogger(os.getenv('LOG_DIR', 'logs'), os.getenv('LOG_LEVEL', 'INFO'))
