"""
WebSocket Event Handlers

Handles all WebSocket events for real-time multiplayer functionality.
Handlers only translate socket events into game session calls; the session
itself emits every resulting update.
"""

from flask import request
from flask_socketio import disconnect

from ..utils.decorators import session_required, admin_required
from ..utils.game_logger import game_logger


def _log_result(action, result, **extra):
    details = {key: value for key, value in result.items() if key != 'success'}
    game_logger.log_player_action(request.sid, action, result['success'], **details, **extra)


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    @session_required
    def handle_connect(auth=None, session=None):
        """Register the new connection as a player and send it the snapshot."""
        result = session.connect(request.sid)
        _log_result('connect', result)

    @socketio.on('disconnect')
    @session_required
    def handle_disconnect(reason=None, session=None):
        """Remove the player immediately; there is no reconnection window."""
        result = session.disconnect(request.sid)
        _log_result('disconnect', result, reason=str(reason) if reason else None)

    @socketio.on('update_name')
    @session_required
    def handle_update_name(name=None, session=None):
        _log_result('update_name', session.rename(request.sid, name))

    @socketio.on('toggle_ready')
    @session_required
    def handle_toggle_ready(data=None, session=None):
        _log_result('toggle_ready', session.toggle_ready(request.sid))

    @socketio.on('start_game')
    @session_required
    def handle_start_game(data=None, session=None):
        _log_result('start_game', session.request_start(request.sid))

    @socketio.on('select_area')
    @session_required
    def handle_select_area(data=None, session=None):
        _log_result('select_area', session.select(request.sid, data), area=data)

    @socketio.on('toggle_mode')
    @session_required
    @admin_required
    def handle_toggle_mode(data=None, session=None):
        _log_result('toggle_mode', session.toggle_mode(request.sid))

    @socketio.on('update_settings')
    @session_required
    @admin_required
    def handle_update_settings(data=None, session=None):
        _log_result('update_settings', session.update_settings(request.sid, data), requested=data)

    @socketio.on('kick_player')
    @session_required
    @admin_required
    def handle_kick_player(target_id=None, session=None):
        result = session.kick(request.sid, target_id)
        _log_result('kick_player', result)
        if result['success']:
            # The target is already out of the registry; close its socket too
            disconnect(sid=target_id, namespace='/')

    @socketio.on('reset_game')
    @session_required
    @admin_required
    def handle_reset_game(data=None, session=None):
        _log_result('reset_game', session.force_start(request.sid))

    @socketio.on_error_default
    def handle_error(e):
        """Log handler failures without dropping the connection."""
        game_logger.log_error(e, request.event.get('message', 'unknown'), request.sid)
