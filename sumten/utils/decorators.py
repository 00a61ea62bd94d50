"""
Socket Event Decorators

Contains decorators shared by the WebSocket handlers.
"""

from functools import wraps
from flask import request

from .game_logger import game_logger


def session_required(f):
    """
    Decorator that resolves the global game session for a socket handler.

    The handler receives it as the ``session`` keyword argument. Events that
    arrive before the session is initialized are dropped.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        session = get_game_service()
        if not session:
            game_logger.logger.warning(f"Dropped '{f.__name__}' from {request.sid}: game session unavailable")
            return
        kwargs['session'] = session
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    """
    Decorator for privileged socket events.

    The caller is privileged when its player record carries the admin flag
    (set whenever its name matches the reserved admin name). Anyone else is
    ignored without a reply. Apply below ``session_required``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        session = kwargs['session']
        if not session.is_admin(request.sid):
            game_logger.log_player_action(request.sid, f.__name__, success=False, error='Admin only')
            return
        return f(*args, **kwargs)

    return decorated_function
